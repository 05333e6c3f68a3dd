"""
Redaction Module - Keeps credentials out of serialized, inspected and logged output

This module removes sensitive record fields (password digests, configured
attribute names) before a value crosses a process boundary.

Architecture:
    - SensitiveValueRedactor: Applies the rules at each boundary
    - FilterProfile: Abstract base class for sets of sensitive names/patterns
    - profiles/: Directory containing specific profile implementations
    - RedactingLogFilter: logging.Filter hook for query bind parameters

Example:
    from redaction import SensitiveValueRedactor

    redactor = SensitiveValueRedactor()
    redactor.redact_for_serialization({"name": "bob", "password_digest": "abc"})
    # {"name": "bob"}
"""

from .base_profile import FILTERED, FilterProfile, RedactionPattern
from .binds import BindParameter
from .engine import SensitiveValueRedactor, get_default_redactor
from .log_filter import RedactingLogFilter, install

__all__ = [
    "BindParameter",
    "FILTERED",
    "FilterProfile",
    "RedactingLogFilter",
    "RedactionPattern",
    "SensitiveValueRedactor",
    "get_default_redactor",
    "install",
]
