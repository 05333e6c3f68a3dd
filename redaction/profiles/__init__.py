"""
Filter Profiles Package

This package contains the filter profiles used by SensitiveValueRedactor.

Available profiles:
    - credentials: Password digests, password parameters, digest strings

To add a new profile:
    1. Create a new file (e.g., payments.py)
    2. Subclass FilterProfile
    3. Implement sensitive_names() and optionally get_patterns()
    4. Register it with redactor.load_profile()
"""

from .credentials import DEFAULT_PROFILE, CredentialProfile, DigestDetector

__all__ = ["CredentialProfile", "DigestDetector", "DEFAULT_PROFILE"]
