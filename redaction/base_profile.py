"""
Base Filter Profile - Abstract base class for redaction rules.

Extend this class to describe which values count as sensitive in a
particular application. For example:
    - credentials.py for password digests and password parameters
    - a payments profile for card tokens stored on records
    - an API profile for access-token columns

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - sensitive_names(): Attribute / bind parameter names always filtered
    - parameter_filters(): Words that mark request-parameter keys as sensitive
    - get_patterns(): Regex patterns applied to free-text log messages
    - get_scrubadub_detectors(): Optional custom scrubadub detectors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Pattern

FILTERED = "[FILTERED]"


@dataclass
class RedactionPattern:
    """A single free-text redaction pattern."""
    name: str  # e.g., "password_assignment"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: str  # e.g., r"\1=[FILTERED]"
    description: str = ""  # Human-readable description


class FilterProfile(ABC):
    """
    Abstract base class for filter profiles.

    Subclass this to add application-specific rules without modifying
    SensitiveValueRedactor.

    Example:
        class PaymentsProfile(FilterProfile):
            @property
            def name(self) -> str:
                return "payments"

            @property
            def description(self) -> str:
                return "Stored card tokens"

            def sensitive_names(self) -> frozenset[str]:
                return frozenset({"card_token"})
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'credentials')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def sensitive_names(self) -> frozenset[str]:
        """
        Exact attribute and bind parameter names to filter.

        These names are removed from serialized records and rendered as
        [FILTERED] in bind parameter logging.
        """
        pass

    def parameter_filters(self) -> tuple[str, ...]:
        """
        Words that mark a request parameter key as sensitive.

        Matching is a case-insensitive substring test, so "password" also
        covers "password_confirmation". Empty by default.
        """
        return ()

    def get_patterns(self) -> list[RedactionPattern]:
        """
        Regex patterns applied to free-text messages.

        These run AFTER scrubadub's detectors. Empty by default.
        """
        return []

    def get_scrubadub_detectors(self) -> list:
        """
        Optional: Return custom scrubadub Detector classes.

        By default, returns an empty list.
        """
        return []

    def __repr__(self) -> str:
        return f"<FilterProfile: {self.name}>"
