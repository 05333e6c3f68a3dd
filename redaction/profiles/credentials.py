"""
Credentials Filter Profile - Default redaction rules.

This profile keeps password material out of every output path:

    - <attribute>_digest columns (serialization, inspection, bind logging)
    - request parameters whose key contains "password"
    - scrypt digest strings appearing in free text
    - password=... assignments in free text

Environment Variables:
    SENSITIVE_ATTRIBUTES: Extra comma-separated column names to filter
        Example: "api_token_digest,otp_secret"
    FILTER_PARAMETERS: Extra comma-separated parameter filter words
        Example: "token,secret"
"""

import os
import re

from dotenv import load_dotenv
from scrubadub.detectors import CredentialDetector, RegexDetector
from scrubadub.filth import Filth

from ..base_profile import FILTERED, FilterProfile, RedactionPattern

ENV_SENSITIVE_ATTRIBUTES = "SENSITIVE_ATTRIBUTES"
ENV_FILTER_PARAMETERS = "FILTER_PARAMETERS"

DEFAULT_PARAMETER_FILTERS = ("password",)


class DigestFilth(Filth):
    """A modular-crypt scrypt digest found in text."""
    type = "digest"


class DigestDetector(RegexDetector):
    """Finds passlib scrypt digests, e.g. ``$scrypt$ln=16,r=8,p=1$salt$hash``."""
    name = "digest"
    filth_cls = DigestFilth
    regex = re.compile(
        r"\$scrypt\$ln=\d+,r=\d+,p=\d+\$[A-Za-z0-9./+]*\$[A-Za-z0-9./+]+"
    )


def _split_env(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class CredentialProfile(FilterProfile):
    """
    Default profile for secure-password records.

    Args:
        attributes: Credential attribute names; each contributes an
                    ``<attribute>_digest`` sensitive column.
        extra_names: Additional exact names to filter.
        parameter_filters: Words marking request-parameter keys as sensitive.
    """

    def __init__(
        self,
        attributes: tuple[str, ...] = ("password",),
        extra_names: tuple[str, ...] = (),
        parameter_filters: tuple[str, ...] = DEFAULT_PARAMETER_FILTERS,
    ):
        self._attributes = tuple(attributes)
        self._extra_names = tuple(extra_names)
        self._parameter_filters = tuple(parameter_filters)

    @classmethod
    def from_env(cls, attributes: tuple[str, ...] = ("password",)) -> "CredentialProfile":
        """Build the profile, adding names configured in the environment."""
        load_dotenv()
        return cls(
            attributes=attributes,
            extra_names=_split_env(ENV_SENSITIVE_ATTRIBUTES),
            parameter_filters=DEFAULT_PARAMETER_FILTERS + _split_env(ENV_FILTER_PARAMETERS),
        )

    @property
    def name(self) -> str:
        return "credentials"

    @property
    def description(self) -> str:
        return "Password digests, password parameters and digest strings in logs"

    def sensitive_names(self) -> frozenset[str]:
        digests = {f"{attribute}_digest" for attribute in self._attributes}
        return frozenset(digests | set(self._extra_names))

    def parameter_filters(self) -> tuple[str, ...]:
        return self._parameter_filters

    def get_patterns(self) -> list[RedactionPattern]:
        return [
            # password=..., password: "...", recovery_password=...
            RedactionPattern(
                name="password_assignment",
                pattern=re.compile(
                    r'(?i)(\w*(?:password|passwd|pwd)\w*)\s*[=:]\s*["\']?([^\s"\',]{1,})["\']?'
                ),
                replacement=rf"\1={FILTERED}",
                description="Password assignment in a log message"
            ),
        ]

    def get_scrubadub_detectors(self) -> list:
        return [DigestDetector, CredentialDetector]


# Export the default profile
DEFAULT_PROFILE = CredentialProfile.from_env()
