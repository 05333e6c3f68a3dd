"""
SensitiveValueRedactor - Keeps credentials out of every output path.

Redaction is applied independently at each boundary a record can cross:
1. Serialization: sensitive keys are dropped from attribute mappings
2. Inspection: repr()-style strings built from the redacted mapping
3. Logging: bound query parameters and free-text messages

Rules come from loaded filter profiles. Free-text scrubbing uses
scrubadub's detector pipeline followed by the profiles' regex patterns.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

import scrubadub

from .base_profile import FILTERED, FilterProfile
from .binds import BindParameter
from .profiles import DEFAULT_PROFILE

logger = logging.getLogger(__name__)


class SensitiveValueRedactor:
    """
    Redacts sensitive fields from serialized records, inspection strings
    and log output.

    Example:
        redactor = SensitiveValueRedactor()

        redactor.redact_for_serialization({"name": "bob", "password_digest": "abc"})
        # {"name": "bob"}

        redactor.redact_for_logging(BindParameter("password_digest", "abc123"))
        # ("password_digest", "[FILTERED]")

        safe_text, was_redacted = redactor.scrub("login password=hunter2")
        # safe_text: "login password=[FILTERED]"

    Thread Safety:
        The redaction methods only read profile state. load_profile() and
        unload_profile() should only be called during initialization.
    """

    def __init__(self, load_default_profile: bool = True):
        """
        Initialize the SensitiveValueRedactor.

        Args:
            load_default_profile: If True, loads the credentials profile.
                                  Set to False for a clean slate.
        """
        self._profiles: dict[str, FilterProfile] = {}
        self._scrubber = scrubadub.Scrubber(detector_list=[])

        if load_default_profile:
            self.load_profile(DEFAULT_PROFILE)

    def load_profile(self, profile: FilterProfile) -> None:
        """
        Load a filter profile into the redactor.

        Args:
            profile: A FilterProfile instance to add.

        Note:
            If a profile with the same name already exists, it will be replaced.
        """
        self._profiles[profile.name] = profile
        logger.info(f"Loaded filter profile: {profile.name}")
        self._rebuild_scrubber()

    def unload_profile(self, profile_name: str) -> bool:
        """
        Remove a filter profile from the redactor.

        Returns:
            True if profile was removed, False if not found.
        """
        if profile_name in self._profiles:
            del self._profiles[profile_name]
            logger.info(f"Unloaded filter profile: {profile_name}")
            self._rebuild_scrubber()
            return True
        return False

    def _rebuild_scrubber(self) -> None:
        scrubber = scrubadub.Scrubber(detector_list=[])
        seen = set()
        for profile in self._profiles.values():
            for detector in profile.get_scrubadub_detectors():
                if detector.name in seen:
                    continue
                seen.add(detector.name)
                scrubber.add_detector(detector)
        self._scrubber = scrubber

    def list_profiles(self) -> list[str]:
        """Return a list of loaded profile names."""
        return list(self._profiles.keys())

    @property
    def sensitive_names(self) -> set[str]:
        """Exact attribute / parameter names filtered by any loaded profile."""
        names: set[str] = set()
        for profile in self._profiles.values():
            names.update(profile.sensitive_names())
        return names

    @property
    def parameter_filters(self) -> tuple[str, ...]:
        words: list[str] = []
        for profile in self._profiles.values():
            words.extend(w for w in profile.parameter_filters() if w not in words)
        return tuple(words)

    def is_sensitive(self, name: Optional[str]) -> bool:
        return name is not None and name in self.sensitive_names

    def redact_for_serialization(
        self, fields: Mapping[str, Any], except_: Optional[Iterable[str]] = None
    ) -> dict[str, Any]:
        """
        Copy ``fields`` without the excluded keys.

        Excluded keys are removed entirely, not blanked.

        Args:
            fields: Attribute name to value mapping.
            except_: Names to drop. Defaults to the loaded sensitive names.

        Returns:
            A new dict; ``fields`` is left untouched.
        """
        excluded = self.sensitive_names if except_ is None else set(except_)
        return {key: value for key, value in fields.items() if key not in excluded}

    def redact_for_inspection(self, record: Any) -> str:
        """
        Build a ``#<ClassName key: value, ...>`` line for ``record``.

        Fields come from ``record.serializable_hash()`` when available and
        from the record's public instance attributes otherwise; they are then
        passed through redact_for_serialization. Values are formatted with
        ``record.attribute_for_inspect(name)`` if the record provides it,
        else with repr().
        """
        if hasattr(record, "serializable_hash"):
            fields = record.serializable_hash()
        else:
            fields = {k: v for k, v in vars(record).items() if not k.startswith("_")}
        fields = self.redact_for_serialization(fields)

        formatter = getattr(record, "attribute_for_inspect", None)
        inspection = [
            f"{name}: {formatter(name) if formatter else repr(value)}"
            for name, value in fields.items()
        ]
        return f"#<{type(record).__name__} {', '.join(inspection)}>"

    def redact_for_logging(self, bind: Any) -> tuple[Optional[str], Any]:
        """
        Render one bound query parameter for a log line.

        Args:
            bind: A BindParameter, or a list-shaped ``[column, value]`` pair
                  whose first element supplies the name and type.

        Returns:
            A ``(name, display_value)`` tuple. Binary content becomes a byte
            count placeholder; otherwise sensitive names become [FILTERED].
        """
        if isinstance(bind, (list, tuple)):
            if not bind:
                return None, None
            column = bind[0]
            value = bind[1] if len(bind) > 1 else getattr(column, "value", None)
            if isinstance(column, str):
                bind = BindParameter(column, value)
            else:
                bind = BindParameter(column.name, value, str(getattr(column, "type", "string")))
        elif not isinstance(bind, BindParameter):
            # Adapter-specific parameter objects exposing name/value/type
            bind = BindParameter(bind.name, getattr(bind, "value", None), str(getattr(bind, "type", "string")))

        name = bind.name
        value = bind.value

        if bind.is_binary:
            raw = bind.value_for_database()
            return name, f"<{len(bytes(raw))} bytes of binary data>"

        if self.is_sensitive(name):
            return name, FILTERED

        return name, value

    def render_binds(self, binds: Iterable[Any]) -> list[tuple[Optional[str], Any]]:
        """Apply redact_for_logging to every bound parameter of one query."""
        return [self.redact_for_logging(bind) for bind in binds]

    def filter_parameters(self, params: Mapping[str, Any]) -> dict[str, Any]:
        """
        Mask request parameters whose key contains a filter word.

        Matching is case-insensitive and by substring. Nested mappings and
        lists are walked.
        """
        words = [w.lower() for w in self.parameter_filters]
        return self._filter_mapping(params, words)

    def _filter_mapping(self, params: Mapping[str, Any], words: list[str]) -> dict[str, Any]:
        filtered = {}
        for key, value in params.items():
            if any(word in str(key).lower() for word in words):
                filtered[key] = FILTERED
            else:
                filtered[key] = self._filter_value(value, words)
        return filtered

    def _filter_value(self, value: Any, words: list[str]) -> Any:
        if isinstance(value, Mapping):
            return self._filter_mapping(value, words)
        if isinstance(value, list):
            return [self._filter_value(item, words) for item in value]
        return value

    def scrub(self, text: str) -> tuple[str, bool]:
        """
        Redact credentials from free text.

        Args:
            text: The input text to sanitize.

        Returns:
            A tuple of (scrubbed_text, was_redacted).

        Example:
            safe, redacted = redactor.scrub("digest=$scrypt$ln=16,r=8,p=1$c2FsdA$aGFzaA")
            # safe: "digest={{DIGEST}}"
            # redacted: True
        """
        if not text:
            return text, False

        original_text = text

        # Step 1: scrubadub detectors contributed by the profiles
        try:
            text = self._scrubber.clean(text)
        except Exception as e:
            logger.warning(f"Scrubadub error (continuing with regex): {e}")

        # Step 2: custom patterns from all loaded profiles
        for profile in self._profiles.values():
            for pattern in profile.get_patterns():
                try:
                    text = pattern.pattern.sub(pattern.replacement, text)
                except Exception as e:
                    logger.warning(f"Pattern '{pattern.name}' error: {e}")

        return text, text != original_text


# Singleton instance for convenience
_default_redactor: Optional[SensitiveValueRedactor] = None


def get_default_redactor() -> SensitiveValueRedactor:
    """
    Get the default SensitiveValueRedactor instance.

    For more control, instantiate SensitiveValueRedactor directly.
    """
    global _default_redactor
    if _default_redactor is None:
        _default_redactor = SensitiveValueRedactor()
    return _default_redactor
