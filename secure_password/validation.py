"""Field-attributed validation errors reported back to callers."""

from dataclasses import dataclass
from typing import Iterator, Optional

BLANK = "blank"
CONFIRMATION = "confirmation"
TOO_LONG = "too_long"
INVALID = "invalid"

_MESSAGES = {
    BLANK: "can't be blank",
    CONFIRMATION: "doesn't match {label}",
    TOO_LONG: "is too long",
    INVALID: "contains characters that cannot be encoded",
}


def humanize(attribute: str) -> str:
    """'recovery_password' -> 'Recovery password'."""
    return attribute.replace("_", " ").strip().capitalize()


@dataclass(frozen=True)
class ValidationError:
    """A single failed check on one attribute."""
    attribute: str
    kind: str
    message: str

    @property
    def full_message(self) -> str:
        return f"{humanize(self.attribute)} {self.message}"


class ValidationErrors:
    """Ordered collection of ValidationError entries."""

    def __init__(self):
        self._errors: list[ValidationError] = []

    def add(self, attribute: str, kind: str, label: Optional[str] = None) -> ValidationError:
        """Record an error of ``kind`` against ``attribute``."""
        message = _MESSAGES.get(kind, kind).format(label=label or humanize(attribute))
        error = ValidationError(attribute=attribute, kind=kind, message=message)
        self._errors.append(error)
        return error

    def extend(self, other: "ValidationErrors") -> None:
        self._errors.extend(other)

    def on(self, attribute: str) -> list[ValidationError]:
        """Errors recorded against ``attribute``."""
        return [error for error in self._errors if error.attribute == attribute]

    def kinds(self, attribute: Optional[str] = None) -> set[str]:
        errors = self._errors if attribute is None else self.on(attribute)
        return {error.kind for error in errors}

    @property
    def full_messages(self) -> list[str]:
        return [error.full_message for error in self._errors]

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"<ValidationErrors {self.full_messages}>"
