"""
SecureRecord - a host object that delegates to its CredentialFields.

Persistence is not handled here. A storage layer only needs to read and
write the attributes listed in ``column_names()``; the ``<attribute>_digest``
columns are the sole persisted form of any credential.

Example:
    class User(SecureRecord):
        columns = ("id", "name", "password_digest", "recovery_password_digest")
        secure_passwords = (
            CredentialSpec("password"),
            CredentialSpec("recovery_password", validations=False),
        )

    user = User(name="david", password="mUc3m00RsqyRe",
                password_confirmation="mUc3m00RsqyRe")
    user.validate()                          # no errors
    user.authenticate("notright")            # False
    user.authenticate("mUc3m00RsqyRe")       # user
    repr(user)                               # digest columns are not shown
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Iterable, Mapping, Optional, Union

from redaction import SensitiveValueRedactor, get_default_redactor

from .field import CredentialField
from .policy import HashingPolicy, get_default_policy
from .validation import ValidationErrors

INSPECT_TRUNCATE = 50
CONFIRMATION_SUFFIX = "_confirmation"


@dataclass(frozen=True)
class CredentialSpec:
    """Declares one credential attribute on a record type."""
    attribute: str = "password"
    validations: bool = True


class SecureRecord:
    """Base class for records owning one or more CredentialFields."""

    columns: ClassVar[tuple[str, ...]] = ()
    secure_passwords: ClassVar[tuple[CredentialSpec, ...]] = (CredentialSpec(),)
    redactor: ClassVar[Optional[SensitiveValueRedactor]] = None
    policy: ClassVar[Optional[HashingPolicy]] = None

    def __init__(self, policy: Optional[HashingPolicy] = None, **attributes: Any):
        for column in self.column_names():
            setattr(self, column, None)

        policy = policy or type(self).policy or get_default_policy()
        self._credentials: dict[str, CredentialField] = {
            credential.attribute: CredentialField(self, credential.attribute, policy, credential.validations)
            for credential in self.secure_passwords
        }
        self.assign(**attributes)

    @classmethod
    def column_names(cls) -> tuple[str, ...]:
        """Declared columns plus any digest column the declaration left out."""
        digests = tuple(
            f"{credential.attribute}_digest"
            for credential in cls.secure_passwords
            if f"{credential.attribute}_digest" not in cls.columns
        )
        return tuple(cls.columns) + digests

    @classmethod
    def from_row(cls, row: Mapping[str, Any], policy: Optional[HashingPolicy] = None) -> "SecureRecord":
        """Rebuild a record from persisted column values without rehashing."""
        record = cls(policy=policy)
        names = set(cls.column_names())
        for key, value in row.items():
            if key in names:
                setattr(record, key, value)
        return record

    def assign(self, **attributes: Any) -> None:
        """
        Mass-assign attributes.

        Credential names go through CredentialField.set_plaintext and
        ``<credential>_confirmation`` through set_confirmation.

        Raises:
            AttributeError: For a key that is neither a column nor a credential.
        """
        names = set(self.column_names())
        for key, value in attributes.items():
            if key in self._credentials:
                self._credentials[key].set_plaintext(value)
            elif key.endswith(CONFIRMATION_SUFFIX) and key[: -len(CONFIRMATION_SUFFIX)] in self._credentials:
                self._credentials[key[: -len(CONFIRMATION_SUFFIX)]].set_confirmation(value)
            elif key in names:
                setattr(self, key, value)
            else:
                raise AttributeError(f"unknown attribute '{key}' for {type(self).__name__}")

    def __getattr__(self, name: str) -> Any:
        """Read transient ``<credential>`` and ``<credential>_confirmation`` values."""
        credentials = self.__dict__.get("_credentials", {})
        if name in credentials:
            return credentials[name].plaintext
        if name.endswith(CONFIRMATION_SUFFIX) and name[: -len(CONFIRMATION_SUFFIX)] in credentials:
            return credentials[name[: -len(CONFIRMATION_SUFFIX)]].confirmation
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def credential(self, attribute: str = "password") -> CredentialField:
        try:
            return self._credentials[attribute]
        except KeyError:
            raise KeyError(f"{type(self).__name__} has no secure password '{attribute}'") from None

    def authenticate(self, candidate: str) -> Union["SecureRecord", bool]:
        """Authenticate against the ``password`` credential."""
        return self.authenticate_credential("password", candidate)

    def authenticate_credential(self, attribute: str, candidate: str) -> Union["SecureRecord", bool]:
        return self.credential(attribute).authenticate(candidate)

    def validate(self) -> ValidationErrors:
        errors = ValidationErrors()
        for field in self._credentials.values():
            errors.extend(field.validate())
        return errors

    @property
    def valid(self) -> bool:
        return not self.validate()

    def attributes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.column_names()}

    def _redactor(self) -> SensitiveValueRedactor:
        return type(self).redactor or get_default_redactor()

    def serializable_hash(self, except_: Iterable[str] = ()) -> dict[str, Any]:
        """Column values with every digest column and sensitive name removed."""
        redactor = self._redactor()
        hidden = set(except_) | redactor.sensitive_names
        hidden.update(field.digest_attribute for field in self._credentials.values())
        return redactor.redact_for_serialization(self.attributes(), except_=hidden)

    def attribute_for_inspect(self, name: str) -> str:
        value = getattr(self, name)
        if isinstance(value, str) and len(value) > INSPECT_TRUNCATE:
            return repr(f"{value[:INSPECT_TRUNCATE]}...")
        if isinstance(value, datetime):
            return f'"{value.strftime("%Y-%m-%d %H:%M:%S")}"'
        if isinstance(value, date):
            return f'"{value.isoformat()}"'
        return repr(value)

    def __repr__(self) -> str:
        return self._redactor().redact_for_inspection(self)
