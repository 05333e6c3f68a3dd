"""
CredentialField - transient plaintext, persisted digest.

A CredentialField belongs to exactly one record. The plaintext and its
confirmation only live in memory; the only value the record persists is the
digest, read from and written to the record's ``<attribute>_digest``
attribute.

Example:
    field = CredentialField(user, "password", policy=HashingPolicy.minimum())
    field.set_plaintext("mUc3m00RsqyRe")
    user.password_digest      # "$scrypt$ln=1,r=8,p=1$..."
    field.authenticate("notright")       # False
    field.authenticate("mUc3m00RsqyRe")  # user
"""

import logging
from typing import Any, Optional, Union

from .exceptions import MalformedDigestError
from .policy import HashingPolicy, get_default_policy
from .validation import BLANK, CONFIRMATION, ValidationErrors, humanize

logger = logging.getLogger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class CredentialField:
    """
    Secure password handling for one attribute of a record.

    Args:
        owner: The record holding the ``<attribute>_digest`` column.
        attribute: Name of the credential, e.g. "password" or "recovery_password".
        policy: HashingPolicy used for new digests. Defaults to the shared
                policy resolved from the environment once per process.
        validations: When False, validate() never reports errors.
    """

    def __init__(
        self,
        owner: Any,
        attribute: str = "password",
        policy: Optional[HashingPolicy] = None,
        validations: bool = True,
    ):
        self._owner = owner
        self._attribute = attribute
        self._policy = policy or get_default_policy()
        self.validations = validations
        self._plaintext: Optional[str] = None
        self._confirmation: Optional[str] = None
        self._rejected: Optional[str] = None

    @property
    def attribute(self) -> str:
        return self._attribute

    @property
    def digest_attribute(self) -> str:
        return f"{self._attribute}_digest"

    @property
    def confirmation_attribute(self) -> str:
        return f"{self._attribute}_confirmation"

    @property
    def policy(self) -> HashingPolicy:
        return self._policy

    @property
    def plaintext(self) -> Optional[str]:
        return self._plaintext

    @property
    def confirmation(self) -> Optional[str]:
        return self._confirmation

    @property
    def digest(self) -> Optional[str]:
        return getattr(self._owner, self.digest_attribute, None)

    def _write_digest(self, value: Optional[str]) -> None:
        setattr(self._owner, self.digest_attribute, value)

    def set_plaintext(self, value: Optional[str]) -> None:
        """
        Assign a new password.

        None clears the stored digest. An empty string is ignored so update
        forms can leave the password field empty without changing it. A value
        the policy cannot hash (over MAX_PASSWORD_SIZE bytes, or not UTF-8
        encodable) leaves the digest unchanged and is reported by validate().
        """
        if value is None:
            self._plaintext = None
            self._rejected = None
            self._write_digest(None)
            logger.debug(f"Cleared digest for '{self._attribute}'")
        elif value != "":
            kind = self._policy.rejection(value)
            if kind is not None:
                self._plaintext = None
                self._rejected = kind
                logger.debug(f"Rejected new value for '{self._attribute}' ({kind})")
                return
            self._plaintext = value
            self._rejected = None
            self._write_digest(self._policy.hash(value))
            logger.debug(f"Updated digest for '{self._attribute}'")

    def set_confirmation(self, value: Optional[str]) -> None:
        self._confirmation = value

    def validate(self) -> ValidationErrors:
        """
        Check presence of a digest and agreement with the confirmation.

        A blank confirmation counts as "not supplied" and skips the mismatch
        check. Confirmation is a form convenience, not an authentication step.
        A rejected assignment is reported even with validations disabled,
        since the caller's value was never applied.
        """
        errors = ValidationErrors()
        if self._rejected is not None:
            errors.add(self._attribute, self._rejected)

        if not self.validations:
            return errors

        if not self.digest:
            errors.add(self._attribute, BLANK)

        if not _is_blank(self._confirmation) and self._confirmation != self._plaintext:
            errors.add(self.confirmation_attribute, CONFIRMATION, label=humanize(self._attribute))

        return errors

    def authenticate(self, candidate: str) -> Union[Any, bool]:
        """
        Return the owning record if ``candidate`` matches, otherwise False.

        Raises:
            MalformedDigestError: If the stored digest cannot be parsed.
        """
        digest = self.digest
        if digest is None:
            return False

        try:
            matched = self._policy.verify(candidate, digest)
        except ValueError as e:
            raise MalformedDigestError(self._attribute, str(e)) from e

        return self._owner if matched else False

    def needs_rehash(self) -> bool:
        """True when the stored digest was made with a lower cost than the policy's."""
        digest = self.digest
        if digest is None:
            return False
        try:
            return self._policy.needs_rehash(digest)
        except ValueError as e:
            raise MalformedDigestError(self._attribute, str(e)) from e

    def reset(self) -> None:
        """Forget the transient plaintext and confirmation (e.g. after a save)."""
        self._plaintext = None
        self._confirmation = None
        self._rejected = None

    def __repr__(self) -> str:
        state = "set" if self.digest else "unset"
        return f"<CredentialField {self._attribute} ({state})>"
