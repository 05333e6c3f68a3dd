"""
Secure Password - credential hashing for record objects

This module keeps a credential's plaintext in memory only and persists a
salted, cost-parameterised scrypt digest in its place.

Architecture:
    - HashingPolicy: Immutable cost settings used to create digests
    - CredentialField: set / confirm / validate / authenticate one credential
    - SecureRecord: Example host that delegates to its CredentialFields and
      hides digest columns from serialization and repr()

Example:
    from secure_password import CredentialField, HashingPolicy

    field = CredentialField(user, "password", policy=HashingPolicy())
    field.set_plaintext("mUc3m00RsqyRe")
    field.authenticate("mUc3m00RsqyRe")  # -> user
"""

from .exceptions import CredentialError, MalformedDigestError, MissingHashingBackendError
from .field import CredentialField
from .policy import HashingPolicy, get_default_policy, reset_default_policy
from .record import CredentialSpec, SecureRecord
from .validation import ValidationError, ValidationErrors

__all__ = [
    "CredentialError",
    "CredentialField",
    "CredentialSpec",
    "HashingPolicy",
    "MalformedDigestError",
    "MissingHashingBackendError",
    "SecureRecord",
    "ValidationError",
    "ValidationErrors",
    "get_default_policy",
    "reset_default_policy",
]
