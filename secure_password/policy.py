"""
HashingPolicy - cost settings for the scrypt digests.

A policy is an immutable value handed to each CredentialField when it is
built. Digests carry their own parameters, so raising the cost only
affects digests created afterwards; existing ones stay verifiable.

Environment Variables:
    SECURE_PASSWORD_COST: scrypt work factor as log2(N). Defaults to 16.
    SECURE_PASSWORD_MIN_COST: "1"/"true"/"yes" selects the scheme's minimum
        cost. Intended for test environments only.
"""

import logging
import os
from dataclasses import dataclass
from functools import cached_property
from typing import Optional

from dotenv import load_dotenv
from passlib.context import CryptContext
from passlib.hash import scrypt as scrypt_hash
from passlib.utils import MAX_PASSWORD_SIZE

from .exceptions import MissingHashingBackendError
from .validation import INVALID, TOO_LONG

logger = logging.getLogger(__name__)

ENV_COST = "SECURE_PASSWORD_COST"
ENV_MIN_COST = "SECURE_PASSWORD_MIN_COST"

DEFAULT_COST = scrypt_hash.default_rounds
DEFAULT_BLOCK_SIZE = 8
DEFAULT_PARALLELISM = 1

# hashlib.scrypt (OpenSSL) or the scrypt C extension; passlib's pure-Python
# fallback is too slow to be used for real credentials.
NATIVE_BACKENDS = ("stdlib", "scrypt")

_TRUTHY = {"1", "true", "yes", "on"}


def _require_native_backend() -> None:
    """Abort import when no native scrypt implementation can be loaded."""
    candidates = [name for name in NATIVE_BACKENDS if name in scrypt_hash.backends]
    if any(scrypt_hash.has_backend(name) for name in candidates):
        return

    message = (
        "No native scrypt backend available. Install the 'scrypt' package "
        "(pip install scrypt) or run on a Python built against OpenSSL 1.1+."
    )
    logger.critical(message)
    raise MissingHashingBackendError(message)


_require_native_backend()


@dataclass(frozen=True)
class HashingPolicy:
    """
    Parameters used to create new scrypt digests.

    Attributes:
        cost: Work factor as log2(N). Raise it over time as hardware speeds up.
        min_cost: Use the smallest cost the scheme allows (fast test runs).
        block_size: scrypt ``r`` parameter.
        parallelism: scrypt ``p`` parameter.
    """
    cost: int = DEFAULT_COST
    min_cost: bool = False
    block_size: int = DEFAULT_BLOCK_SIZE
    parallelism: int = DEFAULT_PARALLELISM

    def __post_init__(self):
        if not scrypt_hash.min_rounds <= self.cost <= scrypt_hash.max_rounds:
            raise ValueError(
                f"cost must be between {scrypt_hash.min_rounds} and "
                f"{scrypt_hash.max_rounds}, got {self.cost}"
            )

    @classmethod
    def minimum(cls) -> "HashingPolicy":
        """Policy using the cheapest cost the scheme accepts."""
        return cls(min_cost=True)

    @classmethod
    def from_env(cls) -> "HashingPolicy":
        """Build a policy from the environment (and a .env file if present)."""
        load_dotenv()
        cost = int(os.getenv(ENV_COST, DEFAULT_COST))
        min_cost = os.getenv(ENV_MIN_COST, "").strip().lower() in _TRUTHY
        return cls(cost=cost, min_cost=min_cost)

    @property
    def effective_cost(self) -> int:
        return scrypt_hash.min_rounds if self.min_cost else self.cost

    @cached_property
    def context(self) -> CryptContext:
        cost = self.effective_cost
        return CryptContext(
            schemes=["scrypt"],
            scrypt__default_rounds=cost,
            scrypt__min_rounds=cost,
            scrypt__block_size=self.block_size,
            scrypt__parallelism=self.parallelism,
        )

    def rejection(self, plaintext: str) -> Optional[str]:
        """
        Return the validation kind for a plaintext that cannot be hashed.

        Returns:
            INVALID for text that has no UTF-8 encoding (lone surrogates),
            TOO_LONG above MAX_PASSWORD_SIZE encoded bytes, otherwise None.
        """
        if isinstance(plaintext, bytes):
            encoded = plaintext
        elif not isinstance(plaintext, str):
            raise TypeError(f"plaintext must be str or bytes, not {type(plaintext).__name__}")
        else:
            try:
                encoded = plaintext.encode("utf-8")
            except UnicodeEncodeError:
                return INVALID
        if len(encoded) > MAX_PASSWORD_SIZE:
            return TOO_LONG
        return None

    def hash(self, plaintext: str) -> str:
        """
        Return a salted digest string that embeds its own parameters.

        Raises:
            ValueError: If ``plaintext`` is rejected by rejection().
        """
        kind = self.rejection(plaintext)
        if kind is not None:
            raise ValueError(f"plaintext cannot be hashed ({kind})")
        return self.context.hash(plaintext)

    def verify(self, candidate: str, digest: str) -> bool:
        """
        Check ``candidate`` against ``digest`` in constant time.

        A candidate that could never have been hashed is a non-match.

        Raises:
            ValueError: If ``digest`` is not a recognisable scrypt digest.
        """
        if self.rejection(candidate) is not None:
            return False
        return self.context.verify(candidate, digest)

    def needs_rehash(self, digest: str) -> bool:
        """True when ``digest`` was produced with weaker settings than this policy."""
        return self.context.needs_update(digest)


# Resolved once per process; records and fields share it.
_default_policy: Optional[HashingPolicy] = None


def get_default_policy() -> HashingPolicy:
    """
    Get the policy used when a field or record is built without one.

    The environment (and .env file) is read on first use only.
    """
    global _default_policy
    if _default_policy is None:
        _default_policy = HashingPolicy.from_env()
    return _default_policy


def reset_default_policy() -> None:
    """Forget the resolved default policy (for testing)."""
    global _default_policy
    _default_policy = None
