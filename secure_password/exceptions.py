"""Exceptions raised by the secure_password package."""


class CredentialError(Exception):
    """Base class for credential handling failures."""


class MissingHashingBackendError(CredentialError, RuntimeError):
    """No native scrypt implementation is available to this interpreter."""


class MalformedDigestError(CredentialError, ValueError):
    """
    A stored digest could not be parsed.

    This is a storage integrity fault for the owning record, not a wrong
    password: authentication with a bad guess returns False instead.
    """

    def __init__(self, attribute: str, reason: str = ""):
        self.attribute = attribute
        self.reason = reason
        message = f"Stored digest for '{attribute}' is malformed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
