"""
Pytest configuration and shared fixtures for secure-password-guard tests.

Every test hashes at the scheme's minimum cost so the suite stays fast.
"""

import os
import sys

import pytest

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def set_min_cost():
    """
    Force minimum-cost hashing for policies built from the environment.
    This runs automatically before each test, and re-resolves the shared
    default policy so it picks the setting up.
    """
    from secure_password import reset_default_policy

    previous = os.environ.get("SECURE_PASSWORD_MIN_COST")
    os.environ["SECURE_PASSWORD_MIN_COST"] = "true"
    reset_default_policy()
    yield
    reset_default_policy()
    if previous is None:
        os.environ.pop("SECURE_PASSWORD_MIN_COST", None)
    else:
        os.environ["SECURE_PASSWORD_MIN_COST"] = previous


@pytest.fixture
def policy():
    """Provide a minimum-cost hashing policy."""
    from secure_password import HashingPolicy

    return HashingPolicy.minimum()


@pytest.fixture
def redactor():
    """Provide a redactor with the default credentials profile."""
    from redaction import SensitiveValueRedactor

    return SensitiveValueRedactor()


@pytest.fixture
def user_class():
    """A record type with a validated password and an unvalidated recovery password."""
    from secure_password import CredentialSpec, SecureRecord

    class User(SecureRecord):
        columns = ("id", "name", "password_digest", "recovery_password_digest")
        secure_passwords = (
            CredentialSpec("password"),
            CredentialSpec("recovery_password", validations=False),
        )

    return User


class Owner:
    """Bare persistence stand-in exposing a password_digest column."""

    def __init__(self):
        self.password_digest = None
        self.recovery_password_digest = None


@pytest.fixture
def owner():
    return Owner()
