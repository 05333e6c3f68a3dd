"""
Tests for CredentialField.

Tests cover:
- Setting, clearing and ignoring plaintext assignments
- Authentication results and malformed digests
- Presence and confirmation validation
- Independent fields on one owner
"""

import pytest

from secure_password import CredentialField, HashingPolicy, MalformedDigestError


class TestSetPlaintext:
    """Test suite for password assignment."""

    def test_sets_digest_on_owner(self, owner, policy):
        """Should write an scrypt digest to <attribute>_digest."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("mUc3m00RsqyRe")

        assert owner.password_digest.startswith("$scrypt$")
        assert "mUc3m00RsqyRe" not in owner.password_digest
        assert field.plaintext == "mUc3m00RsqyRe"

    def test_salted_digests_differ(self, owner, policy):
        """Should produce a fresh salt on every assignment."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("same")
        first = owner.password_digest
        field.set_plaintext("same")

        assert owner.password_digest != first

    def test_none_clears_digest(self, owner, policy):
        """Should clear the digest when assigned None."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        field.set_plaintext(None)

        assert owner.password_digest is None
        assert field.plaintext is None
        assert field.authenticate("secret") is False
        assert field.authenticate("") is False

    def test_empty_string_is_noop(self, owner, policy):
        """Should leave an existing digest untouched on empty input."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        digest = owner.password_digest

        field.set_plaintext("")

        assert owner.password_digest == digest
        assert field.authenticate("secret") is owner

    def test_policy_from_environment_by_default(self, owner):
        """Should build its policy from the environment when none is given."""
        field = CredentialField(owner, "password")

        assert field.policy.min_cost is True


class TestAuthenticate:
    """Test suite for authentication."""

    def test_matching_password_returns_owner(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("mUc3m00RsqyRe")

        assert field.authenticate("mUc3m00RsqyRe") is owner

    def test_wrong_password_returns_false(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("mUc3m00RsqyRe")

        assert field.authenticate("notright") is False
        assert field.authenticate("mUc3m00RsqyRe ") is False

    def test_unset_digest_returns_false(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)

        assert field.authenticate("anything") is False

    def test_reloaded_digest_still_verifies(self, owner, policy):
        """Should verify after the digest is stored and reloaded."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("42password")
        stored = str(owner.password_digest)

        reloaded = type(owner)()
        reloaded.password_digest = stored
        fresh = CredentialField(reloaded, "password", policy=policy)

        assert fresh.authenticate("42password") is reloaded

    def test_malformed_digest_raises(self, owner, policy):
        """Should raise instead of returning False for corrupt storage."""
        owner.password_digest = "not-a-digest"
        field = CredentialField(owner, "password", policy=policy)

        with pytest.raises(MalformedDigestError) as excinfo:
            field.authenticate("secret")

        assert excinfo.value.attribute == "password"

    def test_truncated_digest_raises(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        owner.password_digest = owner.password_digest[:20]

        with pytest.raises(MalformedDigestError):
            field.authenticate("secret")


class TestValidate:
    """Test suite for presence and confirmation validation."""

    def test_missing_digest_is_blank(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        errors = field.validate()

        assert errors.kinds("password") == {"blank"}
        assert "Password can't be blank" in errors.full_messages

    def test_cleared_password_is_blank(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        field.set_plaintext(None)

        assert "blank" in field.validate().kinds("password")

    def test_valid_password(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        field.set_confirmation("secret")

        assert len(field.validate()) == 0

    def test_confirmation_mismatch(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("x")
        field.set_confirmation("y")

        errors = field.validate()

        assert errors.kinds("password_confirmation") == {"confirmation"}
        assert "Password confirmation doesn't match Password" in errors.full_messages

    @pytest.mark.parametrize("confirmation", [None, "", "   "])
    def test_blank_confirmation_skips_check(self, owner, policy, confirmation):
        """Should treat a blank confirmation as not supplied."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("x")
        field.set_confirmation(confirmation)

        assert not field.validate()

    def test_validations_disabled(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy, validations=False)
        field.set_confirmation("nomatch")

        assert not field.validate()

    def test_reset_forgets_transient_values(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("x")
        field.set_confirmation("y")
        field.reset()

        assert field.plaintext is None
        assert field.confirmation is None
        assert not field.validate()
        assert field.authenticate("x") is owner


class TestIndependentFields:
    """Two credentials on the same owner."""

    def test_digests_are_independent(self, owner, policy):
        password = CredentialField(owner, "password", policy=policy)
        recovery = CredentialField(owner, "recovery_password", policy=policy)

        password.set_plaintext("primary")
        recovery.set_plaintext("42password")
        recovery_digest = owner.recovery_password_digest

        password.set_plaintext("changed")

        assert owner.recovery_password_digest == recovery_digest
        assert recovery.authenticate("42password") is owner
        assert recovery.authenticate("changed") is False
        assert password.authenticate("changed") is owner


class TestRehash:
    """Test suite for cost changes."""

    def test_old_digest_verifies_after_cost_change(self, owner):
        """Should verify digests created under a previous cost setting."""
        old = CredentialField(owner, "password", policy=HashingPolicy(cost=4))
        old.set_plaintext("secret")

        current = CredentialField(owner, "password", policy=HashingPolicy(cost=6))

        assert current.authenticate("secret") is owner
        assert current.needs_rehash() is True

    def test_current_digest_needs_no_rehash(self, owner):
        field = CredentialField(owner, "password", policy=HashingPolicy(cost=4))
        field.set_plaintext("secret")

        assert field.needs_rehash() is False

    def test_no_digest_needs_no_rehash(self, owner, policy):
        assert CredentialField(owner, "password", policy=policy).needs_rehash() is False


class TestUnhashableInput:
    """Test suite for values the hashing scheme cannot accept."""

    def test_oversized_value_keeps_digest(self, owner, policy):
        """Should report too_long and leave the stored digest alone."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")
        digest = owner.password_digest

        field.set_plaintext("a" * 5000)

        assert owner.password_digest == digest
        assert field.plaintext is None
        assert field.validate().kinds("password") == {"too_long"}
        assert field.authenticate("secret") is owner

    def test_lone_surrogate_is_invalid(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("\ud800")

        assert owner.password_digest is None
        assert field.validate().kinds("password") == {"invalid", "blank"}

    def test_reported_with_validations_disabled(self, owner, policy):
        field = CredentialField(owner, "recovery_password", policy=policy, validations=False)
        field.set_plaintext("a" * 5000)

        errors = field.validate()
        assert errors.kinds("recovery_password") == {"too_long"}
        assert errors.full_messages == ["Recovery password is too long"]

    def test_later_assignment_clears_rejection(self, owner, policy):
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("a" * 5000)
        field.set_plaintext("secret")

        assert not field.validate()
        assert field.authenticate("secret") is owner

    def test_unencodable_candidate_is_a_mismatch(self, owner, policy):
        """Should return False instead of reporting a malformed digest."""
        field = CredentialField(owner, "password", policy=policy)
        field.set_plaintext("secret")

        assert field.authenticate("\ud800") is False
        assert field.authenticate("a" * 5000) is False
