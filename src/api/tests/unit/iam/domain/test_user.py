"""Unit tests for IAM domain objects."""

from iam.domain.aggregates import User
from iam.domain.value_objects import TrustTier


class TestUser:
    def test_equality_is_identity_based(self):
        """Users with the same id are equal even if details changed."""
        before = User(id=1, external_id=42, username="alice")
        after = User(id=1, external_id=42, username="alice2", email="a@x.com")

        assert before == after
        assert hash(before) == hash(after)

    def test_different_ids_are_not_equal(self):
        assert User(id=1, external_id=42, username="a") != User(
            id=2, external_id=42, username="a"
        )

    def test_str_shows_username(self):
        assert str(User(id=1, external_id=42, username="alice")) == "User(alice)"


class TestTrustTier:
    def test_values_are_log_friendly_strings(self):
        assert str(TrustTier.UNSIGNED) == "unsigned"
