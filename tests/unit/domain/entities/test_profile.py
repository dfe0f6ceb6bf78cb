import pytest
from pydantic import ValidationError

from blueprint.domain.entities.account import Account
from blueprint.domain.entities.profile import SignedInUser, UserProfile


class TestUserProfile:

    @pytest.mark.unit
    def test_username_is_lowercased(self):
        profile = UserProfile(first_name="Jane", last_name="Doe", username="Jane_Doe", email="j@x.io")
        assert profile.username == "jane_doe"

    @pytest.mark.unit
    def test_defaults(self):
        profile = UserProfile(first_name="Jane", last_name="Doe", username="jane", email="j@x.io")
        assert profile.subscription_status == "free"
        assert profile.created_at.endswith("Z")

    @pytest.mark.unit
    def test_record_round_trip(self):
        profile = UserProfile(
            first_name="Jane",
            last_name="Doe",
            username="jane",
            email="j@x.io",
            created_at="2024-01-01T00:00:00.000Z",
        )
        record = profile.to_record()
        assert record == {
            "first_name": "Jane",
            "last_name": "Doe",
            "username": "jane",
            "email": "j@x.io",
            "created_at": "2024-01-01T00:00:00.000Z",
            "subscription_status": "free",
        }
        assert UserProfile.from_record(record) == profile

    @pytest.mark.unit
    def test_from_record_rejects_incomplete_record(self):
        with pytest.raises(ValidationError):
            UserProfile.from_record({"first_name": "Jane"})


class TestSignedInUser:

    @pytest.mark.unit
    def test_profile_is_optional(self):
        user = SignedInUser(account=Account(account_id="uid", email="j@x.io"))
        assert not user.has_profile

    @pytest.mark.unit
    def test_account_requires_id(self):
        with pytest.raises(ValidationError):
            Account(account_id="", email="j@x.io")
