"""Tests for mapping GitHub user payloads onto canonical profiles."""

from credentials_plugin_github.profile import (
    CanonicalProfile,
    ProfileEmail,
    ProfilePhoto,
    map_profile,
)


class TestMapProfile:
    """Test map_profile."""

    def test_full_profile(self):
        raw = {
            "id": 42,
            "name": "Ada",
            "email": "ada@example.com",
            "avatar_url": "https://img/ada.png",
        }

        profile = map_profile(raw)

        assert profile == CanonicalProfile(
            id="42",
            display_name="Ada",
            provider="GitHub",
            emails=[ProfileEmail(value="ada@example.com", type="public")],
            photos=[ProfilePhoto(url="https://img/ada.png")],
        )

    def test_minimal_profile(self):
        profile = map_profile({"id": 7})

        assert profile.id == "7"
        assert profile.display_name == ""
        assert profile.provider == "GitHub"
        assert profile.emails is None
        assert profile.photos is None

    def test_private_email_is_omitted(self):
        profile = map_profile({"id": 7, "name": None, "email": None, "avatar_url": None})

        assert profile.display_name == ""
        assert profile.emails is None
        assert profile.photos is None

    def test_non_string_fields_are_ignored(self):
        profile = map_profile({"id": 7, "name": 123, "email": ["a@b.c"], "avatar_url": {}})

        assert profile.display_name == ""
        assert profile.emails is None
        assert profile.photos is None

    def test_missing_id(self):
        assert map_profile({"name": "Ada"}) is None

    def test_string_id_is_rejected(self):
        assert map_profile({"id": "42"}) is None

    def test_boolean_id_is_rejected(self):
        assert map_profile({"id": True}) is None

    def test_float_id_is_rejected(self):
        assert map_profile({"id": 42.5}) is None

    def test_raw_profile_is_not_modified(self):
        raw = {"id": 42, "login": "ada", "name": "Ada"}

        map_profile(raw)

        assert raw == {"id": 42, "login": "ada", "name": "Ada"}


def test_profile_to_dict():
    profile = CanonicalProfile(
        id="42",
        display_name="Ada",
        emails=[ProfileEmail(value="ada@example.com")],
        photos=[ProfilePhoto(url="https://img/ada.png")],
    )

    assert profile.to_dict() == {
        "id": "42",
        "display_name": "Ada",
        "provider": "GitHub",
        "emails": [{"value": "ada@example.com", "type": "public"}],
        "photos": [{"url": "https://img/ada.png"}],
    }
