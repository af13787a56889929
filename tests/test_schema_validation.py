"""Tests for pydantic share settings and response models."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from vault.schemas import FolderListingResponse, ShareSettings


def test_share_settings_defaults():
    settings = ShareSettings()

    assert settings.access == "view"
    assert settings.expiration == "never"
    assert settings.custom_expiration is None
    assert settings.require_password is False
    assert settings.allowed_emails == []


def test_share_settings_accepts_camel_case():
    settings = ShareSettings.model_validate({
        "access": "admin",
        "expiration": "custom",
        "customExpiration": "2030-01-31",
        "requirePassword": True,
        "password": "pw",
        "allowedEmails": "a@example.com,b@example.com",
    })

    assert settings.access == "admin"
    assert settings.custom_expiration == date(2030, 1, 31)
    assert settings.require_password is True
    assert settings.allowed_emails == ["a@example.com", "b@example.com"]


def test_share_settings_accepts_snake_case():
    settings = ShareSettings(custom_expiration="2030-01-31", require_password=True, allowed_emails=["x@y.z"])
    assert settings.custom_expiration == date(2030, 1, 31)
    assert settings.allowed_emails == ["x@y.z"]


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_custom_date_is_none(value):
    assert ShareSettings(customExpiration=value).custom_expiration is None


def test_datetime_custom_date_is_truncated():
    settings = ShareSettings(customExpiration=datetime(2030, 1, 31, 15, 30, tzinfo=timezone.utc))
    assert settings.custom_expiration == date(2030, 1, 31)


@pytest.mark.parametrize("field,value", [
    ("access", "owner"),
    ("expiration", "90days"),
    ("customExpiration", "not-a-date"),
])
def test_invalid_settings_rejected(field, value):
    with pytest.raises(ValidationError):
        ShareSettings.model_validate({field: value})


def test_unknown_keys_ignored():
    settings = ShareSettings.model_validate({"access": "edit", "theme": "dark"})
    assert settings.access == "edit"


def test_folder_listing_serializes():
    listing = FolderListingResponse(
        folder_id="root",
        breadcrumb=[{"id": "root", "name": "My Files"}],
        folders=[],
        files=[],
    )
    assert listing.model_dump()["breadcrumb"] == [{"id": "root", "name": "My Files"}]
