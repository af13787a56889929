"""Tests for share records, the derived shared flag, expiry and password gating."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from common.constants import ROOT_FOLDER_ID
from vault.exceptions import ItemNotFoundError, ValidationError
from vault.schemas import ShareSettings


@pytest.fixture
def shares(context):
    return context.shares


@pytest.fixture
def docs(context):
    return context.folder_service.create_folder("Docs", ROOT_FOLDER_ID)


@pytest.fixture
def report(upload_file):
    return upload_file("report.pdf")


class TestShareItem:
    def test_creates_record_with_settings(self, shares, report, clock):
        record = shares.share_item("file", report.id, {"access": "edit", "expiration": "7days"})

        assert record.share_id.startswith("share_")
        assert record.type == "file"
        assert record.item_id == report.id
        assert record.access == "edit"
        assert record.channel == "link"
        assert record.created_at == clock.now()
        assert record.expires_at == clock.now() + timedelta(days=7)
        assert shares.is_shared("file", report.id)

    def test_defaults(self, shares, docs):
        record = shares.share_item("folder", docs.id, {})

        assert record.access == "view"
        assert record.expiration == "never"
        assert record.expires_at is None
        assert not record.require_password

    def test_accepts_settings_model(self, shares, docs):
        settings = ShareSettings(access="comment")
        record = shares.share_item("folder", docs.id, settings)
        assert record.access == "comment"

    def test_unknown_item_type(self, shares, docs):
        with pytest.raises(ValidationError, match="Unknown item type"):
            shares.share_item("album", docs.id, {})

    def test_unknown_access_level(self, shares, docs):
        with pytest.raises(ValidationError, match="Invalid share settings"):
            shares.share_item("folder", docs.id, {"access": "owner"})
        assert not shares.is_shared("folder", docs.id)

    def test_missing_item(self, shares):
        with pytest.raises(ItemNotFoundError):
            shares.share_item("file", "upload_missing", {})
        assert shares.list_shares() == []

    def test_missing_item_is_a_validation_error(self, shares):
        with pytest.raises(ValidationError):
            shares.share_item("folder", "folder_missing", {})


class TestShareValidation:
    def test_password_required(self, shares, report):
        with pytest.raises(ValidationError, match="Please enter a password"):
            shares.share_item("file", report.id, {"requirePassword": True, "password": "  "})
        assert not shares.is_shared("file", report.id)

    def test_password_longer_than_bcrypt_limit(self, shares, report):
        with pytest.raises(ValidationError, match="72 bytes"):
            shares.share_item("file", report.id, {"requirePassword": True, "password": "x" * 100})
        assert not shares.is_shared("file", report.id)

    def test_password_limit_counts_utf8_bytes(self, shares, report):
        with pytest.raises(ValidationError, match="72 bytes"):
            shares.share_item("file", report.id, {"requirePassword": True, "password": "é" * 40})

    def test_password_at_bcrypt_limit_accepted(self, shares, report):
        record = shares.share_item("file", report.id, {"requirePassword": True, "password": "x" * 72})
        assert shares.verify_share_password(record.share_id, "x" * 72) is True

    def test_custom_expiration_without_date(self, shares, report):
        with pytest.raises(ValidationError, match="Please select a custom expiration date"):
            shares.share_item("file", report.id, {
                "access": "view",
                "expiration": "custom",
                "customExpiration": "",
            })
        assert shares.list_shares() == []
        assert not shares.is_shared("file", report.id)

    def test_custom_expiration_in_past(self, shares, report, clock):
        yesterday = (clock.now() - timedelta(days=1)).date().isoformat()
        with pytest.raises(ValidationError, match="past"):
            shares.share_item("file", report.id, {"expiration": "custom", "customExpiration": yesterday})

    def test_custom_expiration_today_is_accepted(self, shares, report, clock):
        today = clock.now().date()
        record = shares.share_item("file", report.id, {"expiration": "custom", "customExpiration": today.isoformat()})

        assert record.custom_expiration == today
        assert record.expires_at == datetime.combine(today, time.max).replace(tzinfo=timezone.utc)

    def test_email_channel_requires_recipients(self, shares, report):
        with pytest.raises(ValidationError, match="Please enter at least one email address"):
            shares.share_item("file", report.id, {"allowedEmails": " , "}, channel="email")

    def test_email_channel_splits_recipients(self, shares, report):
        record = shares.share_item(
            "file", report.id, {"allowedEmails": "a@example.com, b@example.com"}, channel="email"
        )
        assert record.allowed_emails == ("a@example.com", "b@example.com")
        assert record.channel == "email"

    def test_unknown_channel(self, shares, report):
        with pytest.raises(ValidationError, match="Unknown share channel"):
            shares.share_item("file", report.id, {}, channel="fax")

    def test_custom_date_dropped_for_fixed_expiration(self, shares, report):
        record = shares.share_item("file", report.id, {"expiration": "1day", "customExpiration": "2099-01-01"})
        assert record.custom_expiration is None


class TestSharedFlag:
    def test_share_then_unshare_restores_flag(self, shares, report):
        assert not shares.is_shared("file", report.id)

        record = shares.share_item("file", report.id, {})
        assert shares.remove_share(record.share_id) is True

        assert not shares.is_shared("file", report.id)

    def test_flag_tracks_every_reference(self, shares, docs):
        first = shares.share_item("folder", docs.id, {"access": "view"})
        second = shares.share_item("folder", docs.id, {"access": "edit"})

        shares.remove_share(first.share_id)
        assert shares.is_shared("folder", docs.id)

        shares.remove_share(second.share_id)
        assert not shares.is_shared("folder", docs.id)

    def test_file_and_folder_with_same_id_are_independent(self, shares, context):
        folder = context.folder_service.create_folder("Docs", ROOT_FOLDER_ID)
        shares.share_item("folder", folder.id, {})
        assert not shares.is_shared("file", folder.id)

    def test_remove_unknown_share(self, shares):
        assert shares.remove_share("share_missing") is False

    def test_shares_for_sorted_by_creation(self, shares, docs, clock):
        first = shares.share_item("folder", docs.id, {})
        clock.advance(seconds=5)
        second = shares.share_item("folder", docs.id, {})

        assert [r.share_id for r in shares.shares_for("folder", docs.id)] == [first.share_id, second.share_id]


class TestExpiry:
    def test_purge_expired(self, shares, docs, report, clock):
        short = shares.share_item("file", report.id, {"expiration": "1day"})
        forever = shares.share_item("folder", docs.id, {"expiration": "never"})

        clock.advance(days=1, seconds=1)
        purged = shares.purge_expired()

        assert [r.share_id for r in purged] == [short.share_id]
        assert not shares.is_shared("file", report.id)
        assert shares.is_shared("folder", docs.id)
        assert [r.share_id for r in shares.list_shares()] == [forever.share_id]

    def test_nothing_to_purge(self, shares, docs):
        shares.share_item("folder", docs.id, {"expiration": "30days"})
        assert shares.purge_expired() == []

    def test_custom_expiration_lasts_whole_day(self, shares, report, clock):
        record = shares.share_item(
            "file", report.id, {"expiration": "custom", "customExpiration": date(2024, 3, 2)}
        )
        clock.advance(hours=35)
        assert not record.is_expired(clock.now())
        clock.advance(hours=2)
        assert record.is_expired(clock.now())


class TestPasswords:
    def test_password_stored_as_hash(self, shares, report):
        record = shares.share_item("file", report.id, {"requirePassword": True, "password": "s3cret"})

        assert record.password_hash is not None
        assert record.password_hash != "s3cret"
        assert record.password_hash.startswith("$2")

    def test_verify_share_password(self, shares, report):
        record = shares.share_item("file", report.id, {"requirePassword": True, "password": "s3cret"})

        assert shares.verify_share_password(record.share_id, "s3cret") is True
        assert shares.verify_share_password(record.share_id, "wrong") is False
        assert shares.verify_share_password(record.share_id, "") is False

    def test_unprotected_share_always_verifies(self, shares, report):
        record = shares.share_item("file", report.id, {})
        assert shares.verify_share_password(record.share_id, "anything") is True

    def test_overlong_candidate_never_verifies(self, shares, report):
        record = shares.share_item("file", report.id, {"requirePassword": True, "password": "x" * 72})
        assert shares.verify_share_password(record.share_id, "x" * 100) is False

    def test_unknown_share_never_verifies(self, shares):
        assert shares.verify_share_password("share_missing", "s3cret") is False

    def test_password_ignored_when_not_required(self, shares, report):
        record = shares.share_item("file", report.id, {"password": "s3cret"})
        assert record.password_hash is None
