"""Tests for CLI command parsing."""

import pytest

from cli.models import (
    ChangeDirCommand,
    HistoryCommand,
    ListCommand,
    MakeDirCommand,
    PwdCommand,
    QueueCommand,
    RemoveDirCommand,
    RemoveFileCommand,
    ShareCommand,
    SharesCommand,
    UnqueueCommand,
    UnshareCommand,
    UploadCommand,
    UploadsCommand,
)
from cli.parser import ParseError, parse_command


@pytest.mark.parametrize("line,expected", [
    ("ls", ListCommand()),
    ("pwd", PwdCommand()),
    ("cd Docs", ChangeDirCommand(target="Docs")),
    ("cd ..", ChangeDirCommand(target="..")),
    ("cd /", ChangeDirCommand(target="/")),
    ('mkdir "Tax Returns"', MakeDirCommand(name="Tax Returns")),
    ("rmdir Docs", RemoveDirCommand(name="Docs")),
    ("rm report.pdf", RemoveFileCommand(name="report.pdf")),
    ("queue a.txt b.txt", QueueCommand(paths=("a.txt", "b.txt"))),
    ("unqueue upload_1", UnqueueCommand(upload_id="upload_1")),
    ("uploads", UploadsCommand()),
    ("upload", UploadCommand()),
    ("unshare share_1", UnshareCommand(share_id="share_1")),
    ("shares", SharesCommand()),
    ("history", HistoryCommand()),
    ("history all", HistoryCommand()),
    ("history remove", HistoryCommand(entry_type="remove")),
])
def test_parse_simple_commands(line, expected):
    assert parse_command(line) == expected


def test_parse_share_defaults():
    cmd = parse_command("share file report.pdf")

    assert cmd == ShareCommand(item_type="file", name="report.pdf")
    assert cmd.access == "view"
    assert cmd.expiration == "never"
    assert cmd.password is None
    assert cmd.emails == ()


def test_parse_share_with_options():
    cmd = parse_command(
        "share folder Docs --access edit --expires 7days --password s3cret --email a@x.com,b@y.com"
    )

    assert cmd.item_type == "folder"
    assert cmd.access == "edit"
    assert cmd.expiration == "7days"
    assert cmd.custom_expiration is None
    assert cmd.password == "s3cret"
    assert cmd.emails == ("a@x.com", "b@y.com")


def test_parse_share_custom_date():
    cmd = parse_command("share file a.txt --expires 2030-01-31")
    assert cmd.expiration == "custom"
    assert cmd.custom_expiration == "2030-01-31"


def test_parse_share_custom_without_date():
    cmd = parse_command("share file a.txt --expires custom")
    assert cmd.expiration == "custom"
    assert cmd.custom_expiration is None


@pytest.mark.parametrize("line,message", [
    ("", "Empty command"),
    ("   ", "Empty command"),
    ("frobnicate", "Unknown command"),
    ("ls extra", "takes no arguments"),
    ("cd", "requires exactly 1 argument"),
    ("mkdir a b", "requires exactly 1 argument"),
    ("queue", "at least one file path"),
    ("share file", "item type"),
    ("share album x", "must be 'file' or 'folder'"),
    ("share file a.txt --color red", "Unknown share option"),
    ("share file a.txt --access", "requires a value"),
    ("share file a.txt --access owner", "--access must be one of"),
    ("history everything", "history filter"),
    ('mkdir "unterminated', "Invalid syntax"),
])
def test_parse_errors(line, message):
    with pytest.raises(ParseError, match=message):
        parse_command(line)
