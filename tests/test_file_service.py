"""Tests for the file registry and activity history."""

import pytest

from common.constants import ROOT_FOLDER_ID
from vault.exceptions import FolderNotFoundError
from vault.types import UploadItem


def make_item(name="notes.txt", size=100, item_id=None):
    return UploadItem(
        id=item_id or f"upload_{name}",
        name=name,
        size=size,
        type="text/plain",
        progress=100,
        status="complete",
    )


@pytest.fixture
def files(context):
    return context.file_service


def test_add_files_stamps_folder_and_path(files, clock):
    entries = files.add_files([make_item("a.txt"), make_item("b.txt")], ROOT_FOLDER_ID, "My Files")

    assert [e.name for e in entries] == ["a.txt", "b.txt"]
    for entry in entries:
        assert entry.folder_id == ROOT_FOLDER_ID
        assert entry.folder_path == "My Files"
        assert entry.added_at == clock.now()
    assert len(files.list_files()) == 2


def test_add_files_keeps_upload_id(files):
    entries = files.add_files([make_item(item_id="upload_abc")], ROOT_FOLDER_ID, "My Files")
    assert entries[0].id == "upload_abc"


def test_add_files_to_missing_folder(files):
    with pytest.raises(FolderNotFoundError):
        files.add_files([make_item()], "folder_missing", "")
    assert files.list_files() == []


def test_add_no_files_is_noop(files):
    assert files.add_files([], ROOT_FOLDER_ID, "My Files") == []
    assert files.history() == []


def test_add_files_records_upload_history(files):
    files.add_files([make_item("a.txt", 10)], ROOT_FOLDER_ID, "My Files")

    history = files.history()
    assert len(history) == 1
    assert history[0].type == "upload"
    assert history[0].file_name == "a.txt"
    assert history[0].file_size == 10
    assert history[0].status == "success"


def test_remove_file_is_idempotent(files):
    entry = files.add_files([make_item()], ROOT_FOLDER_ID, "My Files")[0]

    assert files.remove_file(entry.id) is True
    assert files.remove_file(entry.id) is False
    assert files.get_file(entry.id) is None
    assert [h.type for h in files.history("remove")] == ["remove"]


def test_remove_unknown_file(files):
    assert files.remove_file("upload_missing") is False
    assert files.history() == []


def test_remove_file_cascades_shares(context, files):
    entry = files.add_files([make_item()], ROOT_FOLDER_ID, "My Files")[0]
    context.shares.share_item("file", entry.id, {"access": "edit"})
    context.shares.share_item("file", entry.id, {"access": "view"})

    files.remove_file(entry.id)

    assert context.shares.shares_for("file", entry.id) == []
    assert context.shares.list_shares() == []


def test_history_newest_first_and_filtered(files, clock):
    first = files.add_files([make_item("first.txt")], ROOT_FOLDER_ID, "My Files")[0]
    clock.advance(minutes=1)
    files.add_files([make_item("second.txt")], ROOT_FOLDER_ID, "My Files")
    clock.advance(minutes=1)
    files.remove_file(first.id)

    assert [h.file_name for h in files.history()] == ["first.txt", "second.txt", "first.txt"]
    assert [h.type for h in files.history()] == ["remove", "upload", "upload"]
    assert [h.file_name for h in files.history("upload")] == ["second.txt", "first.txt"]


def test_list_by_folder(context, files):
    docs = context.folder_service.create_folder("Docs", ROOT_FOLDER_ID)
    files.add_files([make_item("root.txt")], ROOT_FOLDER_ID, "My Files")
    files.add_files([make_item("doc.txt")], docs.id, "My Files/Docs")

    assert [e.name for e in files.list_by_folder(docs.id)] == ["doc.txt"]
    assert [e.name for e in files.list_by_folder(ROOT_FOLDER_ID)] == ["root.txt"]
