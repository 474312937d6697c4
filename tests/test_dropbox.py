from datetime import datetime
from unittest import mock

from dropbox import files, users
from dropbox.exceptions import ApiError, BadInputError

from dbx_dropbox import CHUNK_SIZE, DropboxStorage, translate
from dbx_remote import (
    EntryKind,
    GenericServiceError,
    LookupReason,
    PathLookupError,
    PathWriteError,
    RelocationError,
    Success,
    UnknownError,
    WriteReason,
)


def api_error(error):
    return ApiError("req-1", error, None, None)


def file_meta(path="/Docs/a.txt", size=5):
    return files.FileMetadata(
        name=path.rsplit("/", 1)[-1], id="id:abc123",
        client_modified=datetime(2018, 12, 1, 10, 30), server_modified=datetime(2018, 12, 1, 10, 31),
        rev="015d3b2c0a1", size=size, path_lower=path.lower(), path_display=path,
    )


def folder_meta(path="/Docs"):
    return files.FolderMetadata(name=path.rsplit("/", 1)[-1], id="id:fold42",
                                path_lower=path.lower(), path_display=path)


def test_translate_lookup_errors():
    err = files.GetMetadataError.path(files.LookupError.not_found)
    assert translate(api_error(err)) == PathLookupError(LookupReason.NOT_FOUND)
    err = files.ListFolderError.path(files.LookupError.not_folder)
    assert translate(api_error(err)) == PathLookupError(LookupReason.NOT_FOLDER)
    err = files.DeleteError.path_lookup(files.LookupError.malformed_path(None))
    assert translate(api_error(err)) == PathLookupError(LookupReason.MALFORMED)


def test_translate_write_errors():
    err = files.CreateFolderError.path(files.WriteError.conflict(files.WriteConflictError.folder))
    assert translate(api_error(err)) == PathWriteError(WriteReason.CONFLICT)
    err = files.DeleteError.path_write(files.WriteError.no_write_permission)
    assert translate(api_error(err)) == PathWriteError(WriteReason.NO_WRITE_PERMISSION)
    err = files.DeleteError.path_write(files.WriteError.insufficient_space)
    assert translate(api_error(err)) == PathWriteError(WriteReason.INSUFFICIENT_SPACE)


def test_translate_relocation_and_others():
    outcome = translate(api_error(files.RelocationError.cant_copy_shared_folder))
    assert isinstance(outcome, RelocationError)
    assert isinstance(translate(BadInputError("req-2", "bad token")), GenericServiceError)
    assert translate(ValueError("boom")) == UnknownError("boom")


def test_metadata_maps_entries_and_errors():
    client = mock.Mock()
    client.files_get_metadata.return_value = file_meta()
    outcome = DropboxStorage(client).metadata("/Docs/a.txt")
    assert isinstance(outcome, Success)
    assert outcome.value.kind is EntryKind.FILE
    assert outcome.value.size == 5
    assert outcome.value.path_lower == "/docs/a.txt"

    client.files_get_metadata.side_effect = api_error(files.GetMetadataError.path(files.LookupError.not_found))
    assert DropboxStorage(client).metadata("/gone") == PathLookupError(LookupReason.NOT_FOUND)


def test_list_folder_follows_cursor():
    client = mock.Mock()
    client.files_list_folder.return_value = mock.Mock(entries=[folder_meta()], has_more=True, cursor="c1")
    client.files_list_folder_continue.return_value = mock.Mock(entries=[file_meta("/b.txt")], has_more=False)
    outcome = DropboxStorage(client).list_folder("")
    assert [e.name for e in outcome.value] == ["Docs", "b.txt"]
    client.files_list_folder_continue.assert_called_once_with("c1")


def test_create_folder_conflict_is_an_outcome():
    client = mock.Mock()
    client.files_create_folder_v2.side_effect = api_error(
        files.CreateFolderError.path(files.WriteError.conflict(files.WriteConflictError.folder)))
    assert DropboxStorage(client).create_folder("/Docs") == PathWriteError(WriteReason.CONFLICT)


def test_copy_returns_new_entry():
    client = mock.Mock()
    client.files_copy_v2.return_value = mock.Mock(metadata=file_meta("/b.txt"))
    outcome = DropboxStorage(client).copy("/a.txt", "/b.txt")
    assert outcome.value.path_display == "/b.txt"
    client.files_copy_v2.assert_called_once_with("/a.txt", "/b.txt")


def test_space_usage_individual_and_team():
    client = mock.Mock()
    client.users_get_space_usage.return_value = users.SpaceUsage(
        used=10, allocation=users.SpaceAllocation.individual(users.IndividualSpaceAllocation(allocated=100)))
    usage = DropboxStorage(client).space_usage().value
    assert (usage.used, usage.allocated, usage.team, usage.free) == (10, 100, False, 90)


def test_current_account_kind():
    client = mock.Mock()
    acct = client.users_get_current_account.return_value
    acct.account_type.is_basic.return_value = False
    acct.account_type.is_pro.return_value = True
    acct.name.display_name = "Franz Ferdinand"
    acct.country = None
    info = DropboxStorage(client).current_account()
    assert info.account_type == "pro"
    assert info.team
    assert info.display_name == "Franz Ferdinand"
    assert info.country == ""


def test_small_upload_is_single_call(tmp_path):
    local = tmp_path / "up.bin"
    local.write_bytes(b"abc")
    client = mock.Mock()
    client.files_upload.return_value = file_meta("/up.bin", size=3)
    outcome = DropboxStorage(client).upload(str(local), "/up.bin")
    assert outcome.value.entry.size == 3
    args, kwargs = client.files_upload.call_args
    assert args == (b"abc", "/up.bin")
    assert kwargs["mode"] == files.WriteMode.add
    client.files_upload_session_start.assert_not_called()


def test_large_upload_uses_session(tmp_path):
    local = tmp_path / "big.bin"
    local.write_bytes(b"x" * (CHUNK_SIZE * 2 + 10))
    client = mock.Mock()
    client.files_upload_session_start.return_value = mock.Mock(session_id="s1")
    client.files_upload_session_finish.return_value = file_meta("/big.bin", size=CHUNK_SIZE * 2 + 10)
    outcome = DropboxStorage(client).upload(str(local), "/big.bin")
    assert isinstance(outcome, Success)
    assert client.files_upload_session_append_v2.call_count == 1
    data, cursor, commit = client.files_upload_session_finish.call_args[0]
    assert len(data) == 10
    assert cursor.offset == CHUNK_SIZE * 2
    assert commit.path == "/big.bin"
