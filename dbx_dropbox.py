"""
Dropbox implementation of :class:`dbx_remote.RemoteStorage`.

Wraps a ``dropbox.Dropbox`` client. SDK results are converted into
:class:`dbx_remote.RemoteEntry` values and SDK exceptions into outcome values,
so nothing raised by the network layer leaks into the shell, with the single
exception of :meth:`DropboxStorage.current_account`, which is only used while
opening a connection.
"""

import logging
import os
import time
from typing import Callable, List, Optional

import dropbox
from dropbox import files
from dropbox.exceptions import ApiError, DropboxException

from dbx_remote import (
    AccountInfo,
    EntryKind,
    GenericServiceError,
    LookupReason,
    Outcome,
    PathLookupError,
    PathWriteError,
    RelocationError,
    RemoteEntry,
    SpaceUsage,
    Success,
    TransferResult,
    UnknownError,
    WriteReason,
)

logger = logging.getLogger(__name__)

# uploads larger than this go through an upload session
CHUNK_SIZE = 8 * 1024 * 1024


def _entry(meta) -> Optional[RemoteEntry]:
    """Convert SDK metadata into a RemoteEntry; deleted entries give None."""
    if isinstance(meta, files.FileMetadata):
        return RemoteEntry(
            kind=EntryKind.FILE,
            name=meta.name,
            path_display=meta.path_display or "",
            path_lower=meta.path_lower or "",
            size=meta.size,
            client_modified=meta.client_modified,
            server_modified=meta.server_modified,
            rev=meta.rev or "",
            ident=meta.id or "",
        )
    if isinstance(meta, files.FolderMetadata):
        return RemoteEntry(
            kind=EntryKind.FOLDER,
            name=meta.name,
            path_display=meta.path_display or "",
            path_lower=meta.path_lower or "",
            ident=meta.id or "",
        )
    return None


def _lookup(err) -> Outcome:
    if err.is_malformed_path():
        return PathLookupError(LookupReason.MALFORMED)
    if err.is_not_folder():
        return PathLookupError(LookupReason.NOT_FOLDER)
    if err.is_not_found():
        return PathLookupError(LookupReason.NOT_FOUND)
    return GenericServiceError(str(err))


def _write(err) -> Outcome:
    if err.is_conflict():
        return PathWriteError(WriteReason.CONFLICT)
    if err.is_disallowed_name():
        return PathWriteError(WriteReason.DISALLOWED_NAME)
    if err.is_insufficient_space():
        return PathWriteError(WriteReason.INSUFFICIENT_SPACE)
    if err.is_malformed_path():
        return PathWriteError(WriteReason.MALFORMED_PATH)
    if err.is_no_write_permission():
        return PathWriteError(WriteReason.NO_WRITE_PERMISSION)
    return PathWriteError(WriteReason.OTHER)


def _nested(value) -> Outcome:
    if isinstance(value, files.LookupError):
        return _lookup(value)
    if isinstance(value, files.WriteError):
        return _write(value)
    if isinstance(value, files.UploadWriteFailed):
        return _write(value.reason)
    return GenericServiceError(str(value))


def translate(exc: Exception) -> Outcome:
    """Map an exception raised by the SDK onto an outcome value."""
    if isinstance(exc, ApiError):
        error = exc.error
        if isinstance(error, files.RelocationError):
            return RelocationError(str(error))
        if getattr(error, "is_path_lookup", None) and error.is_path_lookup():
            return _lookup(error.get_path_lookup())
        if getattr(error, "is_path_write", None) and error.is_path_write():
            return _write(error.get_path_write())
        if getattr(error, "is_path", None) and error.is_path():
            return _nested(error.get_path())
        return GenericServiceError(str(error))
    if isinstance(exc, DropboxException):
        return GenericServiceError(str(exc))
    return UnknownError(str(exc))


def _call(label: str, fn: Callable[[], Outcome]) -> Outcome:
    try:
        return fn()
    except Exception as e:
        logger.debug("%s failed: %s", label, e)
        return translate(e)


class DropboxStorage:
    """RemoteStorage backed by the Dropbox API."""

    def __init__(self, client: dropbox.Dropbox):
        self.client = client

    @classmethod
    def connect(cls, app_name: str, access_token: str) -> "DropboxStorage":
        return cls(dropbox.Dropbox(oauth2_access_token=access_token, user_agent=f"dropbox/{app_name}"))

    # ---- account
    def current_account(self) -> AccountInfo:
        acct = self.client.users_get_current_account()
        if acct.account_type.is_basic():
            kind = "basic"
        elif acct.account_type.is_pro():
            kind = "pro"
        else:
            kind = "business"
        return AccountInfo(
            account_id=acct.account_id,
            display_name=acct.name.display_name,
            abbreviated_name=acct.name.abbreviated_name,
            email=acct.email,
            country=acct.country or "",
            locale=acct.locale,
            account_type=kind,
        )

    def space_usage(self) -> Outcome:
        def run():
            use = self.client.users_get_space_usage()
            alloc = use.allocation
            if alloc.is_team():
                return Success(SpaceUsage(used=use.used, allocated=alloc.get_team().allocated, team=True))
            if alloc.is_individual():
                return Success(SpaceUsage(used=use.used, allocated=alloc.get_individual().allocated))
            return Success(SpaceUsage(used=use.used, allocated=0))
        return _call("space_usage", run)

    # ---- listing
    def list_folder(self, path: str) -> Outcome:
        def run():
            res = self.client.files_list_folder(path, recursive=False, include_deleted=False,
                                                include_media_info=False)
            entries: List[RemoteEntry] = []
            while True:
                entries.extend(e for e in map(_entry, res.entries) if e is not None)
                if not res.has_more:
                    break
                res = self.client.files_list_folder_continue(res.cursor)
            return Success(entries)
        return _call(f"list_folder {path!r}", run)

    def metadata(self, path: str) -> Outcome:
        def run():
            entry = _entry(self.client.files_get_metadata(path))
            if entry is None:
                return PathLookupError(LookupReason.NOT_FOUND)
            return Success(entry)
        return _call(f"metadata {path!r}", run)

    def search(self, path: str, query: str) -> Outcome:
        def run():
            options = files.SearchOptions(path=path or None)
            res = self.client.files_search_v2(query, options=options)
            found: List[RemoteEntry] = []
            while True:
                for match in res.matches:
                    if match.metadata.is_metadata():
                        entry = _entry(match.metadata.get_metadata())
                        if entry is not None:
                            found.append(entry)
                if not res.has_more:
                    break
                res = self.client.files_search_continue_v2(res.cursor)
            return Success(found)
        return _call(f"search {path!r} {query!r}", run)

    # ---- mutation
    def copy(self, src: str, dst: str) -> Outcome:
        return _call(f"copy {src!r}", lambda: Success(_entry(self.client.files_copy_v2(src, dst).metadata)))

    def move(self, src: str, dst: str) -> Outcome:
        return _call(f"move {src!r}", lambda: Success(_entry(self.client.files_move_v2(src, dst).metadata)))

    def delete(self, path: str) -> Outcome:
        return _call(f"delete {path!r}", lambda: Success(_entry(self.client.files_delete_v2(path).metadata)))

    def create_folder(self, path: str) -> Outcome:
        return _call(f"create_folder {path!r}",
                     lambda: Success(_entry(self.client.files_create_folder_v2(path).metadata)))

    # ---- transfer
    def download(self, remote_path: str, local_path: str) -> Outcome:
        def run():
            start = time.time()
            meta = self.client.files_download_to_file(local_path, remote_path)
            return Success(TransferResult(_entry(meta), time.time() - start, local_path))
        return _call(f"download {remote_path!r}", run)

    def upload(self, local_path: str, remote_path: str) -> Outcome:
        def run():
            start = time.time()
            size = os.path.getsize(local_path)
            mode = files.WriteMode.add
            with open(local_path, "rb") as f:
                if size <= CHUNK_SIZE:
                    meta = self.client.files_upload(f.read(), remote_path, mode=mode)
                else:
                    meta = self._upload_session(f, size, remote_path, mode)
            return Success(TransferResult(_entry(meta), time.time() - start, local_path))
        return _call(f"upload {remote_path!r}", run)

    def _upload_session(self, f, size: int, remote_path: str, mode):
        session = self.client.files_upload_session_start(f.read(CHUNK_SIZE))
        cursor = files.UploadSessionCursor(session_id=session.session_id, offset=f.tell())
        commit = files.CommitInfo(path=remote_path, mode=mode)
        while size - f.tell() > CHUNK_SIZE:
            self.client.files_upload_session_append_v2(f.read(CHUNK_SIZE), cursor)
            cursor.offset = f.tell()
        return self.client.files_upload_session_finish(f.read(CHUNK_SIZE), cursor, commit)
