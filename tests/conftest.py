import io
import os
import sys
from datetime import datetime

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from dbx_remote import (  # noqa: E402
    AccountInfo,
    EntryKind,
    LookupReason,
    PathLookupError,
    PathWriteError,
    RemoteEntry,
    SpaceUsage,
    Success,
    TransferResult,
    WriteReason,
)
from dbx_session import Session  # noqa: E402
from dbx_shell import DBXShell  # noqa: E402


class FakeStorage:
    """In-memory stand-in for the Dropbox account."""

    def __init__(self, account_type="basic"):
        self.entries = {}
        self.contents = {}
        self.calls = []
        self.account = AccountInfo(
            account_id="dbid:AAH4f99", display_name="Franz Ferdinand",
            abbreviated_name="FF", email="franz@example.com", country="US",
            locale="en", account_type=account_type,
        )
        self.usage = SpaceUsage(used=3 * 1024 * 1024, allocated=2 * 1024 * 1024 * 1024,
                                team=account_type != "basic")
        # outcome to return instead of performing the next call, per operation
        self.fail = {}

    # ---- seeding
    def add_file(self, path, data=b"hello"):
        name = path.rsplit("/", 1)[-1]
        self.entries[path.lower()] = RemoteEntry(
            kind=EntryKind.FILE, name=name, path_display=path, path_lower=path.lower(),
            size=len(data), client_modified=datetime(2018, 12, 1, 10, 30, 0),
            server_modified=datetime(2018, 12, 1, 10, 31, 0), rev="015d3b2c0", ident="id:abc123",
        )
        self.contents[path.lower()] = data

    def add_folder(self, path):
        name = path.rsplit("/", 1)[-1]
        self.entries[path.lower()] = RemoteEntry(
            kind=EntryKind.FOLDER, name=name, path_display=path, path_lower=path.lower(),
            ident="id:fold42",
        )

    def _children(self, path):
        prefix = path.lower() + "/"
        return [e for k, e in sorted(self.entries.items())
                if k.startswith(prefix) and "/" not in k[len(prefix):]]

    def _failure(self, op):
        return self.fail.pop(op, None)

    # ---- RemoteStorage
    def current_account(self):
        self.calls.append(("current_account",))
        return self.account

    def space_usage(self):
        return self._failure("space_usage") or Success(self.usage)

    def list_folder(self, path):
        self.calls.append(("list_folder", path))
        failed = self._failure("list_folder")
        if failed:
            return failed
        if path and path.lower() not in self.entries:
            return PathLookupError(LookupReason.NOT_FOUND)
        return Success(self._children(path))

    def metadata(self, path):
        self.calls.append(("metadata", path))
        failed = self._failure("metadata")
        if failed:
            return failed
        if not path:
            return PathLookupError(LookupReason.MALFORMED)
        entry = self.entries.get(path.lower())
        if entry is None:
            return PathLookupError(LookupReason.NOT_FOUND)
        return Success(entry)

    def _relocate(self, op, src, dst, keep):
        self.calls.append((op, src, dst))
        failed = self._failure(op)
        if failed:
            return failed
        moved = {}
        for key, entry in list(self.entries.items()):
            if key == src.lower() or key.startswith(src.lower() + "/"):
                new_path = dst + entry.path_display[len(src):]
                moved[new_path.lower()] = RemoteEntry(
                    kind=entry.kind, name=new_path.rsplit("/", 1)[-1], path_display=new_path,
                    path_lower=new_path.lower(), size=entry.size, ident=entry.ident,
                )
                if not keep:
                    del self.entries[key]
        self.entries.update(moved)
        return Success(self.entries[dst.lower()])

    def copy(self, src, dst):
        return self._relocate("copy", src, dst, keep=True)

    def move(self, src, dst):
        return self._relocate("move", src, dst, keep=False)

    def delete(self, path):
        self.calls.append(("delete", path))
        failed = self._failure("delete")
        if failed:
            return failed
        entry = self.entries.pop(path.lower(), None)
        if entry is None:
            return PathLookupError(LookupReason.NOT_FOUND)
        for key in [k for k in self.entries if k.startswith(path.lower() + "/")]:
            del self.entries[key]
        return Success(entry)

    def create_folder(self, path):
        self.calls.append(("create_folder", path))
        failed = self._failure("create_folder")
        if failed:
            return failed
        if path.lower() in self.entries:
            return PathWriteError(WriteReason.CONFLICT)
        self.add_folder(path)
        return Success(self.entries[path.lower()])

    def search(self, path, query):
        self.calls.append(("search", path, query))
        failed = self._failure("search")
        if failed:
            return failed
        prefix = path.lower()
        return Success([e for k, e in sorted(self.entries.items())
                        if k.startswith(prefix) and query.lower() in e.name.lower()])

    def download(self, remote_path, local_path):
        self.calls.append(("download", remote_path, local_path))
        failed = self._failure("download")
        if failed:
            return failed
        data = self.contents[remote_path.lower()]
        with open(local_path, "wb") as f:
            f.write(data)
        return Success(TransferResult(self.entries[remote_path.lower()], 0.5, local_path))

    def upload(self, local_path, remote_path):
        self.calls.append(("upload", local_path, remote_path))
        failed = self._failure("upload")
        if failed:
            return failed
        with open(local_path, "rb") as f:
            self.add_file(remote_path, f.read())
        return Success(TransferResult(self.entries[remote_path.lower()], 0.25, local_path))


@pytest.fixture
def make_storage():
    return FakeStorage


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def connector(storage):
    def _connect(app_name, token):
        if token == "BADTOKEN":
            raise RuntimeError("invalid_access_token")
        return storage
    return _connect


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def session(out, connector, tmp_path):
    return Session(stdout=out, home=str(tmp_path), connector=connector, colour=False)


@pytest.fixture
def connected(session):
    session.open("myapp", "TOKEN123")
    return session


@pytest.fixture
def run_shell(session):
    """Feed input lines to a shell bound to ``session`` and return the shell."""
    def _run(lines, stdin_text=None):
        text = stdin_text if stdin_text is not None else "".join(line + "\n" for line in lines)
        shell = DBXShell(session=session, stdin=io.StringIO(text), stdout=session.stdout)
        shell.cmdloop()
        return shell
    return _run
