"""
Remote storage capability used by the shell.

Every remote operation returns an *outcome*: either ``Success`` carrying the
result, or one of a small set of failure values (``RelocationError``,
``PathLookupError``, ``PathWriteError``, ``GenericServiceError``,
``UnknownError``). Failures are ordinary values, not exceptions, so a command
can hand them straight to :func:`dbx_errors.classify` for display.

The existence probes at the bottom of the module fold every failure into
``False``; a network error while probing looks the same as "not found".
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True)
class RemoteEntry:
    """A file or folder as reported by the remote service."""
    kind: EntryKind
    name: str
    path_display: str
    path_lower: str = ""
    size: int = 0
    client_modified: Optional[datetime] = None
    server_modified: Optional[datetime] = None
    rev: str = ""
    ident: str = ""

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER


@dataclass(frozen=True)
class AccountInfo:
    account_id: str
    display_name: str
    abbreviated_name: str = ""
    email: str = ""
    country: str = ""
    locale: str = ""
    account_type: str = "basic"

    @property
    def team(self) -> bool:
        # anything above the basic tier reports space in team units
        return self.account_type != "basic"


@dataclass(frozen=True)
class SpaceUsage:
    used: int
    allocated: int
    team: bool = False

    @property
    def free(self) -> int:
        return self.allocated - self.used


# ---------- Outcomes ----------
class LookupReason(enum.Enum):
    MALFORMED = "malformed"
    NOT_FOLDER = "not_folder"
    NOT_FOUND = "not_found"


class WriteReason(enum.Enum):
    CONFLICT = "conflict"
    DISALLOWED_NAME = "disallowed_name"
    INSUFFICIENT_SPACE = "insufficient_space"
    MALFORMED_PATH = "malformed_path"
    NO_WRITE_PERMISSION = "no_write_permission"
    OTHER = "other"


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class RelocationError:
    """Copy or move refused by the service."""
    detail: str = ""


@dataclass(frozen=True)
class PathLookupError:
    reason: LookupReason


@dataclass(frozen=True)
class PathWriteError:
    reason: WriteReason


@dataclass(frozen=True)
class GenericServiceError:
    message: str = ""


@dataclass(frozen=True)
class UnknownError:
    message: str = ""


Failure = Union[RelocationError, PathLookupError, PathWriteError, GenericServiceError, UnknownError]
Outcome = Union[Success, Failure]


@dataclass
class TransferResult:
    """Result of an upload or download."""
    entry: RemoteEntry
    seconds: float = 0.0
    local_path: str = ""

    @property
    def rate(self) -> float:
        # bytes per second; a zero-length timing counts as one millisecond
        return self.entry.size / max(self.seconds, 0.001)


class RemoteStorage(Protocol):
    """The operations the shell needs from a remote storage account."""

    def current_account(self) -> AccountInfo: ...

    def space_usage(self) -> Outcome: ...

    def list_folder(self, path: str) -> Outcome: ...

    def metadata(self, path: str) -> Outcome: ...

    def copy(self, src: str, dst: str) -> Outcome: ...

    def move(self, src: str, dst: str) -> Outcome: ...

    def delete(self, path: str) -> Outcome: ...

    def create_folder(self, path: str) -> Outcome: ...

    def search(self, path: str, query: str) -> Outcome: ...

    def download(self, remote_path: str, local_path: str) -> Outcome: ...

    def upload(self, local_path: str, remote_path: str) -> Outcome: ...


# ---------- Probes ----------
def _probe(client: Optional[RemoteStorage], path: str) -> Optional[RemoteEntry]:
    if client is None:
        return None
    try:
        outcome = client.metadata(path)
    except Exception as e:
        logger.debug("metadata probe for %r raised %s", path, e)
        return None
    if isinstance(outcome, Success) and isinstance(outcome.value, RemoteEntry):
        return outcome.value
    return None


def has_file(client: Optional[RemoteStorage], path: str) -> bool:
    entry = _probe(client, path)
    return entry is not None and entry.is_file


def has_folder(client: Optional[RemoteStorage], path: str) -> bool:
    entry = _probe(client, path)
    return entry is not None and entry.is_folder


def has_path(client: Optional[RemoteStorage], path: str) -> bool:
    return _probe(client, path) is not None
