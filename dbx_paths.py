"""
Path resolution for the two virtual working directories.

The shell keeps a remote working directory (a Dropbox path where the empty
string stands for the account root) and a local working directory (an
absolute host path). Commands take user-typed tokens that may be relative,
absolute, ``.`` or ``..``; the helpers below turn such a token into an
absolute path without touching either filesystem. Whether the result exists,
and whether it is a file or a folder, is for the calling command to find out.
"""

import os
from typing import Optional

# Remote root is stored as the empty string and shown as "/".
REMOTE_ROOT = ""
REMOTE_SEP = "/"
LOCAL_ROOT = os.sep


def display_remote(remote_cwd: str) -> str:
    """Return the remote directory as shown to the user."""
    return remote_cwd if remote_cwd else REMOTE_SEP


def _parent(path: str) -> str:
    # everything up to, not including, the last separator
    return path[:path.rfind(REMOTE_SEP)] if REMOTE_SEP in path else ""


def resolve_remote(token: Optional[str], remote_cwd: str) -> Optional[str]:
    """Resolve ``token`` against ``remote_cwd``.

    Returns the absolute remote path, with the root as ``""``. ``None`` is
    returned for ``..`` when ``remote_cwd`` is already the root.
    """
    token = (token or "").strip()
    if token in ("", ".", REMOTE_SEP):
        return REMOTE_ROOT
    if token == "..":
        if remote_cwd == REMOTE_ROOT:
            return None
        return _parent(remote_cwd)
    if token.startswith(REMOTE_SEP):
        return token
    if remote_cwd == REMOTE_ROOT:
        return REMOTE_SEP + token
    return remote_cwd + REMOTE_SEP + token


def resolve_local(token: Optional[str], local_cwd: str, home: str) -> Optional[str]:
    """Resolve ``token`` against ``local_cwd``.

    A missing token means the directory the shell was started in (``home``).
    ``None`` is returned when ``..`` would climb above the filesystem root.
    """
    token = (token or "").strip()
    if not token:
        return home
    if token == ".":
        return local_cwd
    if token == LOCAL_ROOT:
        return LOCAL_ROOT
    if token == "..":
        if local_cwd == LOCAL_ROOT:
            return None
        parent = local_cwd[:local_cwd.rfind(LOCAL_ROOT)]
        return parent or LOCAL_ROOT
    if os.path.isabs(token):
        return token
    return os.path.join(local_cwd, token)
