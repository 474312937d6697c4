"""
Session state for one run of the shell.

A :class:`Session` is created when the shell starts and handed to every
command. It owns the remote client handle and the transcript, keeps both
working directories, and collects the counters printed by ``report``.
"""

import logging
import os
import re
import sys
import time
from typing import Callable, List, Optional, TextIO

from colorama import Fore, Style

from dbx_errors import AlreadyConnectedError, AlreadyDisconnectedError, NotConnectedError
from dbx_paths import REMOTE_ROOT, display_remote
from dbx_remote import AccountInfo, RemoteStorage
from dbx_transcript import DEFAULT_PREFIX, Transcript

logger = logging.getLogger(__name__)

PROMPT_FORMAT = "{app}:{cwd}:>"

# client constructor: (app_name, access_token) -> RemoteStorage
Connector = Callable[[str, str], RemoteStorage]

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI.sub("", text)


def c(text, color: str = Fore.CYAN) -> str:
    """Colourise text for terminal display."""
    lines = str(text).splitlines() or [""]
    return "\n".join(f"{color}{ln}{Style.RESET_ALL}" for ln in lines)


class Session:
    """Mutable state shared by the dispatcher and the command handlers."""

    def __init__(self, stdout: Optional[TextIO] = None, home: Optional[str] = None,
                 connector: Optional[Connector] = None, colour: bool = True,
                 transcript_prefix: str = DEFAULT_PREFIX):
        self.stdout = stdout or sys.stdout
        self.colour = colour
        self.connector = connector
        self.transcript = Transcript()
        self.transcript_prefix = transcript_prefix

        self.home = home or os.getcwd()
        self.local_cwd = self.home
        self.remote_cwd = REMOTE_ROOT

        self.client: Optional[RemoteStorage] = None
        self.account: Optional[AccountInfo] = None
        self.team = False
        self.app_name = ""
        self.access_token: Optional[str] = None

        self.history: List[str] = []
        self.command_count = 0
        self.bytes_uploaded = 0
        self.bytes_downloaded = 0
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.exit_requested = False

    # ---- state
    @property
    def connected(self) -> bool:
        return self.client is not None

    @property
    def recording(self) -> bool:
        return self.transcript.recording

    def require_connected(self) -> RemoteStorage:
        if self.client is None:
            raise NotConnectedError()
        return self.client

    @property
    def remote_dir(self) -> str:
        """Remote directory as displayed; empty while disconnected."""
        return display_remote(self.remote_cwd) if self.connected else ""

    @property
    def prompt(self) -> str:
        return PROMPT_FORMAT.format(app=self.app_name, cwd=self.remote_dir)

    # ---- output
    def echo(self, text: str = "", color: Optional[str] = None, end: str = "\n") -> None:
        """Write ``text`` to the terminal and, when recording, the transcript."""
        out = text
        if self.colour and color and text:
            out = c(text, color)
        self.stdout.write(out + end)
        self.stdout.flush()
        self.transcript.write(strip_ansi(text) + end)

    def error(self, text: str) -> None:
        self.echo(text, Fore.RED)

    # ---- lifecycle
    def open(self, app_name: str, access_token: str) -> bool:
        """Connect to the remote account.

        Returns True on success. A failing connector or account lookup is
        reported and leaves the session disconnected.
        """
        if self.connected:
            raise AlreadyConnectedError()
        if self.connector is None:
            self.error("No remote connector configured!")
            return False
        try:
            client = self.connector(app_name, access_token)
            account = client.current_account()
        except Exception as e:
            logger.debug("connect failed", exc_info=True)
            self.error(f"Connection to Dropbox failed: {e} {type(e).__name__}")
            return False
        self.client = client
        self.account = account
        self.team = account.team
        self.app_name = app_name
        self.access_token = access_token
        self.remote_cwd = REMOTE_ROOT
        self.echo(f"Connected '{account.display_name}' to Dropbox.", Fore.GREEN)
        return True

    def close(self) -> None:
        if not self.connected:
            raise AlreadyDisconnectedError()
        self.client = None
        self.account = None
        self.team = False
        self.app_name = ""
        self.access_token = None
        self.remote_cwd = REMOTE_ROOT
        self.echo("Connection to Dropbox disconnected.", Fore.YELLOW)

    def elapsed(self) -> int:
        end = self.end_time if self.end_time is not None else time.time()
        return int(end - self.start_time)
