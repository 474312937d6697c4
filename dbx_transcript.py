"""
Session transcripts.

A transcript is a plain text file receiving a copy of everything the shell
prints between ``script`` and the matching ``script`` (or ``bye``). The file
must not exist beforehand; transcripts are never appended across sessions.
"""

import logging
import os
import time
from typing import IO, Optional

from dbx_errors import LocalIOError, TranscriptExistsError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "dbx_shell_transcript"


def default_filename(prefix: str = DEFAULT_PREFIX, directory: str = "", clock=time.localtime) -> str:
    """Return a timestamped transcript name not yet present in ``directory``.

    The name looks like ``<prefix>_YYYY_MM_DD_HH_MM_SS.txt``. When two
    transcripts are started within the same second a counter is appended.
    """
    stamp = time.strftime("%Y_%m_%d_%H_%M_%S", clock())
    name = f"{prefix}_{stamp}.txt"
    n = 0
    while os.path.exists(os.path.join(directory, name)):
        n += 1
        name = f"{prefix}_{stamp}_{n}.txt"
    return name


class Transcript:
    """Optional copy of shell output kept in a file."""

    def __init__(self):
        self.path: Optional[str] = None
        self._fh: Optional[IO[str]] = None

    @property
    def recording(self) -> bool:
        return self._fh is not None

    @property
    def name(self) -> str:
        return os.path.basename(self.path) if self.path else ""

    def begin(self, path: str) -> None:
        if os.path.exists(path):
            raise TranscriptExistsError(path)
        try:
            self._fh = open(path, "a", encoding="utf-8")
        except OSError as e:
            raise LocalIOError(f"Transcript start; file IO error occurred: {e}") from e
        self.path = path
        logger.debug("transcript started: %s", path)

    def write(self, text: str) -> None:
        if self._fh is None:
            return
        self._fh.write(text)
        self._fh.flush()

    def end(self) -> None:
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        try:
            fh.flush()
        finally:
            fh.close()
        logger.debug("transcript closed: %s", self.path)
        self.path = None
