"""
Shell error types and the remote outcome classifier.

Two kinds of failure reach the user. Local ones (bad argument count, not
connected, a local file missing, ...) are raised as :class:`ShellError`
subclasses inside a command and printed by the dispatcher. Remote ones come
back from the storage adapter as outcome values and are turned into a single
line of text by :func:`classify`.
"""

from typing import Dict, Tuple

from dbx_remote import (
    GenericServiceError,
    LookupReason,
    Outcome,
    PathLookupError,
    PathWriteError,
    RelocationError,
    Success,
    UnknownError,
    WriteReason,
)


class ShellError(Exception):
    """A recoverable command failure. The message is shown at the prompt."""


class ArgumentCountError(ShellError):
    def __init__(self, command: str, expected: str):
        self.command = command
        self.expected = expected
        super().__init__(f"Error: The command '{command}' requires {expected}!")


class NotConnectedError(ShellError):
    def __init__(self, message: str = "Not connected to Dropbox!"):
        super().__init__(message)


class AlreadyConnectedError(ShellError):
    def __init__(self, message: str = "Already connected to Dropbox!"):
        super().__init__(message)


class AlreadyDisconnectedError(ShellError):
    def __init__(self, message: str = "Cannot close; not connected to Dropbox!"):
        super().__init__(message)


class LocalIOError(ShellError):
    """Local filesystem failure; wraps the underlying OSError message."""


class UnknownCommandError(ShellError):
    def __init__(self, command: str):
        self.command = command
        super().__init__(
            "I don't understand!\n"
            f"The command: '{command}' is unknown. Try 'help' for list of shell commands."
        )


class TranscriptExistsError(ShellError):
    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"The transcript file: {filename} already exists!")


# ---------- Classifier ----------

# command -> (label, subject) used to build the diagnostic line
LABELS: Dict[str, Tuple[str, str]] = {
    "cp": ("Copy path", "path"),
    "mv": ("Rename path", "path"),
    "rm": ("Remove file", "file entry path"),
    "rmdir": ("Remove directory", "directory path"),
    "mkdir": ("Make directory", "directory path"),
    "find": ("Find", "search path"),
    "info": ("Info", "entry path"),
    "dir": ("List directory", "directory path"),
    "get": ("Get", "file path"),
    "put": ("Put", "file path"),
    "space": ("Space", "account"),
}

LOOKUP_PHRASES: Dict[LookupReason, str] = {
    LookupReason.MALFORMED: "is malformed",
    LookupReason.NOT_FOLDER: "is not directory folder",
    LookupReason.NOT_FOUND: "is not found",
}

WRITE_PHRASES: Dict[WriteReason, str] = {
    WriteReason.CONFLICT: "is in conflict",
    WriteReason.DISALLOWED_NAME: "is disallowed name",
    WriteReason.INSUFFICIENT_SPACE: "has insufficient space",
    WriteReason.MALFORMED_PATH: "is malformed",
    WriteReason.NO_WRITE_PERMISSION: "has no write permission",
    WriteReason.OTHER: "is other",
}


def classify(command: str, outcome: Outcome) -> str:
    """Return the one-line diagnostic for a failed remote ``outcome``.

    ``command`` is the canonical command name and selects the wording.
    Passing a :class:`Success` is a programming error.
    """
    label, subject = LABELS.get(command, (command, "path"))
    if isinstance(outcome, Success):
        raise ValueError(f"{command}: cannot classify a successful outcome")
    if isinstance(outcome, PathLookupError):
        return f"{label}: path lookup; {subject} {LOOKUP_PHRASES[outcome.reason]}."
    if isinstance(outcome, PathWriteError):
        if command == "mkdir" and outcome.reason is WriteReason.CONFLICT:
            return "Make directory: file or directory already exists at the directory path."
        return f"{label}: path write; {subject} {WRITE_PHRASES[outcome.reason]}."
    if isinstance(outcome, RelocationError):
        return f"{label}: some other relocation error occurred! {outcome.detail}."
    if isinstance(outcome, GenericServiceError):
        return f"{label}: some other Dropbox remote error occurred! {outcome.message}."
    if isinstance(outcome, UnknownError):
        return f"{label}: some other unknown error occurred! {outcome.message}."
    raise TypeError(f"{command}: unexpected outcome {outcome!r}")
