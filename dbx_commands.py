"""
Command handlers for the Dropbox shell.

Each handler takes the :class:`dbx_session.Session` and the argument list
(the command name already removed) and either returns a string to print,
prints through ``session.echo`` itself, or raises a
:class:`dbx_errors.ShellError` whose message is printed in red.

Remote commands work on the remote working directory; the ``l``-prefixed
twins work on the local one. ``BUILTINS`` maps canonical names to handlers
and ``ALIASES`` maps every accepted spelling to its canonical name.
"""

import fnmatch
import getpass
import os
import platform
import shutil
import time
from collections import OrderedDict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from colorama import Fore

from dbx_errors import AlreadyConnectedError, ArgumentCountError, LocalIOError, ShellError, classify
from dbx_paths import REMOTE_ROOT, REMOTE_SEP, display_remote, resolve_local, resolve_remote
from dbx_remote import PathLookupError, RemoteEntry, Success, has_file, has_folder, has_path
from dbx_session import Session
from dbx_transcript import default_filename

VERSION = "1.00"
ABOUT = "DBXShell: A Dropbox Command Line Interface Command Shell."
WELCOME = "Welcome to the Dropbox Shell! Use 'help' to get started."
START_MESSAGE = "Start Dropbox Shell"
CLOSE_MESSAGE = "Close Dropbox Shell"

DATE_FORMAT = "%b %d %Y %H:%M:%S:%p"
KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

Handler = Callable[[Session, List[str]], Optional[str]]


# ---------- Helpers ----------
def _want(name: str, args: List[str], *counts: int, expected: str) -> None:
    if len(args) not in counts:
        raise ArgumentCountError(name, expected)


def _check(name: str, outcome) -> Any:
    """Return the value of a successful outcome, else raise its diagnostic."""
    if isinstance(outcome, Success):
        return outcome.value
    raise ShellError(classify(name, outcome))


def _remote_path(s: Session, token: str) -> str:
    path = resolve_remote(token, s.remote_cwd)
    if path is None:
        raise ShellError(f"Path '{token}' is above the root '/' directory!")
    return path.rstrip(REMOTE_SEP)


def _local_path(s: Session, token: str) -> str:
    path = resolve_local(token, s.local_cwd, s.home)
    if path is None:
        raise LocalIOError(f"Error: Path '{token}' does not exist above root '/' directory!")
    return path


def _fmt_time(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        value = datetime.fromtimestamp(value)
    return value.strftime(DATE_FORMAT)


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...{token[-4:]}"


# ---------- Connection ----------
def h_open(s: Session, args: List[str]):
    """Connect with an application name and access token."""
    if s.connected:
        raise AlreadyConnectedError()
    _want("open", args, 0, 2, expected="two parameters")
    if args:
        app, token = args
    else:
        if not s.app_name or s.access_token is None:
            raise ArgumentCountError("open", "two parameters")
        app, token = s.app_name, s.access_token
    s.open(app, token)


def h_close(s: Session, args: List[str]):
    _want("close", args, 0, expected="no parameters")
    s.close()


def h_access(s: Session, args: List[str]):
    """Report or set the access token."""
    _want("access", args, 0, 1, expected="zero or one parameter")
    if not args:
        return "Access token set." if s.access_token is not None else "Access token is not set!"
    if s.access_token is not None:
        raise ShellError("Already set access token!")
    s.access_token = args[0]
    return f"Set access to '{_mask(args[0])}' token."


def h_appname(s: Session, args: List[str]):
    """Report or set the application name."""
    _want("appname", args, 0, 1, expected="zero or one parameter")
    if not args:
        return f"The app name is {s.app_name}" if s.app_name else "The app name is not set!"
    if s.app_name:
        raise ShellError("Already set app name!")
    s.app_name = args[0]
    return f"Set app name to {args[0]}"


# ---------- Remote navigation ----------
def h_cd(s: Session, args: List[str]):
    """Change the remote working directory."""
    _want("cd", args, 0, 1, expected="zero or one path parameter")
    client = s.require_connected()
    token = args[0] if args else ""
    target = resolve_remote(token, s.remote_cwd)
    if target is None or (target == REMOTE_ROOT and s.remote_cwd == REMOTE_ROOT):
        s.echo("Change remote directory: already at root '/' directory.", Fore.YELLOW)
        return None
    target = target.rstrip(REMOTE_SEP)
    if token != ".." and target and not has_folder(client, target):
        raise ShellError(f"Change directory: directory '{target}' does not exist!")
    s.remote_cwd = target
    return f"Change directory to {display_remote(target)}."


def h_pwd(s: Session, args: List[str]):
    _want("pwd", args, 0, expected="no parameters")
    s.require_connected()
    return display_remote(s.remote_cwd)


def h_dir(s: Session, args: List[str]):
    """List the remote working directory."""
    _want("dir", args, 0, expected="no parameters")
    client = s.require_connected()
    entries: List[RemoteEntry] = _check("dir", client.list_folder(s.remote_cwd))
    lines = []
    for e in entries:
        if e.is_folder:
            lines.append(f"....................... ------------- [{e.name}]")
        else:
            lines.append(f"{_fmt_time(e.client_modified):>22} {e.size:13d} {e.name}")
    return "\n".join(lines) if lines else "(empty)"


# ---------- Remote mutation ----------
def _relocate(s: Session, args: List[str], name: str, verb: str, label: str):
    _want(name, args, 2, expected="two path parameters")
    client = s.require_connected()
    src = _remote_path(s, args[0])
    tgt = _remote_path(s, args[1])
    if not has_path(client, src):
        raise ShellError(f"{label} remote source path: {src} not found!")
    if has_path(client, tgt):
        raise ShellError(f"{label} remote target path: {tgt} exists!")
    op = client.copy if name == "cp" else client.move
    _check(name, op(src, tgt))
    if not has_path(client, tgt):
        raise ShellError(f"Problem in {verb} remote file: {src} to {tgt}.")
    return src, tgt


def h_cp(s: Session, args: List[str]):
    """Copy a remote file or folder."""
    src, tgt = _relocate(s, args, "cp", "copying", "Copy")
    return f"Remote path: {src} copied to {tgt}."


def h_mv(s: Session, args: List[str]):
    """Rename or move a remote file or folder."""
    src, tgt = _relocate(s, args, "mv", "renaming", "Rename")
    return f"Remote path: {src} renamed {tgt}."


def h_rm(s: Session, args: List[str]):
    _want("rm", args, 1, expected="one path parameter")
    client = s.require_connected()
    path = _remote_path(s, args[0])
    if not has_file(client, path):
        raise ShellError(f"Path: '{args[0]}' entry is not file!")
    entry = _check("rm", client.delete(path))
    return f"Deleted file: {entry.path_lower if entry else path}"


def h_mkdir(s: Session, args: List[str]):
    _want("mkdir", args, 1, expected="one path parameter")
    client = s.require_connected()
    path = _remote_path(s, args[0])
    entry = _check("mkdir", client.create_folder(path))
    return f"Created {entry.path_display if entry else path} remote directory."


def h_rmdir(s: Session, args: List[str]):
    _want("rmdir", args, 1, expected="one path parameter")
    client = s.require_connected()
    path = _remote_path(s, args[0])
    if not has_folder(client, path):
        raise ShellError(f"Path: '{path}' entry is not folder!")
    entry = _check("rmdir", client.delete(path))
    return f"Removed directory: {entry.path_display if entry else path}"


# ---------- Transfers ----------
def _transfer_line(verb: str, result) -> str:
    return (f"{verb} file: '{result.entry.name}' total bytes: {result.entry.size} "
            f"time: {int(result.seconds)} seconds at {result.rate:4.3f} bytes per second.")


def h_get(s: Session, args: List[str]):
    """Download a remote file into the local working directory."""
    _want("get", args, 1, expected="one path parameter")
    client = s.require_connected()
    remote = _remote_path(s, args[0])
    if not has_file(client, remote):
        raise ShellError(f"File with name {args[0]} does not exist!")
    local = os.path.join(s.local_cwd, remote.rsplit(REMOTE_SEP, 1)[-1])
    if os.path.exists(local):
        raise LocalIOError(f"Local file: {local} already exists!")
    result = _check("get", client.download(remote, local))
    s.bytes_downloaded += result.entry.size
    return _transfer_line("Get downloaded", result)


def h_put(s: Session, args: List[str]):
    """Upload a local file into the remote working directory."""
    _want("put", args, 1, expected="one path parameter")
    client = s.require_connected()
    local = _local_path(s, args[0])
    if not os.path.isfile(local):
        raise LocalIOError(f"Local file: {args[0]} not found!")
    name = os.path.basename(local)
    remote = resolve_remote(name, s.remote_cwd)
    if has_file(client, remote):
        raise ShellError(f"File with name {name} already exists!")
    result = _check("put", client.upload(local, remote))
    s.bytes_uploaded += result.entry.size
    return _transfer_line("Put uploaded", result)


# ---------- Remote information ----------
def h_find(s: Session, args: List[str]):
    """Search a remote path for names matching a query."""
    _want("find", args, 2, expected="two parameters")
    client = s.require_connected()
    path = _remote_path(s, args[0])
    found: List[RemoteEntry] = _check("find", client.search(path, args[1]))
    if not found:
        return "No matches found!"
    lines = [f"Found {len(found)} match in path for query!"]
    for e in found:
        kind = "File:   " if e.is_file else "Dir:    "
        lines.append(f"    {kind} {e.path_lower or e.path_display}")
    return "\n".join(lines)


def h_info(s: Session, args: List[str]):
    """Show metadata for a remote entry."""
    _want("info", args, 1, expected="one path parameter")
    client = s.require_connected()
    path = _remote_path(s, args[0])
    outcome = client.metadata(path)
    if not isinstance(outcome, Success):
        if isinstance(outcome, PathLookupError):
            raise ShellError(f"Info not available for path: '{path}' entry!")
        raise ShellError(classify("info", outcome))
    e: RemoteEntry = outcome.value
    ident = e.ident.split(":", 1)[-1]
    if e.is_file:
        return "\n".join([
            f"Info for file:   {path}",
            "",
            f"Ident:           {ident}",
            f"Name:            {e.name}",
            f"Path:            {e.path_display}",
            f"Revision:        {e.rev}",
            f"Client Modified: {e.client_modified or ''}",
            f"Server Modified: {e.server_modified or ''}",
            f"Size:            {e.size}-bytes {e.size // KB}-Kbytes {e.size // MB}-Mbytes",
        ])
    listing = client.list_folder(path)
    count = len(listing.value) if isinstance(listing, Success) else "?"
    return "\n".join([
        f"Info for folder: {path}",
        "",
        f"Ident:           {ident}",
        f"Name:            {e.name}",
        f"Path Display:    {e.path_display}",
        f"Entry Count:     {count}",
    ])


def h_account(s: Session, args: List[str]):
    _want("account", args, 0, expected="no parameters")
    client = s.require_connected()
    a = s.account
    usage = _check("space", client.space_usage())
    head = (f"{a.country} {a.locale} {a.account_type} User: {a.abbreviated_name} "
            f"{a.display_name} E-mail: {a.email}")
    if s.team:
        space = f"Id: {a.account_id} Space: {usage.allocated // GB}-Gb Using: {usage.used // MB}-Mb"
    else:
        space = f"Id: {a.account_id} Space: {usage.allocated // MB}-Mb Using: {usage.used // MB}-Mb"
    return f"{head}\n{space}"


def h_space(s: Session, args: List[str]):
    """Print storage space utilisation in several units."""
    _want("space", args, 0, expected="no parameters")
    client = s.require_connected()
    usage = _check("space", client.space_usage())
    total, used, free = usage.allocated, usage.used, usage.free
    lines = ["Dropbox Storage Space Utilization:", ""]
    for unit, div in (("bytes", 1), ("Kb", KB), ("Mb", MB), ("Gb", GB)):
        lines.append(f"    Total:{total // div:16d}-{unit:<8} Used:{used // div:16d}-{unit:<8} "
                     f"Free:{free // div:16d}-{unit}")
    return "\n".join(lines)


# ---------- Local ----------
def _listing(path: str) -> str:
    try:
        entries = sorted(os.scandir(path), key=lambda e: e.name)
    except OSError as e:
        raise LocalIOError(f"Error: Path '{path}' does not exist! ({e.strerror})") from e
    lines = []
    for entry in entries:
        try:
            st = entry.stat()
        except OSError:
            continue
        if entry.is_dir():
            lines.append(f"{_fmt_time(st.st_mtime):>22}  {st.st_size:12d} [{entry.name}]")
        else:
            lines.append(f"{_fmt_time(st.st_mtime):>22}  {st.st_size:12d} {entry.name}")
    return "\n".join(lines) if lines else "(empty)"


def h_lcd(s: Session, args: List[str]):
    """Change the local working directory; no argument returns to the start directory."""
    _want("lcd", args, 0, 1, expected="zero or one path parameter")
    target = resolve_local(args[0] if args else None, s.local_cwd, s.home)
    if target is None:
        raise LocalIOError("Change local directory: no such path above root '/' directory!")
    if not os.path.isdir(target):
        raise LocalIOError(f"Error: Path '{target}' does not exist!")
    s.local_cwd = os.path.normpath(target)
    return f"Change local directory to {s.local_cwd}"


def h_lwd(s: Session, args: List[str]):
    _want("lwd", args, 0, expected="no parameters")
    return s.local_cwd


def h_ldir(s: Session, args: List[str]):
    _want("ldir", args, 0, expected="no parameters")
    return _listing(s.local_cwd)


def _local_pair(s: Session, args: List[str], name: str) -> Tuple[str, str]:
    _want(name, args, 2, expected="two path parameters")
    src = _local_path(s, args[0])
    tgt = _local_path(s, args[1])
    if not os.path.exists(src):
        raise LocalIOError(f"Local source file: {args[0]} not found!")
    if os.path.exists(tgt):
        raise LocalIOError(f"Local target file: {args[1]} exists!")
    return src, tgt


def h_lcp(s: Session, args: List[str]):
    """Copy a local file or directory."""
    src, tgt = _local_pair(s, args, "lcp")
    try:
        if os.path.isdir(src):
            shutil.copytree(src, tgt)
        else:
            shutil.copy2(src, tgt)
    except OSError as e:
        raise LocalIOError(f"Error {type(e).__name__} : {e}") from e
    return f"Local file: {os.path.basename(src)} copied {os.path.basename(tgt)}."


def h_lrn(s: Session, args: List[str]):
    """Rename a local file or directory."""
    src, tgt = _local_pair(s, args, "lrn")
    try:
        os.rename(src, tgt)
    except OSError as e:
        raise LocalIOError(f"Error {type(e).__name__} : {e}") from e
    return f"Local file: {os.path.basename(src)} renamed {os.path.basename(tgt)}."


def h_lrm(s: Session, args: List[str]):
    _want("lrm", args, 1, expected="one path parameter")
    path = _local_path(s, args[0])
    if not os.path.exists(path):
        raise LocalIOError(f"Local file: {args[0]} not found!")
    if os.path.isdir(path):
        raise LocalIOError(f"Local file: {args[0]} is a directory; use 'lrdir'!")
    try:
        os.remove(path)
    except OSError as e:
        raise LocalIOError(f"Problem in deleting local file: {os.path.basename(path)}. {e.strerror}") from e
    return f"Local file: {os.path.basename(path)} deleted."


def h_lmdir(s: Session, args: List[str]):
    _want("lmdir", args, 1, expected="one path parameter")
    path = _local_path(s, args[0])
    if os.path.exists(path):
        kind = "directory" if os.path.isdir(path) else "file"
        raise LocalIOError(f"Error: Path '{path}' already exists as {kind}!")
    try:
        os.mkdir(path)
    except OSError as e:
        raise LocalIOError(f"Error: failed to create local directory: '{path}' {e.strerror}") from e
    return f"Created local directory: '{path}'."


def h_lrdir(s: Session, args: List[str]):
    _want("lrdir", args, 1, expected="one path parameter")
    path = _local_path(s, args[0])
    if not os.path.isdir(path):
        raise LocalIOError(f"Error: Path '{path}' directory does not exist!")
    if os.listdir(path):
        raise LocalIOError(f"Error: Path '{path}' directory is not empty!")
    try:
        os.rmdir(path)
    except OSError as e:
        raise LocalIOError(f"Directory: '{path}' not removed! {e.strerror}") from e
    return f"Directory: '{path}' removed."


def h_lfind(s: Session, args: List[str]):
    """Find local files below a path whose names match a glob."""
    _want("lfind", args, 2, expected="two parameters")
    root = _local_path(s, args[0])
    pattern = args[1]
    if not os.path.exists(root):
        raise LocalIOError(f"Error: Path '{root}' does not exist!")
    found = []
    for dirpath, _dirs, names in os.walk(root):
        for name in sorted(names):
            if fnmatch.fnmatch(name, pattern):
                found.append(f"Found:    {os.path.join(dirpath, name)}")
    return "\n".join(found) if found else "No matches found!"


# ---------- Shell ----------
def h_history(s: Session, args: List[str]):
    _want("history", args, 0, expected="no parameters")
    lines = ["Shell Command History:"]
    lines.extend(f"    {i:3d}  {line}" for i, line in enumerate(s.history))
    return "\n".join(lines)


def h_ready(s: Session, args: List[str]):
    """Report connection and transcript status."""
    _want("ready", args, 0, expected="no parameters")
    if s.connected:
        lines = ["Ready! Shell is connected to Dropbox!"]
    else:
        lines = ["Not Ready! Shell is not connected to Dropbox! Use command 'open' to open connection with shell."]
    if s.recording:
        lines.append(f"Creating a transcript of shell session command usage to file: {s.transcript.name}.")
    else:
        lines.append("No current transcript of shell session. Use command 'script' <filename> to create a transcript.")
    return "\n".join(lines)


def report_text(s: Session) -> str:
    start = time.strftime("%a %b %d %H:%M:%S %Y", time.localtime(s.start_time))
    close = time.strftime("%a %b %d %H:%M:%S %Y", time.localtime(s.end_time)) if s.end_time else ""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "unknown"
    return "\n".join([
        "",
        "    [============>>> Dropbox Shell Report <<<============]",
        "",
        f"      Platform: {platform.system()} {platform.machine()} v.{platform.release()}",
        f"      Userinfo: {user}:[{os.path.expanduser('~')}]",
        f"      Home Dir: {s.home}",
        "",
        f"      Session Begin: {start}",
        f"      Session Close: {close}",
        "",
        "           === Total for Session ===",
        "",
        f"      Total command count:{s.command_count:4d}-commands",
        f"      Total session timer:{s.elapsed():4d}-seconds",
        "",
        "           === Total Data Traffic ===",
        "",
        f"      Total bytes data get:{s.bytes_downloaded:10d}-bytes",
        f"      Total bytes data put:{s.bytes_uploaded:10d}-bytes",
        "",
        "    [<<<=========----------------------------=========>>>]",
        "",
    ])


def h_report(s: Session, args: List[str]):
    _want("report", args, 0, expected="no parameters")
    s.echo(report_text(s), Fore.MAGENTA)


def end_transcript(s: Session) -> None:
    s.echo("Transcript has finished for last command.", Fore.YELLOW)
    s.echo(f"Transcript of shell session written to file: {s.transcript.name}.", Fore.YELLOW)
    s.transcript.end()


def h_script(s: Session, args: List[str]):
    """Start a transcript, or stop the one in progress."""
    _want("script", args, 0, 1, expected="zero or one filename parameter")
    if s.recording:
        end_transcript(s)
        return None
    if args:
        path = _local_path(s, args[0])
    else:
        name = default_filename(s.transcript_prefix, s.local_cwd)
        s.echo(f"Using default filename: {name} for transcript.", Fore.YELLOW)
        path = os.path.join(s.local_cwd, name)
    s.transcript.begin(path)
    s.echo("Transcript has started with next command.", Fore.YELLOW)
    return None


def h_version(s: Session, args: List[str]):
    _want("ver", args, 0, expected="no parameters")
    return f"Dropbox shell version {VERSION}."


def h_help(s: Session, args: List[str]):
    """List the shell commands, or describe one."""
    _want("help", args, 0, 1, expected="zero or one parameter")
    if args:
        name = ALIASES.get(args[0].lower())
        if name is None:
            raise ShellError(f"No help found for '{args[0]}'. Try 'help' for the full list.")
        usage, desc = HELP_TEXT[name]
        names = [a for a, canon in ALIASES.items() if canon == name]
        return f"{usage}\n  {desc}\n  aliases: {', '.join(names)}"
    width = max(len(u) for u, _ in HELP_TEXT.values()) + 2
    lines = ["Dropbox Shell Commands and Parameters are:", ""]
    for name in sorted(HELP_TEXT):
        usage, desc = HELP_TEXT[name]
        lines.append(f"    {usage:<{width}} - {desc}")
    return "\n".join(lines)


def finalize(s: Session) -> None:
    """Close the connection, print the report and stop any transcript, in that order."""
    s.end_time = time.time()
    s.exit_requested = True
    try:
        if s.connected:
            s.close()
    except Exception as e:
        s.error(f"General error close connection: {e}")
    finally:
        try:
            s.echo("Goodbye!", Fore.MAGENTA)
            s.echo(report_text(s), Fore.MAGENTA)
        finally:
            if s.recording:
                end_transcript(s)


def h_bye(s: Session, args: List[str]):
    _want("bye", args, 0, expected="no parameters")
    finalize(s)


# ---------- Tables ----------
BUILTINS: "OrderedDict[str, Handler]" = OrderedDict([
    ("open", h_open),
    ("close", h_close),
    ("cd", h_cd),
    ("pwd", h_pwd),
    ("dir", h_dir),
    ("cp", h_cp),
    ("rm", h_rm),
    ("mv", h_mv),
    ("mkdir", h_mkdir),
    ("rmdir", h_rmdir),
    ("get", h_get),
    ("put", h_put),
    ("find", h_find),
    ("info", h_info),
    ("account", h_account),
    ("space", h_space),
    ("lcd", h_lcd),
    ("lcp", h_lcp),
    ("lrm", h_lrm),
    ("ldir", h_ldir),
    ("lfind", h_lfind),
    ("lmdir", h_lmdir),
    ("lrdir", h_lrdir),
    ("lrn", h_lrn),
    ("lwd", h_lwd),
    ("access", h_access),
    ("appname", h_appname),
    ("history", h_history),
    ("ready", h_ready),
    ("report", h_report),
    ("script", h_script),
    ("help", h_help),
    ("ver", h_version),
    ("bye", h_bye),
])

_ALIAS_GROUPS: Dict[str, Tuple[str, ...]] = {
    "cd": ("chdir", "cdir"),
    "dir": ("ls",),
    "rm": ("del",),
    "mv": ("rn", "ren"),
    "mkdir": ("md", "mdir"),
    "rmdir": ("rd", "rdir"),
    "lrm": ("ldel",),
    "lrdir": ("lrd",),
    "ready": ("status",),
    "ver": ("version",),
    "bye": ("exit", "quit"),
}


def _build_aliases() -> Dict[str, str]:
    table = {name: name for name in BUILTINS}
    for canon, spellings in _ALIAS_GROUPS.items():
        for a in spellings:
            table[a] = canon
    return table


# every accepted spelling -> canonical name
ALIASES: Dict[str, str] = _build_aliases()

HELP_TEXT: Dict[str, Tuple[str, str]] = {
    "access": ("access [<access-token>]", "report or set account access token."),
    "account": ("account", "print account status information."),
    "appname": ("appname [<application-name>]", "get or set account application name."),
    "bye": ("(bye | exit | quit)", "exit shell and if connected close."),
    "cd": ("(cd | chdir | cdir) [<path> | ..]", "change remote directory."),
    "close": ("close", "close account connection."),
    "cp": ("cp <source-path> <target-path>", "copy remote file or directory."),
    "rm": ("(rm | del) <path>", "delete remote file entry."),
    "dir": ("(dir | ls)", "list remote directories and files."),
    "find": ("find <path> <query>", "search in remote path for file or directory that matches query."),
    "get": ("get <path>", "get download remote file to local directory."),
    "help": ("help [<command>]", "list shell commands or details about a valid command."),
    "history": ("history", "list the valid shell commands entered."),
    "info": ("info <path>", "print metadata information about entry at path."),
    "lcd": ("lcd [<path> | ..]", "change local current working directory."),
    "lcp": ("lcp <source-path> <target-path>", "copy local file or directory."),
    "lrm": ("(lrm | ldel) <path>", "delete local file."),
    "ldir": ("ldir", "list local directories and files."),
    "lfind": ("lfind <path> <glob>", "search in local path for file that matches glob."),
    "lmdir": ("lmdir <path>", "create local directory."),
    "lrdir": ("(lrdir | lrd) <path>", "remove local directory."),
    "lrn": ("lrn <source-path> <target-path>", "rename local file or directory."),
    "lwd": ("lwd", "print local current working directory."),
    "mkdir": ("(mkdir | md | mdir) <path>", "make remote directory."),
    "open": ("open [<application-name> <access-token>]", "connect shell with application name and access token."),
    "put": ("put <path>", "put upload local file to remote directory."),
    "pwd": ("pwd", "print remote current working directory."),
    "rmdir": ("(rmdir | rd | rdir) <path>", "remove remote directory."),
    "mv": ("(mv | rn | ren) <source-path> <target-path>", "rename remote file or directory."),
    "ready": ("(ready | status)", "print ready status of shell."),
    "report": ("report", "report on shell summaries and totals."),
    "script": ("script [<filename>]", "make transcript of shell session to file."),
    "space": ("space", "print storage space utilization."),
    "ver": ("(ver | version)", "print shell version information."),
}
