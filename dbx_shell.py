#!/usr/bin/env python3
"""
DBXShell - the Dropbox shell client.

An interactive command line that connects to a Dropbox account and works on
two directory trees side by side: the remote account (``cd``, ``ls``, ``cp``,
``rm``, ``mkdir``, ``get``, ``put``, ...) and the local filesystem (``lcd``,
``ldir``, ``lcp``, ``lrm``, ``lmdir``, ...). Every command runs to completion
before the next line is read.

Each input line is split into words (or on quotes when the line has any, so
``put 'my file.txt'`` works), the first word is looked up in the alias table,
and the matching handler from :mod:`dbx_commands` runs against the session.
A failing command prints a message and returns to the prompt; only losing the
input stream ends the session early, and then through the same path as
``bye``: close the connection, print the report, close the transcript.

History and tab completion are available when the readline module is
present. Settings can be pre-seeded from ``dbx_shell.yaml`` (see
:mod:`dbx_config`).
"""

import logging
import os
import re
import sys
from cmd import Cmd
from typing import List, Optional, TextIO

from colorama import Fore, init as colorama_init

from dbx_commands import (
    ABOUT,
    ALIASES,
    BUILTINS,
    CLOSE_MESSAGE,
    START_MESSAGE,
    VERSION,
    WELCOME,
    finalize,
)
from dbx_config import ConfigError, ShellConfig, load_config
from dbx_dropbox import DropboxStorage
from dbx_errors import ShellError, UnknownCommandError
from dbx_session import Connector, Session, c

# optional module
try:
    import readline
except ImportError:
    readline = None

logger = logging.getLogger(__name__)

# commands whose arguments are local paths
LOCAL_PATH_COMMANDS = {"lcd", "lcp", "lrm", "lfind", "lmdir", "lrdir", "lrn", "put", "script"}


def split_line(line: str) -> List[str]:
    """Split an input line into trimmed tokens.

    A line containing a single quote is split on single quotes, otherwise a
    line containing a double quote is split on double quotes, otherwise on
    single whitespace characters. After a quote split, empty pieces past the
    first are dropped. After a whitespace split only trailing empties are
    dropped, so a line starting with a blank has an empty first token and
    means "no command".
    """
    for quote in ("'", '"'):
        if quote in line:
            parts = [p.strip() for p in line.split(quote)]
            return parts[:1] + [p for p in parts[1:] if p]
    parts = [p.strip() for p in re.split(r"\s", line)]
    while parts and not parts[-1]:
        parts.pop()
    return parts


class DBXShell(Cmd):
    intro = None

    def __init__(self, session: Optional[Session] = None, config: Optional[ShellConfig] = None,
                 connector: Optional[Connector] = None, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        super().__init__(stdin=stdin, stdout=stdout)
        self.config = config or ShellConfig()
        if stdin is not None:
            self.use_rawinput = False
        if session is None:
            session = Session(stdout=self.stdout, connector=connector, colour=self.config.colour,
                              transcript_prefix=self.config.transcript_prefix)
            session.app_name = self.config.app_name
            session.access_token = self.config.access_token
        self.session = session
        self.commands = BUILTINS
        self.aliases = ALIASES
        self.index: List[str] = sorted(self.aliases)

    @property
    def prompt(self) -> str:
        return self.session.prompt

    # ---- lifecycle
    def preloop(self):
        s = self.session
        s.echo(f"{ABOUT} Version {VERSION}", Fore.MAGENTA)
        s.echo("Released under terms of the GNU General Public License.", Fore.MAGENTA)
        s.echo()
        s.echo(START_MESSAGE, Fore.MAGENTA)
        s.echo()
        s.echo(WELCOME, Fore.MAGENTA)
        s.echo()
        if readline and self.use_rawinput:
            self._setup_readline()

    def postloop(self):
        self.session.echo()
        self.session.echo(CLOSE_MESSAGE, Fore.MAGENTA)

    def _setup_readline(self):
        hist = os.path.expanduser(self.config.history_file)
        try:
            readline.read_history_file(hist)
        except OSError:
            pass
        import atexit
        atexit.register(self._save_history, hist)
        # libedit (macOS) uses a different binding syntax
        doc = getattr(readline, '__doc__', '') or ''
        if 'libedit' in doc:
            readline.parse_and_bind('bind ^I rl_complete')
        else:
            readline.parse_and_bind('tab: complete')
        # keep path separators inside the completed word
        readline.set_completer_delims(readline.get_completer_delims().replace(os.sep, ""))

    @staticmethod
    def _save_history(path: str):
        try:
            readline.write_history_file(path)
        except OSError as e:
            logger.debug("could not write history file %s: %s", path, e)

    def _read_line(self) -> str:
        """Read one line, raising EOFError at end of input."""
        prompt = self.prompt
        self.session.transcript.write(prompt)
        if self.use_rawinput:
            line = input(c(prompt, Fore.GREEN) if self.session.colour else prompt)
        else:
            self.stdout.write(prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                raise EOFError
            line = line.rstrip("\r\n")
        self.session.transcript.write(line + "\n")
        return line

    def cmdloop(self, intro=None):
        """Read and run commands until ``bye`` or the input ends."""
        old_completer = None
        if self.use_rawinput and self.completekey and readline:
            old_completer = readline.get_completer()
            readline.set_completer(self.complete)
        self.preloop()
        try:
            while not self.session.exit_requested:
                try:
                    line = self._read_line()
                except (EOFError, KeyboardInterrupt, OSError) as e:
                    logger.debug("input ended: %r", e)
                    self.stdout.write("\n")
                    finalize(self.session)
                    break
                self.onecmd(line)
        finally:
            s = self.session
            if not s.exit_requested:
                finalize(s)
            if self.use_rawinput and self.completekey and readline:
                readline.set_completer(old_completer)
            self.postloop()

    # ---- dispatch
    def resolve(self, name: str) -> Optional[str]:
        """Return the canonical command for ``name`` or None if unknown."""
        return self.aliases.get(name.lower())

    def onecmd(self, line: str) -> bool:
        s = self.session
        s.history.append(line)
        tokens = split_line(line)
        if not tokens or not tokens[0]:
            s.history.pop()
            s.echo("Huh? What!", Fore.YELLOW)
            return False
        name = self.resolve(tokens[0])
        if name is None:
            s.history.pop()
            s.error(str(UnknownCommandError(tokens[0])))
            return False
        handler = self.commands[name]
        try:
            out = handler(s, tokens[1:])
        except ShellError as e:
            s.error(str(e))
        except Exception as e:
            logger.debug("command %s failed", name, exc_info=True)
            s.error(f"Evaluate error: {type(e).__name__} {e}")
        else:
            if out is not None:
                s.echo(out, Fore.CYAN)
        s.command_count += 1
        return s.exit_requested

    # ---- completion
    def completenames(self, text, *ignored):
        return [k for k in self.index if k.startswith(text.lower())]

    def completedefault(self, text: str, line: str, begidx: int, endidx: int):
        tokens = line.strip().split()
        if not tokens:
            return []
        if self.resolve(tokens[0]) in LOCAL_PATH_COMMANDS:
            return self._complete_path(text)
        return []

    def _complete_path(self, text: str) -> List[str]:
        """Return local path completions relative to the local working directory."""
        cwd = self.session.local_cwd
        head, pattern = os.path.split(text)
        base = head if os.path.isabs(head) else os.path.join(cwd, head)
        try:
            entries = sorted(os.listdir(base))
        except OSError:
            return []
        out = []
        for entry in entries:
            if not entry.startswith(pattern):
                continue
            candidate = os.path.join(head, entry) if head else entry
            if os.path.isdir(os.path.join(base, entry)):
                candidate += os.sep
            out.append(candidate)
        return out


def main(config_path: Optional[str] = None) -> int:
    problem = None
    try:
        config = load_config(config_path) if config_path else load_config()
    except ConfigError as e:
        problem = e
        config = ShellConfig()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    if problem is not None:
        logger.warning("ignoring configuration: %s", problem)
    colorama_init()
    try:
        DBXShell(config=config, connector=DropboxStorage.connect).cmdloop()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
