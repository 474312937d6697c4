"""
Optional YAML configuration.

If a ``dbx_shell.yaml`` file sits in the working directory it is read at
startup and may pre-seed the connection details and a few shell settings::

    app_name: myapp
    access_token: sl.XXXXXXXX
    transcript_prefix: dbx_shell_transcript
    log_level: WARNING
    history_file: ~/.dbx_shell_history
    colour: true

Keys not listed above are ignored.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from dbx_transcript import DEFAULT_PREFIX

DEFAULT_CONFIG_FILE = "dbx_shell.yaml"


class ConfigError(Exception):
    pass


@dataclass
class ShellConfig:
    app_name: str = ""
    access_token: Optional[str] = None
    transcript_prefix: str = DEFAULT_PREFIX
    log_level: str = "WARNING"
    history_file: str = "~/.dbx_shell_history"
    colour: bool = True


def load_config(path: str = DEFAULT_CONFIG_FILE) -> ShellConfig:
    """Load a :class:`ShellConfig` from ``path``; defaults if the file is absent."""
    if not os.path.exists(path):
        return ShellConfig()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(ShellConfig)}
    values = {k: v for k, v in data.items() if k in known}
    cfg = ShellConfig(**values)
    # YAML reads a bare number as an int
    if cfg.access_token is not None:
        cfg.access_token = str(cfg.access_token)
    cfg.app_name = str(cfg.app_name or "")
    cfg.log_level = str(cfg.log_level).upper()
    return cfg
