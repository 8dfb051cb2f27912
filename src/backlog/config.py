"""Global configuration and logging.

Everything global lives under one directory:

  ~/.backlog/            ($BACKLOG_HOME overrides)
    config.yml           optional settings
    index.json           repos that have a backlog
    tui.log              editor log

Per-repo backlogs live in <repo>/<todo_dir>/backlog.json.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from backlog.errors import ConfigError

DEFAULT_TODO_DIR = ".todo"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def global_dir() -> Path:
    override = os.environ.get("BACKLOG_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".backlog"


@dataclass(frozen=True)
class Config:
    home: Path
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    hide_completed: bool = False
    todo_dir: str = DEFAULT_TODO_DIR

    @property
    def index_path(self) -> Path:
        return self.home / "index.json"

    @property
    def log_path(self) -> Path:
        return self.log_file or self.home / "tui.log"


def load_config(home: Path | None = None) -> Config:
    home = home or global_dir()
    cfg_path = home / "config.yml"
    if not cfg_path.exists():
        return Config(home=home)

    try:
        raw = yaml.safe_load(cfg_path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config {cfg_path}: {e}") from e

    if raw is None:
        return Config(home=home)
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config {cfg_path}: expected a mapping")

    log_file = raw.get("log_file")
    return Config(
        home=home,
        log_level=str(raw.get("log_level", "INFO")).upper(),
        log_file=Path(log_file).expanduser() if log_file else None,
        hide_completed=bool(raw.get("hide_completed", False)),
        todo_dir=str(raw.get("todo_dir") or DEFAULT_TODO_DIR),
    )


def setup_logging(cfg: Config) -> None:
    """Send log records to the editor log file; the terminal belongs to the TUI."""
    log_path = cfg.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=getattr(logging, cfg.log_level, logging.INFO),
        format=LOG_FORMAT,
    )
