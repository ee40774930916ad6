"""Rotating log file setup for hosts that embed the exporter.

Library modules only call logging.getLogger(__name__); a host process calls
build_logger(LoggerConfig.from_env()) once to get the "wpexport" tree onto
disk (and optionally stdout).
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class LoggerConfig:
    name: str = "wpexport"
    level: int = logging.INFO
    max_bytes: int = 2_000_000
    backup_count: int = 5
    encoding: str = "utf-8"
    console: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, name: str = "wpexport") -> "LoggerConfig":
        level_name = str(os.environ.get("WPEXPORT_LOG_LEVEL", "INFO")).strip().upper()
        level = logging.getLevelName(level_name)
        return cls(
            name=name,
            level=level if isinstance(level, int) else logging.INFO,
            console=str(os.environ.get("WPEXPORT_LOG_STDOUT", "")).strip() == "1",
            log_file=(os.environ.get("WPEXPORT_LOG_FILE") or "").strip() or None,
        )


def _default_log_file(name: str) -> str:
    app_dir = Path(os.path.expanduser("~")) / ".wpexport" / "logs"
    app_dir.mkdir(parents=True, exist_ok=True)
    return str(app_dir / f"{name.replace('.', '_')}.log")


def _same_file(handler: logging.Handler, path: str) -> bool:
    base = getattr(handler, "baseFilename", None)
    if not base:
        return False
    return os.path.normcase(os.path.abspath(base)) == os.path.normcase(os.path.abspath(path))


def build_logger(config: LoggerConfig) -> logging.Logger:
    """Attach a rotating file handler (and stdout if asked) once per name and file."""
    logger = logging.getLogger(config.name)
    logger.setLevel(int(config.level))

    log_file = config.log_file or _default_log_file(config.name)
    Path(os.path.dirname(os.path.abspath(log_file))).mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(_same_file(h, log_file) for h in logger.handlers):
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(config.max_bytes),
            backupCount=int(config.backup_count),
            encoding=config.encoding,
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    has_console = any(type(h) is logging.StreamHandler for h in logger.handlers)
    if config.console and not has_console:
        stream = logging.StreamHandler(stream=sys.stdout)
        stream.setFormatter(formatter)
        logger.addHandler(stream)

    logger.propagate = False
    return logger
