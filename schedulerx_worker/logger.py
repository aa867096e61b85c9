"""Worker logging: a replaceable process-wide logger with file rotation."""

import glob
import gzip
import logging
import os
import shutil
import sys
import time
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

LOG_LEVEL_ENV = "SCHEDULERX_WORKER_LOG_LEVEL"

_FORMAT = "%(asctime)s level=%(levelname)s msg=%(message)s"
_DEFAULT_MAX_MEGABYTES = 100
_SECONDS_PER_DAY = 86400

_LEVELS = {
    "debug": logging.DEBUG,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

_LOGGER_METHODS = ("debug", "info", "warning", "error", "set_level", "set_output_path")


def _parse_level(name: Optional[str]) -> int:
    return _LEVELS.get((name or "").lower(), logging.INFO)


def _gzip_name(name: str) -> str:
    return name + ".gz"


def _gzip_rotate(source: str, dest: str) -> None:
    if not os.path.exists(source):
        return
    with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


class _RotatingHandler(RotatingFileHandler):
    """Size-based rotation with optional gzip and age-based pruning of backups."""

    def __init__(
        self,
        filename: str,
        max_bytes: int,
        backup_count: int,
        max_age_days: int,
        compress: bool,
    ) -> None:
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=True,
        )
        self._max_age_days = max_age_days
        if compress:
            self.namer = _gzip_name
            self.rotator = _gzip_rotate

    def doRollover(self) -> None:
        super().doRollover()
        self._prune()

    def _prune(self) -> None:
        if self._max_age_days <= 0:
            return
        cutoff = time.time() - self._max_age_days * _SECONDS_PER_DAY
        base = Path(self.baseFilename)
        for backup in base.parent.glob(glob.escape(base.name) + ".*"):
            try:
                if backup.stat().st_mtime < cutoff:
                    backup.unlink()
            except OSError:
                continue


@dataclass
class LogConfig:
    """Where and how log files are written and rotated."""

    output_path: str
    max_file_size_mb: int = 10
    max_backups: int = 5
    max_ages: int = 3
    compress: bool = False
    local_time: bool = True

    def build_handler(self) -> logging.Handler:
        """Create a rotating file handler, making the log directory if needed."""
        path = Path(self.output_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        megabytes = self.max_file_size_mb if self.max_file_size_mb > 0 else _DEFAULT_MAX_MEGABYTES
        handler = _RotatingHandler(
            str(path),
            max_bytes=megabytes * 1024 * 1024,
            backup_count=self.max_backups,
            max_age_days=self.max_ages,
            compress=self.compress,
        )
        formatter = logging.Formatter(_FORMAT)
        formatter.converter = time.localtime if self.local_time else time.gmtime
        handler.setFormatter(formatter)
        return handler


def default_log_config() -> LogConfig:
    """Return the default file configuration under the user's home directory."""
    return LogConfig(output_path=str(Path.home() / "logs" / "schedulerx" / "schedulerx.log"))


class DefaultLogger:
    """Logger writing to standard error until it is pointed at a file."""

    def __init__(self, name: str = "schedulerx_worker", level: Optional[str] = None) -> None:
        self.logger = logging.Logger(name)
        self.set_level(os.environ.get(LOG_LEVEL_ENV, "") if level is None else level)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        self._use_handler(handler)

    @property
    def level(self) -> int:
        return self.logger.level

    def _use_handler(self, handler: logging.Handler) -> None:
        for old in list(self.logger.handlers):
            self.logger.removeHandler(old)
            old.close()
        self.logger.addHandler(handler)

    def debug(self, msg: str, *args: Any) -> None:
        self.logger.debug(msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self.logger.error(msg, *args)

    def set_level(self, level: str) -> None:
        """Set the level by name: debug, warn, error or fatal; anything else means info."""
        self.logger.setLevel(_parse_level(level))

    def set_output_path(self, path: str) -> None:
        """Write to ``path`` with the default rotation settings."""
        config = default_log_config()
        config.output_path = path
        self.configure(config)

    def configure(self, config: LogConfig) -> None:
        """Write to the file described by ``config``."""
        self._use_handler(config.build_handler())


_active: Any = DefaultLogger()


def get_logger() -> Any:
    """Return the logger currently in use."""
    return _active


def set_logger(logger: Any) -> None:
    """Replace the process-wide logger with a custom one.

    Raises TypeError if ``logger`` lacks any of the logging methods.
    """
    global _active
    missing = [name for name in _LOGGER_METHODS if not callable(getattr(logger, name, None))]
    if missing:
        raise TypeError(f"logger lacks methods: {', '.join(missing)}")
    _active = logger


def set_log_level(level: str) -> None:
    """Change the active logger's level; an empty name leaves it unchanged."""
    if not level:
        return
    _active.set_level(level)


def set_output_path(path: str) -> None:
    """Point the active logger at a file; an empty path leaves it unchanged."""
    if not path:
        return
    _active.set_output_path(path)


def debug(msg: str, *args: Any) -> None:
    _active.debug(msg, *args)


def info(msg: str, *args: Any) -> None:
    _active.info(msg, *args)


def warning(msg: str, *args: Any) -> None:
    _active.warning(msg, *args)


def error(msg: str, *args: Any) -> None:
    _active.error(msg, *args)