"""
Diagnostic logging for upload runs.

Console output goes to stderr so that stdout carries only the JSON run
summary. With ``JFROG_CLI_LOG_FILE`` set, the same records are also kept
in ``<home_dir>/logs/artup.log``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ..core.interfaces.logger import ILogger

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ArtupLogger(ILogger):
    """ILogger backed by a stdlib logger named ``artup``.

    Each instance replaces the handlers of that logger, so the most
    recently bootstrapped configuration wins.
    """

    MAX_FILE_SIZE = 10 * 1024 * 1024
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "artup",
        level: str = "info",
        console_enabled: bool = True,
        log_file: Path | None = None,
    ) -> None:
        """
        Args:
            name: stdlib logger name
            level: Threshold for every handler (JFROG_CLI_LOG_LEVEL)
            console_enabled: Write to stderr
            log_file: Rotating log file, created with its parent directory
        """
        self._logger = logging.getLogger(name)
        # Handlers do the filtering so set_level can adjust them together.
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._handlers: list[logging.Handler] = []
        threshold = self._to_level(level)

        if console_enabled:
            self._add_handler(logging.StreamHandler(sys.stderr), threshold)
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                RotatingFileHandler(
                    log_file, maxBytes=self.MAX_FILE_SIZE, backupCount=self.BACKUP_COUNT
                ),
                threshold,
            )

    @classmethod
    def _to_level(cls, level: str) -> int:
        return cls.LEVEL_MAP.get(level.lower(), logging.INFO)

    def _add_handler(self, handler: logging.Handler, threshold: int) -> None:
        handler.setLevel(threshold)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        self._logger.addHandler(handler)
        self._handlers.append(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        threshold = self._to_level(level)
        for handler in self._handlers:
            handler.setLevel(threshold)


class NullLogger(ILogger):
    """Discards everything; the default when nothing is bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass
