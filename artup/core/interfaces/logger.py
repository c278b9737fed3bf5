"""
Logging seam for the upload pipeline.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """
    Receives per-entry failures, retries and dry-run notices.

    Messages use %-style arguments. The JSON run summary is not logged;
    the CLI prints it to stdout.
    """

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def set_level(self, level: str) -> None:
        """Change the threshold to 'debug', 'info', 'warning' or 'error'."""
        pass
