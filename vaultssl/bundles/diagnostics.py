"""Diagnostics sink used by the bundle engine."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from vaultssl.utils.logging import get_logger


class DiagnosticsSink(ABC):
    """Receives the engine's diagnostic events."""

    @abstractmethod
    def debug(self, message: str) -> None:
        pass

    @abstractmethod
    def warn(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        pass


class LoggingDiagnostics(DiagnosticsSink):
    """Forwards diagnostics to a standard logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("vaultssl.bundles")

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.logger.error(message, exc_info=exc)
