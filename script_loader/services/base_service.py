#!/usr/bin/env python3
"""
Base service class with common functionality
"""
from abc import ABC
from typing import Optional
import logging

from .interfaces import IService
from ..models import ScriptStatus

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class BaseService(IService, ABC):
    """Base class for plain (non-QObject) services

    Loggers are children of the package logger, so AppLogger's handlers
    receive everything a service writes.
    """

    def __init__(self, logger_name: Optional[str] = None):
        self.logger = logging.getLogger(logger_name or f"script_loader.{self.__class__.__name__}")

    def _log_operation(self, operation: str, details: str = "", level: str = "info"):
        """Log service operation with consistent format"""
        message = f"[{self.__class__.__name__}] {operation}"
        if details:
            message += f" - {details}"
        self.logger.log(_LEVELS.get(level, logging.INFO), message)

    def _log_status_change(self, identifier: str, previous: Optional[ScriptStatus],
                           status: Optional[ScriptStatus]):
        """Log a script moving between statuses; None means no entry"""
        before = previous.value if previous is not None else "none"
        after = status.value if status is not None else "none"
        self._log_operation("Status changed", f"{identifier}: {before} -> {after}", level="debug")
