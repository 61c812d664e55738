#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Centralized logging for the script loader with Qt signal support
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional
from PySide6.QtCore import QObject, Signal


LOGGER_NAME = 'script_loader'


class AppLogger(QObject):
    """Centralized logging with Qt signal support for UI integration"""

    # Qt signal for UI components to receive log messages
    log_message = Signal(str, str)  # level, message

    _instance = None

    def __new__(cls):
        """Singleton pattern ensures single logger instance"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger (only once due to singleton)"""
        if self._initialized:
            return

        super().__init__()
        self._initialized = True

        # Parent of every module logger in the package
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        self._file_handler: Optional[logging.FileHandler] = None
        self._setup_console_handler()

        self._debug_enabled = False

    def _setup_console_handler(self):
        """Setup console (stdout) handler"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        self.logger.addHandler(console_handler)
        self._console_handler = console_handler

    def enable_file_logging(self, log_dir: Path) -> Path:
        """Write all levels to a dated log file in log_dir

        Args:
            log_dir: Directory for log files (created if missing)

        Returns:
            Path of the active log file
        """
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"script_loader_{datetime.now().strftime('%Y%m%d')}.log"

        if self._file_handler is not None:
            if Path(self._file_handler.baseFilename) == log_file.absolute():
                return log_file
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        ))

        self.logger.addHandler(file_handler)
        self._file_handler = file_handler
        return log_file

    def enable_debug(self, enabled: bool = True):
        """Enable or disable debug logging to console

        Args:
            enabled: Whether to show debug messages in console
        """
        self._debug_enabled = enabled
        if enabled:
            self._console_handler.setLevel(logging.DEBUG)
            self.info("Debug logging enabled")
        else:
            self._console_handler.setLevel(logging.INFO)
            self.info("Debug logging disabled")

    @property
    def debug_enabled(self) -> bool:
        return self._debug_enabled

    def debug(self, message: str):
        self.logger.debug(message)
        if self._debug_enabled:
            self.log_message.emit('DEBUG', message)

    def info(self, message: str):
        self.logger.info(message)
        self.log_message.emit('INFO', message)

    def warning(self, message: str):
        self.logger.warning(message)
        self.log_message.emit('WARNING', message)

    def error(self, message: str, exc_info: bool = False):
        """Log error message

        Args:
            message: Error message to log
            exc_info: Whether to include exception traceback
        """
        self.logger.error(message, exc_info=exc_info)
        self.log_message.emit('ERROR', message)

    def exception(self, message: str):
        """Log exception with automatic traceback"""
        self.logger.exception(message)
        self.log_message.emit('ERROR', f"Exception: {message}")

    def get_log_file_path(self) -> Optional[Path]:
        """Get the current log file path, or None if file logging is off"""
        if self._file_handler is not None:
            return Path(self._file_handler.baseFilename)
        return None


# Global logger instance
logger = AppLogger()
