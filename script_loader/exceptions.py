#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the script loader

Load failures are not exceptions here: a failed script becomes a terminal
ERROR status. These classes cover misuse of the registry and service layer.
"""

from typing import Dict, Any, Optional
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for categorization and UI display"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ScriptLoaderError(Exception):
    """
    Base exception for all script loader errors

    Captures context information and provides a user-friendly message
    alongside the technical one.
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 user_message: Optional[str] = None,
                 severity: ErrorSeverity = ErrorSeverity.ERROR,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize script loader error

        Args:
            message: Technical error message for logging
            error_code: Unique error code for categorization
            user_message: User-friendly message for UI display
            severity: Error severity level
            context: Additional context information
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.user_message = user_message or self._generate_user_message()
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)
        self.context = context or {}

    def _generate_user_message(self) -> str:
        """Generate user-friendly message from technical message"""
        return "The script loader encountered an error. Please check the logs for details."

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and serialization"""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'user_message': self.user_message,
            'severity': self.severity.value,
            'timestamp': self.timestamp.isoformat(),
            'context': self.context
        }


class RegistryError(ScriptLoaderError):
    """Invalid operations on the script handle registry"""

    def __init__(self, message: str, identifier: Optional[str] = None, **kwargs):
        """
        Initialize registry error

        Args:
            message: Technical error message
            identifier: Script identifier the operation targeted
            **kwargs: Additional ScriptLoaderError arguments
        """
        context = kwargs.get('context', {})
        if identifier:
            context['identifier'] = identifier
        kwargs['context'] = context

        super().__init__(message, **kwargs)

    def _generate_user_message(self) -> str:
        return "A script could not be registered or updated."


class ServiceNotRegisteredError(ScriptLoaderError, ValueError):
    """Lookup of a service interface that has no registration"""

    def __init__(self, interface_name: str, **kwargs):
        context = kwargs.get('context', {})
        context['interface'] = interface_name
        kwargs['context'] = context

        super().__init__(f"Service {interface_name} not registered",
                         severity=ErrorSeverity.CRITICAL, **kwargs)

    def _generate_user_message(self) -> str:
        return "The application services are not configured."
