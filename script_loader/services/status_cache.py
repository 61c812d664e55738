#!/usr/bin/env python3
"""
StatusCache - process-wide record of script load outcomes
"""
from typing import Dict, Optional
import threading

from .base_service import BaseService
from .interfaces import IStatusCache
from ..models import ScriptStatus


class StatusCache(BaseService, IStatusCache):
    """
    Maps script identifiers to their last known status.

    Registered once as a singleton by configure_services(); tests build
    their own instance and inject it into the loader service.
    """

    def __init__(self):
        super().__init__()
        self._statuses: Dict[str, ScriptStatus] = {}
        self._lock = threading.RLock()

    def get(self, identifier: str) -> Optional[ScriptStatus]:
        with self._lock:
            return self._statuses.get(identifier)

    def set(self, identifier: str, status: ScriptStatus) -> None:
        with self._lock:
            previous = self._statuses.get(identifier)
            self._statuses[identifier] = status
        if previous is not status:
            self._log_status_change(identifier, previous, status)

    def delete(self, identifier: str) -> bool:
        with self._lock:
            previous = self._statuses.pop(identifier, None)
        if previous is not None:
            self._log_status_change(identifier, previous, None)
        return previous is not None

    def clear(self) -> None:
        with self._lock:
            count = len(self._statuses)
            self._statuses.clear()
        self._log_operation("Cleared", f"{count} status(es)", level="debug")

    def snapshot(self) -> Dict[str, ScriptStatus]:
        with self._lock:
            return dict(self._statuses)

    def __contains__(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._statuses

    def __len__(self) -> int:
        with self._lock:
            return len(self._statuses)
