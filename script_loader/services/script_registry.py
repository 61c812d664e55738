#!/usr/bin/env python3
"""
ScriptRegistry - in-process registry of script handles

Stands in for the host's script insertion mechanism: it owns at most one
handle per identifier and relays the host's load/error completion to the
handle's subscribers.
"""

from typing import Dict, List, Optional
from datetime import datetime
import threading
import logging

from PySide6.QtCore import QObject, Signal

from .interfaces import CompletionCallback
from ..models import ScriptStatus
from ..exceptions import RegistryError

logger = logging.getLogger(__name__)


class ScriptHandle:
    """
    A single load of one script identifier.

    The status field is the handle's status marker: LOADING from creation,
    then the terminal status written once on completion. Completion
    callbacks are held in subscription order and called synchronously.
    """

    def __init__(self, identifier: str, async_load: bool = True, defer: bool = True):
        self.identifier = identifier
        self.async_load = async_load
        self.defer = defer
        self.status: ScriptStatus = ScriptStatus.LOADING
        self.created_at = datetime.now()
        self.destroyed = False
        self._completed = False
        self._subscribers: List[CompletionCallback] = []

    @property
    def completed(self) -> bool:
        """Whether the host has reported load or error for this handle"""
        return self._completed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: CompletionCallback) -> None:
        """Add a completion callback; adding the same callback twice is a no-op"""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: CompletionCallback) -> bool:
        """Remove a completion callback; returns whether it was subscribed"""
        try:
            self._subscribers.remove(callback)
            return True
        except ValueError:
            return False

    def _complete(self, status: ScriptStatus) -> int:
        """Deliver the terminal status to current subscribers

        Returns:
            Number of callbacks that ran without raising
        """
        self._completed = True
        # Marker is written even when nothing is subscribed
        self.status = status
        delivered = 0
        for callback in list(self._subscribers):
            try:
                callback(status)
                delivered += 1
            except Exception:
                logger.exception(f"Completion callback failed for {self.identifier}")
        return delivered

    def _detach_all(self) -> None:
        self.destroyed = True
        self._subscribers.clear()

    def __repr__(self) -> str:
        return (f"ScriptHandle(identifier={self.identifier!r}, status={self.status.value}, "
                f"subscribers={len(self._subscribers)}, destroyed={self.destroyed})")


class ScriptRegistry(QObject):
    """
    Default script handle registry.
    Implements IScriptRegistry interface.

    The host reports outcomes through report_loaded()/report_failed(); each
    handle accepts exactly one report.
    """

    # Qt Signals for monitoring
    handle_added = Signal(str)            # identifier
    handle_removed = Signal(str)          # identifier
    handle_completed = Signal(str, str)   # identifier, status

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._handles: Dict[str, ScriptHandle] = {}
        self._lock = threading.RLock()

    def find(self, identifier: str) -> Optional[ScriptHandle]:
        with self._lock:
            return self._handles.get(identifier)

    def create(self, identifier: str, async_load: bool = True,
               defer: bool = True) -> ScriptHandle:
        if not identifier:
            raise RegistryError("Cannot create a script handle without an identifier")

        with self._lock:
            if identifier in self._handles:
                raise RegistryError(
                    f"Script handle already exists for {identifier}",
                    identifier=identifier,
                    user_message="The script is already being loaded."
                )
            handle = ScriptHandle(identifier, async_load=async_load, defer=defer)
            self._handles[identifier] = handle

        logger.debug(f"Created script handle: {identifier}")
        self.handle_added.emit(identifier)
        return handle

    def destroy(self, handle: ScriptHandle) -> bool:
        with self._lock:
            if self._handles.get(handle.identifier) is not handle:
                return False
            del self._handles[handle.identifier]
            handle._detach_all()

        logger.debug(f"Destroyed script handle: {handle.identifier}")
        self.handle_removed.emit(handle.identifier)
        return True

    def get_status_marker(self, handle: ScriptHandle) -> Optional[ScriptStatus]:
        return handle.status

    def set_status_marker(self, handle: ScriptHandle, status: ScriptStatus) -> None:
        current = handle.status
        if current is status:
            return
        if current.is_terminal:
            raise RegistryError(
                f"Status of {handle.identifier} is already {current.value}; "
                f"refusing {status.value}",
                identifier=handle.identifier
            )
        handle.status = status

    def on_complete(self, handle: ScriptHandle, callback: CompletionCallback) -> None:
        handle.subscribe(callback)

    def off_complete(self, handle: ScriptHandle, callback: CompletionCallback) -> None:
        handle.unsubscribe(callback)

    def report_complete(self, identifier: str, success: bool) -> bool:
        """
        Report the host's completion signal for an identifier

        Args:
            identifier: Script identifier
            success: True for a load event, False for an error event

        Returns:
            True if a live, not yet completed handle received the report
        """
        handle = self.find(identifier)
        if handle is None:
            logger.warning(f"Completion reported for unknown script: {identifier}")
            return False
        if handle.completed:
            logger.warning(f"Duplicate completion reported for script: {identifier}")
            return False

        status = ScriptStatus.from_completion(success)
        delivered = handle._complete(status)
        logger.debug(f"Script {identifier} completed as {status.value} "
                     f"({delivered} subscriber(s) notified)")
        self.handle_completed.emit(identifier, status.value)
        return True

    def report_loaded(self, identifier: str) -> bool:
        return self.report_complete(identifier, True)

    def report_failed(self, identifier: str) -> bool:
        return self.report_complete(identifier, False)

    def handle_count(self) -> int:
        with self._lock:
            return len(self._handles)

    def identifiers(self) -> List[str]:
        with self._lock:
            return list(self._handles)

    def clear(self) -> None:
        """Destroy every handle"""
        with self._lock:
            handles = list(self._handles.values())
        for handle in handles:
            self.destroy(handle)


__all__: List[str] = ['ScriptHandle', 'ScriptRegistry']
