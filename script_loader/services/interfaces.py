#!/usr/bin/env python3
"""
Service interfaces for dependency injection and testing
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from ..models import ScriptStatus, ScriptLoadOptions

if TYPE_CHECKING:
    from .script_registry import ScriptHandle
    from .script_loader_service import ScriptSubscription


CompletionCallback = Callable[[ScriptStatus], None]


class IService(ABC):
    """Base interface for all services"""
    pass


class IStatusCache(IService):
    """Interface for the process-wide script status cache"""

    @abstractmethod
    def get(self, identifier: str) -> Optional[ScriptStatus]:
        """Get the cached status for an identifier, if any"""
        pass

    @abstractmethod
    def set(self, identifier: str, status: ScriptStatus) -> None:
        """Record the status for an identifier"""
        pass

    @abstractmethod
    def delete(self, identifier: str) -> bool:
        """Evict an identifier; returns whether an entry existed"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached status"""
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, ScriptStatus]:
        """Copy of the current cache contents"""
        pass


class IScriptRegistry(IService):
    """
    Interface for the host's script insertion mechanism

    The registry owns script handles. At most one live handle exists per
    identifier, and each handle signals completion exactly once.
    """

    @abstractmethod
    def find(self, identifier: str) -> Optional['ScriptHandle']:
        """Look up the live handle for an identifier"""
        pass

    @abstractmethod
    def create(self, identifier: str, async_load: bool = True,
               defer: bool = True) -> 'ScriptHandle':
        """
        Insert a new handle in the LOADING state

        Args:
            identifier: Script identifier (usually a URL)
            async_load: Whether the host may execute the script asynchronously
            defer: Whether the host should defer execution until parsing ends

        Returns:
            The newly registered handle
        """
        pass

    @abstractmethod
    def destroy(self, handle: 'ScriptHandle') -> bool:
        """Remove a handle entirely"""
        pass

    @abstractmethod
    def get_status_marker(self, handle: 'ScriptHandle') -> Optional[ScriptStatus]:
        """Read the status recorded on a handle"""
        pass

    @abstractmethod
    def set_status_marker(self, handle: 'ScriptHandle', status: ScriptStatus) -> None:
        """Record a status on a handle"""
        pass

    @abstractmethod
    def on_complete(self, handle: 'ScriptHandle', callback: CompletionCallback) -> None:
        """Subscribe to the handle's completion signal"""
        pass

    @abstractmethod
    def off_complete(self, handle: 'ScriptHandle', callback: CompletionCallback) -> None:
        """Unsubscribe from the handle's completion signal"""
        pass

    @abstractmethod
    def handle_count(self) -> int:
        """Number of live handles"""
        pass


class IScriptLoaderService(IService):
    """Interface for the script load coordinator"""

    @abstractmethod
    def request(self, identifier: Optional[str],
                options: Optional[ScriptLoadOptions] = None,
                on_status: Optional[CompletionCallback] = None) -> 'ScriptSubscription':
        """
        Request a script for one consumer

        Args:
            identifier: Script identifier, or None for no script
            options: Consumer options
            on_status: Called with each later status transition until detach

        Returns:
            Subscription carrying the current status and a detach operation
        """
        pass

    @abstractmethod
    def get_status(self, identifier: Optional[str]) -> ScriptStatus:
        """Current status of an identifier without requesting it"""
        pass

    @abstractmethod
    def evict(self, identifier: str) -> bool:
        """Remove an identifier from the status cache"""
        pass

    @abstractmethod
    def active_subscription_count(self, identifier: Optional[str] = None) -> int:
        """Attached subscriptions, for one identifier or overall"""
        pass

    @abstractmethod
    def get_statistics(self) -> Dict[str, Any]:
        """Counters describing coordinator activity"""
        pass


__all__: List[str] = [
    'CompletionCallback', 'IService', 'IStatusCache',
    'IScriptRegistry', 'IScriptLoaderService',
]
