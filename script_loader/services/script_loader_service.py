#!/usr/bin/env python3
"""
ScriptLoaderService - deduplicated loading of external scripts

Many consumers may request the same script. The service creates at most one
handle per identifier in the registry, shares its completion with every
attached consumer, and records terminal outcomes in the status cache so
later requests return without touching the registry.
"""

from typing import Any, Dict, List, Optional, Set
import logging

from PySide6.QtCore import QObject, Signal

from .interfaces import (
    CompletionCallback, IScriptRegistry, IStatusCache
)
from .service_registry import get_service
from .script_registry import ScriptHandle
from ..models import RemovalPolicy, ScriptLoadOptions, ScriptStatus

logger = logging.getLogger(__name__)


class ScriptSubscription:
    """
    One consumer's view of a script request.

    Holds the current status and this consumer's completion callback on the
    handle. Call detach() when the consumer goes away.
    """

    def __init__(self, service: 'ScriptLoaderService', identifier: Optional[str],
                 options: ScriptLoadOptions,
                 on_status: Optional[CompletionCallback] = None):
        self.identifier = identifier
        self.options = options
        self.status = ScriptStatus.IDLE
        self._service = service
        self._on_status = on_status
        self._handle: Optional[ScriptHandle] = None
        self._listener: Optional[CompletionCallback] = None
        self._detached = False

    @property
    def handle(self) -> Optional[ScriptHandle]:
        return self._handle

    @property
    def attached(self) -> bool:
        """Whether this subscription is listening on a handle"""
        return self._listener is not None and not self._detached

    @property
    def detached(self) -> bool:
        return self._detached

    def detach(self) -> None:
        """Stop receiving notifications; idempotent"""
        if self._detached:
            return
        self._detached = True
        self._service._detach(self)

    def _deliver(self, status: ScriptStatus) -> bool:
        # Statuses only move forward; a terminal status is final
        if self._detached or self.status.is_terminal or status is self.status:
            return False
        self.status = status
        if self._on_status is not None:
            self._on_status(status)
        return True

    def __repr__(self) -> str:
        return (f"ScriptSubscription(identifier={self.identifier!r}, "
                f"status={self.status.value}, detached={self._detached})")


class ScriptLoaderService(QObject):
    """
    Script load coordinator.
    Implements IScriptLoaderService interface.

    Runs entirely on the caller's thread: request(), detach() and the
    registry's completion callbacks never block or wait.
    """

    # Qt Signals for monitoring
    status_changed = Signal(str, str)   # identifier, status
    handle_created = Signal(str)        # identifier
    handle_removed = Signal(str)        # identifier

    def __init__(self,
                 registry: Optional[IScriptRegistry] = None,
                 cache: Optional[IStatusCache] = None,
                 removal_policy: RemovalPolicy = RemovalPolicy.UNSCOPED,
                 parent: Optional[QObject] = None):
        """
        Initialize the loader service

        Args:
            registry: Script handle registry (defaults to the registered IScriptRegistry)
            cache: Status cache (defaults to the registered IStatusCache)
            removal_policy: What remove_on_unmount does to a shared handle
            parent: Parent QObject
        """
        super().__init__(parent)

        self._registry = registry if registry is not None else get_service(IScriptRegistry)
        self._cache = cache if cache is not None else get_service(IStatusCache)
        self.removal_policy = RemovalPolicy(removal_policy)

        # Subscriptions listening on a handle, by identifier
        self._subscriptions: Dict[str, List[ScriptSubscription]] = {}
        # Identifiers whose removal waits for the last attached consumer
        self._pending_removals: Set[str] = set()

        self._stats = {
            'requests': 0,
            'idle_requests': 0,
            'cache_hits': 0,
            'handles_created': 0,
            'handles_discovered': 0,
            'handles_destroyed': 0,
            'notifications_delivered': 0,
        }

        logger.info(f"ScriptLoaderService initialized (removal policy: {self.removal_policy.value})")

    @property
    def registry(self) -> IScriptRegistry:
        return self._registry

    @property
    def cache(self) -> IStatusCache:
        return self._cache

    def request(self, identifier: Optional[str],
                options: Optional[ScriptLoadOptions] = None,
                on_status: Optional[CompletionCallback] = None) -> ScriptSubscription:
        """
        Request a script on behalf of one consumer

        Args:
            identifier: Script identifier, or None for no script
            options: Consumer options
            on_status: Called with each later status transition until detach

        Returns:
            Subscription whose status is current as of return
        """
        options = options or ScriptLoadOptions()
        subscription = ScriptSubscription(self, identifier, options, on_status)
        self._stats['requests'] += 1

        if not identifier or options.should_prevent_load:
            self._stats['idle_requests'] += 1
            return subscription

        cached = self._cache.get(identifier)
        if cached is not None and cached.is_terminal:
            self._stats['cache_hits'] += 1
            subscription.status = cached
            handle = self._registry.find(identifier)
            if handle is not None:
                self._attach(subscription, handle)
            logger.debug(f"Cache hit for {identifier}: {cached.value}")
            return subscription

        handle = self._registry.find(identifier)
        if handle is not None:
            self._stats['handles_discovered'] += 1
            marker = self._registry.get_status_marker(handle)
            if marker is not None and marker.is_terminal:
                subscription.status = marker
                self._cache.set(identifier, marker)
            else:
                subscription.status = ScriptStatus.LOADING
            self._attach(subscription, handle)
            return subscription

        handle = self._registry.create(identifier)
        self._pending_removals.discard(identifier)
        self._registry.set_status_marker(handle, ScriptStatus.LOADING)
        self._stats['handles_created'] += 1

        registry = self._registry

        def write_marker(status: ScriptStatus):
            registry.set_status_marker(handle, status)

        # Subscribed before any consumer so later discoverers read the marker
        self._registry.on_complete(handle, write_marker)

        subscription.status = ScriptStatus.LOADING
        self._attach(subscription, handle)

        logger.debug(f"Started loading {identifier}")
        self.handle_created.emit(identifier)
        return subscription

    def get_status(self, identifier: Optional[str]) -> ScriptStatus:
        """Current status of an identifier; creates nothing"""
        if not identifier:
            return ScriptStatus.IDLE

        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        handle = self._registry.find(identifier)
        if handle is None:
            return ScriptStatus.IDLE

        marker = self._registry.get_status_marker(handle)
        if marker is not None and marker.is_terminal:
            return marker
        return ScriptStatus.LOADING

    def evict(self, identifier: str) -> bool:
        return self._cache.delete(identifier)

    def active_subscription_count(self, identifier: Optional[str] = None) -> int:
        if identifier is not None:
            return len(self._subscriptions.get(identifier, []))
        return sum(len(subs) for subs in self._subscriptions.values())

    def get_statistics(self) -> Dict[str, Any]:
        """Get coordinator statistics"""
        return {
            **self._stats,
            'active_subscriptions': self.active_subscription_count(),
            'cached_statuses': len(self._cache.snapshot()),
            'live_handles': self._registry.handle_count(),
        }

    # Private methods

    def _attach(self, subscription: ScriptSubscription, handle: ScriptHandle) -> None:
        def on_complete(status: ScriptStatus):
            self._on_complete(subscription, status)

        subscription._handle = handle
        subscription._listener = on_complete
        self._registry.on_complete(handle, on_complete)
        self._subscriptions.setdefault(subscription.identifier, []).append(subscription)

    def _on_complete(self, subscription: ScriptSubscription, status: ScriptStatus) -> None:
        identifier = subscription.identifier
        previous = self._cache.get(identifier)
        self._cache.set(identifier, status)
        if previous is not status:
            logger.debug(f"Script {identifier} finished: {status.value}")
            self.status_changed.emit(identifier, status.value)

        if subscription._deliver(status):
            self._stats['notifications_delivered'] += 1

    def _detach(self, subscription: ScriptSubscription) -> None:
        handle = subscription._handle
        identifier = subscription.identifier

        if handle is not None and subscription._listener is not None:
            self._registry.off_complete(handle, subscription._listener)
            subscription._listener = None
            remaining = self._subscriptions.get(identifier, [])
            if subscription in remaining:
                remaining.remove(subscription)
            if not remaining:
                self._subscriptions.pop(identifier, None)

        if not identifier or subscription.options.should_prevent_load:
            return

        wants_removal = subscription.options.remove_on_unmount
        others = self.active_subscription_count(identifier)

        if handle is not None and self._registry.find(identifier) is not handle:
            # Handle already gone; the cache entry belongs to a newer load
            if wants_removal:
                logger.debug(f"Skipping removal of {identifier}: handle already destroyed")
            return

        if self.removal_policy is RemovalPolicy.REFERENCE_COUNTED:
            if wants_removal and others:
                self._pending_removals.add(identifier)
                logger.debug(f"Deferring removal of {identifier}: {others} consumer(s) still attached")
                return
            if not wants_removal and (others or identifier not in self._pending_removals):
                return
        elif not wants_removal:
            return
        elif others:
            # Unscoped removal: the remaining consumers lose their handle
            logger.warning(
                f"Removing {identifier} while {others} consumer(s) are still attached; "
                f"they will receive no further notifications"
            )

        self._pending_removals.discard(identifier)
        self._cache.delete(identifier)
        if handle is not None and self._registry.destroy(handle):
            self._stats['handles_destroyed'] += 1
            self._drop_orphans(identifier, handle)
            self.handle_removed.emit(identifier)

    def _drop_orphans(self, identifier: str, handle: ScriptHandle) -> None:
        """Forget subscriptions left on a destroyed handle"""
        subscriptions = self._subscriptions.get(identifier, [])
        for orphan in [s for s in subscriptions if s._handle is handle]:
            orphan._listener = None
            subscriptions.remove(orphan)
        if not subscriptions:
            self._subscriptions.pop(identifier, None)


__all__: List[str] = ['ScriptSubscription', 'ScriptLoaderService']
