"""
Script resource coordinator for component lifecycles.

Ties script subscriptions to the component that requested them, so that a
component going away detaches everything it asked for.
"""

import logging
import weakref
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from script_loader.models import ScriptLoadOptions, ScriptStatus
from script_loader.services.interfaces import CompletionCallback, IScriptLoaderService
from script_loader.services.script_loader_service import ScriptSubscription
from script_loader.services.service_registry import get_service

logger = logging.getLogger(__name__)


class ScriptResourceCoordinator(QObject):
    """
    Coordinator between a consumer component and the ScriptLoaderService.

    Each use_script() call is one consumer request (mount); detach_all()
    is the matching unmount and runs automatically when a bound QObject
    component is destroyed.
    """

    status_changed = Signal(str, str)  # identifier, status

    def __init__(self, component_id: str,
                 service: Optional[IScriptLoaderService] = None,
                 parent: Optional[QObject] = None):
        """
        Initialize the script coordinator.

        Args:
            component_id: Unique identifier for the component
            service: Optional service instance (defaults to getting from registry)
            parent: Parent QObject
        """
        super().__init__(parent)
        self._component_id = component_id
        self._service = service if service is not None else get_service(IScriptLoaderService)
        self._subscriptions: Dict[str, List[ScriptSubscription]] = {}
        self._component_ref: Optional[weakref.ref] = None
        self.debug_mode = False

    @property
    def component_id(self) -> str:
        return self._component_id

    def bind_to_component(self, component: Any) -> 'ScriptResourceCoordinator':
        """
        Bind the coordinator to a component.

        Args:
            component: The component to bind to (usually a widget or controller)

        Returns:
            Self for fluent interface
        """
        self._component_ref = weakref.ref(component)

        if isinstance(component, QObject):
            component.destroyed.connect(lambda *args: self.detach_all())

        return self

    def use_script(self, identifier: Optional[str],
                   options: Optional[ScriptLoadOptions] = None,
                   on_status: Optional[CompletionCallback] = None) -> ScriptSubscription:
        """
        Request a script for the bound component.

        Args:
            identifier: Script identifier, or None for no script
            options: Consumer options
            on_status: Extra callback for later status transitions

        Returns:
            The subscription; its status is current as of return
        """
        key = identifier or ''

        def forward(status: ScriptStatus):
            self.status_changed.emit(key, status.value)
            if on_status is not None:
                on_status(status)

        subscription = self._service.request(identifier, options, on_status=forward)
        self._subscriptions.setdefault(key, []).append(subscription)

        if self.debug_mode:
            logger.debug(f"{self._component_id} requested {identifier!r}: {subscription.status.value}")

        return subscription

    def release(self, identifier: Optional[str]) -> int:
        """
        Detach every subscription this component holds for an identifier.

        Returns:
            Number of subscriptions detached
        """
        subscriptions = self._subscriptions.pop(identifier or '', [])
        for subscription in subscriptions:
            subscription.detach()
        return len(subscriptions)

    def detach_all(self):
        """
        Detach all subscriptions (component unmount).
        """
        for identifier in list(self._subscriptions.keys()):
            try:
                self.release(identifier)
            except Exception as e:
                logger.error(f"Error detaching {identifier!r} for {self._component_id}: {e}")

        self._subscriptions.clear()

    def get_subscription_count(self) -> int:
        """
        Get the count of live subscriptions.
        """
        return sum(
            1 for subs in self._subscriptions.values()
            for subscription in subs if not subscription.detached
        )

    def get_component(self) -> Optional[Any]:
        if self._component_ref:
            return self._component_ref()
        return None

    def __del__(self):
        """
        Safety check on destruction to warn about live subscriptions.
        """
        subscriptions = getattr(self, '_subscriptions', None)
        if subscriptions and self.get_subscription_count():
            logger.warning(
                f"Coordinator {self._component_id} destroyed with "
                f"{self.get_subscription_count()} live subscriptions"
            )
            try:
                self.detach_all()
            except Exception as e:
                logger.error(f"Error during coordinator cleanup: {e}")
