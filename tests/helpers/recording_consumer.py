"""
Recording consumer for script loader tests.

Collects every status a consumer is notified with so tests can assert on
ordering and fan-out without a UI component.
"""

from typing import List, Optional

from script_loader.models import ScriptLoadOptions, ScriptStatus


class RecordingConsumer:
    """
    Test double for a component that uses a script.

    Keeps the subscription returned by the service and the statuses
    delivered to it afterwards.
    """

    def __init__(self, service, identifier: Optional[str],
                 options: Optional[ScriptLoadOptions] = None):
        self.notifications: List[ScriptStatus] = []
        self.subscription = service.request(identifier, options, on_status=self.notifications.append)
        self.initial_status = self.subscription.status

    @property
    def status(self) -> ScriptStatus:
        return self.subscription.status

    @property
    def observed(self) -> List[ScriptStatus]:
        """Initial status followed by every notification"""
        return [self.initial_status] + self.notifications

    def unmount(self):
        self.subscription.detach()
