"""
Unit tests for ScriptResourceCoordinator.

Tests component-bound script usage against a real loader service and
against mocks of the service registry.
"""

import sys
import unittest
from unittest.mock import Mock, patch

from PySide6.QtCore import QCoreApplication, QObject

from script_loader.models import ScriptLoadOptions, ScriptStatus
from script_loader.resource_coordinators.script_coordinator import ScriptResourceCoordinator
from script_loader.services.script_loader_service import ScriptLoaderService
from script_loader.services.script_registry import ScriptRegistry
from script_loader.services.status_cache import StatusCache


def setUpModule():
    global _app
    _app = QCoreApplication.instance() or QCoreApplication(sys.argv)


class TestScriptResourceCoordinator(unittest.TestCase):
    """Test ScriptResourceCoordinator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = ScriptRegistry()
        self.cache = StatusCache()
        self.service = ScriptLoaderService(registry=self.registry, cache=self.cache)
        self.coordinator = ScriptResourceCoordinator("game_shape", service=self.service)

    def tearDown(self):
        self.coordinator.detach_all()

    def test_defaults_to_registered_service(self):
        """Test the service is resolved from the registry when not injected."""
        with patch('script_loader.resource_coordinators.script_coordinator.get_service') as mock_get_service:
            mock_get_service.return_value = self.service
            coordinator = ScriptResourceCoordinator("game_shape")

        self.assertIs(coordinator._service, self.service)
        self.assertEqual(coordinator.component_id, "game_shape")

    def test_bind_to_component(self):
        """Test binding returns self and stores a weak reference."""
        component = QObject()

        result = self.coordinator.bind_to_component(component)

        self.assertIs(result, self.coordinator)
        self.assertIs(self.coordinator.get_component(), component)

    def test_bind_connects_destroyed_signal(self):
        """Test QObject components detach on destruction."""
        component = Mock(spec=QObject)
        component.destroyed = Mock()
        component.destroyed.connect = Mock()

        self.coordinator.bind_to_component(component)

        component.destroyed.connect.assert_called_once()
        subscription = self.coordinator.use_script("game.wasm.js")

        on_destroyed = component.destroyed.connect.call_args[0][0]
        on_destroyed()

        self.assertTrue(subscription.detached)
        self.assertEqual(self.coordinator.get_subscription_count(), 0)

    def test_use_script_requests_through_service(self):
        """Test script usage returns the service subscription."""
        subscription = self.coordinator.use_script("game.wasm.js")

        self.assertEqual(subscription.status, ScriptStatus.LOADING)
        self.assertEqual(self.registry.handle_count(), 1)
        self.assertEqual(self.coordinator.get_subscription_count(), 1)

    def test_status_changed_signal(self):
        """Test transitions are re-emitted through the coordinator signal."""
        received = []
        extra = []
        self.coordinator.status_changed.connect(lambda identifier, status: received.append((identifier, status)))

        self.coordinator.use_script("game.wasm.js", on_status=extra.append)
        self.registry.report_loaded("game.wasm.js")

        self.assertEqual(received, [("game.wasm.js", "ready")])
        self.assertEqual(extra, [ScriptStatus.READY])

    def test_release(self):
        """Test releasing one identifier detaches only its subscriptions."""
        game = self.coordinator.use_script("game.wasm.js")
        other = self.coordinator.use_script("other.js")

        released = self.coordinator.release("game.wasm.js")

        self.assertEqual(released, 1)
        self.assertTrue(game.detached)
        self.assertFalse(other.detached)
        self.assertEqual(self.service.active_subscription_count("game.wasm.js"), 0)

    def test_detach_all_applies_remove_on_unmount(self):
        """Test unmount removes the handle when the consumer asked for it."""
        self.coordinator.use_script("game.wasm.js", ScriptLoadOptions(remove_on_unmount=True))
        self.registry.report_loaded("game.wasm.js")

        self.coordinator.detach_all()

        self.assertEqual(self.registry.handle_count(), 0)
        self.assertIsNone(self.cache.get("game.wasm.js"))

    def test_idle_request_is_tracked(self):
        """Test requests without an identifier are still tracked and released."""
        subscription = self.coordinator.use_script(None)

        self.assertEqual(subscription.status, ScriptStatus.IDLE)
        self.assertEqual(self.coordinator.release(None), 1)
        self.assertEqual(self.registry.handle_count(), 0)

    def test_del_warning(self):
        """Test that __del__ warns about live subscriptions."""
        with patch('script_loader.resource_coordinators.script_coordinator.logger') as mock_logger:
            coordinator = ScriptResourceCoordinator("game_shape", service=self.service)
            coordinator.use_script("game.wasm.js")

            coordinator.__del__()

            mock_logger.warning.assert_called()
            self.assertEqual(coordinator.get_subscription_count(), 0)


if __name__ == '__main__':
    unittest.main()
