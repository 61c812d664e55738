#!/usr/bin/env python3
"""
Tests for service registry functionality
"""
import pytest
import threading
import time
from script_loader.services import ServiceRegistry, IService
from script_loader.exceptions import ServiceNotRegisteredError


class MockService(IService):
    def __init__(self, value: str = "test"):
        self.value = value


class MockDependentService(IService):
    def __init__(self, dep: MockService):
        self.dependency = dep


def test_singleton_registration():
    """Test singleton service registration"""
    registry = ServiceRegistry()
    service = MockService("singleton")

    registry.register_singleton(MockService, service)
    retrieved = registry.get_service(MockService)

    assert retrieved is service
    assert retrieved.value == "singleton"


def test_factory_creates_new_instances():
    """Test that factory creates new instances each time"""
    registry = ServiceRegistry()

    registry.register_factory(MockService, lambda: MockService("factory"))
    instance1 = registry.get_service(MockService)
    instance2 = registry.get_service(MockService)

    assert instance1 is not instance2
    assert instance1.value == instance2.value == "factory"


def test_service_not_found():
    """Test error when service not registered"""
    registry = ServiceRegistry()

    with pytest.raises(ServiceNotRegisteredError, match="Service MockService not registered"):
        registry.get_service(MockService)


def test_service_not_found_is_value_error():
    """Lookup misses stay catchable as ValueError"""
    registry = ServiceRegistry()

    with pytest.raises(ValueError):
        registry.get_service(MockService)


def test_singleton_priority_over_factory():
    """Test that singleton takes priority over factory when both are registered"""
    registry = ServiceRegistry()
    singleton = MockService("singleton")

    registry.register_factory(MockService, lambda: MockService("factory"))
    registry.register_singleton(MockService, singleton)

    assert registry.get_service(MockService) is singleton


def test_has_service_and_clear():
    """Test has_service before and after clearing all registrations"""
    registry = ServiceRegistry()
    registry.register_singleton(MockService, MockService())

    assert registry.has_service(MockService)
    assert not registry.has_service(MockDependentService)

    registry.clear()

    assert not registry.has_service(MockService)
    with pytest.raises(ValueError):
        registry.get_service(MockService)


def test_unregister_and_registered_interfaces():
    """Test unregistering removes both singleton and factory registrations"""
    registry = ServiceRegistry()
    registry.register_singleton(MockService, MockService())
    registry.register_factory(MockDependentService, lambda: MockDependentService(MockService()))
    registry.register_factory(MockService, lambda: MockService("factory"))

    assert registry.registered_interfaces() == [MockService, MockDependentService]

    assert registry.unregister(MockService) is True
    assert registry.unregister(MockService) is False
    assert not registry.has_service(MockService)
    assert registry.registered_interfaces() == [MockDependentService]

def test_thread_safety():
    """Test concurrent registration and lookup"""
    registry = ServiceRegistry()
    results = []
    errors = []
    shared = MockService("thread")

    def register_and_get_service():
        try:
            registry.register_singleton(MockService, shared)
            time.sleep(0.01)
            results.append(registry.get_service(MockService))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=register_and_get_service) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(results) == 10
    assert all(result is shared for result in results)


def test_convenience_functions():
    """Test global convenience functions"""
    from script_loader.services import get_service, register_service, register_factory, has_service
    from script_loader.services.service_registry import _service_registry

    _service_registry.clear()
    try:
        service = MockService("convenience")
        register_service(MockService, service)
        assert get_service(MockService) is service
        assert has_service(MockService)

        _service_registry.clear()
        register_factory(MockService, lambda: MockService("factory_convenience"))
        assert get_service(MockService).value == "factory_convenience"
    finally:
        _service_registry.clear()


def test_error_context():
    """Test that lookup errors carry the interface name"""
    registry = ServiceRegistry()

    try:
        registry.get_service(MockService)
        assert False, "Should have raised ServiceNotRegisteredError"
    except ServiceNotRegisteredError as e:
        assert "MockService" in str(e)
        assert e.context['interface'] == "MockService"
        assert e.to_dict()['severity'] == "critical"
