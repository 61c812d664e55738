#!/usr/bin/env python3
"""
Service registry with dependency injection
"""
from typing import Any, Callable, Dict, List, Type, TypeVar
import threading

from .interfaces import IService
from ..exceptions import ServiceNotRegisteredError

T = TypeVar('T')


class ServiceRegistry:
    """Thread-safe service registry with dependency injection"""

    def __init__(self):
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._singletons: Dict[Type, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, interface: Type[T], implementation: T):
        """Register singleton service instance"""
        with self._lock:
            self._singletons[interface] = implementation

    def register_factory(self, interface: Type[T], factory: Callable[[], T]):
        """Register service factory"""
        with self._lock:
            self._factories[interface] = factory

    def get_service(self, interface: Type[T]) -> T:
        """Get service instance, singletons first"""
        with self._lock:
            if interface in self._singletons:
                return self._singletons[interface]

            if interface in self._factories:
                return self._factories[interface]()

            raise ServiceNotRegisteredError(interface.__name__)

    def has_service(self, interface: Type[T]) -> bool:
        with self._lock:
            return interface in self._singletons or interface in self._factories

    def unregister(self, interface: Type[T]) -> bool:
        """Drop the singleton and factory for an interface; returns whether either existed"""
        with self._lock:
            had_singleton = self._singletons.pop(interface, None) is not None
            had_factory = self._factories.pop(interface, None) is not None
            return had_singleton or had_factory

    def registered_interfaces(self) -> List[Type]:
        """Interfaces with a singleton or factory, in registration order"""
        with self._lock:
            return list(dict.fromkeys([*self._singletons, *self._factories]))

    def clear(self):
        """Clear all registrations (for testing)"""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()


# Global service registry
_service_registry = ServiceRegistry()


def get_service(interface: Type[T]) -> T:
    """Convenience function to get service"""
    return _service_registry.get_service(interface)


def has_service(interface: Type[T]) -> bool:
    return _service_registry.has_service(interface)


def register_service(interface: Type[T], implementation: T):
    """Convenience function to register singleton service"""
    _service_registry.register_singleton(interface, implementation)


def register_factory(interface: Type[T], factory: Callable[[], T]):
    """Convenience function to register service factory"""
    _service_registry.register_factory(interface, factory)


def unregister_service(interface: Type[T]) -> bool:
    return _service_registry.unregister(interface)


def registered_interfaces() -> List[Type]:
    return _service_registry.registered_interfaces()


__all__ = [
    'IService', 'ServiceRegistry', 'get_service', 'has_service',
    'register_service', 'register_factory', 'unregister_service',
    'registered_interfaces',
]
