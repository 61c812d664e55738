#!/usr/bin/env python3
"""
Service layer for the script loader

- Dependency injection through the service registry
- Status cache and script handle registry as injectable services
- The load coordinator that deduplicates script requests
"""

from .service_registry import (
    ServiceRegistry, get_service, has_service, register_service, register_factory,
    unregister_service, registered_interfaces
)
from .interfaces import (
    IService, IStatusCache, IScriptRegistry, IScriptLoaderService, CompletionCallback
)
from .base_service import BaseService

# Service implementations
from .status_cache import StatusCache
from .script_registry import ScriptHandle, ScriptRegistry
from .script_loader_service import ScriptLoaderService, ScriptSubscription

# Service configuration
from .service_config import (
    configure_services, shutdown_services, verify_service_configuration
)

__all__ = [
    'ServiceRegistry', 'get_service', 'has_service', 'register_service', 'register_factory',
    'unregister_service', 'registered_interfaces',
    'IService', 'IStatusCache', 'IScriptRegistry', 'IScriptLoaderService',
    'CompletionCallback',
    'BaseService',
    'StatusCache', 'ScriptHandle', 'ScriptRegistry',
    'ScriptLoaderService', 'ScriptSubscription',
    'configure_services', 'shutdown_services', 'verify_service_configuration'
]
