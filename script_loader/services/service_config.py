#!/usr/bin/env python3
"""
Service configuration and registration
"""
import logging
from typing import Any, Dict, List, Optional

from .service_registry import (
    get_service, register_service, registered_interfaces, unregister_service
)
from .interfaces import IScriptRegistry, IStatusCache, IScriptLoaderService
from .status_cache import StatusCache
from .script_registry import ScriptRegistry
from .script_loader_service import ScriptLoaderService
from ..settings_manager import SettingsManager
from ..logger import logger as app_logger

logger = logging.getLogger("script_loader.ServiceConfiguration")


def configure_services(settings: Optional[SettingsManager] = None,
                       registry: Optional[IScriptRegistry] = None,
                       enable_file_logging: bool = True) -> ScriptLoaderService:
    """
    Configure and register the script loader services

    Args:
        settings: Settings to read the removal policy and logging options from
        registry: Host registry to use instead of the in-process ScriptRegistry
        enable_file_logging: Whether to attach the dated log file handler

    Returns:
        The registered loader service
    """
    settings = settings or SettingsManager()

    try:
        if settings.debug_logging:
            app_logger.enable_debug(True)
        if enable_file_logging:
            app_logger.enable_file_logging(settings.log_directory)

        # Cache and registry first; the loader resolves them on construction
        register_service(IStatusCache, StatusCache())
        register_service(IScriptRegistry, registry if registry is not None else ScriptRegistry())

        service = ScriptLoaderService(removal_policy=settings.removal_policy)
        register_service(IScriptLoaderService, service)

        logger.info("All services configured successfully")
        return service

    except Exception as e:
        logger.error(f"Service configuration failed: {e}")
        raise


def get_configured_services():
    """Get list of all configured service interfaces for debugging"""
    return [
        IStatusCache,
        IScriptRegistry,
        IScriptLoaderService,
    ]


def verify_service_configuration() -> Dict[str, Dict[str, Any]]:
    """Verify all services are properly configured (for testing/debugging)"""
    results = {}

    for service_interface in get_configured_services():
        try:
            service = get_service(service_interface)
            results[service_interface.__name__] = {
                'configured': True,
                'instance': service.__class__.__name__,
                'error': None
            }
        except Exception as e:
            results[service_interface.__name__] = {
                'configured': False,
                'instance': None,
                'error': str(e)
            }

    return results


def shutdown_services() -> List[str]:
    """
    Unregister the script loader services

    Live handles and cached statuses are left to the released instances;
    a later configure_services() starts from empty ones.

    Returns:
        Names of the interfaces that were registered
    """
    configured = set(get_configured_services())
    removed = []
    for service_interface in registered_interfaces():
        if service_interface in configured and unregister_service(service_interface):
            removed.append(service_interface.__name__)

    logger.info(f"Services shut down: {', '.join(removed) or 'none registered'}")
    return removed
