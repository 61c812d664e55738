"""
Resource coordinator infrastructure for component script usage.

Coordinators bridge between consumer components and the
ScriptLoaderService, detaching subscriptions when components go away.
"""

from .script_coordinator import ScriptResourceCoordinator

__all__ = [
    'ScriptResourceCoordinator',
]
