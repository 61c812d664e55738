#!/usr/bin/env python3
"""
Script Loader

Deduplicated loading of externally hosted scripts shared by many consumers,
with a process-wide cache of load outcomes.
"""

from .models import ScriptStatus, ScriptLoadOptions, RemovalPolicy
from .exceptions import (
    ErrorSeverity, ScriptLoaderError, RegistryError, ServiceNotRegisteredError
)

__version__ = "1.0.0"

__all__ = [
    'ScriptStatus', 'ScriptLoadOptions', 'RemovalPolicy',
    'ErrorSeverity', 'ScriptLoaderError', 'RegistryError', 'ServiceNotRegisteredError',
]
