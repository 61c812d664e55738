#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Centralized settings management for the script loader
"""

from typing import Any, Optional
from pathlib import Path
from PySide6.QtCore import QSettings

from .models import RemovalPolicy


class SettingsManager:
    """Centralized settings management backed by QSettings"""

    # Canonical keys for all settings
    KEYS = {
        # Loader settings
        'REMOVAL_POLICY': 'loader.removal_policy',

        # Debug settings
        'DEBUG_LOGGING': 'debug.enable_logging',

        # Path settings
        'LOG_DIRECTORY': 'paths.log_directory',
    }

    ORGANIZATION = 'ScriptLoader'
    APPLICATION = 'Settings'

    _instance = None

    def __new__(cls, qsettings: Optional[QSettings] = None):
        """Singleton for the application settings; injected stores get their own instance"""
        if qsettings is not None:
            instance = super().__new__(cls)
            instance._initialized = False
            return instance
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, qsettings: Optional[QSettings] = None):
        """Initialize settings manager

        Args:
            qsettings: Optional settings store (defaults to the per-user native store)
        """
        if self._initialized:
            return

        self._initialized = True
        self._settings = qsettings or QSettings(self.ORGANIZATION, self.APPLICATION)

        self._set_defaults()

    def _set_defaults(self):
        """Set default values for missing keys"""
        defaults = {
            self.KEYS['REMOVAL_POLICY']: RemovalPolicy.UNSCOPED.value,
            self.KEYS['DEBUG_LOGGING']: False,
            self.KEYS['LOG_DIRECTORY']: str(Path.home() / '.script_loader' / 'logs'),
        }

        for key, default in defaults.items():
            if not self._settings.contains(key):
                self._settings.setValue(key, default)

    def get(self, key: str, default: Any = None) -> Any:
        """Get setting value

        Args:
            key: Either a KEYS constant or direct key string
            default: Default value if key not found
        """
        canonical_key = self.KEYS.get(key, key)
        return self._settings.value(canonical_key, default)

    def set(self, key: str, value: Any):
        canonical_key = self.KEYS.get(key, key)
        self._settings.setValue(canonical_key, value)

    def contains(self, key: str) -> bool:
        canonical_key = self.KEYS.get(key, key)
        return self._settings.contains(canonical_key)

    def sync(self):
        """Force settings to disk"""
        self._settings.sync()

    @property
    def removal_policy(self) -> RemovalPolicy:
        """What remove_on_unmount does to a handle other consumers still use"""
        value = str(self.get('REMOVAL_POLICY', RemovalPolicy.UNSCOPED.value)).lower()
        try:
            return RemovalPolicy(value)
        except ValueError:
            return RemovalPolicy.UNSCOPED  # Safe fallback

    @removal_policy.setter
    def removal_policy(self, value: RemovalPolicy):
        policy = RemovalPolicy(value)
        self.set('REMOVAL_POLICY', policy.value)

    @property
    def debug_logging(self) -> bool:
        """Whether debug logging is enabled"""
        value = self.get('DEBUG_LOGGING', False)
        # INI-backed stores hand booleans back as strings
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes')
        return bool(value)

    @property
    def log_directory(self) -> Path:
        return Path(str(self.get('LOG_DIRECTORY')))

    def reset_all_settings(self):
        """Clear all stored settings and restore defaults"""
        self._settings.clear()
        self._settings.sync()
        self._set_defaults()
