#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data models for script loading state and consumer options
"""

from dataclasses import dataclass
from enum import Enum


class ScriptStatus(Enum):
    """Load status of an external script"""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Whether the status is a completed load (success or failure)"""
        return self in (ScriptStatus.READY, ScriptStatus.ERROR)

    @classmethod
    def from_completion(cls, success: bool) -> 'ScriptStatus':
        """Map a load/error completion signal to its terminal status"""
        return cls.READY if success else cls.ERROR


class RemovalPolicy(Enum):
    """How remove_on_unmount treats a handle shared with other consumers"""
    UNSCOPED = "unscoped"
    REFERENCE_COUNTED = "reference_counted"


@dataclass(frozen=True)
class ScriptLoadOptions:
    """Per-consumer options for a script request

    Attributes:
        should_prevent_load: Never create or observe a handle; status stays idle
        remove_on_unmount: Evict the cached status and destroy the handle on detach
    """
    should_prevent_load: bool = False
    remove_on_unmount: bool = False
