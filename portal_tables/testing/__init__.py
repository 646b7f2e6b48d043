"""
Public test utilities for portal-tables.
"""

from .harness import (
    FetchRecorder,
    ManualScheduler,
    ManualTimer,
    build_controller,
    build_request,
    override_table_settings,
)

__all__ = [
    "FetchRecorder",
    "ManualScheduler",
    "ManualTimer",
    "build_controller",
    "build_request",
    "override_table_settings",
]
