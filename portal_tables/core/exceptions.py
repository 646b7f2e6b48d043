"""
Custom exceptions for the table controller.

Invalid *values* never raise: the reducer rejects them and keeps the prior
state. The exceptions below signal programming defects and are meant to
propagate to the caller untouched.
"""

from typing import Any, Optional


class TableControllerError(Exception):
    """Base exception for table controller errors."""

    def __init__(self, message: str, table_name: Optional[str] = None):
        self.table_name = table_name
        super().__init__(message)


class UnexpectedActionError(TableControllerError):
    """Raised when the reducer receives an action type it does not handle."""

    def __init__(self, action_type: Any, table_name: Optional[str] = None):
        self.action_type = action_type
        super().__init__(f"Unexpected action type: {action_type!r}", table_name)


class TableConfigurationError(TableControllerError):
    """Raised when a controller is used with an unusable configuration."""
