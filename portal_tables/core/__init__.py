"""
Core table state machinery: validation, state records, reducer and loading policy.
"""

from .exceptions import TableConfigurationError, TableControllerError, UnexpectedActionError
from .loading import DelayedLoading
from .reducer import (
    TableAction,
    TableActionType,
    TableStore,
    set_all,
    set_data,
    set_order_by,
    set_page,
    set_per_page,
    set_per_page_options,
    set_sort_direction,
    set_total,
    table_state_reducer,
)
from .state import SortDirection, TableParams, TableState

__all__ = [
    "DelayedLoading",
    "SortDirection",
    "TableAction",
    "TableActionType",
    "TableConfigurationError",
    "TableControllerError",
    "TableParams",
    "TableState",
    "TableStore",
    "UnexpectedActionError",
    "set_all",
    "set_data",
    "set_order_by",
    "set_page",
    "set_per_page",
    "set_per_page_options",
    "set_sort_direction",
    "set_total",
    "table_state_reducer",
]
