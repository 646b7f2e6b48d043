"""
portal-tables: the state machine behind paginated, sortable admin tables.
"""

from .controller import ControllerStatus, FetchRequest, TableController, TableHandle
from .core import (
    DelayedLoading,
    SortDirection,
    TableParams,
    TableState,
    TableStore,
    UnexpectedActionError,
    table_state_reducer,
)
from .core.columns import ColumnDescriptor
from .defaults import LIBRARY_VERSION as __version__

__all__ = [
    "ColumnDescriptor",
    "ControllerStatus",
    "DelayedLoading",
    "FetchRequest",
    "SortDirection",
    "TableController",
    "TableHandle",
    "TableParams",
    "TableState",
    "TableStore",
    "UnexpectedActionError",
    "__version__",
    "table_state_reducer",
]
