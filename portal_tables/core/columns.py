"""
Column descriptors and sort-column lookup.

Only the sort-relevant attributes matter to the controller; ``label`` and
``renderer`` are carried for the rendering layer.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

Comparator = Callable[[Any, Any], int]


@dataclass(frozen=True)
class ColumnDescriptor:
    label: str
    renderer: Optional[Callable[[Any], Any]] = None
    field: Optional[str] = None
    # Sort identifier used when ``field`` is not a real attribute of the row.
    field_key: Optional[str] = None
    is_default: bool = False
    sort_disabled: bool = False
    # Used by in-memory tables that cannot sort server-side.
    comparator: Optional[Comparator] = None


def get_field_value(row: Any, field: Optional[str]) -> Any:
    if field is None:
        return None
    if isinstance(row, Mapping):
        return row.get(field)
    return getattr(row, field, None)


def column_key(column: Optional[ColumnDescriptor]) -> Optional[str]:
    if column is None:
        return None
    if column.field_key:
        return column.field_key
    if column.field is not None:
        return str(column.field)
    return None


def find_column(columns: Sequence[ColumnDescriptor], key: Optional[str]) -> Optional[ColumnDescriptor]:
    if not key or not columns:
        return None
    for column in columns:
        if column_key(column) == key:
            return column
    return None


def default_column(columns: Sequence[ColumnDescriptor]) -> Optional[ColumnDescriptor]:
    """The column flagged as default, else the first sortable column with a key."""
    if not columns:
        return None
    for column in columns:
        if column.is_default and column_key(column):
            return column
    for column in columns:
        if not column.sort_disabled and column_key(column):
            return column
    return None
