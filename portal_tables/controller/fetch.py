"""
Fetch requests derived from table state.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..core.columns import ColumnDescriptor, Comparator, column_key
from ..core.state import TableState


@dataclass(frozen=True)
class FetchRequest:
    """
    Description of the page a table wants next.

    Two requests are equal when every field is equal; the controller relies
    on that to drop repeated fetches.
    """

    page_size: int
    offset: int
    sort_direction: str
    order_by: Optional[str] = None
    comparator: Optional[Comparator] = None

    @property
    def page(self) -> int:
        return self.offset // self.page_size if self.page_size else 0

    def to_variables(self) -> Dict[str, Any]:
        """GraphQL list-query variables for this request."""
        return {
            "first": self.page_size,
            "offset": self.offset,
            "sortDirection": self.sort_direction,
            "orderBy": self.order_by,
        }

    @classmethod
    def from_state(cls, state: TableState, column: Optional[ColumnDescriptor]) -> "FetchRequest":
        return cls(
            page_size=state.per_page,
            offset=state.page * state.per_page,
            sort_direction=state.sort_direction,
            order_by=column_key(column),
            comparator=column.comparator if column is not None else None,
        )


FetchCallback = Callable[[FetchRequest, bool], None]
