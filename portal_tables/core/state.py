"""
Table state records.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class TableParams:
    """Read-only snapshot of the paging and sorting parameters of a table."""

    page: int
    per_page: int
    sort_direction: str
    order_by: Optional[str]


@dataclass(frozen=True)
class TableState:
    """
    The single source of truth for one table instance.

    ``page`` is 0-based. ``data`` holds only the current page of rows while
    ``total`` counts rows across all pages.
    """

    data: Tuple[Any, ...] = ()
    total: int = 0
    page: int = 0
    per_page: int = 10
    per_page_options: Tuple[int, ...] = (5, 10, 20, 50)
    sort_direction: str = SortDirection.DESC.value
    order_by: Optional[str] = None

    @classmethod
    def initial(
        cls,
        *,
        data: Sequence[Any] = (),
        total: int = 0,
        per_page: int = 10,
        per_page_options: Sequence[int] = (5, 10, 20, 50),
        sort_direction: str = SortDirection.DESC.value,
        order_by: Optional[str] = None,
    ) -> "TableState":
        return cls(
            data=tuple(data or ()),
            total=total,
            page=0,
            per_page=per_page,
            per_page_options=tuple(per_page_options),
            sort_direction=getattr(sort_direction, "value", sort_direction),
            order_by=order_by,
        )

    @property
    def params(self) -> TableParams:
        return TableParams(
            page=self.page,
            per_page=self.per_page,
            sort_direction=self.sort_direction,
            order_by=self.order_by,
        )
