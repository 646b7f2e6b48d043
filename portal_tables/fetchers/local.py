"""
In-memory page fetcher.

For tables whose rows are all loaded up front (user lists, institution
lists): filtering, sorting and slicing happen locally, and the result is
pushed back into the controller exactly like a remote fetch would.
"""

import logging
from functools import cmp_to_key
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..core.columns import Comparator, get_field_value
from ..controller.fetch import FetchRequest

logger = logging.getLogger(__name__)

RowFilter = Callable[[Any], bool]


def sort_rows(
    rows: Iterable[Any],
    order_by: Optional[str],
    sort_direction: str,
    comparator: Optional[Comparator] = None,
) -> List[Any]:
    """
    Sort rows by ``comparator`` or, without one, by the ``order_by`` field.

    Field-based sorting keeps rows whose value is ``None`` at the end in
    either direction. The sort is stable.
    """
    rows = list(rows)
    descending = sort_direction == "desc"
    if comparator is not None:
        return sorted(rows, key=cmp_to_key(comparator), reverse=descending)
    if not order_by:
        return rows

    present = [row for row in rows if get_field_value(row, order_by) is not None]
    missing = [row for row in rows if get_field_value(row, order_by) is None]
    present.sort(key=lambda row: get_field_value(row, order_by), reverse=descending)
    return present + missing


def paginate_rows(rows: Sequence[Any], request: FetchRequest) -> List[Any]:
    return list(rows[request.offset : request.offset + request.page_size])


class LocalPageFetcher:
    """
    Fetch collaborator that serves pages from an in-memory row list.

    Args:
        rows: Every row of the table.
        controller: The controller to push pages into; may be bound later.
        filters: Predicates a row must all satisfy to be listed.
    """

    def __init__(
        self,
        rows: Iterable[Any] = (),
        controller=None,
        filters: Sequence[RowFilter] = (),
    ):
        self.rows = list(rows)
        self.controller = controller
        self.filters = list(filters)

    def bind(self, controller) -> "LocalPageFetcher":
        self.controller = controller
        return self

    def filtered_rows(self) -> List[Any]:
        return [row for row in self.rows if all(check(row) for check in self.filters)]

    def __call__(self, request: FetchRequest, force: bool = False) -> None:
        if self.controller is None:
            raise RuntimeError("LocalPageFetcher is not bound to a table controller")
        ordered = sort_rows(
            self.filtered_rows(), request.order_by, request.sort_direction, request.comparator
        )
        page = paginate_rows(ordered, request)
        logger.debug(f"Serving {len(page)} of {len(ordered)} local rows (offset={request.offset})")
        self.controller.receive(data=page, total=len(ordered))

    def set_rows(self, rows: Iterable[Any]) -> None:
        self.rows = list(rows)
        self._reload()

    def set_filters(self, *filters: RowFilter) -> None:
        self.filters = list(filters)
        self._reload()

    def _reload(self) -> None:
        if self.controller is None:
            return
        self.controller.handle.set_page(0, force_refetch=True)
