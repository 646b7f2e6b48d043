"""
Two-way synchronization between table parameters and the query string.

Pages are 1-based in the query string and 0-based everywhere else; the
conversion happens only here.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from ..core.columns import ColumnDescriptor, column_key, find_column
from ..core.state import TableParams
from ..core.validation import validate_page, validate_rows_per_page, validate_sort_direction
from ..utils.coercion import coerce_query_int, coerce_query_str
from .params import (
    ORDER_BY_KEY,
    PAGE_KEY,
    PER_PAGE_KEY,
    SORT_DIRECTION_KEY,
    generate_search_parameters,
)
from .store import QueryStringStore

logger = logging.getLogger(__name__)


def to_query_params(params: TableParams) -> Dict[str, Any]:
    return {
        PAGE_KEY: params.page + 1,
        PER_PAGE_KEY: params.per_page,
        ORDER_BY_KEY: params.order_by,
        SORT_DIRECTION_KEY: params.sort_direction,
    }


class QueryStringSynchronizer:
    """
    Seeds table parameters from a query string once, then mirrors changes back.

    Args:
        store: The query string to read and write. ``None`` disables syncing.
        defaults: Parameters a fresh table starts with; values equal to
            these are pruned from the query string.
        enabled: Per-table switch. When False nothing is read or written.
    """

    def __init__(
        self,
        store: Optional[QueryStringStore],
        defaults: TableParams,
        enabled: bool = True,
    ):
        self.store = store
        self.defaults = defaults
        self.enabled = bool(enabled) and store is not None
        self.hydrated = False

    def hydrate(
        self,
        columns: Sequence[ColumnDescriptor],
        per_page_options: Sequence[int],
    ) -> Dict[str, Any]:
        """
        Read the persisted parameters, returning only the keys that validate.

        An invalid ``page`` is deleted from the store so the location falls
        back to the default page.
        """
        if self.hydrated or not self.enabled:
            self.hydrated = True
            return {}

        updates: Dict[str, Any] = {}

        sort_direction = self.store.get(SORT_DIRECTION_KEY)
        if validate_sort_direction(sort_direction):
            updates["sort_direction"] = sort_direction

        order_by_column = find_column(columns, coerce_query_str(self.store.get(ORDER_BY_KEY)))
        if order_by_column is not None:
            updates["order_by"] = column_key(order_by_column)

        per_page = coerce_query_int(self.store.get(PER_PAGE_KEY))
        if per_page is not None and validate_rows_per_page(per_page, per_page_options):
            updates["per_page"] = per_page

        raw_page = self.store.get(PAGE_KEY)
        if raw_page is not None:
            page_number = coerce_query_int(raw_page)
            page = page_number - 1 if page_number is not None else None
            if validate_page(page):
                updates["page"] = page
            else:
                logger.info(f"Dropping invalid page {raw_page!r} from query string")
                self.store.delete(PAGE_KEY)

        self.hydrated = True
        logger.debug(f"Hydrated table params from query string: {updates!r}")
        return updates

    def write(self, params: TableParams) -> bool:
        """Mirror ``params`` into the store; returns False when nothing changed."""
        if not self.enabled:
            return False
        updated = generate_search_parameters(
            self.store.copy(),
            to_query_params(params),
            to_query_params(self.defaults),
        )
        return self.store.replace(updated)
