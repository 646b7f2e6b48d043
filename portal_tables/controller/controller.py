"""
Generic table controller.

Composes the reducer store, the query-string synchronizer and the delayed
loading policy into the state machine behind every paginated, sortable
table:

    UNINITIALIZED --mount()--> INITIALIZING --hydrated--> READY

Fetch requests are only derived and issued in READY, so a table never asks
for a page with default parameters before the persisted ones are known.
The controller does not load data itself: it asks ``on_fetch_data`` for a
page and receives the result through ``receive``.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from ..core.columns import ColumnDescriptor, column_key, default_column, find_column
from ..core.exceptions import TableConfigurationError
from ..core.loading import DelayedLoading, Scheduler
from ..core.reducer import TableStore, describe_changes, set_all, set_data, set_page, set_total
from ..core.settings import TableSettings
from ..core.state import TableParams, TableState
from ..core.validation import (
    validate_page,
    validate_per_page_options,
    validate_rows_per_page,
    validate_sort_direction,
)
from ..pagination import PaginationState, build_pagination_state, empty_rows
from ..query_string.store import QueryStringStore
from ..query_string.synchronizer import QueryStringSynchronizer
from ..utils.coercion import coerce_query_int
from .fetch import FetchCallback, FetchRequest
from .handle import TableHandle

logger = logging.getLogger(__name__)

# Fields whose change produces a new fetch request.
FETCH_FIELDS = ("page", "per_page", "sort_direction", "order_by")

_UNSET = object()


class ControllerStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def _pick(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


class TableController:
    """
    State machine for one table instance.

    Args:
        columns: Ordered column descriptors; only their sort attributes are read.
        on_fetch_data: ``(request, force) -> None`` collaborator that loads a
            page and later calls ``receive``.
        data: Initial rows.
        total: Initial total row count.
        loading: Whether the caller is loading when the table mounts.
        query_params: Store holding the persisted query string.
        disable_url_params: Skip the query string entirely for this table.
        default_order: Initial sort direction.
        default_rows_per_page: Initial rows per page.
        rows_per_page_options: Rows-per-page choices offered to the user.
        delayed_loading_ms: Grace period before the loading indicator shows.
        num_rows_no_content: Placeholder rows drawn while loading an empty table.
        scheduler: Timer source for the loading indicator.
        on_order_change: Called with the new sort direction on user sort.
        on_order_by_change: Called with the column the user sorted by.
        on_per_page_change: Called with the rows-per-page the user picked.
        on_loading_indicator_change: Called when ``show_loading`` may have flipped.
        table_settings: Settings to use instead of ``TableSettings.load()``.
        name: Label used in log messages.

    Raises:
        TableConfigurationError: The rows-per-page defaults are inconsistent.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        on_fetch_data: Optional[FetchCallback] = None,
        *,
        data: Sequence[Any] = (),
        total: int = 0,
        loading: bool = False,
        query_params: Optional[QueryStringStore] = None,
        disable_url_params: Optional[bool] = None,
        default_order: Optional[str] = None,
        default_rows_per_page: Optional[int] = None,
        rows_per_page_options: Optional[Sequence[int]] = None,
        delayed_loading_ms: Optional[float] = None,
        num_rows_no_content: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
        on_order_change: Optional[Callable[[str], None]] = None,
        on_order_by_change: Optional[Callable[[ColumnDescriptor], None]] = None,
        on_per_page_change: Optional[Callable[[int], None]] = None,
        on_loading_indicator_change: Optional[Callable[[bool], None]] = None,
        table_settings: Optional[TableSettings] = None,
        name: Optional[str] = None,
    ):
        table_settings = table_settings or TableSettings.load()
        self.name = name or "table"
        self.columns = tuple(columns or ())
        self.on_fetch_data = on_fetch_data
        self.on_order_change = on_order_change
        self.on_order_by_change = on_order_by_change
        self.on_per_page_change = on_per_page_change

        default_order = _pick(default_order, table_settings.default_order)
        self.default_order = getattr(default_order, "value", default_order)
        if not validate_sort_direction(self.default_order):
            raise TableConfigurationError(f"Invalid default order: {self.default_order!r}", self.name)
        per_page = _pick(default_rows_per_page, table_settings.default_rows_per_page)
        per_page_options = tuple(_pick(rows_per_page_options, table_settings.rows_per_page_options))
        if not validate_per_page_options(per_page_options):
            raise TableConfigurationError(
                f"Invalid rows per page options: {per_page_options!r}", self.name
            )
        if not validate_rows_per_page(per_page, per_page_options):
            raise TableConfigurationError(
                f"Default rows per page {per_page!r} is not one of {per_page_options!r}",
                self.name,
            )
        self.num_rows_no_content = _pick(num_rows_no_content, table_settings.num_rows_no_content)

        initial_column = default_column(self.columns)
        self.initial_params = TableParams(
            page=0,
            per_page=per_page,
            sort_direction=self.default_order,
            order_by=column_key(initial_column),
        )
        self.store = TableStore(
            TableState.initial(
                per_page=per_page,
                per_page_options=per_page_options,
                sort_direction=self.default_order,
                order_by=self.initial_params.order_by,
            )
        )
        self.store.dispatch(set_all(data=data or (), total=total))
        self.synchronizer = QueryStringSynchronizer(
            query_params,
            self.initial_params,
            enabled=not _pick(disable_url_params, table_settings.disable_url_params),
        )
        self.delayed_loading = DelayedLoading(
            _pick(delayed_loading_ms, table_settings.delayed_loading_ms),
            scheduler=scheduler,
            on_change=on_loading_indicator_change,
        )

        self.status = ControllerStatus.UNINITIALIZED
        self.unmounted = False
        self.handle = TableHandle(self)
        self._loading = bool(loading)
        self._pending_data: Any = _UNSET
        self._pending_total: Any = _UNSET
        self._previous_request: Optional[FetchRequest] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------ #
    # State access
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> TableState:
        return self.store.state

    @property
    def is_ready(self) -> bool:
        return self.status is ControllerStatus.READY

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def order_by_column(self) -> Optional[ColumnDescriptor]:
        return find_column(self.columns, self.state.order_by)

    @property
    def last_request(self) -> Optional[FetchRequest]:
        return self._previous_request

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def mount(self) -> "TableController":
        if self.unmounted:
            raise TableConfigurationError("A table controller cannot be mounted twice", self.name)
        if self.status is not ControllerStatus.UNINITIALIZED:
            return self
        self._unsubscribe = self.store.subscribe(self._on_state_change)
        self._set_status(ControllerStatus.INITIALIZING)
        self.delayed_loading.update(self._loading)
        self._apply_intake()
        self._try_initialize()
        return self

    def unmount(self) -> None:
        self.delayed_loading.dispose()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.unmounted = True
        self._previous_request = None
        self._set_status(ControllerStatus.UNINITIALIZED)

    def _set_status(self, status: ControllerStatus) -> None:
        if status is self.status:
            return
        logger.info(f"Table '{self.name}' {self.status.value} -> {status.value}")
        self.status = status

    def _try_initialize(self) -> None:
        if self.status is not ControllerStatus.INITIALIZING:
            return
        if self.synchronizer.enabled:
            # Query-string hydration waits for the caller's columns and data.
            if self._loading or not self.columns:
                return
            updates = self.synchronizer.hydrate(self.columns, self.state.per_page_options)
            if updates:
                self.store.dispatch(set_all(**updates))
        self._set_status(ControllerStatus.READY)
        self._ensure_order_by()
        self.fetch_data()

    # ------------------------------------------------------------------ #
    # Caller inputs
    # ------------------------------------------------------------------ #
    def set_columns(self, columns: Sequence[ColumnDescriptor]) -> None:
        """Replace the column configuration, e.g. after a feature-flagged column appears."""
        self.columns = tuple(columns or ())
        self._try_initialize()
        self._ensure_order_by()

    def set_loading(self, loading: bool) -> None:
        loading = bool(loading)
        if loading == self._loading:
            return
        self._loading = loading
        if self.status is not ControllerStatus.UNINITIALIZED:
            self.delayed_loading.update(loading)
        if loading:
            return
        self._apply_intake()
        self._try_initialize()
        self._ensure_order_by()

    def receive(self, data: Any = _UNSET, total: Any = _UNSET) -> None:
        """
        Accept rows and/or a total produced by the fetch collaborator.

        While the caller is still loading, the values are held and applied
        once ``set_loading(False)`` is called.
        """
        if data is not _UNSET:
            self._pending_data = data
        if total is not _UNSET:
            self._pending_total = total
        if not self._loading and self.status is not ControllerStatus.UNINITIALIZED:
            self._apply_intake()

    def _apply_intake(self) -> None:
        if self._pending_data is not _UNSET:
            rows, self._pending_data = self._pending_data, _UNSET
            self.store.dispatch(set_data(rows))
        if self._pending_total is not _UNSET:
            total, self._pending_total = self._pending_total, _UNSET
            self.store.dispatch(set_total(total))

    def _ensure_order_by(self) -> None:
        """Fall back to the default column when the sorted column disappeared."""
        state = self.state
        if state.order_by and find_column(self.columns, state.order_by) is not None:
            return
        if self._loading or self.status is not ControllerStatus.READY or not self.columns:
            return
        column = default_column(self.columns)
        if column is None:
            return
        logger.debug(
            f"Table '{self.name}' order_by {state.order_by!r} not found, using {column_key(column)!r}"
        )
        self.store.dispatch(set_all(order_by=column_key(column), sort_direction=self.default_order))

    # ------------------------------------------------------------------ #
    # Fetching
    # ------------------------------------------------------------------ #
    def _on_state_change(self, previous: TableState, current: TableState) -> None:
        if self.status is not ControllerStatus.READY:
            return
        if describe_changes(previous, current, FETCH_FIELDS):
            self.fetch_data()

    def fetch_data(self, force: bool = False) -> Optional[FetchRequest]:
        """
        Derive the current fetch request and hand it to ``on_fetch_data``.

        Returns the request issued, or ``None`` when nothing was sent because
        the table is not ready or the request repeats the previous one.
        """
        if self.on_fetch_data is None or self.status is not ControllerStatus.READY:
            return None
        state = self.state
        if not validate_page(state.page):
            return None

        request = FetchRequest.from_state(state, self.order_by_column)
        if not force and request == self._previous_request:
            logger.debug(f"Table '{self.name}' skipped duplicate fetch {request!r}")
            return None

        self._previous_request = request
        logger.debug(f"Table '{self.name}' fetching {request!r} (force={force})")
        self.on_fetch_data(request, force)
        return request

    # ------------------------------------------------------------------ #
    # User interaction
    # ------------------------------------------------------------------ #
    def handle_request_sort(self, column: ColumnDescriptor) -> None:
        key = column_key(column)
        if key is None or column.sort_disabled:
            return
        state = self.state
        current = self.order_by_column
        is_current = current is not None and column_key(current) == key
        new_order = "desc" if is_current and state.sort_direction == "asc" else "asc"

        if self.on_order_change is not None:
            self.on_order_change(new_order)
        if self.on_order_by_change is not None:
            self.on_order_by_change(column)

        self.store.dispatch(set_all(order_by=key, sort_direction=new_order))
        self._persist()

    def handle_rows_per_page_change(self, per_page: Any) -> None:
        per_page = coerce_query_int(per_page)
        if per_page is None:
            logger.debug(f"Table '{self.name}' ignored unparseable rows per page")
            return
        if self.on_per_page_change is not None:
            self.on_per_page_change(per_page)

        self.store.dispatch(set_all(page=0, per_page=per_page))
        self._persist()

    def handle_page_change(self, page: int) -> None:
        # Ignore paging until the persisted parameters have been applied.
        if self.status is not ControllerStatus.READY:
            return
        self.store.dispatch(set_page(page))
        self._persist()

    def _persist(self) -> None:
        if not self.synchronizer.hydrated:
            return
        self.synchronizer.write(self.state.params)

    # ------------------------------------------------------------------ #
    # Rendering aids
    # ------------------------------------------------------------------ #
    def pagination(self, vertical_placement: str = "bottom") -> PaginationState:
        state = self.state
        return build_pagination_state(
            page=state.page,
            total=state.total,
            per_page=state.per_page,
            rows_per_page_options=state.per_page_options,
            vertical_placement=vertical_placement,
            disabled=self._loading or not self.is_ready,
        )

    @property
    def empty_rows(self) -> int:
        state = self.state
        return empty_rows(state.page, state.per_page, state.total)

    @property
    def show_loading(self) -> bool:
        return not self.is_ready or self.delayed_loading.value

    @property
    def show_no_content(self) -> bool:
        if self.delayed_loading.value or not self.is_ready:
            return False
        state = self.state
        return not state.total or not state.data

    @property
    def loading_row_count(self) -> int:
        state = self.state
        if self.show_loading and (state.total == 0 or not state.data):
            return self.num_rows_no_content
        return 0

    def __repr__(self) -> str:
        return f"<TableController {self.name!r} {self.status.value} {self.state.params!r}>"
