"""
Table state reducer and store.

``table_state_reducer`` is a pure ``(state, action) -> state`` function.
Invalid values are rejected by returning the state unchanged; an action
type outside ``TableActionType`` is a programming error and raises
``UnexpectedActionError``.

``TableStore`` is the sole writer of a ``TableState``: it applies actions in
dispatch order and notifies subscribers after each effective transition.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Sequence

from .exceptions import UnexpectedActionError
from .state import TableState
from .validation import (
    validate_and_set_if_changed,
    validate_data,
    validate_order_by,
    validate_page,
    validate_per_page_options,
    validate_rows_per_page,
    validate_sort_direction,
    validate_total,
)

logger = logging.getLogger(__name__)


class TableActionType(str, Enum):
    SET_DATA = "SET_DATA"
    SET_TOTAL = "SET_TOTAL"
    SET_PAGE = "SET_PAGE"
    SET_PER_PAGE = "SET_PER_PAGE"
    SET_PER_PAGE_OPTIONS = "SET_PER_PAGE_OPTIONS"
    SET_SORT_DIRECTION = "SET_SORT_DIRECTION"
    SET_ORDER_BY = "SET_ORDER_BY"
    SET_ALL = "SET_ALL"


@dataclass(frozen=True)
class TableAction:
    type: Any
    payload: Any = None


def set_data(rows: Sequence[Any]) -> TableAction:
    return TableAction(TableActionType.SET_DATA, rows)


def set_total(total: int) -> TableAction:
    return TableAction(TableActionType.SET_TOTAL, total)


def set_page(page: int) -> TableAction:
    return TableAction(TableActionType.SET_PAGE, page)


def set_per_page(per_page: int) -> TableAction:
    return TableAction(TableActionType.SET_PER_PAGE, per_page)


def set_per_page_options(options: Sequence[int]) -> TableAction:
    return TableAction(TableActionType.SET_PER_PAGE_OPTIONS, options)


def set_sort_direction(direction: str) -> TableAction:
    return TableAction(TableActionType.SET_SORT_DIRECTION, getattr(direction, "value", direction))


def set_order_by(order_by: str) -> TableAction:
    return TableAction(TableActionType.SET_ORDER_BY, order_by)


def set_all(**changes: Any) -> TableAction:
    """Build a ``SET_ALL`` action; only the keyword arguments given are applied."""
    if "sort_direction" in changes:
        changes["sort_direction"] = getattr(changes["sort_direction"], "value", changes["sort_direction"])
    return TableAction(TableActionType.SET_ALL, changes)


def _options_predicate(per_page: int) -> Callable[[Any], bool]:
    # New options must still offer the rows-per-page in effect.
    return lambda options: validate_per_page_options(options) and per_page in options


def _apply_all(state: TableState, payload: Mapping[str, Any]) -> TableState:
    if not isinstance(payload, Mapping):
        logger.warning(f"Ignoring SET_ALL with non-mapping payload: {payload!r}")
        return state

    updated = state
    if "data" in payload:
        updated = validate_and_set_if_changed(updated, "data", payload["data"], validate_data)
    if "total" in payload:
        updated = validate_and_set_if_changed(updated, "total", payload["total"], validate_total)
    if "per_page_options" in payload:
        options = payload["per_page_options"]
        target = updated.per_page
        if "per_page" in payload and validate_rows_per_page(payload["per_page"], options):
            target = payload["per_page"]
        updated = validate_and_set_if_changed(
            updated, "per_page_options", options, _options_predicate(target)
        )
    if "per_page" in payload:
        options = updated.per_page_options
        updated = validate_and_set_if_changed(
            updated,
            "per_page",
            payload["per_page"],
            lambda value: validate_rows_per_page(value, options),
        )
    if "sort_direction" in payload:
        updated = validate_and_set_if_changed(
            updated, "sort_direction", payload["sort_direction"], validate_sort_direction
        )
    if "order_by" in payload:
        updated = validate_and_set_if_changed(
            updated, "order_by", payload["order_by"], validate_order_by
        )
    if "page" in payload:
        updated = validate_and_set_if_changed(updated, "page", payload["page"], validate_page)

    return updated


_SINGLE_FIELD_ACTIONS = {
    TableActionType.SET_DATA: ("data", lambda state: validate_data),
    TableActionType.SET_TOTAL: ("total", lambda state: validate_total),
    TableActionType.SET_PAGE: ("page", lambda state: validate_page),
    TableActionType.SET_PER_PAGE: (
        "per_page",
        lambda state: lambda value: validate_rows_per_page(value, state.per_page_options),
    ),
    TableActionType.SET_PER_PAGE_OPTIONS: (
        "per_page_options",
        lambda state: _options_predicate(state.per_page),
    ),
    TableActionType.SET_SORT_DIRECTION: ("sort_direction", lambda state: validate_sort_direction),
    TableActionType.SET_ORDER_BY: ("order_by", lambda state: validate_order_by),
}


def _action_type(action: Any) -> Optional[TableActionType]:
    raw = getattr(action, "type", None)
    try:
        return TableActionType(raw)
    except (TypeError, ValueError):
        return None


def table_state_reducer(state: TableState, action: TableAction) -> TableState:
    """
    Compute the next table state.

    Returns ``state`` itself when the action changes nothing, either because
    the value is invalid or because it equals the current one.

    Raises:
        UnexpectedActionError: ``action.type`` is not a ``TableActionType``.
    """
    action_type = _action_type(action)
    if action_type is None:
        raise UnexpectedActionError(getattr(action, "type", action))

    if action_type is TableActionType.SET_ALL:
        updated = _apply_all(state, action.payload)
    else:
        field, predicate_for = _SINGLE_FIELD_ACTIONS[action_type]
        predicate = predicate_for(state)
        if not predicate(action.payload):
            logger.warning(f"Rejected invalid {field}: {action.payload!r}")
            return state
        updated = validate_and_set_if_changed(state, field, action.payload, predicate)

    if updated is not state:
        logger.debug(f"{action_type.value} applied: {action.payload!r}")
    return updated


Listener = Callable[[TableState, TableState], None]


class TableStore:
    """
    Holds one ``TableState`` and applies actions to it.

    Dispatches issued from inside a listener are queued and applied after
    the current one, so listeners always observe fully applied transitions
    in dispatch order.
    """

    def __init__(self, initial_state: TableState, reducer: Callable = table_state_reducer):
        self._state = initial_state
        self._reducer = reducer
        self._listeners: List[Listener] = []
        self._queue: Deque[TableAction] = deque()
        self._dispatching = False

    @property
    def state(self) -> TableState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: TableAction) -> TableState:
        self._queue.append(action)
        if self._dispatching:
            return self._state

        self._dispatching = True
        try:
            while self._queue:
                queued = self._queue.popleft()
                previous = self._state
                current = self._reducer(previous, queued)
                if current is previous:
                    continue
                self._state = current
                for listener in list(self._listeners):
                    listener(previous, current)
        finally:
            self._dispatching = False
            self._queue.clear()
        return self._state


def describe_changes(previous: TableState, current: TableState, fields: Sequence[str]) -> Dict[str, Any]:
    """Return ``{field: new_value}`` for the listed fields that differ."""
    return {
        name: getattr(current, name)
        for name in fields
        if getattr(previous, name) != getattr(current, name)
    }
