"""
Validation predicates for table state values.

Every predicate is pure and never raises; a ``False`` answer means the
candidate value must be ignored. ``validate_and_set_if_changed`` builds on
them to produce the next state, returning the *same* state object when
nothing changed so callers can short-circuit on identity.
"""

import dataclasses
from numbers import Integral
from typing import Any, Callable, Sequence, TypeVar

SORT_DIRECTIONS = ("asc", "desc")

S = TypeVar("S")


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def validate_page(page: Any) -> bool:
    """A page index is a non-negative integer."""
    return _is_int(page) and page >= 0


def validate_total(total: Any) -> bool:
    """A total row count is a non-negative integer."""
    return _is_int(total) and total >= 0


def validate_rows_per_page(per_page: Any, options: Sequence[int]) -> bool:
    """The rows-per-page value must be one of the offered options."""
    if not _is_int(per_page) or not _is_sequence(options):
        return False
    return per_page in options


def validate_per_page_options(options: Any) -> bool:
    """Options are a non-empty list of positive integers."""
    if not _is_sequence(options) or not options:
        return False
    return all(_is_int(option) and option > 0 for option in options)


def validate_sort_direction(direction: Any) -> bool:
    return direction in SORT_DIRECTIONS


def validate_order_by(order_by: Any) -> bool:
    """
    Any string is a legal sort key, the empty string included.

    Whether a column with that key exists is decided by the controller.
    """
    return isinstance(order_by, str)


def validate_data(rows: Any) -> bool:
    return _is_sequence(rows)


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


def validate_and_set_if_changed(
    state: S,
    field: str,
    candidate: Any,
    predicate: Callable[[Any], bool],
) -> S:
    """
    Return ``state`` with ``field`` set to ``candidate`` if it validates and differs.

    Args:
        state: A frozen dataclass instance.
        field: The attribute to update.
        candidate: The proposed value. Lists are stored as tuples.
        predicate: Validity check applied to ``candidate``.

    Returns:
        A new state object, or ``state`` itself when the candidate is
        invalid or equal to the current value.
    """
    if not predicate(candidate):
        return state
    value = _freeze(candidate)
    if getattr(state, field) == value:
        return state
    return dataclasses.replace(state, **{field: value})
