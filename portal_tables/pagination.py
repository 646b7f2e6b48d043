"""
Pagination rendering helpers.

Pure functions that turn table state into what a pagination bar shows.
Nothing here mutates state: the "safe page" in particular is a render-time
correction, the stored page stays as requested.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

VERTICAL_PLACEMENTS = ("top", "bottom")


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed for ``total`` rows; 0 when there are none."""
    if not total or total < 0 or not per_page or per_page < 1:
        return 0
    return math.ceil(total / per_page)


def page_from_event(ui_page: int) -> int:
    """Translate a 1-based page number from the pagination UI to a 0-based index."""
    return max(int(ui_page) - 1, 0)


def is_page_out_of_range(page: int, total: int, per_page: int) -> bool:
    return page + 1 > page_count(total, per_page)


def safe_page(page: int, total: int, per_page: int) -> int:
    """
    The page to render given the latest ``total``.

    Falls back to the first page when ``page`` lies beyond the last page, for
    example after a filter shrank the result set.
    """
    return 0 if is_page_out_of_range(page, total, per_page) else page


def empty_rows(page: int, per_page: int, total: int) -> int:
    """Blank rows needed to pad a partially filled page after the first one."""
    if page <= 0 or not total:
        return 0
    return max(0, (page + 1) * per_page - total)


@dataclass(frozen=True)
class PaginationState:
    """Everything one pagination bar needs to render."""

    page: int
    page_count: int
    total: int
    per_page: int
    rows_per_page_options: Tuple[int, ...]
    vertical_placement: str
    disabled: bool
    next_disabled: bool
    back_disabled: bool

    @property
    def first_row(self) -> int:
        return self.page * self.per_page + 1 if self.total else 0

    @property
    def last_row(self) -> int:
        return min((self.page + 1) * self.per_page, self.total)


def build_pagination_state(
    *,
    page: int,
    total: int,
    per_page: int,
    rows_per_page_options: Sequence[int],
    vertical_placement: str = "bottom",
    disabled: bool = False,
) -> PaginationState:
    if vertical_placement not in VERTICAL_PLACEMENTS:
        raise ValueError(f"vertical_placement must be one of {', '.join(VERTICAL_PLACEMENTS)}")
    rendered_page = safe_page(page, total, per_page)
    return PaginationState(
        page=rendered_page,
        page_count=page_count(total, per_page),
        total=total or 0,
        per_page=per_page,
        rows_per_page_options=tuple(rows_per_page_options),
        vertical_placement=vertical_placement,
        disabled=disabled,
        next_disabled=disabled or not total or total <= (rendered_page + 1) * per_page,
        back_disabled=disabled or rendered_page <= 0,
    )
