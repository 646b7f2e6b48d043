"""
Imperative table handle.

Handed to ancestor components (a page, a filter form, a mutation hook) that
need to trigger or inspect a table without owning its state.
"""

from typing import TYPE_CHECKING

from ..core.exceptions import TableConfigurationError
from ..core.state import TableParams

if TYPE_CHECKING:
    from .controller import TableController


class TableHandle:
    def __init__(self, controller: "TableController"):
        self._controller = controller

    def _require_mounted(self) -> "TableController":
        if self._controller.unmounted:
            raise TableConfigurationError(
                "Table handle used after the table was unmounted",
                self._controller.name,
            )
        return self._controller

    def refresh(self) -> None:
        """Re-issue the current fetch request even if it did not change."""
        self._require_mounted().fetch_data(force=True)

    def set_page(self, page: int, force_refetch: bool = False) -> None:
        """
        Move to ``page`` (0-based).

        ``force_refetch`` re-fetches when ``page`` is already the current
        page, e.g. after a mutation changed the rows it shows.
        """
        controller = self._require_mounted()
        previous_page = controller.state.page
        controller.handle_page_change(page)
        if force_refetch and page == previous_page:
            controller.fetch_data(force=True)

    @property
    def table_params(self) -> TableParams:
        return self._controller.state.params
