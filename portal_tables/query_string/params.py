"""
Query-string parameter helpers.
"""

from typing import Any, Mapping

from django.http import QueryDict

PAGE_KEY = "page"
PER_PAGE_KEY = "perPage"
ORDER_BY_KEY = "orderBy"
SORT_DIRECTION_KEY = "sortDirection"

TABLE_PARAM_KEYS = (PAGE_KEY, PER_PAGE_KEY, ORDER_BY_KEY, SORT_DIRECTION_KEY)


def generate_search_parameters(
    params: QueryDict,
    current: Mapping[str, Any],
    defaults: Mapping[str, Any],
) -> QueryDict:
    """
    Return a copy of ``params`` updated with ``current``, pruning defaults.

    A key is removed when its current value is ``None`` or renders to the
    same string as its default, so ``1`` and ``"1"`` count as equal. Keys
    absent from ``current`` are left untouched.
    """
    updated = params.copy()
    for key, value in current.items():
        default = defaults.get(key)
        if value is None or (default is not None and str(value) == str(default)):
            if key in updated:
                del updated[key]
            continue
        updated[key] = str(value)
    return updated
