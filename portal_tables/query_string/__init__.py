"""
Query-string persistence for table parameters.
"""

from .params import (
    ORDER_BY_KEY,
    PAGE_KEY,
    PER_PAGE_KEY,
    SORT_DIRECTION_KEY,
    TABLE_PARAM_KEYS,
    generate_search_parameters,
)
from .store import QueryDictStore, QueryStringStore
from .synchronizer import QueryStringSynchronizer, to_query_params

__all__ = [
    "ORDER_BY_KEY",
    "PAGE_KEY",
    "PER_PAGE_KEY",
    "QueryDictStore",
    "QueryStringStore",
    "QueryStringSynchronizer",
    "SORT_DIRECTION_KEY",
    "TABLE_PARAM_KEYS",
    "generate_search_parameters",
    "to_query_params",
]
