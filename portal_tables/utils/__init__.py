"""
Utility helpers shared across portal-tables.
"""

from .coercion import coerce_query_int, coerce_query_str

__all__ = ["coerce_query_int", "coerce_query_str"]
