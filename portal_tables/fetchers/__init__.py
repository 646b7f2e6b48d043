"""
Fetch collaborators that load table pages and push them back into a controller.
"""

from .graphql import AsyncGraphQLPageFetcher, GraphQLPageFetcher
from .local import LocalPageFetcher, paginate_rows, sort_rows

__all__ = [
    "AsyncGraphQLPageFetcher",
    "GraphQLPageFetcher",
    "LocalPageFetcher",
    "paginate_rows",
    "sort_rows",
]
