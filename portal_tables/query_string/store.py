"""
Query-string stores.

The table controller never reads the request or the browser location
directly: the page layer hands it a ``QueryStringStore`` and decides what a
write means (a redirect, a ``history.replaceState`` payload, a test
assertion).
"""

import logging
from typing import Any, Callable, Mapping, Optional, Protocol

from django.http import QueryDict

logger = logging.getLogger(__name__)


class QueryStringStore(Protocol):
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def copy(self) -> QueryDict: ...

    def replace(self, params: QueryDict) -> bool: ...

    def urlencode(self) -> str: ...


class QueryDictStore:
    """
    ``QueryStringStore`` backed by a mutable Django ``QueryDict``.

    ``on_change`` receives the encoded query string after every effective
    write, which lets a view or router replace the current location instead
    of pushing a new history entry.
    """

    def __init__(
        self,
        query_string: str = "",
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self._params = QueryDict(query_string or "", mutable=True)
        self._on_change = on_change

    @classmethod
    def from_request(cls, request, on_change: Optional[Callable[[str], None]] = None) -> "QueryDictStore":
        return cls(request.GET.urlencode(), on_change=on_change)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], **kwargs) -> "QueryDictStore":
        store = cls(**kwargs)
        for key, value in values.items():
            store._params[key] = str(value)
        return store

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._params.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._params

    def set(self, key: str, value: Any) -> None:
        text = str(value)
        if self._params.get(key) == text:
            return
        self._params[key] = text
        self._notify()

    def delete(self, key: str) -> None:
        if key not in self._params:
            return
        del self._params[key]
        self._notify()

    def copy(self) -> QueryDict:
        return self._params.copy()

    def replace(self, params: QueryDict) -> bool:
        """Swap in ``params``; returns False when the encoded string is unchanged."""
        if params.urlencode() == self._params.urlencode():
            return False
        self._params = params.copy()
        self._notify()
        return True

    def urlencode(self) -> str:
        return self._params.urlencode()

    def _notify(self) -> None:
        query_string = self._params.urlencode()
        logger.debug(f"Query string updated: {query_string!r}")
        if self._on_change is not None:
            self._on_change(query_string)

    def __repr__(self) -> str:
        return f"<QueryDictStore {self.urlencode()!r}>"
