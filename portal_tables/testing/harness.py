"""
Testing helpers for portal-tables.

``ManualScheduler`` replaces the event loop as the timer source so tests can
advance time deterministically; ``build_controller`` wires a mounted
controller with a recording fetch callback.
"""

from __future__ import annotations

import heapq
import itertools
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from django.test import RequestFactory
from django.test.utils import override_settings

from portal_tables.controller import FetchRequest, TableController
from portal_tables.core.columns import ColumnDescriptor
from portal_tables.defaults import SETTINGS_NAME
from portal_tables.query_string import QueryDictStore


class ManualTimer:
    def __init__(self, scheduler: "ManualScheduler", due_ms: int, callback: Callable, args: Tuple):
        self._scheduler = scheduler
        self.due_ms = due_ms
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._scheduler.cancelled_count += 1


class ManualScheduler:
    """``call_later`` implementation driven by ``advance``; time is kept in whole milliseconds."""

    def __init__(self):
        self.now_ms = 0
        self.cancelled_count = 0
        self._timers: List[Tuple[int, int, ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTimer:
        timer = ManualTimer(self, self.now_ms + round(delay * 1000), callback, args)
        heapq.heappush(self._timers, (timer.due_ms, next(self._sequence), timer))
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._timers if not timer.cancelled)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while self._timers and self._timers[0][0] <= target:
            due_ms, _, timer = heapq.heappop(self._timers)
            self.now_ms = due_ms
            if not timer.cancelled:
                timer.callback(*timer.args)
        self.now_ms = target


@dataclass
class FetchRecorder:
    """Fetch callback that records every call."""

    calls: List[Tuple[FetchRequest, bool]] = field(default_factory=list)

    def __call__(self, request: FetchRequest, force: bool) -> None:
        self.calls.append((request, force))

    @property
    def requests(self) -> List[FetchRequest]:
        return [request for request, _ in self.calls]

    @property
    def last(self) -> Optional[FetchRequest]:
        return self.calls[-1][0] if self.calls else None


def build_request(path: str = "/tables/", query: Optional[Dict[str, Any]] = None):
    return RequestFactory().get(path, data=query or {})


def build_controller(
    columns: Sequence[ColumnDescriptor],
    *,
    query_string: Optional[str] = None,
    mount: bool = True,
    **kwargs: Any,
) -> Tuple[TableController, FetchRecorder, ManualScheduler]:
    """
    Build a controller with a ``FetchRecorder`` and a ``ManualScheduler``.

    Passing ``query_string`` enables query-string syncing against a fresh
    ``QueryDictStore`` available as ``controller.synchronizer.store``.
    """
    recorder = FetchRecorder()
    scheduler = kwargs.pop("scheduler", None) or ManualScheduler()
    if query_string is not None:
        kwargs.setdefault("query_params", QueryDictStore(query_string))
        kwargs.setdefault("disable_url_params", False)
    controller = TableController(columns, recorder, scheduler=scheduler, **kwargs)
    if mount:
        controller.mount()
    return controller, recorder, scheduler


@contextmanager
def override_table_settings(**table_settings: Any):
    """Override ``PORTAL_TABLES["table_settings"]`` for the duration of the block."""
    with override_settings(**{SETTINGS_NAME: {"table_settings": table_settings}}):
        yield
