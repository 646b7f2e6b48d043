"""
Unit tests for the delayed loading indicator.
"""

import asyncio
import threading
import time
from unittest.mock import MagicMock

import pytest

from portal_tables.core.loading import DelayedLoading, ThreadTimerScheduler
from portal_tables.testing import ManualScheduler

pytestmark = pytest.mark.unit


@pytest.fixture
def scheduler():
    return ManualScheduler()


class TestDelayedLoading:
    def test_stays_hidden_before_delay(self, scheduler):
        loading = DelayedLoading(1000, scheduler=scheduler)
        loading.update(True)

        scheduler.advance(999)

        assert loading.value is False
        assert loading.pending is True

    def test_shows_once_delay_elapsed(self, scheduler):
        loading = DelayedLoading(1000, scheduler=scheduler)
        loading.update(True)

        scheduler.advance(999)
        scheduler.advance(1)

        assert loading.value is True
        assert loading.pending is False

    def test_fast_load_never_shows(self, scheduler):
        on_change = MagicMock()
        loading = DelayedLoading(1000, scheduler=scheduler, on_change=on_change)
        loading.update(True)
        scheduler.advance(500)
        loading.update(False)
        scheduler.advance(2000)

        assert loading.value is False
        assert scheduler.cancelled_count == 1
        on_change.assert_not_called()

    def test_stop_loading_resets_immediately(self, scheduler):
        on_change = MagicMock()
        loading = DelayedLoading(200, scheduler=scheduler, on_change=on_change)
        loading.update(True)
        scheduler.advance(200)

        assert loading.update(False) is False
        assert [call.args[0] for call in on_change.call_args_list] == [True, False]

    def test_repeated_true_does_not_restart_timer(self, scheduler):
        loading = DelayedLoading(1000, scheduler=scheduler)
        loading.update(True)
        scheduler.advance(600)
        loading.update(True)
        scheduler.advance(400)

        assert loading.value is True

    def test_toggle_restarts_grace_period(self, scheduler):
        loading = DelayedLoading(1000, scheduler=scheduler)
        loading.update(True)
        scheduler.advance(600)
        loading.update(False)
        loading.update(True)
        scheduler.advance(600)

        assert loading.value is False
        scheduler.advance(400)
        assert loading.value is True

    def test_dispose_cancels_timer(self, scheduler):
        loading = DelayedLoading(1000, scheduler=scheduler)
        loading.update(True)
        loading.dispose()
        scheduler.advance(5000)

        assert loading.value is False
        assert scheduler.pending == 0
        assert loading.update(True) is False

    def test_without_event_loop_falls_back_to_thread_timer(self):
        shown = threading.Event()
        loading = DelayedLoading(10, on_change=lambda value: value and shown.set())

        loading.update(True)

        assert isinstance(loading._resolve_scheduler(), ThreadTimerScheduler)
        assert shown.wait(2) is True
        assert loading.value is True
        loading.update(False)
        assert loading.value is False

    def test_thread_timer_is_cancelled_by_stop(self):
        loading = DelayedLoading(20)
        loading.update(True)
        loading.update(False)
        time.sleep(0.1)
        assert loading.value is False
        assert loading.pending is False

    def test_superseded_timer_callback_is_ignored(self, scheduler):
        loading = DelayedLoading(100, scheduler=scheduler)
        loading.update(True)
        stale_generation = loading._generation
        loading.update(False)
        loading.update(True)

        loading._fire(stale_generation)

        assert loading.value is False
        assert loading.pending is True

    def test_uses_running_event_loop(self):
        async def scenario():
            loading = DelayedLoading(5)
            loading.update(True)
            await asyncio.sleep(0.05)
            return loading.value

        assert asyncio.run(scenario()) is True
