"""Tests for schedulers and settings."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from fluo import (
    AsyncioScheduler,
    QueueScheduler,
    SchedulingError,
    Settings,
    configure,
    create_action,
    get_settings,
)


class TestQueueScheduler:
    def test_runs_in_order(self) -> None:
        scheduler = QueueScheduler()
        order: list[int] = []
        scheduler.call_soon(order.append, 1)
        scheduler.call_soon(order.append, 2)
        assert order == []
        assert scheduler.run_pending() == 2
        assert order == [1, 2]
        assert scheduler.run_pending() == 0

    def test_drains_work_queued_while_running(self) -> None:
        scheduler = QueueScheduler()
        order: list[str] = []

        def first() -> None:
            order.append("first")
            scheduler.call_soon(order.append, "second")

        scheduler.call_soon(first)
        assert scheduler.run_pending() == 2
        assert order == ["first", "second"]


class TestAsyncioScheduler:
    def test_no_running_loop_raises(self) -> None:
        with pytest.raises(SchedulingError):
            AsyncioScheduler().call_soon(MagicMock(), "x")

    def test_default_settings_outside_loop_fail_before_notifying(self) -> None:
        previous = configure(Settings())
        try:
            action = create_action(pre_emit=MagicMock())
            callback = MagicMock()
            action.listen(callback)
            with pytest.raises(SchedulingError):
                action(1337, "test")
            action.pre_emit.assert_called_once_with(1337, "test")

            async def later_turns() -> None:
                for _ in range(5):
                    await asyncio.sleep(0)

            asyncio.run(later_turns())
            callback.assert_not_called()
        finally:
            configure(previous)

    def test_sync_action_needs_no_loop(self) -> None:
        previous = configure(Settings())
        try:
            action = create_action(sync=True)
            callback = MagicMock()
            action.listen(callback)
            action("x")
            callback.assert_called_once_with("x")
        finally:
            configure(previous)

    def test_explicit_loop_runs_work_when_started(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            callback = MagicMock()
            AsyncioScheduler(loop).call_soon(callback, "x")
            callback.assert_not_called()
            loop.run_until_complete(asyncio.sleep(0))
            callback.assert_called_once_with("x")
        finally:
            loop.close()

    @pytest.mark.asyncio
    async def test_uses_running_loop(self) -> None:
        scheduler = AsyncioScheduler()
        callback = MagicMock()
        scheduler.call_soon(callback, "x")
        callback.assert_not_called()
        await asyncio.sleep(0)
        callback.assert_called_once_with("x")

    @pytest.mark.asyncio
    async def test_deferred_emission_on_event_loop(self) -> None:
        previous = configure(scheduler=AsyncioScheduler())
        try:
            action = create_action()
            callback = MagicMock()
            action.listen(callback)
            action(1337, "test")
            callback.assert_not_called()
            await asyncio.sleep(0)
            callback.assert_called_once_with(1337, "test")
        finally:
            configure(previous)


class TestSettings:
    def test_configure_returns_previous(self, scheduler: QueueScheduler) -> None:
        replacement = QueueScheduler()
        previous = configure(scheduler=replacement)
        assert previous.scheduler is scheduler
        assert get_settings().scheduler is replacement
        configure(previous)
        assert get_settings().scheduler is scheduler

    def test_default_scheduler(self) -> None:
        assert isinstance(Settings().scheduler, AsyncioScheduler)

    def test_rejects_non_scheduler(self) -> None:
        with pytest.raises(ValueError):
            Settings(scheduler=object())
