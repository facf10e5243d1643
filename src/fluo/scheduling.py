"""Schedulers that run deferred emissions on a later turn."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable

from .exceptions import SchedulingError


class Scheduler(ABC):
    """Runs callbacks after the current flow of control has finished."""

    @abstractmethod
    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        """Arrange for `callback(*args)` to run on a later turn."""
        ...


class QueueScheduler(Scheduler):
    """FIFO backlog drained explicitly with `run_pending()`.

    Nothing runs until `run_pending()` is called, which makes ordering
    fully deterministic.
    """

    def __init__(self) -> None:
        self._pending: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self._pending.append((callback, args))

    def run_pending(self) -> int:
        """Run queued callbacks, including ones queued while draining.

        Returns the number of callbacks run.
        """
        count = 0
        while self._pending:
            callback, args = self._pending.popleft()
            callback(*args)
            count += 1
        return count


class AsyncioScheduler(Scheduler):
    """Defers onto an asyncio event loop.

    Uses `loop` when given, otherwise the loop running in the calling
    thread. With neither there is nothing to run the work later, so
    `SchedulingError` is raised; use a `QueueScheduler` outside asyncio.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                raise SchedulingError(
                    f"cannot defer {callback!r}: no running event loop"
                ) from None
        loop.call_soon(callback, *args)
