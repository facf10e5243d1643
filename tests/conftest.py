from __future__ import annotations

from typing import Iterator

import pytest

from fluo import QueueScheduler, configure


@pytest.fixture(autouse=True)
def scheduler() -> Iterator[QueueScheduler]:
    """Deferred emissions wait in a queue until the test drains it."""
    queue = QueueScheduler()
    previous = configure(scheduler=queue)
    yield queue
    configure(previous)
