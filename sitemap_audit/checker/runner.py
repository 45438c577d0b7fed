# sitemap_audit/checker/runner.py
"""
Bounded concurrent execution: at most ``concurrency`` units in flight,
optional minimum spacing between dispatches, results in input order.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar, Union

__all__ = ("DispatchPacer", "run_bounded")

T = TypeVar("T")
R = TypeVar("R")

Outcome = Union[R, BaseException]


class DispatchPacer:
    """Keeps successive dispatches at least ``delay`` seconds apart."""

    def __init__(self, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._lock = asyncio.Lock()
        self._last_dispatch_ts: Optional[float] = None

    async def wait(self) -> None:
        if not self.delay:
            return
        async with self._lock:
            now = time.monotonic()
            if self._last_dispatch_ts is not None:
                wait = self.delay - (now - self._last_dispatch_ts)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_dispatch_ts = time.monotonic()


async def run_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    *,
    concurrency: int,
    delay: float = 0.0,
    on_complete: Optional[Callable[[Any], None]] = None,
) -> List[Outcome]:
    """Run ``worker(item)`` for every item under a concurrency cap.

    The returned list is aligned with *items*. A unit that raises does not
    disturb its siblings: its exception object is stored in its slot.
    ``on_complete`` receives each unit's outcome (result or exception)
    exactly once, in completion order.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")

    semaphore = asyncio.Semaphore(concurrency)
    pacer = DispatchPacer(delay)
    results: List[Any] = [None] * len(items)

    async def _run(index: int, item: T) -> None:
        async with semaphore:
            await pacer.wait()
            try:
                outcome: Any = await worker(item)
            except Exception as exc:
                outcome = exc
            results[index] = outcome
            if on_complete is not None:
                on_complete(outcome)

    await asyncio.gather(*(_run(i, item) for i, item in enumerate(items)))
    return results
