"""
Dispatch scheduler: run a callable *R* times with at most *C* in flight.

A thread pool provides the parallel execution units; a bounded semaphore of
size *C* is the admission gate. Every unit acquires one slot before calling
the task and gives it back in ``finally``, so failures and timeouts never leak
a slot. All *R* units are submitted up front and the function only returns
once every one of them has finished.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable

logger = logging.getLogger(__name__)


def dispatch(task: Callable[[], None], requests: int, concurrency: int) -> int:
    """Call *task* exactly *requests* times, never more than *concurrency* at once.

    Returns the number of completed units. An exception escaping *task* is
    re‑raised after the completion barrier, never before.
    """
    if requests < 1:
        raise ValueError("requests must be >= 1")
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")

    slots = threading.BoundedSemaphore(concurrency)

    def unit() -> None:
        slots.acquire()
        try:
            task()
        finally:
            slots.release()

    workers = min(concurrency, requests)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="stress") as pool:
        futures = [pool.submit(unit) for _ in range(requests)]
        logger.debug("submitted %d units to %d workers", requests, workers)
        done, _ = wait(futures)  # completion barrier

    for fut in futures:
        exc = fut.exception()
        if exc is not None:
            raise exc
    return len(done)
