"""
Engine entry point: wire executor, scheduler and aggregator into one run.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from http_stress.executor import build_client, make_request
from http_stress.model import Results, RunConfig
from http_stress.scheduler import dispatch
from http_stress.stats import StatsAggregator

logger = logging.getLogger(__name__)


def run_stress_test(config: RunConfig, *, client: Optional[httpx.Client] = None) -> Results:
    """Issue ``config.requests`` calls, at most ``config.concurrency`` at a time.

    A caller‑supplied *client* is used as is and left open; otherwise a client
    is built for the run and closed afterwards.
    """
    logger.info(
        "starting run: %s %s, %d requests, concurrency %d",
        config.method,
        config.url,
        config.requests,
        config.concurrency,
    )
    owned = client is None
    http = build_client(config) if client is None else client
    stats = StatsAggregator()

    def one_call() -> None:
        stats.record(make_request(http, config))

    try:
        start = time.perf_counter()
        dispatch(one_call, config.requests, config.concurrency)
        total_time = time.perf_counter() - start
    finally:
        if owned:
            http.close()

    results = stats.finalize(total_time)
    logger.info(
        "run finished: %d ok, %d failed in %.3fs",
        results.success_requests,
        results.failed_requests,
        results.total_time,
    )
    return results
