"""
Human and JSON renderings of :class:`~http_stress.model.Results`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from http_stress.model import Results, RunConfig


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f} ms"


def format_banner(config: RunConfig) -> str:
    return "\n".join(
        [
            "Starting stress test...",
            f"URL:          {config.url}",
            f"Method:       {config.method}",
            f"Requests:     {config.requests}",
            f"Concurrency:  {config.concurrency}",
        ]
    )


def format_results(results: Results) -> str:
    """Multi‑line summary in the order operators read it."""
    return "\n".join(
        [
            "=== Stress test results ===",
            f"Total requests:       {results.total_requests}",
            f"Successful requests:  {results.success_requests}",
            f"Failed requests:      {results.failed_requests}",
            f"Total time:           {results.total_time:.3f} s",
            f"Average per request:  {_ms(results.average_duration)}",
            f"Minimum:              {_ms(results.min_duration)}",
            f"Maximum:              {_ms(results.max_duration)}",
            f"Success rate:         {results.success_rate:.2f}%",
        ]
    )


def write_json(results: Results, path: Union[str, Path]) -> None:
    """Write *results* (including ``success_rate``) as a JSON document."""
    Path(path).write_text(results.model_dump_json(indent=2) + "\n", encoding="utf-8")
