"""
http_stress package initialization.

Re‑exports the engine entry point and its data types so scripts can do::

    from http_stress import RunConfig, run_stress_test
"""

from http_stress.model import RequestOutcome, Results, RunConfig
from http_stress.runner import run_stress_test

__all__ = ["RequestOutcome", "Results", "RunConfig", "run_stress_test"]
