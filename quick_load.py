"""
Quick programmatic run against the local ping target.

Start the target first (``stressctl target``), then:

    python quick_load.py

Writes *results.json* next to the script and prints the summary.
"""

import logging
import pathlib

from http_stress import RunConfig, run_stress_test
from http_stress.report import format_results, write_json

# Benchmark configuration
URL = "http://127.0.0.1:8080/ping?delay_ms=50"
REQUESTS = 200
CONN = 20

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    results = run_stress_test(RunConfig(url=URL, requests=REQUESTS, concurrency=CONN))

    # Print summary
    print(format_results(results))
    write_json(results, pathlib.Path(__file__).with_name("results.json"))
