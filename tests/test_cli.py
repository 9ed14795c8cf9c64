"""
CLI tests: configuration errors exit 1 before any request, a successful run
prints the report and exits 0.
"""

import json
import subprocess
import sys
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from http_stress import cli, runner

ROOT = Path(__file__).parent.parent
cli_runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in ("URL", "METHOD", "HEADERS", "BODY", "REQUESTS", "CONCURRENCY", "LOG_LEVEL"):
        monkeypatch.delenv(f"STRESS_{name}", raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env


@pytest.fixture
def calls(monkeypatch):
    """Swap the network for a mock transport and record every request."""
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    monkeypatch.setattr(
        runner, "build_client", lambda config: httpx.Client(transport=httpx.MockTransport(handler))
    )
    return seen


def test_cli_zero_requests_rejected():
    """``-n 0`` fails with exit status 1 and a message on stderr."""
    cmd = [
        sys.executable,
        "-m",
        "http_stress.cli",
        "run",
        "--url",
        "http://127.0.0.1:9/ping",
        "--requests",
        "0",
    ]
    result = subprocess.run(cmd, capture_output=True, text=True, cwd=ROOT)
    assert result.returncode == 1
    assert "Error" in result.stderr
    assert "requests" in result.stderr


def test_missing_url(calls):
    result = cli_runner.invoke(cli.app, ["run"])
    assert result.exit_code == 1
    assert "--url is required" in result.output
    assert calls == []


def test_malformed_headers(calls):
    result = cli_runner.invoke(cli.app, ["run", "-u", "http://t.test/", "-H", "{oops"])
    assert result.exit_code == 1
    assert "headers" in result.output
    assert calls == []


def test_header_with_newline_rejected(calls):
    result = cli_runner.invoke(cli.app, ["run", "-u", "http://t.test/", "-H", '{"X-Bad": "a\\nb"}'])
    assert result.exit_code == 1
    assert "control characters" in result.output
    assert calls == []


def test_non_ascii_header_file_runs(calls, tmp_path):
    path = tmp_path / "headers.json"
    path.write_text('{"X-Name": "café"}', encoding="utf-8")
    result = cli_runner.invoke(cli.app, ["run", "-u", "http://t.test/", "-H", str(path), "-n", "2"])
    assert result.exit_code == 0, result.output
    assert "Successful requests:  2" in result.output
    assert len(calls) == 2


def test_run_prints_report(calls, tmp_path):
    out = tmp_path / "results.json"
    result = cli_runner.invoke(
        cli.app,
        [
            "run", "-u", "http://t.test/ping", "-m", "POST",
            "-H", '{"X-Test": 1}', "-b", '{"hello": "world"}',
            "-n", "5", "-c", "2", "-o", str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Successful requests:  5" in result.output
    assert "Success rate:         100.00%" in result.output
    assert len(calls) == 5
    assert all(r.headers["X-Test"] == "1" for r in calls)
    data = json.loads(out.read_text())
    assert data["total_requests"] == 5
    assert data["success_rate"] == 100.0


def test_environment_fallback(calls, monkeypatch):
    monkeypatch.setenv("STRESS_URL", "http://env.test/ping")
    monkeypatch.setenv("STRESS_REQUESTS", "3")
    monkeypatch.setenv("STRESS_CONCURRENCY", "1")
    result = cli_runner.invoke(cli.app, ["run"])
    assert result.exit_code == 0, result.output
    assert len(calls) == 3
    assert str(calls[0].url) == "http://env.test/ping"


def test_flags_override_environment(calls, monkeypatch):
    monkeypatch.setenv("STRESS_URL", "http://env.test/ping")
    monkeypatch.setenv("STRESS_REQUESTS", "3")
    result = cli_runner.invoke(cli.app, ["run", "-u", "http://flag.test/", "-n", "2"])
    assert result.exit_code == 0, result.output
    assert len(calls) == 2
    assert calls[0].url.host == "flag.test"


def test_bad_log_level(calls):
    result = cli_runner.invoke(cli.app, ["run", "-u", "http://t.test/", "--log-level", "LOUD"])
    assert result.exit_code == 1
    assert "log level" in result.output
