"""
Command‑line interface (CLI) for the HTTP stress tester.

Example – 500 POSTs, 20 at a time
---------------------------------
    stressctl run --url http://127.0.0.1:8080/ping \
           --method POST \
           --headers '{"Authorization": "Bearer t0k3n"}' \
           --body payload.json \
           -n 500 -c 20

Flags fall back to ``STRESS_*`` environment variables (see
:mod:`http_stress.settings`).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError

from http_stress.loader import ConfigError, load_json_map
from http_stress.model import Results, RunConfig
from http_stress.report import format_banner, format_results, write_json
from http_stress.runner import run_stress_test
from http_stress.settings import get_settings

logger = logging.getLogger(__name__)

# Typer application instance
app = typer.Typer(
    add_completion=False,
    help="Fire a fixed number of HTTP requests with bounded concurrency.",
)


# Helper functions

def _setup_logging(level: str) -> None:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"unknown log level {level!r}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def build_config(
    url: Optional[str],
    method: Optional[str],
    headers: Optional[str],
    body: Optional[str],
    requests: Optional[int],
    concurrency: Optional[int],
) -> RunConfig:
    """Merge flags over the environment and validate the result."""
    env = get_settings()
    url = url or env.url
    if not url:
        raise ConfigError("--url is required (or set STRESS_URL)")
    try:
        header_map = load_json_map(headers if headers is not None else env.headers)
    except ConfigError as exc:
        raise ConfigError(f"headers: {exc}") from exc
    try:
        body_map = load_json_map(body if body is not None else env.body)
    except ConfigError as exc:
        raise ConfigError(f"body: {exc}") from exc
    return RunConfig(
        url=url,
        method=method or env.method,
        headers=header_map,
        body=body_map,
        requests=requests if requests is not None else env.requests,
        concurrency=concurrency if concurrency is not None else env.concurrency,
    )


@app.command()
def run(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Target URL (required)"),
    method: Optional[str] = typer.Option(
        None, "--method", "-m", help="HTTP method (GET, POST, PUT, DELETE, ...)"
    ),
    headers: Optional[str] = typer.Option(
        None, "--headers", "-H", help="JSON file or inline JSON object with headers"
    ),
    body: Optional[str] = typer.Option(
        None, "--body", "-b", help="JSON file or inline JSON object sent as body"
    ),
    requests: Optional[int] = typer.Option(
        None, "--requests", "-n", help="Total number of requests [default: 100]"
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", help="Requests in flight at once [default: 10]"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Also write the results as JSON to this file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level [default: WARNING]"
    ),
) -> None:
    """Run the stress test and print a summary (exit 1 on configuration errors)."""
    try:
        _setup_logging(log_level or get_settings().log_level)
        config = build_config(url, method, headers, body, requests, concurrency)
    except ConfigError as exc:
        _fail(str(exc))
    except ValidationError as exc:
        _fail(_describe(exc))

    typer.echo(format_banner(config))
    typer.echo()
    results: Results = run_stress_test(config)
    typer.echo(format_results(results))

    if output:
        write_json(results, output)
        logger.info("results written to %s", output)


@app.command()
def target(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8080, "--port", "-p", help="Port to listen on"),
) -> None:
    """Serve the local ``/ping`` target (see :mod:`http_stress.target`)."""
    import uvicorn

    uvicorn.run("http_stress.target:app", host=host, port=port)


# ``python -m http_stress.cli`` entry‑point

def main() -> None:  # pragma: no cover
    """Entry‑point for the ``stressctl`` console script."""
    app()


if __name__ == "__main__":  # called via ``python cli.py``
    app()
