"""
Request executor: one HTTP call → one :class:`RequestOutcome`.

* JSON body (with ``Content-Type: application/json``) when the body map is
  non‑empty; user headers are applied first, so the JSON content type wins.
* Timed with :func:`time.perf_counter` from send until the body (or the
  error) arrives; one 30 s deadline covers the whole exchange.
* 2xx → success. Any other status or any transport error → failure. Nothing
  is retried and nothing is raised.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

import httpx

from http_stress.model import RequestOutcome, RunConfig

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30.0  # seconds, per request


def build_client(config: RunConfig, *, timeout: float = REQUEST_TIMEOUT) -> httpx.Client:
    """Return a client whose pool can hold one connection per admission unit."""
    size = config.effective_concurrency
    return httpx.Client(
        timeout=timeout,
        limits=httpx.Limits(max_connections=size, max_keepalive_connections=size),
        follow_redirects=True,
    )


def build_request(client: httpx.Client, config: RunConfig) -> httpx.Request:
    # values go out as UTF-8 bytes; httpx would reject non-ASCII text
    headers = {k: v.encode("utf-8") for k, v in config.request_headers().items()}
    content = None
    if config.body:
        content = json.dumps(config.body).encode()
        headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
        headers["Content-Type"] = b"application/json"
    return client.build_request(config.method, config.url, headers=headers, content=content)


def make_request(
    client: httpx.Client, config: RunConfig, *, timeout: Optional[float] = None
) -> RequestOutcome:
    """Send one request described by *config* and classify the result.

    *timeout* is a deadline for the whole exchange, body included, and
    defaults to the client's read timeout. It is checked after every chunk.
    """
    request = build_request(client, config)
    limit = timeout if timeout is not None else (client.timeout.read or REQUEST_TIMEOUT)

    start = time.perf_counter()
    deadline = start + limit
    try:
        response = client.send(request, stream=True)
        try:
            for _ in response.iter_raw():
                if time.perf_counter() > deadline:
                    break
        finally:
            response.close()
        if time.perf_counter() > deadline:
            raise httpx.ReadTimeout(f"request exceeded {limit:g}s", request=request)
    except httpx.TimeoutException as exc:
        duration = time.perf_counter() - start
        logger.debug("%s %s timed out after %.3fs", config.method, config.url, duration)
        return RequestOutcome(duration=duration, success=False, error=f"timeout: {exc!r}")
    except httpx.HTTPError as exc:
        duration = time.perf_counter() - start
        logger.debug("%s %s failed: %r", config.method, config.url, exc)
        return RequestOutcome(duration=duration, success=False, error=repr(exc))
    duration = time.perf_counter() - start

    status = response.status_code
    if not 200 <= status < 300:
        logger.debug("%s %s answered %d", config.method, config.url, status)
        return RequestOutcome(
            duration=duration,
            success=False,
            status_code=status,
            error=f"status code: {status}",
        )
    return RequestOutcome(duration=duration, success=True, status_code=status)
