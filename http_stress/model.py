"""
Core data‑model classes for the HTTP stress tester.

Includes:
* **RunConfig** – immutable description of one run (target, R, C, headers, body).
* **RequestOutcome** – classification and timing of a single request.
* **Results** – frozen summary handed to the report layer.
* Helper for rendering arbitrary JSON values as header text.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

# RFC 9110 token characters
_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_CTL = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


# Helper functions

def header_value(value: Any) -> str:
    """Render a JSON value as header text (``True`` → ``"true"``, dicts as JSON)."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


# Core model classes

class RunConfig(BaseModel):
    """Everything the engine needs for one run. Never mutated once built."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "GET"
    headers: Dict[str, Any] = Field(default_factory=dict)
    body: Dict[str, Any] = Field(default_factory=dict)
    requests: int = Field(100, ge=1, description="Total request count (R)")
    concurrency: int = Field(10, ge=1, description="In-flight cap (C)")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        try:
            parsed = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid URL {value!r}: {exc}") from exc
        if parsed.scheme not in {"http", "https"} or not parsed.host:
            raise ValueError(f"URL must be absolute http(s), got {value!r}")
        return value

    @field_validator("method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        value = value.strip().upper()
        if not _TOKEN.fullmatch(value):
            raise ValueError(f"invalid HTTP method {value!r}")
        return value

    @field_validator("headers")
    @classmethod
    def _check_headers(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for name, raw in value.items():
            if not _TOKEN.fullmatch(name):
                raise ValueError(f"invalid header name {name!r}")
            if _CTL.search(header_value(raw)):
                raise ValueError(f"header {name!r} contains control characters")
        return value

    @property
    def effective_concurrency(self) -> int:
        """C capped at R; a larger C would only leave idle slots."""
        return min(self.concurrency, self.requests)

    def request_headers(self) -> Dict[str, str]:
        """Header map with every value rendered as text."""
        return {name: header_value(v) for name, v in self.headers.items()}


class RequestOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: float = Field(..., ge=0, description="Seconds from send to response/error")
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class Results(BaseModel):
    """Final statistics of a run. All durations are seconds."""

    model_config = ConfigDict(frozen=True)

    total_requests: int
    success_requests: int
    failed_requests: int
    total_time: float
    average_duration: float
    min_duration: float
    max_duration: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_rate(self) -> float:
        """Percentage of successful requests (``0`` for an empty run)."""
        if not self.total_requests:
            return 0.0
        return self.success_requests / self.total_requests * 100
