"""
Environment configuration using Pydantic Settings.

Every option of ``stressctl run`` can also come from a ``STRESS_*`` variable
(or a ``.env`` file):

    STRESS_URL=http://api:8080/ping STRESS_REQUESTS=500 stressctl run
"""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class StressSettings(BaseSettings):
    """Defaults for a run; command‑line flags take precedence."""

    model_config = SettingsConfigDict(
        env_prefix="STRESS_",
        env_file=".env",
        extra="ignore",
    )

    url: Optional[str] = None
    method: str = "GET"
    headers: Optional[str] = None  # file path or JSON literal
    body: Optional[str] = None
    requests: int = 100
    concurrency: int = 10
    log_level: str = "WARNING"


def get_settings() -> StressSettings:
    """Read the environment afresh (tests rely on ``monkeypatch.setenv``)."""
    return StressSettings()
