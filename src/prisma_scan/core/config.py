# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Action configuration via GitHub Actions inputs (``INPUT_*``) and .env files."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRUE_VALUES = ("true", "yes", "y", "1")

# Checked in order; the first one set wins
PROXY_ENV_VARS = ("https_proxy", "HTTPS_PROXY", "http_proxy", "HTTP_PROXY")


def _default_tool_cache() -> Path:
    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return Path.home() / ".cache" / "prisma-scan"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Console
    pcc_console_url: str = ""
    pcc_user: str = ""
    pcc_pass: str = ""
    http_timeout: float = 60.0

    # Scan
    image_name: str = ""
    containerized: bool = False
    results_file: Path = Path("pcc_scan_results.json")
    sarif_file: Path = Path("pcc_scan_results.sarif.json")

    @field_validator("containerized", mode="before")
    @classmethod
    def _parse_containerized(cls, v: object) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in TRUE_VALUES
        return bool(v)

    # twistcli cache
    tool_cache_dir: Path = Field(default_factory=_default_tool_cache)

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


def get_settings() -> Settings:
    return Settings()


def get_proxy() -> str | None:
    """Return the proxy URL from the environment, if any."""
    for name in PROXY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
