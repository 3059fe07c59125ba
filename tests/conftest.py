# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

import logging
import os
from pathlib import Path

import pytest

RESULTS_DIR = Path(__file__).parent / "fixtures" / "results"

_ENV_VARS = (
    "GITHUB_OUTPUT",
    "GITHUB_PATH",
    "RUNNER_TOOL_CACHE",
    "https_proxy",
    "HTTPS_PROXY",
    "http_proxy",
    "HTTP_PROXY",
    "INPUT_PCC_CONSOLE_URL",
    "INPUT_PCC_USER",
    "INPUT_PCC_PASS",
    "INPUT_IMAGE_NAME",
    "INPUT_CONTAINERIZED",
    "INPUT_RESULTS_FILE",
    "INPUT_SARIF_FILE",
    "INPUT_LOG_LEVEL",
    "INPUT_LOG_FORMAT",
)


@pytest.fixture
def results_dir() -> Path:
    return RESULTS_DIR


@pytest.fixture
def single_image_file() -> Path:
    return RESULTS_DIR / "single_image.json"


@pytest.fixture
def clean_image_file() -> Path:
    return RESULTS_DIR / "clean_image.json"


@pytest.fixture
def multi_image_file() -> Path:
    return RESULTS_DIR / "multi_image.json"


@pytest.fixture
def malformed_file() -> Path:
    return RESULTS_DIR / "malformed.json"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep runner and action environment variables out of tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # add_path prepends to PATH in-process
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("prisma_scan")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
