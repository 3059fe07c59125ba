# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""GitHub Actions workflow commands and environment files."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from prisma_scan.core.exceptions import GitHubActionsError

logger = logging.getLogger("prisma_scan.ci.github")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _append_env_file(variable: str, line: str) -> bool:
    path = os.environ.get(variable)
    if not path:
        return False
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{line}\n")
    except OSError as exc:
        raise GitHubActionsError(f"Failed writing ${variable} file {path}: {exc}") from exc
    return True


def set_output(name: str, value: str) -> None:
    """Write a key=value pair to $GITHUB_OUTPUT.

    Raises:
        GitHubActionsError: If the output file cannot be written.
    """
    if not _append_env_file("GITHUB_OUTPUT", f"{name}={value}"):
        logger.debug("GITHUB_OUTPUT not set; output %s=%s not recorded", name, value)


def add_path(directory: str | Path) -> None:
    """Prepend a directory to PATH for this process and later workflow steps."""
    directory = str(directory)
    _append_env_file("GITHUB_PATH", directory)
    os.environ["PATH"] = os.pathsep.join([directory, os.environ.get("PATH", "")])


def set_failed(message: str) -> None:
    """Emit an ``::error::`` workflow command for the failure."""
    sys.stdout.write(f"::error::{_escape_data(message)}\n")
    sys.stdout.flush()
