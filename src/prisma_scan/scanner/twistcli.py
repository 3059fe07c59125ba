# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Build and run ``twistcli images scan``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from prisma_scan.core.exceptions import ScanError
from prisma_scan.core.logging import redact_sensitive

logger = logging.getLogger("prisma_scan.scanner.twistcli")

TWISTCLI = "twistcli"


def build_scan_command(
    *,
    console_url: str,
    username: str,
    password: str,
    image_name: str,
    results_file: Path,
    containerized: bool = False,
    proxy: str | None = None,
    executable: str = TWISTCLI,
) -> list[str]:
    """Return the argv for scanning *image_name* with full details."""
    cmd = [executable]
    if proxy:
        cmd += ["--http-proxy", proxy]
    cmd += [
        "images", "scan",
        "--address", console_url,
        "--user", username,
        "--password", password,
        "--output-file", str(results_file),
        "--details",
    ]
    if containerized:
        cmd.append("--containerized")
    cmd.append(image_name)
    return cmd


async def run_twistcli(cmd: list[str]) -> int:
    """Run twistcli with output passed through, returning its exit code.

    A non-zero exit is a scan verdict, not an error; only failing to start
    the process raises.
    """
    logger.info("Running %s", redact_sensitive(" ".join(cmd)))
    try:
        proc = await asyncio.create_subprocess_exec(*cmd)
    except OSError as exc:
        raise ScanError(f"Image scan failed: {exc}") from exc
    returncode = await proc.wait()
    logger.info("twistcli exited with code %d", returncode)
    return returncode
