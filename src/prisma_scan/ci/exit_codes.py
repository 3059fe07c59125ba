# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Standardized exit codes for CI/CD pipeline integrations.

Exit codes:
    0  SUCCESS: scan ran and SARIF was written
    1  SCAN_FAILED: twistcli reported a failed scan (e.g. policy threshold)
    2  ERROR: the run could not complete (configuration, Console or formatting error)
"""

from __future__ import annotations

from enum import IntEnum


class CIExitCode(IntEnum):
    """Exit codes used by prisma-scan."""

    SUCCESS = 0
    SCAN_FAILED = 1
    ERROR = 2


def scan_exit_code(twistcli_returncode: int) -> CIExitCode:
    """Map a twistcli process return code to a CI exit code."""
    if twistcli_returncode > 0:
        return CIExitCode.SCAN_FAILED
    return CIExitCode.SUCCESS
