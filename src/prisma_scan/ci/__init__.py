# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CI/CD integration module for prisma-scan.

Provides exit codes and GitHub Actions workflow commands.
"""

from prisma_scan.ci.exit_codes import CIExitCode
from prisma_scan.ci.github import add_path, set_failed, set_output

__all__ = [
    "CIExitCode",
    "add_path",
    "set_failed",
    "set_output",
]
