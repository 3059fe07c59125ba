# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""prisma-scan - Prisma Cloud image scanning with SARIF output for CI pipelines."""

__version__ = "0.1.0"

from prisma_scan.core.exceptions import FormattingError
from prisma_scan.formatters.sarif import format_sarif, sarif_to_json

__all__ = [
    "FormattingError",
    "__version__",
    "format_sarif",
    "sarif_to_json",
]
