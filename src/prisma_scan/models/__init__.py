# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for prisma-scan."""

from prisma_scan.models.report import (
    ComplianceViolation,
    ImageScanResult,
    ScanReport,
    Vulnerability,
)
from prisma_scan.models.sarif import SarifReport, SarifResult, SarifRule

__all__ = [
    "ComplianceViolation",
    "ImageScanResult",
    "SarifReport",
    "SarifResult",
    "SarifRule",
    "ScanReport",
    "Vulnerability",
]
