# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Allow ``python -m prisma_scan``."""

from prisma_scan.cli.app import app

app()
