# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Command-line interface for prisma-scan."""
