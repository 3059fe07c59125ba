# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Configuration, logging and error types shared across prisma-scan."""
