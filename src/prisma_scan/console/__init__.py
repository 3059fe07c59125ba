# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Prisma Cloud Console API access and twistcli caching."""

from prisma_scan.console.client import ConsoleClient, join_url_path, parse_console_url
from prisma_scan.console.toolcache import ToolCache

__all__ = [
    "ConsoleClient",
    "ToolCache",
    "join_url_path",
    "parse_console_url",
]
