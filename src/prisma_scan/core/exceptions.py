# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for prisma-scan."""

from __future__ import annotations


class PrismaScanError(Exception):
    """Base exception for all prisma-scan errors."""


class ConfigurationError(PrismaScanError):
    """Invalid or missing configuration."""


class ConsoleError(PrismaScanError):
    """Error returned by the Prisma Cloud Console API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ConsoleError):
    """Console rejected the credentials or could not be reached."""


class VersionError(ConsoleError):
    """Failed to read the Console version."""


class ToolDownloadError(ConsoleError):
    """Failed to download the twistcli binary."""


class ScanError(PrismaScanError):
    """twistcli could not be executed."""


class FormattingError(PrismaScanError):
    """The scan results file could not be converted to SARIF."""


class ToolCacheError(PrismaScanError):
    """The twistcli tool cache could not be read or written."""


class GitHubActionsError(PrismaScanError):
    """A GitHub Actions environment file could not be written."""
