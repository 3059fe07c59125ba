# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""End-to-end image scan: Console auth, twistcli, SARIF conversion."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from prisma_scan.ci.exit_codes import CIExitCode, scan_exit_code
from prisma_scan.ci.github import add_path, set_output
from prisma_scan.console.client import ConsoleClient
from prisma_scan.console.toolcache import ToolCache
from prisma_scan.core.config import Settings
from prisma_scan.core.exceptions import ConfigurationError
from prisma_scan.formatters.sarif import build_sarif, load_scan_report, write_sarif
from prisma_scan.models.report import ScanReport
from prisma_scan.models.sarif import SarifReport
from prisma_scan.scanner.twistcli import TWISTCLI, build_scan_command, run_twistcli

logger = logging.getLogger("prisma_scan.scanner.pipeline")

_REQUIRED_INPUTS = ("pcc_console_url", "pcc_user", "pcc_pass", "image_name")


@dataclass
class ScanOutcome:
    """What a completed scan produced."""

    twistcli_version: str
    returncode: int
    results_file: Path
    sarif_file: Path
    scan_report: ScanReport
    report: SarifReport

    @property
    def exit_code(self) -> CIExitCode:
        return scan_exit_code(self.returncode)


def check_required(settings: Settings) -> None:
    missing = [name for name in _REQUIRED_INPUTS if not getattr(settings, name)]
    if missing:
        raise ConfigurationError(f"Missing required input(s): {', '.join(missing)}")


async def ensure_twistcli(
    client: ConsoleClient,
    token: str,
    version: str,
    cache: ToolCache,
) -> Path:
    """Return a directory holding twistcli for *version*, downloading on a cache miss."""
    tool_dir = cache.find(TWISTCLI, version)
    if tool_dir is not None:
        logger.info("Using cached twistcli %s", version)
        return tool_dir

    with tempfile.TemporaryDirectory(prefix="prisma-scan-") as tmp:
        downloaded = await client.download_twistcli(token, Path(tmp) / TWISTCLI)
        return cache.cache_file(downloaded, TWISTCLI, TWISTCLI, version)


async def run_scan(
    settings: Settings,
    *,
    proxy: str | None = None,
    cache: ToolCache | None = None,
) -> ScanOutcome:
    """Scan ``settings.image_name`` and write the SARIF file.

    Raises:
        PrismaScanError: On any configuration, Console, execution or formatting failure.
    """
    check_required(settings)
    client = ConsoleClient(settings.pcc_console_url, timeout=settings.http_timeout, proxy=proxy)
    cache = cache or ToolCache(settings.tool_cache_dir)

    token = await client.authenticate(settings.pcc_user, settings.pcc_pass)
    version = (await client.get_version(token)).replace('"', "").strip()
    logger.info("Console version %s", version)

    tool_dir = await ensure_twistcli(client, token, version, cache)
    add_path(tool_dir)

    cmd = build_scan_command(
        console_url=settings.pcc_console_url,
        username=settings.pcc_user,
        password=settings.pcc_pass,
        image_name=settings.image_name,
        results_file=settings.results_file,
        containerized=settings.containerized,
        proxy=proxy,
        executable=str(tool_dir / TWISTCLI),
    )
    returncode = await run_twistcli(cmd)
    if returncode > 0:
        logger.warning(
            "Image scan of %s failed with exit code %d",
            settings.image_name,
            returncode,
            extra={"image": settings.image_name},
        )

    scan_report = load_scan_report(settings.results_file)
    report = build_sarif(version, scan_report)
    write_sarif(report, settings.sarif_file)
    logger.info("SARIF written to %s", settings.sarif_file, extra={"image": settings.image_name})

    set_output("results_file", str(settings.results_file))
    set_output("sarif_file", str(settings.sarif_file))

    return ScanOutcome(
        twistcli_version=version,
        returncode=returncode,
        results_file=settings.results_file,
        sarif_file=settings.sarif_file,
        scan_report=scan_report,
        report=report,
    )
