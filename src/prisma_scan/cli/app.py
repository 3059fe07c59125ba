# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from prisma_scan.ci.exit_codes import CIExitCode
from prisma_scan.ci.github import set_failed
from prisma_scan.core.config import Settings, get_proxy, get_settings
from prisma_scan.core.exceptions import ConfigurationError, PrismaScanError
from prisma_scan.core.logging import setup_logging

app = typer.Typer(
    name="prisma-scan",
    help="Scan container images with Prisma Cloud twistcli and emit SARIF",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


def _load_settings(**overrides: Any) -> Settings:
    """Read settings from the environment, then apply CLI options that were given."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    updates = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=updates)


def _fail(exc: PrismaScanError) -> typer.Exit:
    set_failed(str(exc))
    return typer.Exit(int(CIExitCode.ERROR))


@app.command()
def scan(
    console_url: Annotated[
        str | None, typer.Option("--console-url", help="Prisma Cloud Console address")
    ] = None,
    user: Annotated[
        str | None, typer.Option("--user", "-u", help="Console username or access key")
    ] = None,
    password: Annotated[
        str | None, typer.Option("--password", "-p", help="Console password or secret key")
    ] = None,
    image: Annotated[
        str | None, typer.Option("--image", "-i", help="Image to scan (name:tag or ID)")
    ] = None,
    containerized: Annotated[
        bool | None,
        typer.Option(
            "--containerized/--no-containerized",
            help="Scan from within the build container",
        ),
    ] = None,
    results_file: Annotated[
        Path | None, typer.Option("--results-file", help="twistcli JSON results path")
    ] = None,
    sarif_file: Annotated[
        Path | None, typer.Option("--sarif-file", "-o", help="SARIF output path")
    ] = None,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Logging level")
    ] = None,
) -> None:
    """Scan an image with twistcli and convert the results to SARIF."""
    from prisma_scan.formatters.console import format_scan_summary
    from prisma_scan.scanner.pipeline import run_scan

    try:
        settings = _load_settings(
            pcc_console_url=console_url,
            pcc_user=user,
            pcc_pass=password,
            image_name=image,
            containerized=containerized,
            results_file=results_file,
            sarif_file=sarif_file,
            log_level=log_level,
        )
        setup_logging(settings.log_level, settings.log_format)
        outcome = asyncio.run(run_scan(settings, proxy=get_proxy()))
    except PrismaScanError as exc:
        raise _fail(exc) from exc

    format_scan_summary(outcome.scan_report.results[0], sarif_file=outcome.sarif_file)

    if outcome.exit_code != CIExitCode.SUCCESS:
        set_failed("Image scan failed")
        raise typer.Exit(int(outcome.exit_code))


@app.command()
def sarif(
    results_file: Annotated[
        Path, typer.Argument(help="twistcli JSON results file to convert")
    ],
    scanner_version: Annotated[
        str, typer.Option("--scanner-version", "-V", help="twistcli version for the SARIF driver")
    ] = "",
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file path")
    ] = None,
) -> None:
    """Convert an existing twistcli results file to SARIF."""
    from prisma_scan.formatters.console import format_scan_summary
    from prisma_scan.formatters.sarif import (
        build_sarif,
        load_scan_report,
        sarif_to_json,
        write_sarif,
    )

    try:
        settings = _load_settings()
        setup_logging(settings.log_level, settings.log_format)
        scan_report = load_scan_report(results_file)
        report = build_sarif(scanner_version.replace('"', ""), scan_report)
        if output:
            write_sarif(report, output)
    except PrismaScanError as exc:
        raise _fail(exc) from exc

    if output:
        format_scan_summary(scan_report.results[0], sarif_file=output)
    else:
        sys.stdout.write(sarif_to_json(report) + "\n")


@app.command()
def version() -> None:
    """Show version information."""
    from prisma_scan import __version__

    typer.echo(f"prisma-scan v{__version__}")
