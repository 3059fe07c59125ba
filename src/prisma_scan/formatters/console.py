# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console summary of an image scan."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from prisma_scan import __version__
from prisma_scan.models.report import ImageScanResult

console = Console(stderr=True)

SEVERITY_ORDER = ["critical", "high", "important", "medium", "moderate", "low"]

SEVERITY_COLORS = {
    "critical": "bold red",
    "high": "red",
    "important": "red",
    "medium": "yellow",
    "moderate": "yellow",
    "low": "cyan",
}


def _severity_key(severity: str) -> tuple[int, str]:
    try:
        return SEVERITY_ORDER.index(severity), severity
    except ValueError:
        return len(SEVERITY_ORDER), severity


def severity_counts(result: ImageScanResult) -> dict[str, Counter[str]]:
    """Count findings per kind and lower-cased severity."""
    return {
        "vulnerabilities": Counter(v.severity.lower() for v in result.vulnerabilities or []),
        "compliances": Counter(c.severity.lower() for c in result.compliances or []),
    }


def format_scan_summary(
    result: ImageScanResult,
    sarif_file: Path | None = None,
    out: Console | None = None,
) -> None:
    """Print a per-severity table of the converted findings."""
    out = out or console
    counts = severity_counts(result)
    severities = sorted(
        set(counts["vulnerabilities"]) | set(counts["compliances"]),
        key=_severity_key,
    )

    out.print(f"[bold]prisma-scan v{__version__}[/bold] - {result.name}")

    if not severities:
        out.print("[bold green]No vulnerabilities or compliance issues found.[/bold green]")
    else:
        table = Table(title="Findings")
        table.add_column("Severity", style="bold")
        table.add_column("Vulnerabilities", justify="right")
        table.add_column("Compliance", justify="right")
        for sev in severities:
            color = SEVERITY_COLORS.get(sev, "white")
            table.add_row(
                f"[{color}]{sev}[/{color}]",
                str(counts["vulnerabilities"][sev]),
                str(counts["compliances"][sev]),
            )
        table.add_row(
            "total",
            str(sum(counts["vulnerabilities"].values())),
            str(sum(counts["compliances"].values())),
            style="dim",
        )
        out.print(table)

    if sarif_file is not None:
        out.print(f"SARIF written to {sarif_file}", style="green")
