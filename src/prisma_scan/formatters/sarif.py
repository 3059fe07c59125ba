# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SARIF 2.1.0 output formatter for twistcli scan results."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from prisma_scan.core.exceptions import FormattingError
from prisma_scan.models.report import (
    ComplianceViolation,
    ImageScanResult,
    ScanReport,
    Vulnerability,
)
from prisma_scan.models.sarif import (
    SarifArtifactLocation,
    SarifDriver,
    SarifHelp,
    SarifLocation,
    SarifMessage,
    SarifPhysicalLocation,
    SarifRegion,
    SarifReport,
    SarifResult,
    SarifRule,
    SarifRun,
    SarifTool,
)

logger = logging.getLogger("prisma_scan.formatters.sarif")

CVSS_DEFAULT = "N/A"
STATUS_DEFAULT = "not fixed"

_VULN_HEADER = (
    "| CVE | Severity | CVSS | Package | Version | Fix Status | Published | Discovered |\n"
    "| --- | --- | --- | --- | --- | --- | --- | --- |\n"
)
_COMPLIANCE_HEADER = (
    "| Compliance Check | Severity | Title |\n"
    "| --- | --- | --- |\n"
)


def to_sentence_case(text: str) -> str:
    """Upper-case the first character and lower-case the rest.

    Raises:
        ValueError: If *text* is empty.
    """
    if not text:
        raise ValueError("Cannot sentence-case an empty severity")
    return text[0].upper() + text[1:].lower()


def _vulnerability_rule(vuln: Vulnerability) -> SarifRule:
    cvss = vuln.cvss if vuln.cvss is not None else CVSS_DEFAULT
    status = vuln.status if vuln.status is not None else STATUS_DEFAULT
    row = (
        f"| [{vuln.id}]({vuln.link}) | {vuln.severity} | {cvss} | {vuln.package_name} "
        f"| {vuln.package_version} | {status} | {vuln.published_date} | {vuln.discovered_date} |"
    )
    return SarifRule(
        id=vuln.id,
        shortDescription=SarifMessage(
            text=f"[Prisma Cloud] {vuln.id} in {vuln.package_name} ({vuln.severity})",
        ),
        fullDescription=SarifMessage(
            text=(
                f"{to_sentence_case(vuln.severity)} severity {vuln.id} found in "
                f"{vuln.package_name} version {vuln.package_version}"
            ),
        ),
        help=SarifHelp(text="", markdown=_VULN_HEADER + row),
    )


def _compliance_rule(comp: ComplianceViolation) -> SarifRule:
    return SarifRule(
        id=comp.id,
        shortDescription=SarifMessage(
            text=f"[Prisma Cloud] Compliance check {comp.id} violated ({comp.severity})",
        ),
        fullDescription=SarifMessage(
            text=f'{to_sentence_case(comp.severity)} severity compliance check "{comp.title}" violated',
        ),
        help=SarifHelp(
            text="",
            markdown=_COMPLIANCE_HEADER + f"| {comp.id} | {comp.severity} | {comp.title} |",
        ),
    )


def _first_result(results: list[ImageScanResult]) -> ImageScanResult:
    # Only one image is scanned per invocation
    if not results:
        raise ValueError("scan report contains no image results")
    return results[0]


def format_rules(results: list[ImageScanResult]) -> list[SarifRule]:
    """Build one SARIF rule per finding, vulnerabilities before compliances.

    Repeated finding ids are not collapsed.
    """
    result = _first_result(results)
    rules = [_vulnerability_rule(v) for v in result.vulnerabilities or []]
    rules.extend(_compliance_rule(c) for c in result.compliances or [])
    return rules


def format_results(results: list[ImageScanResult]) -> list[SarifResult]:
    """Build one SARIF result per finding, located at the scanned image."""
    result = _first_result(results)
    findings: list[Vulnerability | ComplianceViolation] = [
        *(result.vulnerabilities or []),
        *(result.compliances or []),
    ]
    return [
        SarifResult(
            ruleId=finding.id,
            level="warning",
            message=SarifMessage(text=f"Description:\n{finding.description}"),
            locations=[
                SarifLocation(
                    physicalLocation=SarifPhysicalLocation(
                        artifactLocation=SarifArtifactLocation(uri=result.name),
                        region=SarifRegion(startLine=1, startColumn=1, endLine=1, endColumn=1),
                    ),
                ),
            ],
        )
        for finding in findings
    ]


def load_scan_report(results_file: str | Path) -> ScanReport:
    """Read and parse a twistcli results file.

    Raises:
        FormattingError: If the file cannot be read or is not a valid scan report.
    """
    try:
        text = Path(results_file).read_text(encoding="utf-8")
        return ScanReport.model_validate_json(text)
    except (OSError, ValidationError, UnicodeDecodeError) as exc:
        raise FormattingError(f"Failed formatting SARIF: {exc}") from exc


def build_sarif(scanner_version: str, scan: ScanReport) -> SarifReport:
    """Assemble the SARIF report for the first image in *scan*.

    Raises:
        FormattingError: If the report holds no image results or a finding
            has an empty severity.
    """
    if len(scan.results) > 1:
        logger.warning(
            "Scan report holds %d image results; only %s is converted",
            len(scan.results),
            scan.results[0].name,
        )
    try:
        rules = format_rules(scan.results)
        results = format_results(scan.results)
    except ValueError as exc:
        raise FormattingError(f"Failed formatting SARIF: {exc}") from exc

    return SarifReport(
        runs=[
            SarifRun(
                tool=SarifTool(driver=SarifDriver(version=scanner_version, rules=rules)),
                results=results,
            ),
        ],
    )


def format_sarif(scanner_version: str, results_file: str | Path) -> SarifReport:
    """Read a twistcli results file and convert it to a SARIF 2.1.0 report.

    Args:
        scanner_version: twistcli version, used verbatim as the driver version.
        results_file: Path to the JSON file written by ``twistcli --output-file``.

    Returns:
        The assembled SARIF report.

    Raises:
        FormattingError: If the file cannot be read or is not a valid scan report.
    """
    report = build_sarif(scanner_version, load_scan_report(results_file))
    logger.info("Converted %d finding(s) from %s", len(report.runs[0].results), results_file)
    return report


def write_sarif(report: SarifReport, sarif_file: str | Path) -> None:
    """Write *report* to *sarif_file* as JSON."""
    try:
        Path(sarif_file).write_text(sarif_to_json(report), encoding="utf-8")
    except OSError as exc:
        raise FormattingError(f"Failed writing SARIF to {sarif_file}: {exc}") from exc


def sarif_to_json(report: SarifReport, indent: int | None = 2) -> str:
    """Return SARIF JSON string using the SARIF property names."""
    return report.model_dump_json(by_alias=True, indent=indent)
