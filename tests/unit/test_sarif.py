# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for the twistcli to SARIF 2.1.0 conversion.

Tests cover:
- Severity sentence-casing
- Rule extraction for vulnerabilities and compliance checks
- Result mapping and ordering
- Report assembly from a results file, including malformed input
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from prisma_scan.core.exceptions import FormattingError
from prisma_scan.formatters.sarif import (
    build_sarif,
    format_results,
    format_rules,
    format_sarif,
    load_scan_report,
    sarif_to_json,
    to_sentence_case,
    write_sarif,
)
from prisma_scan.models.report import ImageScanResult, ScanReport
from prisma_scan.models.sarif import SARIF_SCHEMA, TOOL_NAME

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _vuln(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "CVE-2024-0001",
        "severity": "high",
        "packageName": "libfoo",
        "packageVersion": "1.2.3",
        "link": "http://x",
        "publishedDate": "2024-01-01",
        "discoveredDate": "2024-01-02",
        "description": "desc",
    }
    data.update(overrides)
    return data


def _comp(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "C-1",
        "severity": "low",
        "title": "Check X",
        "description": "d",
    }
    data.update(overrides)
    return data


def _image(
    vulnerabilities: list[dict[str, Any]] | None = None,
    compliances: list[dict[str, Any]] | None = None,
    name: str = "registry.example.com/app:1.0",
) -> ImageScanResult:
    data: dict[str, Any] = {"name": name}
    if vulnerabilities is not None:
        data["vulnerabilities"] = vulnerabilities
    if compliances is not None:
        data["compliances"] = compliances
    return ImageScanResult.model_validate(data)


def _write_report(tmp_path: Path, *images: dict[str, Any]) -> Path:
    path = tmp_path / "results.json"
    path.write_text(json.dumps({"results": list(images)}), encoding="utf-8")
    return path


# ===========================================================================
# Severity normalizer
# ===========================================================================


class TestToSentenceCase:
    def test_lowercase(self):
        assert to_sentence_case("high") == "High"

    def test_uppercase(self):
        assert to_sentence_case("CRITICAL") == "Critical"

    def test_mixed(self):
        assert to_sentence_case("mEdIuM") == "Medium"

    def test_single_character(self):
        assert to_sentence_case("l") == "L"

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty severity"):
            to_sentence_case("")


# ===========================================================================
# Rule extractor
# ===========================================================================


class TestFormatRules:
    def test_vulnerability_rule_text(self):
        rules = format_rules([_image(vulnerabilities=[_vuln()])])

        assert len(rules) == 1
        rule = rules[0]
        assert rule.id == "CVE-2024-0001"
        assert rule.shortDescription.text == "[Prisma Cloud] CVE-2024-0001 in libfoo (high)"
        assert rule.fullDescription.text == "High severity CVE-2024-0001 found in libfoo version 1.2.3"
        assert rule.help.text == ""

    def test_vulnerability_help_defaults(self):
        rule = format_rules([_image(vulnerabilities=[_vuln()])])[0]

        header, separator, row = rule.help.markdown.split("\n")
        assert header == (
            "| CVE | Severity | CVSS | Package | Version | Fix Status | Published | Discovered |"
        )
        assert separator == "| --- | --- | --- | --- | --- | --- | --- | --- |"
        assert row == (
            "| [CVE-2024-0001](http://x) | high | N/A | libfoo | 1.2.3 | not fixed "
            "| 2024-01-01 | 2024-01-02 |"
        )

    def test_vulnerability_help_with_cvss_and_status(self):
        rule = format_rules(
            [_image(vulnerabilities=[_vuln(cvss=9.8, status="fixed in 1.2.4")])]
        )[0]

        assert "| 9.8 |" in rule.help.markdown
        assert "| fixed in 1.2.4 |" in rule.help.markdown
        assert "N/A" not in rule.help.markdown
        assert "not fixed" not in rule.help.markdown

    def test_zero_cvss_is_not_replaced(self):
        rule = format_rules([_image(vulnerabilities=[_vuln(cvss=0)])])[0]

        assert "| high | 0 | libfoo |" in rule.help.markdown
        assert "N/A" not in rule.help.markdown

    def test_null_cvss_uses_default(self):
        rule = format_rules([_image(vulnerabilities=[_vuln(cvss=None, status=None)])])[0]

        assert "| N/A |" in rule.help.markdown
        assert "| not fixed |" in rule.help.markdown

    def test_compliance_rule_text(self):
        rules = format_rules([_image(compliances=[_comp()])])

        assert len(rules) == 1
        rule = rules[0]
        assert rule.id == "C-1"
        assert rule.shortDescription.text == "[Prisma Cloud] Compliance check C-1 violated (low)"
        assert rule.fullDescription.text == 'Low severity compliance check "Check X" violated'
        assert rule.help.markdown == (
            "| Compliance Check | Severity | Title |\n"
            "| --- | --- | --- |\n"
            "| C-1 | low | Check X |"
        )

    def test_numeric_compliance_id_becomes_string(self):
        rule = format_rules([_image(compliances=[_comp(id=41)])])[0]

        assert rule.id == "41"
        assert "Compliance check 41 violated" in rule.shortDescription.text

    def test_vulnerabilities_before_compliances(self):
        rules = format_rules([
            _image(
                vulnerabilities=[_vuln(id="CVE-B"), _vuln(id="CVE-A")],
                compliances=[_comp(id="C-2"), _comp(id="C-1")],
            )
        ])

        assert [r.id for r in rules] == ["CVE-B", "CVE-A", "C-2", "C-1"]

    def test_repeated_ids_are_not_deduplicated(self):
        rules = format_rules([
            _image(vulnerabilities=[
                _vuln(packageName="libfoo"),
                _vuln(packageName="libbar"),
            ])
        ])

        assert [r.id for r in rules] == ["CVE-2024-0001", "CVE-2024-0001"]
        assert "libbar" in rules[1].shortDescription.text

    def test_no_findings(self):
        assert format_rules([_image()]) == []
        assert format_rules([_image(vulnerabilities=[], compliances=[])]) == []

    def test_only_first_image_used(self):
        rules = format_rules([
            _image(vulnerabilities=[_vuln(id="CVE-FIRST")]),
            _image(vulnerabilities=[_vuln(id="CVE-SECOND")]),
        ])

        assert [r.id for r in rules] == ["CVE-FIRST"]

    def test_empty_results_raises(self):
        with pytest.raises(ValueError, match="no image results"):
            format_rules([])

    def test_empty_severity_raises(self):
        with pytest.raises(ValueError):
            format_rules([_image(vulnerabilities=[_vuln(severity="")])])


# ===========================================================================
# Result mapper
# ===========================================================================


class TestFormatResults:
    def test_compliance_result(self):
        results = format_results([_image(compliances=[_comp()])])

        assert len(results) == 1
        result = results[0]
        assert result.ruleId == "C-1"
        assert result.level == "warning"
        assert result.message.text.startswith("Description:\nd")

    def test_location_points_at_image(self):
        result = format_results(
            [_image(vulnerabilities=[_vuln()], name="alpine:3.19")]
        )[0]

        assert len(result.locations) == 1
        physical = result.locations[0].physicalLocation
        assert physical.artifactLocation.uri == "alpine:3.19"
        assert physical.region.startLine == 1
        assert physical.region.startColumn == 1
        assert physical.region.endLine == 1
        assert physical.region.endColumn == 1

    def test_order_matches_rules(self):
        image = _image(
            vulnerabilities=[_vuln(id="CVE-1"), _vuln(id="CVE-2")],
            compliances=[_comp(id="C-9")],
        )

        results = format_results([image])
        rules = format_rules([image])

        assert [r.ruleId for r in results] == ["CVE-1", "CVE-2", "C-9"]
        assert [r.ruleId for r in results] == [r.id for r in rules]

    def test_no_findings(self):
        assert format_results([_image()]) == []


# ===========================================================================
# Assembler
# ===========================================================================


class TestFormatSarif:
    def test_envelope(self, single_image_file: Path):
        report = format_sarif("32.03.123", single_image_file)

        assert report.schema_uri == SARIF_SCHEMA
        assert report.version == "2.1.0"
        assert len(report.runs) == 1
        driver = report.runs[0].tool.driver
        assert driver.name == TOOL_NAME == "Prisma Cloud (twistcli)"
        assert driver.version == "32.03.123"

    def test_counts_match_findings(self, single_image_file: Path):
        report = format_sarif("32.03.123", single_image_file)
        run = report.runs[0]

        assert len(run.tool.driver.rules) == 4
        assert len(run.results) == 4
        assert [r.ruleId for r in run.results] == [
            "CVE-2023-44487", "CVE-2024-2961", "41", "425",
        ]

    def test_real_report_fields(self, single_image_file: Path):
        rules = format_sarif("1.0", single_image_file).runs[0].tool.driver.rules

        assert "| 7.5 |" in rules[0].help.markdown
        assert "| fixed in 1.57.0 |" in rules[0].help.markdown
        assert rules[1].fullDescription.text.startswith("Critical severity CVE-2024-2961")
        assert "| N/A |" in rules[1].help.markdown

    def test_clean_image(self, clean_image_file: Path):
        run = format_sarif("1.0", clean_image_file).runs[0]

        assert run.tool.driver.rules == []
        assert run.results == []

    def test_extra_images_ignored(self, multi_image_file: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="prisma_scan"):
            run = format_sarif("1.0", multi_image_file).runs[0]

        assert [r.id for r in run.tool.driver.rules] == ["CVE-2024-0001"]
        assert [r.ruleId for r in run.results] == ["CVE-2024-0001"]
        assert run.results[0].locations[0].physicalLocation.artifactLocation.uri == "first:latest"
        assert "2 image results" in caplog.text

    def test_version_used_verbatim(self, clean_image_file: Path):
        report = format_sarif("  v32.03 ", clean_image_file)
        assert report.runs[0].tool.driver.version == "  v32.03 "

    def test_malformed_json_raises(self, malformed_file: Path):
        with pytest.raises(FormattingError, match="Failed formatting SARIF"):
            format_sarif("1.0", malformed_file)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FormattingError) as exc_info:
            format_sarif("1.0", tmp_path / "missing.json")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_missing_results_key_raises(self, tmp_path: Path):
        path = tmp_path / "results.json"
        path.write_text('{"consoleURL": "https://console"}', encoding="utf-8")

        with pytest.raises(FormattingError):
            format_sarif("1.0", path)

    def test_empty_results_raises(self, tmp_path: Path):
        path = _write_report(tmp_path)

        with pytest.raises(FormattingError, match="no image results"):
            format_sarif("1.0", path)

    def test_empty_severity_raises(self, tmp_path: Path):
        path = _write_report(tmp_path, {"name": "img", "compliances": [_comp(severity="")]})

        with pytest.raises(FormattingError):
            format_sarif("1.0", path)

    def test_invalid_utf8_raises(self, tmp_path: Path):
        path = tmp_path / "results.json"
        path.write_bytes(b'{"results": [{"name": "\xff\xfe"}]}')

        with pytest.raises(FormattingError):
            format_sarif("1.0", path)

    def test_input_report_unchanged(self, tmp_path: Path):
        path = _write_report(tmp_path, {"name": "img", "vulnerabilities": [_vuln()]})
        scan = load_scan_report(path)
        before = scan.model_dump()

        build_sarif("1.0", scan)

        assert scan.model_dump() == before


class TestSarifJson:
    def test_round_trip(self, single_image_file: Path):
        data = json.loads(sarif_to_json(format_sarif("32.03.123", single_image_file)))

        assert data["version"] == "2.1.0"
        assert len(data["runs"]) == 1
        assert data["$schema"] == SARIF_SCHEMA
        assert data["runs"][0]["tool"]["driver"]["name"] == "Prisma Cloud (twistcli)"

    def test_uses_sarif_property_names(self, single_image_file: Path):
        data = json.loads(sarif_to_json(format_sarif("1.0", single_image_file)))
        rule = data["runs"][0]["tool"]["driver"]["rules"][0]
        result = data["runs"][0]["results"][0]

        assert set(rule) == {"id", "shortDescription", "fullDescription", "help"}
        assert set(rule["help"]) == {"text", "markdown"}
        assert set(result) == {"ruleId", "level", "message", "locations"}
        assert result["locations"][0]["physicalLocation"]["region"] == {
            "startLine": 1,
            "startColumn": 1,
            "endLine": 1,
            "endColumn": 1,
        }

    def test_compact_output(self, clean_image_file: Path):
        text = sarif_to_json(format_sarif("1.0", clean_image_file), indent=None)
        assert "\n" not in text

    def test_write_sarif(self, tmp_path: Path, clean_image_file: Path):
        out = tmp_path / "scan.sarif.json"
        write_sarif(format_sarif("1.0", clean_image_file), out)

        assert json.loads(out.read_text(encoding="utf-8"))["version"] == "2.1.0"

    def test_write_sarif_unwritable(self, tmp_path: Path, clean_image_file: Path):
        with pytest.raises(FormattingError, match="Failed writing SARIF"):
            write_sarif(format_sarif("1.0", clean_image_file), tmp_path / "no" / "dir.json")


def test_scan_report_model_accepts_aliases():
    scan = ScanReport.model_validate({"results": [{"name": "img", "vulnerabilities": [_vuln()]}]})
    vuln = scan.results[0].vulnerabilities[0]

    assert vuln.package_name == "libfoo"
    assert vuln.package_version == "1.2.3"
    assert vuln.cvss is None
    assert vuln.status is None
