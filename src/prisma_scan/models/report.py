# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Pydantic models for the twistcli ``--output-file`` scan report."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def _as_text(value: object) -> object:
    """Render numeric report values the way twistcli prints them."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int | float):
        return str(value)
    return value


class Vulnerability(BaseModel):
    """A package vulnerability found in the image."""

    id: str
    severity: str
    package_name: str = Field(alias="packageName")
    package_version: str = Field(alias="packageVersion")
    link: str
    cvss: str | None = None
    status: str | None = None
    published_date: str = Field(alias="publishedDate")
    discovered_date: str = Field(alias="discoveredDate")
    description: str

    model_config = {"populate_by_name": True}

    @field_validator("id", "cvss", mode="before")
    @classmethod
    def _coerce_text(cls, v: object) -> object:
        return _as_text(v)


class ComplianceViolation(BaseModel):
    """A failed compliance check. twistcli reports numeric check ids."""

    id: str
    severity: str
    title: str
    description: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: object) -> object:
        return _as_text(v)


class ImageScanResult(BaseModel):
    """Findings for a single scanned image."""

    name: str
    vulnerabilities: list[Vulnerability] | None = None
    compliances: list[ComplianceViolation] | None = None


class ScanReport(BaseModel):
    """Top-level twistcli results document."""

    results: list[ImageScanResult]
