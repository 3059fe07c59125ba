# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SARIF 2.1.0 output models."""

from __future__ import annotations

from pydantic import BaseModel, Field

SARIF_SCHEMA = (
    "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
)
SARIF_VERSION = "2.1.0"
TOOL_NAME = "Prisma Cloud (twistcli)"


class SarifMessage(BaseModel):
    text: str


class SarifHelp(BaseModel):
    text: str = ""
    markdown: str


class SarifArtifactLocation(BaseModel):
    uri: str


class SarifRegion(BaseModel):
    startLine: int = 1
    startColumn: int = 1
    endLine: int = 1
    endColumn: int = 1


class SarifPhysicalLocation(BaseModel):
    artifactLocation: SarifArtifactLocation
    region: SarifRegion = Field(default_factory=SarifRegion)


class SarifLocation(BaseModel):
    physicalLocation: SarifPhysicalLocation


class SarifRule(BaseModel):
    id: str
    shortDescription: SarifMessage
    fullDescription: SarifMessage
    help: SarifHelp


class SarifDriver(BaseModel):
    name: str = TOOL_NAME
    version: str
    rules: list[SarifRule] = Field(default_factory=list)


class SarifTool(BaseModel):
    driver: SarifDriver


class SarifResult(BaseModel):
    ruleId: str
    level: str = "warning"
    message: SarifMessage
    locations: list[SarifLocation] = Field(default_factory=list)


class SarifRun(BaseModel):
    tool: SarifTool
    results: list[SarifResult] = Field(default_factory=list)


class SarifReport(BaseModel):
    schema_uri: str = Field(default=SARIF_SCHEMA, alias="$schema")
    version: str = SARIF_VERSION
    runs: list[SarifRun] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
