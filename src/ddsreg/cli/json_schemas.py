"""Pydantic models for JSON output schemas.

This module defines the validated JSON schemas for CLI commands that support
--json output, along with converters from the core dataclasses.
"""

from pydantic import BaseModel, ConfigDict, Field

from ddsreg.core.types import (
    DocumentInfo,
    Finding,
    IdentifierEntry,
    RegistryKeyEntry,
    ValidationResult,
)


class IdentifierInfo(BaseModel):
    """One identifier entry.

    Attributes:
        guid: Canonical braced GUID
        kind: "CLSID", "IID", "LIBID" or "GUID"
        label: Human-readable label
        source: Document name and line, e.g. "msdds.md:26"
    """

    model_config = ConfigDict(strict=True)

    guid: str
    kind: str = Field(..., pattern="^(CLSID|IID|LIBID|GUID)$")
    label: str
    source: str


class RegistryValueInfo(BaseModel):
    model_config = ConfigDict(strict=True)

    path: str
    value_name: str
    value_data: str
    source: str


class LookupCommandResponse(BaseModel):
    """JSON response schema for `ddsreg lookup`.

    Attributes:
        query: GUID as given on the command line
        found: Whether any entry matched
        entries: Matching entries (first match only unless --all)
    """

    model_config = ConfigDict(strict=True)

    query: str
    found: bool
    entries: list[IdentifierInfo]


class FindCommandResponse(BaseModel):
    """JSON response schema for `ddsreg find` and `ddsreg list`."""

    model_config = ConfigDict(strict=True)

    query: str | None
    count: int = Field(..., ge=0)
    entries: list[IdentifierInfo]


class ValidateCommandResponse(BaseModel):
    """JSON response schema for `ddsreg validate`.

    Attributes:
        prog_id: ProgID as given
        status: "ok", "unresolved" or "dangling_clsid"
        clsid: CLSID value from the registry table, verbatim
        entry: Identifier the CLSID resolved to
        chain: ProgIDs visited via CurVer
    """

    model_config = ConfigDict(strict=True)

    prog_id: str
    status: str = Field(..., pattern="^(ok|unresolved|dangling_clsid)$")
    clsid: str | None
    entry: IdentifierInfo | None
    chain: list[str]


class FindingInfo(BaseModel):
    model_config = ConfigDict(strict=True)

    kind: str
    subject: str
    message: str


class CheckCommandResponse(BaseModel):
    """JSON response schema for `ddsreg check`."""

    model_config = ConfigDict(strict=True)

    ok: bool
    findings: list[FindingInfo]


class KeysCommandResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    prefix: str
    count: int = Field(..., ge=0)
    values: list[RegistryValueInfo]


class DocumentSummary(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    title: str
    sources: list[str]


class SourcesCommandResponse(BaseModel):
    model_config = ConfigDict(strict=True)

    documents: list[DocumentSummary]


class ConfigShowResponse(BaseModel):
    """JSON response schema for `ddsreg config show`."""

    model_config = ConfigDict(strict=True)

    path: str
    exists: bool
    reference_paths: list[str]
    output_format: str
    error: str | None = None


def identifier_info(entry: IdentifierEntry) -> IdentifierInfo:
    return IdentifierInfo(
        guid=entry.guid,
        kind=entry.kind.value,
        label=entry.label,
        source=f"{entry.source}:{entry.line}",
    )


def registry_value_info(value: RegistryKeyEntry) -> RegistryValueInfo:
    return RegistryValueInfo(
        path=value.path,
        value_name=value.value_name,
        value_data=value.value_data,
        source=f"{value.source}:{value.line}",
    )


def validate_response(result: ValidationResult) -> ValidateCommandResponse:
    return ValidateCommandResponse(
        prog_id=result.prog_id,
        status=result.status.value,
        clsid=result.clsid,
        entry=identifier_info(result.entry) if result.entry is not None else None,
        chain=list(result.chain),
    )


def finding_info(finding: Finding) -> FindingInfo:
    return FindingInfo(kind=finding.kind.value, subject=finding.subject, message=finding.message)


def document_summary(info: DocumentInfo) -> DocumentSummary:
    return DocumentSummary(name=info.name, title=info.title, sources=list(info.sources))
