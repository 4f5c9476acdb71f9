"""Core data types for identifier and registry tables.

All types are frozen: tables are built once at load and only read after.
"""

from dataclasses import dataclass, field
from enum import Enum


class GuidKind(Enum):
    """What a GUID names."""

    CLSID = "CLSID"
    IID = "IID"
    LIBID = "LIBID"
    # Property set, provider and other ids that name no class, interface or library
    GUID = "GUID"


@dataclass(frozen=True)
class IdentifierEntry:
    """A GUID with its kind and human-readable label.

    Attributes:
        guid: Canonical braced upper-case GUID
        kind: Whether the GUID names a class, interface, type library or something else
        label: Free text, not unique
        source: Name of the document the entry was read from
        line: 1-based line number within that document
    """

    guid: str
    kind: GuidKind
    label: str
    source: str = ""
    line: int = 0


@dataclass(frozen=True)
class RegistryKeyEntry:
    """A single value under a registry key.

    Attributes:
        path: Backslash-separated key path as written, hive first
        value_name: Value name, empty string for the default value
        value_data: Value data with .reg escapes removed
        source: Name of the document the entry was read from
        line: 1-based line number of the value line
    """

    path: str
    value_name: str
    value_data: str
    source: str = ""
    line: int = 0

    @property
    def is_default(self) -> bool:
        return self.value_name == ""


@dataclass(frozen=True)
class DocumentInfo:
    """Front matter of a reference document."""

    name: str
    title: str
    sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReferenceDocument:
    """One parsed reference document."""

    info: DocumentInfo
    identifiers: tuple[IdentifierEntry, ...]
    registry_keys: tuple[RegistryKeyEntry, ...]


class ValidationStatus(Enum):
    """Outcome of resolving a ProgID to a known CLSID."""

    OK = "ok"
    UNRESOLVED = "unresolved"
    DANGLING_CLSID = "dangling_clsid"


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a ProgID chain.

    Attributes:
        prog_id: ProgID as queried
        status: Resolution outcome
        clsid: CLSID value found in the registry table, verbatim; None if unresolved
        entry: Identifier entry the CLSID resolved to; None unless status is OK
        chain: ProgIDs visited, starting with prog_id, following CurVer links
    """

    prog_id: str
    status: ValidationStatus
    clsid: str | None = None
    entry: IdentifierEntry | None = None
    chain: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.OK


class FindingKind(Enum):
    """Kinds of inconsistency reported by the audit."""

    DUPLICATE_GUID = "duplicate_guid"
    DANGLING_REFERENCE = "dangling_reference"
    PROGID_MISMATCH = "progid_mismatch"


@dataclass(frozen=True)
class Finding:
    """One audit finding.

    Attributes:
        kind: Finding category
        subject: GUID or ProgID the finding is about
        message: Human-readable description
    """

    kind: FindingKind
    subject: str
    message: str
