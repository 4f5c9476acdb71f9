"""Plain-text rendering of query results."""

from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from ddsreg.cli.output import machine_output
from ddsreg.core.types import (
    DocumentInfo,
    Finding,
    FindingKind,
    IdentifierEntry,
    RegistryKeyEntry,
    ValidationResult,
    ValidationStatus,
)

_FINDING_STYLES = {
    FindingKind.DUPLICATE_GUID: "yellow",
    FindingKind.DANGLING_REFERENCE: "red",
    FindingKind.PROGID_MISMATCH: "magenta",
}


def _console() -> Console:
    # soft_wrap keeps each finding on one line regardless of terminal width
    return Console(soft_wrap=True, highlight=False)


def format_entry_line(entry: IdentifierEntry) -> str:
    """One-line form: GUID, kind and label, column aligned."""
    return f"{entry.guid}  {entry.kind.value:<5}  {entry.label}"


def render_entry(entry: IdentifierEntry) -> None:
    """Key-value block for a single identifier."""
    machine_output(f"guid: {entry.guid}")
    machine_output(f"kind: {entry.kind.value}")
    machine_output(f"label: {entry.label}")
    machine_output(f"source: {entry.source}:{entry.line}")


def render_entries(entries: Iterable[IdentifierEntry]) -> int:
    """One line per entry. Returns the number of entries written."""
    count = 0
    for entry in entries:
        machine_output(format_entry_line(entry))
        count += 1
    return count


def render_validation(result: ValidationResult) -> None:
    machine_output(f"prog_id: {result.prog_id}")
    machine_output(f"status: {result.status.value}")
    if len(result.chain) > 1:
        machine_output(f"chain: {' -> '.join(result.chain)}")
    if result.clsid is not None:
        machine_output(f"clsid: {result.clsid}")
    if result.status == ValidationStatus.OK and result.entry is not None:
        machine_output(f"label: {result.entry.label}")


def render_registry_values(values: Iterable[RegistryKeyEntry]) -> int:
    """Values grouped under their key in .reg style. Returns the number of values."""
    count = 0
    current_path: str | None = None
    for value in values:
        if value.path != current_path:
            if current_path is not None:
                machine_output()
            machine_output(f"[{value.path}]")
            current_path = value.path
        name = "@" if value.is_default else f'"{value.value_name}"'
        machine_output(f"{name}={value.value_data}")
        count += 1
    return count


def render_findings(findings: Iterable[Finding]) -> int:
    """Findings with kind-specific color. Returns the number of findings."""
    console = _console()
    count = 0
    for finding in findings:
        line = Text()
        line.append(f"{finding.kind.value}: ", style=_FINDING_STYLES[finding.kind])
        line.append(finding.message)
        console.print(line)
        count += 1
    return count


def render_documents(documents: Iterable[DocumentInfo]) -> None:
    console = _console()
    for info in documents:
        console.print(Text(f"{info.name}: {info.title}", style="bold"))
        for source in info.sources:
            console.print(Text(f"  - {source}"))
