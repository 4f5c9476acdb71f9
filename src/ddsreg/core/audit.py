"""Consistency audit over a loaded registry.

Reference documents are transcribed by hand and kept verbatim, so the
audit reports inconsistencies instead of correcting them.
"""

from dataclasses import dataclass

from ddsreg.core.guid import is_guid, normalize_guid
from ddsreg.core.identifier_registry import HKCR, IdentifierRegistry, canonical_key_path
from ddsreg.core.progid import prog_ids, validate_prog_id_chain
from ddsreg.core.types import Finding, FindingKind, ValidationStatus


@dataclass(frozen=True)
class AuditReport:
    findings: tuple[Finding, ...]

    @property
    def ok(self) -> bool:
        return not self.findings

    def of_kind(self, kind: FindingKind) -> tuple[Finding, ...]:
        return tuple(finding for finding in self.findings if finding.kind == kind)


def _duplicate_findings(registry: IdentifierRegistry) -> list[Finding]:
    findings = []
    for guid, entries in registry.duplicate_guids().items():
        listed = ", ".join(f"{entry.kind.value} {entry.label}" for entry in entries)
        findings.append(
            Finding(
                kind=FindingKind.DUPLICATE_GUID,
                subject=guid,
                message=f"{guid} is listed {len(entries)} times: {listed}",
            )
        )
    return findings


def _dangling_findings(registry: IdentifierRegistry) -> list[Finding]:
    findings = []
    for prog_id in prog_ids(registry):
        result = validate_prog_id_chain(registry, prog_id)
        if result.status == ValidationStatus.DANGLING_CLSID:
            findings.append(
                Finding(
                    kind=FindingKind.DANGLING_REFERENCE,
                    subject=prog_id,
                    message=f"{prog_id} references CLSID {result.clsid}, which is not listed",
                )
            )
    return findings


def _back_reference_findings(registry: IdentifierRegistry) -> list[Finding]:
    """Check CLSID\\{guid}\\ProgID values resolve back to the same class."""
    prefix = f"{HKCR}\\CLSID\\"
    findings = []
    for value in registry.registry_keys:
        path = canonical_key_path(value.path)
        if not value.is_default or not path.startswith(prefix) or not path.endswith("\\PROGID"):
            continue
        guid_text = path[len(prefix) : -len("\\PROGID")]
        if not is_guid(guid_text):
            continue
        guid = normalize_guid(guid_text)
        prog_id = value.value_data
        result = validate_prog_id_chain(registry, prog_id)
        if result.status == ValidationStatus.UNRESOLVED:
            message = f"{guid} names ProgID {prog_id}, which has no CLSID value"
        elif result.clsid is None or not is_guid(result.clsid) or (
            normalize_guid(result.clsid) != guid
        ):
            message = f"{guid} names ProgID {prog_id}, which resolves to {result.clsid}"
        else:
            continue
        findings.append(
            Finding(kind=FindingKind.PROGID_MISMATCH, subject=prog_id, message=message)
        )
    return findings


def audit_registry(registry: IdentifierRegistry) -> AuditReport:
    """Report duplicate GUIDs, dangling ProgID references and ProgID mismatches.

    Findings are grouped by kind in that order; within a kind they follow
    document order.
    """
    findings = (
        _duplicate_findings(registry)
        + _dangling_findings(registry)
        + _back_reference_findings(registry)
    )
    return AuditReport(findings=tuple(findings))
