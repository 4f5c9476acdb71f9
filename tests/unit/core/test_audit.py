"""Tests for the registry audit."""

from ddsreg.core.audit import audit_registry
from ddsreg.core.identifier_registry import IdentifierRegistry
from ddsreg.core.reference_parser import parse_reference
from ddsreg.core.sources import load_registry
from ddsreg.core.types import FindingKind


def _registry(text: str) -> IdentifierRegistry:
    return IdentifierRegistry.from_documents([parse_reference(text, "audit.md")])


def test_bundled_documents_report_known_transcription_errors() -> None:
    report = audit_registry(load_registry())

    duplicates = report.of_kind(FindingKind.DUPLICATE_GUID)
    dangling = report.of_kind(FindingKind.DANGLING_REFERENCE)

    assert [f.subject for f in duplicates] == ["{77D2C92E-7779-11D8-9070-00065B840D9C}"]
    assert "IDataAutoWrapper" in duplicates[0].message
    assert [f.subject for f in dangling] == ["MSDDS.Label.080"]
    assert "00055B840D9C" in dangling[0].message
    assert report.of_kind(FindingKind.PROGID_MISMATCH) == ()
    assert not report.ok


def test_clean_document_has_no_findings() -> None:
    text = "\n".join(
        [
            "- CLSID `{11111111-2222-3333-4444-555555555555}` Widget",
            "```reg",
            "[HKEY_CLASSES_ROOT\\Widget.1\\CLSID]",
            '@="{11111111-2222-3333-4444-555555555555}"',
            "[HKEY_CLASSES_ROOT\\CLSID\\{11111111-2222-3333-4444-555555555555}\\ProgID]",
            '@="Widget.1"',
            "```",
        ]
    )

    report = audit_registry(_registry(text))

    assert report.ok
    assert report.findings == ()


def test_progid_back_reference_mismatch() -> None:
    text = "\n".join(
        [
            "- CLSID `{11111111-2222-3333-4444-555555555555}` Widget",
            "- CLSID `{22222222-2222-3333-4444-555555555555}` Gadget",
            "```reg",
            "[HKEY_CLASSES_ROOT\\Widget.1\\CLSID]",
            '@="{22222222-2222-3333-4444-555555555555}"',
            "[HKEY_CLASSES_ROOT\\CLSID\\{11111111-2222-3333-4444-555555555555}\\ProgID]",
            '@="Widget.1"',
            "[HKEY_CLASSES_ROOT\\CLSID\\{22222222-2222-3333-4444-555555555555}\\ProgID]",
            '@="Gadget.1"',
            "```",
        ]
    )

    report = audit_registry(_registry(text))

    mismatches = report.of_kind(FindingKind.PROGID_MISMATCH)
    assert [f.subject for f in mismatches] == ["Widget.1", "Gadget.1"]
    assert "resolves to {22222222-2222-3333-4444-555555555555}" in mismatches[0].message
    assert "has no CLSID value" in mismatches[1].message
