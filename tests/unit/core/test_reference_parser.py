"""Tests for parsing Markdown reference documents."""

import pytest

from ddsreg.core.errors import MalformedEntryError
from ddsreg.core.reference_parser import parse_reference
from ddsreg.core.types import GuidKind, IdentifierEntry, RegistryKeyEntry
from tests.test_utils.reference_docs import SAMPLE_DOC


def test_parse_reads_front_matter() -> None:
    doc = parse_reference(SAMPLE_DOC, "sample.md")

    assert doc.info.name == "sample.md"
    assert doc.info.title == "Sample controls"
    assert doc.info.sources == ("hand written",)


def test_parse_identifier_bullets_in_document_order() -> None:
    doc = parse_reference(SAMPLE_DOC, "sample.md")

    assert doc.identifiers == (
        IdentifierEntry(
            guid="{11111111-2222-3333-4444-555555555555}",
            kind=GuidKind.CLSID,
            label="Sample Widget Control",
            source="sample.md",
            line=9,
        ),
        IdentifierEntry(
            guid="{AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE}",
            kind=GuidKind.IID,
            label="ISampleWidget",
            source="sample.md",
            line=10,
        ),
        IdentifierEntry(
            guid="{99999999-8888-7777-6666-555555555555}",
            kind=GuidKind.LIBID,
            label="Sample Type Library",
            source="sample.md",
            line=12,
        ),
    )


def test_parse_registry_block() -> None:
    doc = parse_reference(SAMPLE_DOC, "sample.md")

    assert [(v.path, v.value_name, v.value_data) for v in doc.registry_keys] == [
        ("HKEY_CLASSES_ROOT\\Sample.Widget", "", "Sample Widget"),
        ("HKEY_CLASSES_ROOT\\Sample.Widget\\CurVer", "", "Sample.Widget.1"),
        (
            "HKEY_CLASSES_ROOT\\Sample.Widget.1\\CLSID",
            "",
            "{11111111-2222-3333-4444-555555555555}",
        ),
        (
            "HKEY_CLASSES_ROOT\\Sample.Broken\\CLSID",
            "",
            "{00000000-0000-0000-0000-000000000000}",
        ),
    ]
    assert doc.registry_keys[0].line == 16


def test_parse_ignores_bullets_inside_other_fences() -> None:
    doc = parse_reference(SAMPLE_DOC, "sample.md")

    assert all(entry.line < 28 for entry in doc.identifiers)


def test_parse_is_idempotent() -> None:
    assert parse_reference(SAMPLE_DOC, "sample.md") == parse_reference(SAMPLE_DOC, "sample.md")


def test_parse_without_front_matter_uses_source_as_title() -> None:
    doc = parse_reference("- IID `{AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE}` IThing\n", "plain.md")

    assert doc.info.title == "plain.md"
    assert doc.identifiers[0].line == 1


def test_parse_unescapes_reg_strings_and_keeps_typed_values() -> None:
    text = "\n".join(
        [
            "```reg",
            "Windows Registry Editor Version 5.00",
            "",
            "; comment",
            "[HKEY_CLASSES_ROOT\\CLSID\\{11111111-2222-3333-4444-555555555555}\\InprocServer32]",
            '@="C:\\\\Windows\\\\thing.dll"',
            '"ThreadingModel"="Apartment"',
            '"Quoted \\"name\\""="x"',
            '"1"=dword:00020591',
            "```",
        ]
    )

    doc = parse_reference(text, "escapes.md")

    assert [(v.value_name, v.value_data) for v in doc.registry_keys] == [
        ("", "C:\\Windows\\thing.dll"),
        ("ThreadingModel", "Apartment"),
        ('Quoted "name"', "x"),
        ("1", "dword:00020591"),
    ]
    assert isinstance(doc.registry_keys[0], RegistryKeyEntry)
    assert doc.registry_keys[0].is_default
    assert not doc.registry_keys[1].is_default


def test_parse_keeps_transcription_errors_verbatim() -> None:
    text = "```reg\n[HKEY_CLASSES_ROOT\\X.1\\CLSID]\n@=\"{77D2C901-7779-11D8-9070-00055B840D9C}\"\n```\n"

    doc = parse_reference(text, "typo.md")

    assert doc.registry_keys[0].value_data == "{77D2C901-7779-11D8-9070-00055B840D9C}"


@pytest.mark.parametrize(
    ("text", "line", "fragment"),
    [
        ("- CLSID `{not-a-guid}` Broken\n", 1, "invalid GUID"),
        ("\n- IID `{AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE}`\n", 2, "missing label"),
        ('```reg\n@="orphan"\n```\n', 2, "before any key"),
        ("```reg\n[HKEY_CLASSES_ROOT\\A]\nnonsense\n```\n", 3, "unrecognized"),
        ('```reg\n[HKEY_CLASSES_ROOT\\A]\n@=unquoted\n```\n', 3, "unsupported value"),
        ("```reg\n[-HKEY_CLASSES_ROOT\\A]\n```\n", 2, "deletions"),
        ("intro\n```reg\n[HKEY_CLASSES_ROOT\\A]\n", 2, "unterminated"),
    ],
)
def test_parse_rejects_malformed_entries(text: str, line: int, fragment: str) -> None:
    with pytest.raises(MalformedEntryError) as exc_info:
        parse_reference(text, "bad.md")

    assert exc_info.value.source == "bad.md"
    assert exc_info.value.line == line
    assert fragment in exc_info.value.message


def test_parse_rejects_bad_front_matter() -> None:
    text = "---\ntitle: [unclosed\n---\n"

    with pytest.raises(MalformedEntryError) as exc_info:
        parse_reference(text, "bad.md")

    assert exc_info.value.line == 1


def test_parse_rejects_non_list_sources() -> None:
    text = "---\ntitle: ok\nsources: just one\n---\n"

    with pytest.raises(MalformedEntryError, match="sources"):
        parse_reference(text, "bad.md")


@pytest.mark.parametrize("front", ["- a\n- b", "just a string", "42"])
def test_parse_rejects_front_matter_that_is_not_a_mapping(front: str) -> None:
    text = f"---\n{front}\n---\n- CLSID `{{11111111-2222-3333-4444-555555555555}}` Widget\n"

    with pytest.raises(MalformedEntryError, match="mapping") as exc_info:
        parse_reference(text, "x.md")

    assert exc_info.value.line == 1


def test_parse_accepts_empty_front_matter() -> None:
    doc = parse_reference("---\n---\n# Nothing\n", "empty.md")

    assert doc.info.title == "empty.md"
    assert doc.info.sources == ()


def test_parse_guid_kind_bullets() -> None:
    doc = parse_reference("- GUID `{b30985d6-6bbb-45f2-9ab8-371664f03270}` Provider\n", "g.md")

    assert [(e.guid, e.kind) for e in doc.identifiers] == [
        ("{B30985D6-6BBB-45F2-9AB8-371664F03270}", GuidKind.GUID)
    ]
