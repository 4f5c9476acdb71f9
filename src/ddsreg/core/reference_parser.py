"""Parse Markdown reference documents into identifier and registry tables.

A reference document is Markdown with optional YAML front matter:

- Identifier bullets: ``- CLSID `{GUID}` Label`` (kinds CLSID, IID, LIBID, GUID).
  Other bullets and prose are ignored.
- Registry values: fenced blocks tagged ``reg`` in .reg file syntax::

      [HKEY_CLASSES_ROOT\\MSDDS.Diagram.080\\CLSID]
      @="{C795D2FE-7776-11D8-9070-00065B840D9C}"

Any line that looks like an entry but cannot be read raises
MalformedEntryError. Parsing has no side effects, so the same text always
yields an equal ReferenceDocument.
"""

import logging
import re

import frontmatter
import yaml

from ddsreg.core.errors import MalformedEntryError, MalformedGuidError
from ddsreg.core.guid import normalize_guid
from ddsreg.core.types import (
    DocumentInfo,
    GuidKind,
    IdentifierEntry,
    ReferenceDocument,
    RegistryKeyEntry,
)

logger = logging.getLogger(__name__)

_FRONT_MATTER = frontmatter.YAMLHandler()

_ID_BULLET = re.compile(r"^\s*[-*+]\s+(CLSID|IID|LIBID|GUID)\s+`?([^`\s]+)`?(?:\s+(.*))?$")
_FENCE = re.compile(r"^\s*(`{3,}|~{3,})\s*([^\s`]*)")
_REG_HEADERS = ("Windows Registry Editor Version 5.00", "REGEDIT4")
_REG_KEY = re.compile(r"^\[([^\[\]]+)\]$")
_REG_VALUE = re.compile(r'^(?:(@)|"((?:[^"\\]|\\.)*)")\s*=\s*(.*)$')
_REG_QUOTED = re.compile(r'^"((?:[^"\\]|\\.)*)"$')
_REG_TYPED = re.compile(r"^(?:dword|hex(?:\([0-9a-fA-F]\))?):[0-9a-fA-F,\s\\]*$")


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text)


def _front_matter_length(lines: list[str]) -> int:
    """Number of leading lines taken by a YAML front matter block (0 if none)."""
    if not lines or lines[0].strip() != "---":
        return 0
    for index in range(1, len(lines)):
        if lines[index].strip() == "---":
            return index + 1
    return 0


def _read_info(text: str, source: str) -> DocumentInfo:
    metadata: object = None
    if _FRONT_MATTER.detect(text):
        try:
            front, _ = _FRONT_MATTER.split(text)
        except ValueError:
            # No closing delimiter: the opening line is ordinary Markdown
            front = ""
        try:
            metadata = _FRONT_MATTER.load(front)
        except yaml.YAMLError as e:
            raise MalformedEntryError(source, 1, f"invalid front matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedEntryError(
            source, 1, f"front matter must be a mapping, not {type(metadata).__name__}"
        )
    title = metadata.get("title", source)
    sources = metadata.get("sources", [])
    if not isinstance(title, str):
        raise MalformedEntryError(source, 1, "front matter 'title' must be a string")
    if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
        raise MalformedEntryError(source, 1, "front matter 'sources' must be a list of strings")
    return DocumentInfo(name=source, title=title, sources=tuple(sources))


def _parse_identifier(match: re.Match[str], source: str, line_no: int) -> IdentifierEntry:
    kind_text, guid_text, label = match.group(1), match.group(2), match.group(3)
    try:
        guid = normalize_guid(guid_text)
    except MalformedGuidError:
        raise MalformedEntryError(source, line_no, f"invalid GUID {guid_text!r}") from None
    label = (label or "").strip()
    if not label:
        raise MalformedEntryError(source, line_no, f"missing label for {guid}")
    return IdentifierEntry(
        guid=guid, kind=GuidKind(kind_text), label=label, source=source, line=line_no
    )


def _parse_value_data(raw: str, source: str, line_no: int) -> str:
    raw = raw.strip()
    quoted = _REG_QUOTED.match(raw)
    if quoted is not None:
        return _unescape(quoted.group(1))
    # Typed values are kept as written
    if _REG_TYPED.match(raw) is not None:
        return raw
    raise MalformedEntryError(source, line_no, f"unsupported value data {raw!r}")


def _parse_registry_line(
    line: str,
    current_key: str | None,
    source: str,
    line_no: int,
) -> tuple[str | None, RegistryKeyEntry | None]:
    """Parse one line of a reg block.

    Returns:
        Tuple of (key in effect after this line, value entry or None)
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(";") or stripped in _REG_HEADERS:
        return current_key, None

    key_match = _REG_KEY.match(stripped)
    if key_match is not None:
        path = key_match.group(1).strip()
        if path.startswith("-"):
            raise MalformedEntryError(source, line_no, "key deletions are not supported")
        return path, None

    value_match = _REG_VALUE.match(stripped)
    if value_match is None:
        raise MalformedEntryError(source, line_no, f"unrecognized registry line {stripped!r}")
    if current_key is None:
        raise MalformedEntryError(source, line_no, "registry value before any key")

    value_name = "" if value_match.group(1) else _unescape(value_match.group(2))
    value_data = _parse_value_data(value_match.group(3), source, line_no)
    entry = RegistryKeyEntry(
        path=current_key,
        value_name=value_name,
        value_data=value_data,
        source=source,
        line=line_no,
    )
    return current_key, entry


def parse_reference(text: str, source: str) -> ReferenceDocument:
    """Parse a reference document.

    Args:
        text: Markdown content
        source: Document name used in entries and error messages

    Returns:
        ReferenceDocument with identifiers and registry values in document order

    Raises:
        MalformedEntryError: If any entry line or fenced block cannot be parsed
    """
    info = _read_info(text, source)
    lines = text.splitlines()

    identifiers: list[IdentifierEntry] = []
    registry_keys: list[RegistryKeyEntry] = []

    fence: str | None = None
    fence_is_reg = False
    fence_line = 0
    current_key: str | None = None

    for index in range(_front_matter_length(lines), len(lines)):
        line = lines[index]
        line_no = index + 1

        fence_match = _FENCE.match(line)
        if fence is None:
            if fence_match is not None:
                fence = fence_match.group(1)
                fence_is_reg = fence_match.group(2).lower() == "reg"
                fence_line = line_no
                current_key = None
                continue
            bullet = _ID_BULLET.match(line)
            if bullet is not None:
                identifiers.append(_parse_identifier(bullet, source, line_no))
            continue

        if line.strip().startswith(fence) and line.strip().strip(fence[0]) == "":
            fence = None
            continue
        if fence_is_reg:
            current_key, entry = _parse_registry_line(line, current_key, source, line_no)
            if entry is not None:
                registry_keys.append(entry)

    if fence is not None:
        raise MalformedEntryError(source, fence_line, "unterminated fenced block")

    logger.debug(
        "Parsed %s: %d identifiers, %d registry values",
        source,
        len(identifiers),
        len(registry_keys),
    )
    return ReferenceDocument(
        info=info,
        identifiers=tuple(identifiers),
        registry_keys=tuple(registry_keys),
    )
