"""In-memory identifier registry built from parsed reference documents."""

from collections.abc import Iterable, Iterator

from ddsreg.core.guid import normalize_guid
from ddsreg.core.types import (
    DocumentInfo,
    GuidKind,
    IdentifierEntry,
    ReferenceDocument,
    RegistryKeyEntry,
)

HKCR = "HKEY_CLASSES_ROOT"

# Prefixes that name the same classes root, compared case-insensitively
_HIVE_ALIASES = (
    ("HKEY_LOCAL_MACHINE\\SOFTWARE\\CLASSES", HKCR),
    ("HKLM\\SOFTWARE\\CLASSES", HKCR),
    ("HKCR", HKCR),
)


def canonical_key_path(path: str) -> str:
    """Normalize a registry key path for comparison.

    Upper-cases the path, collapses repeated backslashes, drops a trailing
    backslash and maps classes-root aliases to HKEY_CLASSES_ROOT.

    Examples:
        >>> canonical_key_path("HKCR\\\\MSDDS.Diagram.080\\\\CLSID")
        'HKEY_CLASSES_ROOT\\\\MSDDS.DIAGRAM.080\\\\CLSID'
    """
    parts = [part for part in path.strip().split("\\") if part]
    normalized = "\\".join(parts).upper()
    for alias, hive in _HIVE_ALIASES:
        if normalized == alias or normalized.startswith(alias + "\\"):
            return hive + normalized[len(alias) :]
    return normalized


class LabelMatches:
    """Entries whose label contains a substring, case-insensitively.

    Matching is done during iteration, and every iteration starts over from
    the first entry, so the same object can be iterated any number of times.
    Results are in document order.
    """

    def __init__(
        self,
        entries: tuple[IdentifierEntry, ...],
        substring: str,
        kind: GuidKind | None = None,
    ) -> None:
        self._entries = entries
        self._needle = substring.casefold()
        self._kind = kind

    @property
    def substring(self) -> str:
        return self._needle

    def __iter__(self) -> Iterator[IdentifierEntry]:
        for entry in self._entries:
            if self._kind is not None and entry.kind != self._kind:
                continue
            if self._needle in entry.label.casefold():
                yield entry

    def __repr__(self) -> str:
        return f"LabelMatches({self._needle!r}, kind={self._kind})"


class IdentifierRegistry:
    """Read-only tables of identifiers and registry values.

    Built once from one or more reference documents. Nothing mutates it
    afterwards, so it can be shared between readers without locking.
    """

    def __init__(
        self,
        identifiers: Iterable[IdentifierEntry],
        registry_keys: Iterable[RegistryKeyEntry],
        documents: Iterable[DocumentInfo] = (),
    ) -> None:
        self._identifiers = tuple(identifiers)
        self._registry_keys = tuple(registry_keys)
        self._documents = tuple(documents)

        by_guid: dict[str, list[IdentifierEntry]] = {}
        for entry in self._identifiers:
            by_guid.setdefault(entry.guid, []).append(entry)
        self._by_guid = {guid: tuple(entries) for guid, entries in by_guid.items()}

        by_path: dict[str, list[RegistryKeyEntry]] = {}
        for value in self._registry_keys:
            by_path.setdefault(canonical_key_path(value.path), []).append(value)
        self._by_path = {path: tuple(values) for path, values in by_path.items()}

    @classmethod
    def from_documents(cls, documents: Iterable[ReferenceDocument]) -> "IdentifierRegistry":
        """Merge parsed documents, keeping their order."""
        docs = tuple(documents)
        return cls(
            identifiers=[entry for doc in docs for entry in doc.identifiers],
            registry_keys=[value for doc in docs for value in doc.registry_keys],
            documents=[doc.info for doc in docs],
        )

    @property
    def identifiers(self) -> tuple[IdentifierEntry, ...]:
        return self._identifiers

    @property
    def registry_keys(self) -> tuple[RegistryKeyEntry, ...]:
        return self._registry_keys

    @property
    def documents(self) -> tuple[DocumentInfo, ...]:
        return self._documents

    def entries(self, kind: GuidKind | None = None) -> tuple[IdentifierEntry, ...]:
        """All identifier entries in document order, optionally of one kind."""
        if kind is None:
            return self._identifiers
        return tuple(entry for entry in self._identifiers if entry.kind == kind)

    def lookup_by_guid(self, guid: str, kind: GuidKind | None = None) -> IdentifierEntry | None:
        """Find the entry for a GUID.

        Matching ignores hex case, and braces on the input are optional. When
        a GUID is listed more than once, the first entry in document order
        wins unless kind narrows the candidates.

        Args:
            guid: GUID to look up
            kind: Only consider entries of this kind

        Returns:
            Matching entry, or None if the GUID is not listed

        Raises:
            MalformedGuidError: If guid is not a GUID
        """
        for entry in self._by_guid.get(normalize_guid(guid), ()):
            if kind is None or entry.kind == kind:
                return entry
        return None

    def lookup_all(self, guid: str) -> tuple[IdentifierEntry, ...]:
        """Every entry listed under a GUID, in document order.

        Raises:
            MalformedGuidError: If guid is not a GUID
        """
        return self._by_guid.get(normalize_guid(guid), ())

    def lookup_by_label(self, substring: str, kind: GuidKind | None = None) -> LabelMatches:
        """Case-insensitive substring search over labels."""
        return LabelMatches(self._identifiers, substring, kind)

    def duplicate_guids(self) -> dict[str, tuple[IdentifierEntry, ...]]:
        """GUIDs listed more than once, mapped to all of their entries."""
        return {guid: entries for guid, entries in self._by_guid.items() if len(entries) > 1}

    def values_at(self, path: str) -> tuple[RegistryKeyEntry, ...]:
        """Values stored directly under a key."""
        return self._by_path.get(canonical_key_path(path), ())

    def default_value(self, path: str) -> str | None:
        """Default value data of a key, or None if the key has no default value."""
        for value in self.values_at(path):
            if value.is_default:
                return value.value_data
        return None

    def find_keys(self, prefix: str = "") -> tuple[RegistryKeyEntry, ...]:
        """Values under a key path prefix, in document order.

        A prefix matches whole path components: ``HKCR\\MSDDS.Diagram``
        matches ``HKCR\\MSDDS.Diagram\\CurVer`` but not
        ``HKCR\\MSDDS.Diagram.080``. An empty prefix returns every value.
        """
        wanted = canonical_key_path(prefix)
        if not wanted:
            return self._registry_keys
        return tuple(
            value
            for value in self._registry_keys
            if (path := canonical_key_path(value.path)) == wanted
            or path.startswith(wanted + "\\")
        )
