"""ProgID resolution against the registry table.

A ProgID resolves through ``HKEY_CLASSES_ROOT\\<ProgID>\\CLSID``. A
version-independent ProgID without a CLSID subkey is followed through its
``CurVer`` subkey to the versioned ProgID first.
"""

import logging

from ddsreg.core.errors import MalformedProgIdError
from ddsreg.core.guid import is_guid, normalize_guid
from ddsreg.core.identifier_registry import HKCR, IdentifierRegistry, canonical_key_path
from ddsreg.core.types import GuidKind, ValidationResult, ValidationStatus

logger = logging.getLogger(__name__)

MAX_CURVER_HOPS = 8


def _check_prog_id(prog_id: str) -> None:
    if not prog_id:
        raise MalformedProgIdError(prog_id, "empty")
    if "\\" in prog_id:
        raise MalformedProgIdError(prog_id, "contains a backslash")
    if any(ch.isspace() for ch in prog_id):
        raise MalformedProgIdError(prog_id, "contains whitespace")


def validate_prog_id_chain(registry: IdentifierRegistry, prog_id: str) -> ValidationResult:
    """Resolve a ProgID to its CLSID and check the CLSID is a known class.

    Args:
        registry: Loaded identifier registry
        prog_id: ProgID such as ``MSDDS.Diagram.080``

    Returns:
        ValidationResult with status:
        - OK: the CLSID value names a CLSID entry
        - UNRESOLVED: the ProgID has no CLSID value, directly or via CurVer
        - DANGLING_CLSID: the CLSID value is not a GUID or not a listed class

    Raises:
        MalformedProgIdError: If prog_id is empty or contains a backslash or whitespace
    """
    _check_prog_id(prog_id)

    chain: list[str] = []
    seen: set[str] = set()
    current = prog_id
    clsid: str | None = None

    while True:
        chain.append(current)
        seen.add(current.upper())
        clsid = registry.default_value(f"{HKCR}\\{current}\\CLSID")
        if clsid is not None:
            break
        cur_ver = registry.default_value(f"{HKCR}\\{current}\\CurVer")
        if cur_ver is None or cur_ver.upper() in seen or len(chain) > MAX_CURVER_HOPS:
            break
        logger.debug("Following CurVer %s -> %s", current, cur_ver)
        current = cur_ver

    if clsid is None:
        return ValidationResult(
            prog_id=prog_id, status=ValidationStatus.UNRESOLVED, chain=tuple(chain)
        )

    entry = None
    if is_guid(clsid):
        entry = registry.lookup_by_guid(clsid, kind=GuidKind.CLSID)
    if entry is None:
        logger.debug("ProgID %s references unknown CLSID %s", current, clsid)
        return ValidationResult(
            prog_id=prog_id,
            status=ValidationStatus.DANGLING_CLSID,
            clsid=clsid,
            chain=tuple(chain),
        )

    return ValidationResult(
        prog_id=prog_id,
        status=ValidationStatus.OK,
        clsid=normalize_guid(clsid),
        entry=entry,
        chain=tuple(chain),
    )


def prog_ids(registry: IdentifierRegistry) -> tuple[str, ...]:
    """ProgIDs that have a CLSID or CurVer subkey, in document order."""
    prefix = HKCR + "\\"
    found: list[str] = []
    seen: set[str] = set()
    for value in registry.registry_keys:
        path = canonical_key_path(value.path)
        if not path.startswith(prefix):
            continue
        parts = path[len(prefix) :].split("\\")
        if len(parts) != 2 or parts[1] not in ("CLSID", "CURVER") or parts[0] == "CLSID":
            continue
        # Take the spelling from the document rather than the upper-cased path
        original = [part for part in value.path.strip().split("\\") if part][-2]
        if parts[0] not in seen:
            seen.add(parts[0])
            found.append(original)
    return tuple(found)
