"""GUID normalization.

GUIDs are stored and compared in canonical form: braced, hyphenated,
upper-case hex, e.g. ``{C795D2FE-7776-11D8-9070-00065B840D9C}``.
"""

import re

from ddsreg.core.errors import MalformedGuidError

_GUID_BODY = r"[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}"
_GUID_PATTERN = re.compile(rf"^(\{{{_GUID_BODY}\}}|{_GUID_BODY})$")


def normalize_guid(text: str) -> str:
    """Return the canonical braced upper-case form of a GUID.

    Braces are optional but must be balanced. Hex digits may be any case and
    surrounding whitespace is ignored.

    Args:
        text: GUID as typed or as found in a document

    Returns:
        Canonical GUID string

    Raises:
        MalformedGuidError: If text is not a GUID

    Examples:
        >>> normalize_guid("77d2c902-7779-11d8-9070-00065b840d9c")
        '{77D2C902-7779-11D8-9070-00065B840D9C}'
    """
    stripped = text.strip()
    if _GUID_PATTERN.match(stripped) is None:
        raise MalformedGuidError(text)
    return "{" + stripped.strip("{}").upper() + "}"


def is_guid(text: str) -> bool:
    """Check whether text is a GUID in any accepted form."""
    return _GUID_PATTERN.match(text.strip()) is not None
