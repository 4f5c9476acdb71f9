"""Error types raised while loading and querying reference documents."""


class DdsregError(Exception):
    """Base class for ddsreg errors."""


class MalformedEntryError(DdsregError):
    """A reference document contains a line that cannot be parsed.

    Fatal at load time: a registry is never built from a partially parsed
    document.
    """

    def __init__(self, source: str, line: int, message: str) -> None:
        super().__init__(f"{source}:{line}: {message}")
        self.source = source
        self.line = line
        self.message = message


class MalformedGuidError(DdsregError, ValueError):
    """Query input is not a GUID."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Not a GUID: {text!r}")
        self.text = text


class MalformedProgIdError(DdsregError, ValueError):
    """Query input is not a usable ProgID."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Invalid ProgID {text!r}: {reason}")
        self.text = text
        self.reason = reason
