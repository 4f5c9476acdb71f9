"""Locate and load reference documents.

Bundled documents ship in the ``ddsreg/data`` package directory. Callers may
pass their own Markdown files instead; either way every document is read
and parsed exactly once per load.
"""

import logging
from collections.abc import Sequence
from importlib.resources import files
from pathlib import Path

from ddsreg.core.identifier_registry import IdentifierRegistry
from ddsreg.core.reference_parser import parse_reference
from ddsreg.core.types import ReferenceDocument

logger = logging.getLogger(__name__)

# Load order is part of the contract: label searches follow it.
BUNDLED_DOCUMENTS = ("msdds.md", "mdt.md")


def bundled_documents() -> tuple[str, ...]:
    """Names of the reference documents shipped with the package."""
    return BUNDLED_DOCUMENTS


def read_bundled_document(name: str) -> str:
    """Read a bundled reference document by name.

    Raises:
        FileNotFoundError: If name is not a bundled document
    """
    if name not in BUNDLED_DOCUMENTS:
        raise FileNotFoundError(f"No bundled reference document named {name!r}")
    return files("ddsreg").joinpath("data", name).read_text(encoding="utf-8")


def load_documents(paths: Sequence[Path] = ()) -> tuple[ReferenceDocument, ...]:
    """Parse reference documents from files, or the bundled set if none are given.

    Raises:
        FileNotFoundError: If a path does not exist
        MalformedEntryError: If a document cannot be parsed
    """
    documents: list[ReferenceDocument] = []
    if paths:
        for path in paths:
            if not path.exists():
                raise FileNotFoundError(f"Reference document not found: {path}")
            logger.debug("Loading reference document %s", path)
            documents.append(parse_reference(path.read_text(encoding="utf-8"), path.name))
    else:
        for name in BUNDLED_DOCUMENTS:
            logger.debug("Loading bundled reference document %s", name)
            documents.append(parse_reference(read_bundled_document(name), name))
    return tuple(documents)


def load_registry(paths: Sequence[Path] = ()) -> IdentifierRegistry:
    """Build an IdentifierRegistry from reference documents.

    Args:
        paths: Markdown files to load in order; empty loads the bundled documents

    Returns:
        Registry over all documents, merged in load order

    Raises:
        FileNotFoundError: If a path does not exist
        MalformedEntryError: If a document cannot be parsed
    """
    return IdentifierRegistry.from_documents(load_documents(paths))
