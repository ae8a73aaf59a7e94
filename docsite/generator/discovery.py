"""Scan a flat source directory for documents and sidecar files."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from docsite._constants import DEFAULT_SIDECAR_EXTENSIONS, DOCUMENT_EXTENSION
from docsite.generator.models import DiscoveryResult
from docsite.markdown_parser import Document, read_document

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


def discover_documents(
    source_dir: Path,
    output_dir: Path,
    *,
    sidecar_extensions: cabc.Collection[str] = DEFAULT_SIDECAR_EXTENSIONS,
) -> DiscoveryResult:
    """Classify each regular file in ``source_dir``.

    Markdown files become :class:`Document` records in sorted filename order;
    sidecar files are copied byte-for-byte into ``output_dir`` under the same
    name; anything else is ignored. The scan is not recursive.

    Parameters
    ----------
    source_dir : Path
        Flat directory holding the documents.
    output_dir : Path
        Existing output root receiving sidecar copies.
    sidecar_extensions : Collection[str], optional
        Lowercase, dot-prefixed extensions copied verbatim.

    Returns
    -------
    DiscoveryResult
        The discovered documents and the paths of the copied sidecars.

    Raises
    ------
    FileNotFoundError
        If ``source_dir`` does not exist.
    NotADirectoryError
        If ``source_dir`` is not a directory.
    OSError
        If a file cannot be read or a sidecar cannot be copied.
    """
    if not source_dir.exists():
        msg = f"Source directory '{source_dir}' not found."
        raise FileNotFoundError(msg)
    if not source_dir.is_dir():
        msg = f"Source path '{source_dir}' is not a directory."
        raise NotADirectoryError(msg)

    logger.info("Discovering documentation files in %s", source_dir)
    documents: list[Document] = []
    sidecars: list[Path] = []
    for entry in sorted(source_dir.iterdir(), key=lambda path: path.name):
        if not entry.is_file():
            continue
        suffix = entry.suffix.lower()
        if suffix == DOCUMENT_EXTENSION:
            document = read_document(entry)
            documents.append(document)
            logger.info("Found: %s (%s)", document.title, document.slug)
        elif suffix in sidecar_extensions:
            destination = output_dir / entry.name
            shutil.copyfile(entry, destination)
            sidecars.append(destination)
            logger.info("Copied: %s", entry.name)

    logger.info("Discovered %d documentation files", len(documents))
    return DiscoveryResult(documents=tuple(documents), sidecars=tuple(sidecars))


__all__ = ["discover_documents"]
