r"""Derive document metadata from raw Markdown.

This module holds the :class:`Document` record produced by discovery and the
pure text helpers that derive a document's title, home-page excerpt, and meta
description. Every helper is total over arbitrary text: malformed or empty
input falls back to a deterministic default instead of raising.

Example
-------
>>> from docsite.markdown_parser import extract_title
>>> extract_title("# API Reference\nBody", "api.md")
'API Reference'
>>> extract_title("No heading here", "file-mode-log.md")
'File Mode Log'
"""

from __future__ import annotations

import dataclasses as dc
import re
from pathlib import Path, PurePath

from docsite._constants import DESCRIPTION_LENGTH, EXCERPT_FALLBACK, EXCERPT_LENGTH

TITLE_PATTERN = re.compile(r"^#[ \t]+(\S.*)$", re.MULTILINE)
EMPHASIS_PATTERN = re.compile(r"\*\*|\*")


@dc.dataclass(frozen=True, slots=True)
class Document:
    """One discovered Markdown source file.

    Attributes
    ----------
    slug : str
        Identifier derived from the filename; names the output directory and
        navigation links.
    title : str
        Display title from the first level-1 heading or the slug.
    content : str
        Raw Markdown body.
    source_path : Path
        File the content was read from; kept for diagnostics.
    """

    slug: str
    title: str
    content: str
    source_path: Path


def slug_from_filename(filename: str) -> str:
    """Return the filename without its extension."""
    return PurePath(filename).stem


def _title_from_slug(slug: str) -> str:
    """Capitalize each hyphen-separated piece of ``slug`` and join with spaces."""
    return " ".join(piece[:1].upper() + piece[1:] for piece in slug.split("-"))


def extract_title(content: str, filename: str) -> str:
    """Return the display title for a document.

    Parameters
    ----------
    content : str
        Raw Markdown text.
    filename : str
        Source filename, used for the fallback when no ``# Title`` line exists.

    Returns
    -------
    str
        The trimmed text of the first level-1 heading, or the filename stem
        split on ``-`` with each piece capitalized.
    """
    match = TITLE_PATTERN.search(content)
    if match:
        return match.group(1).strip()
    return _title_from_slug(slug_from_filename(filename))


def extract_excerpt(content: str, limit: int = EXCERPT_LENGTH) -> str:
    """Return the first non-empty, non-heading line truncated to ``limit``."""
    for line in content.splitlines():
        if line.strip() and not line.startswith("#"):
            return line[:limit]
    return EXCERPT_FALLBACK


def extract_description(content: str, limit: int = DESCRIPTION_LENGTH) -> str | None:
    """Return a plain-text meta description from the first prose line.

    Headings and code fences are skipped; emphasis markers are removed before
    truncation. Returns ``None`` when the document has no prose line.
    """
    for line in content.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(("#", "```")):
            return EMPHASIS_PATTERN.sub("", stripped)[:limit]
    return None


def read_document(path: Path) -> Document:
    """Read ``path`` as UTF-8 and derive its slug and title."""
    content = path.read_text(encoding="utf-8")
    return Document(
        slug=slug_from_filename(path.name),
        title=extract_title(content, path.name),
        content=content,
        source_path=path,
    )


__all__ = [
    "Document",
    "extract_description",
    "extract_excerpt",
    "extract_title",
    "read_document",
    "slug_from_filename",
]
