"""Shared dataclasses used by the site generation pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docsite.markdown_parser import Document


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """A sidebar navigation link."""

    label: str
    href: str
    is_home: bool = False


@dc.dataclass(frozen=True, slots=True)
class DocCard:
    """A home-page card linking to one document.

    Attributes
    ----------
    title : str
        Document title shown as the card heading.
    href : str
        Link to the document page.
    excerpt : str
        First prose line of the document, already truncated.
    """

    title: str
    href: str
    excerpt: str


@dc.dataclass(frozen=True, slots=True)
class PageMeta:
    """Head metadata for one rendered page."""

    html_title: str
    description: str
    canonical_url: str


@dc.dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Documents and sidecar copies produced by scanning the source directory."""

    documents: tuple[Document, ...]
    sidecars: tuple[Path, ...]


@dc.dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of a completed build.

    Attributes
    ----------
    documents : tuple[Document, ...]
        Documents in discovery order.
    pages : tuple[Path, ...]
        Every HTML file written, home page first.
    sidecars : tuple[Path, ...]
        Sidecar files copied into the output root.
    """

    documents: tuple[Document, ...]
    pages: tuple[Path, ...]
    sidecars: tuple[Path, ...]

    @property
    def written(self) -> tuple[Path, ...]:
        """Return all written artefacts, sidecars first as they are copied first."""
        return self.sidecars + self.pages


__all__ = ["BuildResult", "DiscoveryResult", "DocCard", "NavEntry", "PageMeta"]
