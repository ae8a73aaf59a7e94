"""Helpers for rewriting links between sibling markdown documents."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from docsite._constants import DOCUMENT_EXTENSION

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


class SiblingLinkExtension(Extension):
    """Rewrite links to sibling markdown files into generated page URLs.

    Source documents live in one flat directory and usually link to each
    other by filename (``./sessions.md``, ``events.md#stream``). Once
    rendered, each document lives at ``{base_path}/{slug}/``, so this
    extension rewrites such links when ``slug`` names a known document.
    External URLs, absolute paths, and links to unknown files are left alone.
    """

    def __init__(self, base_path: str, slugs: cabc.Iterable[str]) -> None:
        super().__init__()
        self.base_path = base_path
        self.slugs = frozenset(slugs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the sibling-link treeprocessor on the Markdown instance."""
        processor = SiblingLinkTreeprocessor(md, self.base_path, self.slugs)
        md.treeprocessors.register(processor, "docsite_sibling_links", 15)


class SiblingLinkTreeprocessor(Treeprocessor):
    """Rewrite ``<a href="x.md">`` anchors to ``{base_path}/x/``."""

    def __init__(self, md: Markdown, base_path: str, slugs: frozenset[str]) -> None:
        super().__init__(md)
        self.base_path = base_path
        self.slugs = slugs

    def run(self, root: Element) -> Element:
        """Rewrite sibling document anchors in the parsed markdown tree."""
        for element in root.iter("a"):
            rewritten = self._rewrite(element.get("href"))
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the generated page URL for ``target`` or None to keep it."""
        if not target or target.startswith(("#", "/")) or "://" in target:
            return None

        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc:
            return None

        path = posixpath.normpath(parsed.path)
        if "/" in path or not path.lower().endswith(DOCUMENT_EXTENSION):
            return None
        slug = path[: -len(DOCUMENT_EXTENSION)]
        if slug not in self.slugs:
            return None

        url = f"{self.base_path}/{slug}/"
        if parsed.query:
            url = f"{url}?{parsed.query}"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url


__all__ = ["SiblingLinkExtension", "SiblingLinkTreeprocessor"]
