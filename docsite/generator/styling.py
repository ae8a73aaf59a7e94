"""Markdown extension attaching presentation classes to rendered elements.

Each element kind produced by Python-Markdown maps to a fixed class string in
``TAG_CLASSES``; tables are additionally wrapped in a horizontally scrolling
container. Highlighted code blocks are emitted as stashed raw HTML by
``codehilite``; the paragraph holding each stash placeholder is left bare so
the raw HTML replaces it cleanly, and only inline code spans pick up the
``code`` classes.
"""

from __future__ import annotations

import typing as typ
from xml.etree.ElementTree import Element

from markdown import util
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

TAG_CLASSES: dict[str, str] = {
    "h1": "text-3xl font-bold text-gray-900 mb-6",
    "h2": "text-2xl font-semibold text-gray-900 mt-8 mb-4",
    "h3": "text-xl font-semibold text-gray-900 mt-6 mb-3",
    "p": "text-gray-700 mb-4 leading-relaxed",
    "ul": "list-disc list-inside text-gray-700 mb-4 space-y-1",
    "ol": "list-decimal list-inside text-gray-700 mb-4 space-y-1",
    "blockquote": "border-l-4 border-blue-500 pl-4 py-2 mb-4 bg-blue-50 text-gray-800",
    "a": "text-blue-600 hover:text-blue-800 underline",
    "table": "min-w-full divide-y divide-gray-200",
    "th": (
        "px-6 py-3 bg-gray-50 text-left text-xs font-medium text-gray-500 "
        "uppercase tracking-wider"
    ),
    "td": "px-6 py-4 whitespace-nowrap text-sm text-gray-900",
    "code": "bg-gray-100 px-1 py-0.5 rounded text-sm",
}
TABLE_WRAPPER_CLASS = "overflow-x-auto"


def _is_placeholder(element: Element) -> bool:
    """Return True for a bare paragraph wrapping a raw-HTML stash placeholder."""
    text = (element.text or "").strip()
    return (
        element.tag == "p"
        and len(element) == 0
        and util.HTML_PLACEHOLDER_RE.fullmatch(text) is not None
    )


class PresentationClassExtension(Extension):
    """Register :class:`PresentationClassTreeprocessor` on a Markdown instance."""

    def __init__(self, classes: typ.Mapping[str, str] | None = None) -> None:
        super().__init__()
        self.classes = dict(TAG_CLASSES if classes is None else classes)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the styling treeprocessor after inline processing."""
        processor = PresentationClassTreeprocessor(md, self.classes)
        md.treeprocessors.register(processor, "docsite_presentation_classes", 12)


class PresentationClassTreeprocessor(Treeprocessor):
    """Apply the tag-to-class table and wrap tables for horizontal scrolling."""

    def __init__(self, md: Markdown, classes: typ.Mapping[str, str]) -> None:
        super().__init__(md)
        self.classes = classes

    def run(self, root: Element) -> Element:
        """Annotate every element whose tag has a registered class string."""
        block_code = {
            child for pre in root.iter("pre") for child in pre if child.tag == "code"
        }
        for element in list(root.iter()):
            if element is root or element in block_code or _is_placeholder(element):
                continue
            self._add_classes(element)
        self._wrap_tables(root)
        return root

    def _add_classes(self, element: Element) -> None:
        extra = self.classes.get(element.tag)
        if not extra:
            return
        existing = element.get("class")
        element.set("class", f"{existing} {extra}" if existing else extra)

    @staticmethod
    def _wrap_tables(root: Element) -> None:
        parents = [
            (parent, index, child)
            for parent in root.iter()
            for index, child in enumerate(parent)
            if child.tag == "table"
        ]
        for parent, index, table in reversed(parents):
            wrapper = Element("div", {"class": TABLE_WRAPPER_CLASS})
            parent.remove(table)
            wrapper.append(table)
            wrapper.tail = table.tail
            table.tail = None
            parent.insert(index, wrapper)


__all__ = [
    "TABLE_WRAPPER_CLASS",
    "TAG_CLASSES",
    "PresentationClassExtension",
    "PresentationClassTreeprocessor",
]
