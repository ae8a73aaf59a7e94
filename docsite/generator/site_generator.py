"""High-level orchestration for documentation site generation.

This module turns a flat directory of Markdown files into the static output
tree served by :mod:`docsite.server`. It exposes :class:`SiteGenerator`, which
consumes a :class:`~docsite.config.SiteConfig` and runs four sequential
phases: create the output root, discover documents (copying sidecar files),
render the home page, then render one ``{slug}/index.html`` per document. A
``404.html`` page is rendered last when enabled.

The navigation, card, and metadata helpers are plain functions over the
document collection and the config so templates receive ready-made values.

Example
-------
>>> from docsite.config import load_site_config
>>> from docsite.generator import SiteGenerator
>>> result = SiteGenerator(load_site_config(None)).run()  # doctest: +SKIP
>>> result.pages[0]  # doctest: +SKIP
PosixPath('dist/index.html')
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docsite._constants import INDEX_FILENAME, NOT_FOUND_FILENAME
from docsite.generator.discovery import discover_documents
from docsite.generator.link_rewriter import SiblingLinkExtension
from docsite.generator.models import BuildResult, DocCard, NavEntry, PageMeta
from docsite.generator.renderer import HtmlContentRenderer
from docsite.generator.styling import TAG_CLASSES, PresentationClassExtension
from docsite.markdown_parser import extract_description, extract_excerpt

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docsite.config import SiteConfig
    from docsite.markdown_parser import Document

logger = logging.getLogger(__name__)

HOME_LABEL = "Home"


def build_navigation(
    config: SiteConfig, documents: cabc.Sequence[Document]
) -> list[NavEntry]:
    """Return the global sidebar: home first, then documents in order."""
    entries = [NavEntry(label=HOME_LABEL, href=config.home_href, is_home=True)]
    entries.extend(
        NavEntry(label=doc.title, href=config.doc_href(doc.slug)) for doc in documents
    )
    return entries


def build_doc_cards(
    config: SiteConfig, documents: cabc.Sequence[Document]
) -> list[DocCard]:
    """Return one home-page card per document with its excerpt."""
    return [
        DocCard(
            title=doc.title,
            href=config.doc_href(doc.slug),
            excerpt=extract_excerpt(doc.content),
        )
        for doc in documents
    ]


def home_page_meta(config: SiteConfig) -> PageMeta:
    """Return head metadata for the home page."""
    return PageMeta(
        html_title=config.title,
        description=config.description,
        canonical_url=config.canonical_url(),
    )


def document_page_meta(config: SiteConfig, document: Document) -> PageMeta:
    """Return head metadata for ``document``.

    The description falls back to ``"{title} documentation - {site
    description}"`` when the document has no prose line.
    """
    description = extract_description(document.content) or (
        f"{document.title} documentation - {config.description}"
    )
    return PageMeta(
        html_title=f"{document.title} - {config.title}",
        description=description,
        canonical_url=config.canonical_url(document.slug),
    )


class SiteGenerator:
    """Discover markdown documents and emit the themed static site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        config : SiteConfig
            Site settings: titles, URLs, directories, and theming.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        source_dir : Path, optional
            Override for the markdown source directory.
        output_dir : Path, optional
            Override for the output root.
        """
        self.config = config
        self.source_dir = source_dir or config.source_dir
        self.output_dir = output_dir or config.output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.home_template = self.env.get_template("home_page.jinja")
        self.doc_template = self.env.get_template("doc_page.jinja")
        self.not_found_template = self.env.get_template("not_found_page.jinja")

    def run(self, *, clean: bool = False) -> BuildResult:
        """Build the complete output tree.

        Parameters
        ----------
        clean : bool, optional
            Remove the output root before building. By default existing files
            are kept, so output from earlier builds may persist.

        Returns
        -------
        BuildResult
            Discovered documents, written page paths (home page first), and
            copied sidecars.

        Notes
        -----
        Any failure (missing source directory, unreadable file, unwritable
        output) propagates immediately. Files already written stay on disk.
        """
        logger.info("Starting static site generation")
        if clean and self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        discovery = discover_documents(
            self.source_dir,
            self.output_dir,
            sidecar_extensions=self.config.sidecar_extensions,
        )
        documents = discovery.documents
        renderer = self._build_renderer(documents)
        shared = self._shared_context(documents, renderer)

        pages = [self._write_home_page(documents, shared)]
        pages.extend(self._write_document_pages(documents, renderer, shared))
        if self.config.not_found_page:
            pages.append(self._write_not_found_page(shared))

        logger.info(
            "Site generated in %s (%d pages)", self.output_dir, len(documents) + 1
        )
        return BuildResult(
            documents=documents, pages=tuple(pages), sidecars=discovery.sidecars
        )

    def _build_renderer(self, documents: cabc.Sequence[Document]) -> HtmlContentRenderer:
        """Return a renderer aware of the document slugs for link rewriting."""
        return HtmlContentRenderer(
            self.config.pygments_style,
            extensions=[
                SiblingLinkExtension(
                    self.config.base_path, (doc.slug for doc in documents)
                ),
                PresentationClassExtension(),
            ],
            plain_code_class=TAG_CLASSES["code"],
        )

    def _shared_context(
        self, documents: cabc.Sequence[Document], renderer: HtmlContentRenderer
    ) -> dict[str, typ.Any]:
        """Return template values common to every page."""
        return {
            "site": self.config,
            "nav_entries": build_navigation(self.config, documents),
            "pygments_css": renderer.stylesheet,
        }

    def _write_home_page(
        self, documents: cabc.Sequence[Document], shared: dict[str, typ.Any]
    ) -> Path:
        logger.info("Generating homepage")
        html = self.home_template.render(
            **shared,
            meta=home_page_meta(self.config),
            cards=build_doc_cards(self.config, documents),
        )
        return self._write(self.output_dir / INDEX_FILENAME, html)

    def _write_document_pages(
        self,
        documents: cabc.Sequence[Document],
        renderer: HtmlContentRenderer,
        shared: dict[str, typ.Any],
    ) -> list[Path]:
        logger.info("Generating documentation pages")
        written: list[Path] = []
        for document in documents:
            logger.info("Generating: %s", document.title)
            html = self.doc_template.render(
                **shared,
                meta=document_page_meta(self.config, document),
                document=document,
                content_html=renderer.markdown(document.content),
            )
            doc_dir = self.output_dir / document.slug
            doc_dir.mkdir(parents=True, exist_ok=True)
            written.append(self._write(doc_dir / INDEX_FILENAME, html))
        return written

    def _write_not_found_page(self, shared: dict[str, typ.Any]) -> Path:
        meta = PageMeta(
            html_title=f"Page not found - {self.config.title}",
            description=self.config.description,
            canonical_url=self.config.canonical_url(),
        )
        html = self.not_found_template.render(**shared, meta=meta)
        return self._write(self.output_dir / NOT_FOUND_FILENAME, html)

    @staticmethod
    def _write(path: Path, html: str) -> Path:
        """Write ``html`` with a trailing newline and return ``path``."""
        if not html.endswith("\n"):
            html += "\n"
        path.write_text(html, encoding="utf-8")
        return path


__all__ = [
    "HOME_LABEL",
    "SiteGenerator",
    "build_doc_cards",
    "build_navigation",
    "document_page_meta",
    "home_page_meta",
]
