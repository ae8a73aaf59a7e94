"""Typed dataclasses describing docsite build and server configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docsite._constants import DEFAULT_SIDECAR_EXTENSIONS


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Immutable settings for a single site build.

    Attributes
    ----------
    title : str
        Site title shown in the navigation header and on the home page.
    description : str
        Site description used for the home page and meta fallbacks.
    base_url : str
        Absolute URL the output tree is published under; used for canonical
        and social-sharing links.
    base_path : str
        Path prefix for deployments under a subpath (``""`` or ``/prefix``).
    source_dir : Path
        Flat directory holding the Markdown documents and sidecar files.
    output_dir : Path
        Output root receiving the rendered tree.
    """

    title: str = "Documentation"
    description: str = ""
    base_url: str = "http://localhost:3000"
    base_path: str = ""
    source_dir: Path = Path("docs")
    output_dir: Path = Path("dist")
    pygments_style: str = "monokai"
    author: str = ""
    keywords: tuple[str, ...] = ()
    theme_color: str = "#1f2937"
    og_image: str | None = "og-image.png"
    not_found_page: bool = True
    sidecar_extensions: tuple[str, ...] = DEFAULT_SIDECAR_EXTENSIONS

    def doc_href(self, slug: str) -> str:
        """Return the navigation href for the document ``slug``."""
        return f"{self.base_path}/{slug}/"

    @property
    def home_href(self) -> str:
        """Return the navigation href for the home page."""
        return f"{self.base_path}/"

    def canonical_url(self, slug: str | None = None) -> str:
        """Return the canonical URL for the home page or a document."""
        base = self.base_url.rstrip("/")
        if slug is None:
            return base or "/"
        return f"{base}/{slug}/"

    @property
    def og_image_url(self) -> str | None:
        """Return the absolute social-sharing image URL, if configured."""
        if not self.og_image:
            return None
        if "://" in self.og_image:
            return self.og_image
        return f"{self.base_url.rstrip('/')}/{self.og_image.lstrip('/')}"


@dc.dataclass(frozen=True, slots=True)
class ServerConfig:
    """Settings for the development file server."""

    root: Path = Path("dist")
    host: str = "127.0.0.1"
    port: int = 3000
    sidecar_files: tuple[str, ...] = ()


__all__ = ["ServerConfig", "SiteConfig", "SiteConfigError"]
