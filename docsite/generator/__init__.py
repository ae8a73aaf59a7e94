"""Utilities for discovering, rendering, and writing documentation pages."""

from .discovery import discover_documents
from .link_rewriter import SiblingLinkExtension
from .models import BuildResult, DiscoveryResult, DocCard, NavEntry, PageMeta
from .renderer import HtmlContentRenderer
from .site_generator import SiteGenerator
from .styling import PresentationClassExtension

__all__ = [
    "BuildResult",
    "DiscoveryResult",
    "DocCard",
    "HtmlContentRenderer",
    "NavEntry",
    "PageMeta",
    "PresentationClassExtension",
    "SiblingLinkExtension",
    "SiteGenerator",
    "discover_documents",
]
