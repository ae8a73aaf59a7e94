"""End-to-end tests for static site generation.

This module runs :class:`docsite.generator.SiteGenerator` over the fixture
source directory from ``conftest.py`` and inspects the output tree with
BeautifulSoup. It verifies that:

* every discovered document gets exactly one ``{slug}/index.html`` and the
  home page always exists, even for an empty source directory;
* titles come from the first ``# Heading`` or the filename fallback;
* the sidebar navigation is identical on every page and honours the base
  path;
* fenced code is highlighted with ``data-language`` metadata while inline
  code stays plain, tables are wrapped, and sibling links are rewritten;
* sidecar files are copied byte-for-byte;
* earlier output is kept unless a clean build is requested, and failures
  abort without cleanup.

Run ``pytest tests/test_site_generation.py -v`` to execute the module.
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

import pytest
from bs4 import BeautifulSoup

from docsite.generator import BuildResult, SiteGenerator

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docsite.config import SiteConfig


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@pytest.fixture
def build_result(site_config: SiteConfig) -> BuildResult:
    """Run a full build for the fixture configuration."""
    return SiteGenerator(site_config).run()


@pytest.fixture
def output_dir(site_config: SiteConfig, build_result: BuildResult) -> Path:  # noqa: ARG001
    return site_config.output_dir


def test_one_output_directory_per_document(
    build_result: BuildResult, output_dir: Path
) -> None:
    """Each document maps to a subdirectory holding exactly one index file."""
    subdirs = sorted(path.name for path in output_dir.iterdir() if path.is_dir())
    assert subdirs == ["api", "file-mode-log", "sessions"]
    assert len(subdirs) == len(build_result.documents)
    for name in subdirs:
        assert [p.name for p in (output_dir / name).iterdir()] == ["index.html"]


def test_discovery_order_and_titles(build_result: BuildResult) -> None:
    assert [(doc.slug, doc.title) for doc in build_result.documents] == [
        ("api", "API Reference"),
        ("file-mode-log", "File Mode Log"),
        ("sessions", "Sessions API"),
    ]


def test_non_document_files_and_subdirectories_ignored(output_dir: Path) -> None:
    assert not (output_dir / "notes.txt").exists()
    assert not (output_dir / "deep").exists()
    assert not (output_dir / "nested").exists()


def test_home_page_written_first(build_result: BuildResult, output_dir: Path) -> None:
    assert build_result.pages[0] == output_dir / "index.html"
    assert (output_dir / "404.html") in build_result.pages


def test_api_page_title_and_navigation(output_dir: Path) -> None:
    """The API page carries its heading title and links to every document."""
    soup = _soup(output_dir / "api" / "index.html")
    assert soup.title is not None
    assert soup.title.get_text() == "API Reference - Fixture Docs"
    heading = soup.select_one("main h1")
    assert heading is not None
    assert heading.get_text(strip=True) == "API Reference"
    nav_links = [(a.get_text(strip=True), a["href"]) for a in soup.select("nav a")]
    assert nav_links == [
        ("Home", "/"),
        ("API Reference", "/api/"),
        ("File Mode Log", "/file-mode-log/"),
        ("Sessions API", "/sessions/"),
    ]


def test_navigation_identical_on_every_page(output_dir: Path) -> None:
    pages = [
        output_dir / "index.html",
        output_dir / "api" / "index.html",
        output_dir / "sessions" / "index.html",
        output_dir / "file-mode-log" / "index.html",
    ]
    navs = {str(_soup(page).select_one("nav")) for page in pages}
    assert len(navs) == 1


def test_home_page_cards_show_excerpts(output_dir: Path) -> None:
    soup = _soup(output_dir / "index.html")
    assert soup.title is not None
    assert soup.title.get_text() == "Fixture Docs"
    cards = soup.select(".grid .doc-card")
    assert len(cards) == 3
    first = cards[0]
    link = first.select_one("a")
    assert link is not None
    assert (link.get_text(strip=True), link["href"]) == ("API Reference", "/api/")
    excerpt = first.select_one("p")
    assert excerpt is not None
    assert excerpt.get_text(strip=True) == (
        "The **HTTP API** exposes sessions and events...."
    )


def test_fenced_code_highlighted_with_language(output_dir: Path) -> None:
    soup = _soup(output_dir / "api" / "index.html")
    blocks = soup.select(".doc-article .codehilite")
    assert len(blocks) == 1
    assert blocks[0].get("data-language") == "python"
    assert "def hello" in blocks[0].get_text()
    assert blocks[0].find_parent("p") is None
    style = soup.select_one("head style")
    assert style is not None
    assert ".codehilite" in style.get_text()


def test_inline_code_rendered_as_plain_styled_code(output_dir: Path) -> None:
    soup = _soup(output_dir / "api" / "index.html")
    inline = [
        code
        for code in soup.select(".doc-article code")
        if code.find_parent("pre") is None
    ]
    assert [code.get_text() for code in inline] == ["opencode serve"]
    assert "bg-gray-100" in inline[0]["class"]


def test_tables_wrapped_and_elements_styled(output_dir: Path) -> None:
    soup = _soup(output_dir / "api" / "index.html")
    table = soup.select_one(".doc-article table")
    assert table is not None
    assert table.parent is not None
    assert "overflow-x-auto" in table.parent.get("class", [])
    assert "uppercase" in table.select_one("th")["class"]
    blockquote = soup.select_one(".doc-article blockquote")
    assert blockquote is not None
    assert "border-l-4" in blockquote["class"]


def test_sibling_markdown_links_rewritten(output_dir: Path) -> None:
    soup = _soup(output_dir / "api" / "index.html")
    link = soup.select_one(".doc-article a")
    assert link is not None
    assert link["href"] == "/sessions/#create"


def test_head_metadata(output_dir: Path) -> None:
    soup = _soup(output_dir / "api" / "index.html")
    canonical = soup.select_one("link[rel='canonical']")
    assert canonical is not None
    assert canonical["href"] == "https://docs.example.invalid/api/"
    description = soup.select_one("meta[name='description']")
    assert description is not None
    assert description["content"] == "The HTTP API exposes sessions and events."
    og_image = soup.select_one("meta[property='og:image']")
    assert og_image is not None
    assert og_image["content"] == "https://docs.example.invalid/og-image.png"
    script = soup.select_one("script[type='application/ld+json']")
    assert script is not None
    data = json.loads(script.get_text())
    assert data["@type"] == "WebSite"
    assert data["name"] == "Fixture Docs"


def test_description_skips_headings(output_dir: Path) -> None:
    soup = _soup(output_dir / "sessions" / "index.html")
    description = soup.select_one("meta[name='description']")
    assert description is not None
    assert description["content"] == "Create a session."


def test_sidecar_copied_byte_for_byte(source_dir: Path, output_dir: Path) -> None:
    original = source_dir / "opencode-openapi.json"
    copied = output_dir / "opencode-openapi.json"
    assert copied.read_bytes() == original.read_bytes()


def test_base_path_prefixes_links(prefixed_config: SiteConfig) -> None:
    SiteGenerator(prefixed_config).run()
    soup = _soup(prefixed_config.output_dir / "api" / "index.html")
    hrefs = [a["href"] for a in soup.select("nav a")]
    assert hrefs[0] == "/handbook/"
    assert "/handbook/api/" in hrefs
    link = soup.select_one(".doc-article a")
    assert link is not None
    assert link["href"] == "/handbook/sessions/#create"
    canonical = soup.select_one("link[rel='canonical']")
    assert canonical is not None
    assert canonical["href"] == "https://docs.example.invalid/handbook/api/"


def test_empty_source_directory_still_builds_home_page(
    site_config: SiteConfig, tmp_path: Path
) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    config = dc.replace(site_config, source_dir=empty, output_dir=tmp_path / "out")
    result = SiteGenerator(config).run()
    assert result.documents == ()
    home = config.output_dir / "index.html"
    assert home.exists()
    soup = _soup(home)
    assert [a["href"] for a in soup.select("nav a")] == ["/"]
    assert not [path for path in config.output_dir.iterdir() if path.is_dir()]


def test_not_found_page_can_be_disabled(site_config: SiteConfig) -> None:
    config = dc.replace(site_config, not_found_page=False)
    SiteGenerator(config).run()
    assert not (config.output_dir / "404.html").exists()


def test_stale_output_persists_without_clean(site_config: SiteConfig) -> None:
    stale = site_config.output_dir / "removed-doc" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    SiteGenerator(site_config).run()
    assert stale.exists()


def test_clean_build_removes_stale_output(site_config: SiteConfig) -> None:
    stale = site_config.output_dir / "removed-doc" / "index.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    SiteGenerator(site_config).run(clean=True)
    assert not stale.exists()
    assert (site_config.output_dir / "api" / "index.html").exists()


def test_missing_source_directory_aborts_build(
    site_config: SiteConfig, tmp_path: Path
) -> None:
    config = dc.replace(site_config, source_dir=tmp_path / "missing")
    with pytest.raises(FileNotFoundError, match="not found"):
        SiteGenerator(config).run()
    assert config.output_dir.is_dir()
    assert not (config.output_dir / "index.html").exists()


def test_malformed_markdown_renders(site_config: SiteConfig) -> None:
    """Unbalanced constructs degrade to text instead of failing the build."""
    broken = site_config.source_dir / "broken.md"
    broken.write_text(
        "# Broken\n```unknown-lang\nnever closed\n| a | b\n[dangling](\n**open",
        encoding="utf-8",
    )
    result = SiteGenerator(site_config).run()
    assert "broken" in [doc.slug for doc in result.documents]
    assert (site_config.output_dir / "broken" / "index.html").exists()


def test_indented_fenced_block_keeps_language(site_config: SiteConfig) -> None:
    """Fences nested in list items and carrying extra labels still highlight."""
    (site_config.source_dir / "guide.md").write_text(
        "# Guide\n"
        "- **Example** demonstrates inline code\n\n"
        "  ```rust,no_run\n"
        '  fn main() { println!("hi"); }\n'
        "  ```\n",
        encoding="utf-8",
    )
    SiteGenerator(site_config).run()
    soup = _soup(site_config.output_dir / "guide" / "index.html")
    code_blocks = soup.select(".doc-article .codehilite code")
    assert any("fn main" in block.get_text() for block in code_blocks)
    assert any(
        block.find_parent("div", class_="codehilite").get("data-language") == "rust"
        for block in code_blocks
    )
