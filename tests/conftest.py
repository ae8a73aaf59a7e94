"""Shared fixtures for docsite tests.

The fixtures build a small Markdown source directory and a matching
``SiteConfig`` rooted in per-test temporary directories, so every test can run
the full build pipeline without touching the repository tree.
"""

from __future__ import annotations

import dataclasses as dc
import json
from pathlib import Path

import pytest

from docsite.config import SiteConfig

SIDECAR_PAYLOAD = {"openapi": "3.1.0", "info": {"title": "opencode", "version": "0.0.1"}}


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return a source directory with documents, a sidecar, and a stray file."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "api.md").write_text(
        "# API Reference\n"
        "The **HTTP API** exposes sessions and events.\n\n"
        "See [sessions](./sessions.md#create) for details.\n\n"
        "```python\n"
        "def hello():\n"
        "    return 'hi'\n"
        "```\n\n"
        "Use `opencode serve` to start the server.\n\n"
        "| Method | Path |\n"
        "| ------ | ---- |\n"
        "| GET | /session |\n\n"
        "> Note: endpoints may change.\n",
        encoding="utf-8",
    )
    (docs / "sessions.md").write_text(
        "# Sessions API\n\n## Create\nCreate a session.\n", encoding="utf-8"
    )
    (docs / "file-mode-log.md").write_text(
        "No heading in this document.\n", encoding="utf-8"
    )
    (docs / "opencode-openapi.json").write_text(
        json.dumps(SIDECAR_PAYLOAD, indent=2), encoding="utf-8"
    )
    (docs / "notes.txt").write_text("ignored\n", encoding="utf-8")
    (docs / "nested").mkdir()
    (docs / "nested" / "deep.md").write_text("# Deep\n", encoding="utf-8")
    return docs


@pytest.fixture
def site_config(tmp_path: Path, source_dir: Path) -> SiteConfig:
    """Build a site configuration rooted in a temp directory."""
    return SiteConfig(
        title="Fixture Docs",
        description="Fixture description",
        base_url="https://docs.example.invalid",
        base_path="",
        source_dir=source_dir,
        output_dir=tmp_path / "dist",
        pygments_style="monokai",
    )


@pytest.fixture
def prefixed_config(site_config: SiteConfig) -> SiteConfig:
    """Return ``site_config`` deployed under a ``/handbook`` subpath."""
    return dc.replace(
        site_config,
        base_url="https://docs.example.invalid/handbook",
        base_path="/handbook",
    )
