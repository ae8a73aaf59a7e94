"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docsite._constants import DEFAULT_SIDECAR_EXTENSIONS

from .helpers import (
    _normalize_base_path,
    _normalize_extensions,
    _normalize_names,
    _optional_str,
    _require_mapping,
)
from .models import ServerConfig, SiteConfig, SiteConfigError

DEFAULT_PROFILE = "development"
DEFAULT_PROFILES: dict[str, dict[str, str]] = {
    "development": {"base_url": "http://localhost:3000", "base_path": ""},
    "production": {
        "base_url": "https://ericc-ch.github.io/opencode-serve",
        "base_path": "/opencode-serve",
    },
}


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    """Return the top-level mapping stored in the YAML file at ``path``."""
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


def load_site_config(path: Path | None, *, profile: str | None = None) -> SiteConfig:
    """Load the YAML configuration describing a documentation site build.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). When ``None`` the built-in defaults are used.
    profile : str, optional
        Deployment profile selecting ``base_url`` and ``base_path``; defaults
        to ``development``.

    Returns
    -------
    SiteConfig
        Immutable build settings with the profile's URLs applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given and does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the title is empty, a section has the wrong shape, or the
        requested profile is not defined.

    Examples
    --------
    >>> from docsite.config import load_site_config
    >>> load_site_config(None).output_dir
    PosixPath('dist')
    """
    raw = _read_yaml(path) if path is not None else {}
    site = _require_mapping(raw.get("site"), "site")
    profiles = _merge_profiles(_require_mapping(raw.get("profiles"), "profiles"))

    profile_name = profile or DEFAULT_PROFILE
    try:
        selected = profiles[profile_name]
    except KeyError as exc:
        available = ", ".join(sorted(profiles))
        msg = f"Unknown profile '{profile_name}'. Known profiles: {available}"
        raise SiteConfigError(msg) from exc

    base = SiteConfig()
    title = _optional_str(site.get("title", base.title))
    if not title:
        msg = "Site configuration requires a non-empty 'title'."
        raise SiteConfigError(msg)

    keywords = _normalize_names(site.get("keywords"))
    og_image = site.get("og_image", base.og_image)

    return SiteConfig(
        title=title,
        description=_optional_str(site.get("description")) or base.description,
        base_url=_optional_str(selected.get("base_url")) or base.base_url,
        base_path=_normalize_base_path(selected.get("base_path")),
        source_dir=Path(site.get("source_dir", base.source_dir)),
        output_dir=Path(site.get("output_dir", base.output_dir)),
        pygments_style=site.get("pygments_style", base.pygments_style),
        author=_optional_str(site.get("author")) or base.author,
        keywords=keywords,
        theme_color=site.get("theme_color", base.theme_color),
        og_image=_optional_str(og_image),
        not_found_page=bool(site.get("not_found_page", base.not_found_page)),
        sidecar_extensions=_normalize_extensions(
            site.get("sidecar_extensions"), DEFAULT_SIDECAR_EXTENSIONS
        ),
    )


def load_server_config(path: Path | None) -> ServerConfig:
    """Load the ``server`` block of the YAML configuration.

    The server root defaults to the site's ``output_dir`` so ``docsite serve``
    serves whatever ``docsite build`` produced.
    """
    raw = _read_yaml(path) if path is not None else {}
    site = _require_mapping(raw.get("site"), "site")
    server = _require_mapping(raw.get("server"), "server")
    base = ServerConfig()
    root = server.get("root", site.get("output_dir", base.root))
    port = server.get("port", base.port)
    try:
        port_number = int(port)
    except (TypeError, ValueError) as exc:
        msg = f"Server port must be an integer, got {port!r}."
        raise SiteConfigError(msg) from exc
    return ServerConfig(
        root=Path(root),
        host=_optional_str(server.get("host")) or base.host,
        port=port_number,
        sidecar_files=_normalize_names(server.get("sidecar_files")),
    )


def _merge_profiles(
    overrides: typ.Mapping[str, typ.Any],
) -> dict[str, typ.Mapping[str, typ.Any]]:
    """Merge configured profiles over the built-in development/production pair."""
    merged: dict[str, typ.Mapping[str, typ.Any]] = dict(DEFAULT_PROFILES)
    for name, payload in overrides.items():
        match payload:
            case dict():
                combined = dict(merged.get(name, {}))
                combined.update(payload)
                merged[name] = combined
            case _:
                msg = f"Profile '{name}' must be a mapping."
                raise SiteConfigError(msg)
    return merged


__all__ = ["DEFAULT_PROFILE", "load_server_config", "load_site_config"]
