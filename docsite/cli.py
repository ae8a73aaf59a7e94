"""Cyclopts CLI entrypoint for building and serving documentation sites.

The ``docsite`` console script defined here renders a flat directory of
Markdown files into a static site (``docsite build``) and serves the result
with a small development HTTP server (``docsite serve``). Options can also be
supplied through ``DOCSITE_``-prefixed environment variables, which is how CI
selects the production profile.

Examples
--------
Build the site with the default configuration:

>>> from docsite.cli import main
>>> main()  # doctest: +SKIP

Build for production into a custom directory:

>>> from docsite.cli import app
>>> app(["build", "--production", "--output-dir", "public"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ServerConfig, load_server_config, load_site_config
from .generator import SiteGenerator
from .server import serve as serve_directory

DEFAULT_CONFIG = Path("config/site.yaml")
PRODUCTION_PROFILE = "production"

app = App(name="docsite", config=cyclopts.config.Env("DOCSITE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config_path(config: Path | None) -> Path | None:
    """Return ``config`` or the default config file when it exists."""
    if config is not None:
        return config
    return DEFAULT_CONFIG if DEFAULT_CONFIG.exists() else None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render the Markdown source directory into a static site.")
def build(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to site config", env_var="DOCSITE_CONFIG")
    ] = None,
    profile: typ.Annotated[
        str | None,
        Parameter(help="Deployment profile (base URL and path)", env_var="DOCSITE_PROFILE"),
    ] = None,
    production: typ.Annotated[
        bool, Parameter(help="Shortcut for --profile production")
    ] = False,
    source_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the Markdown source folder", env_var="DOCSITE_SOURCE_DIR"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="DOCSITE_OUTPUT_DIR"),
    ] = None,
    clean: typ.Annotated[
        bool, Parameter(help="Remove the output folder before building")
    ] = False,
    verbose: bool = False,
) -> None:
    """Build the documentation site for the requested profile.

    Parameters
    ----------
    config : Path or None, optional
        Path to the ``site.yaml`` configuration file; ``config/site.yaml`` is
        used when present, otherwise built-in defaults apply.
    profile : str or None, optional
        Profile selecting ``base_url`` and ``base_path``; defaults to
        ``development``.
    production : bool, optional
        Select the ``production`` profile; conflicts with ``profile``.
    source_dir : Path or None, optional
        Override the configured Markdown directory.
    output_dir : Path or None, optional
        Override the configured output root.
    clean : bool, optional
        Delete the output root first so stale pages do not survive.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the output tree and prints each written path.

    Raises
    ------
    ValueError
        If both ``production`` and a different ``profile`` are given.
    """
    _configure_logging(verbose)
    if production:
        if profile and profile != PRODUCTION_PROFILE:
            msg = f"Cannot combine --production with --profile {profile}."
            raise ValueError(msg)
        profile = PRODUCTION_PROFILE

    site_config = load_site_config(_resolve_config_path(config), profile=profile)
    generator = SiteGenerator(
        site_config, source_dir=source_dir, output_dir=output_dir
    )
    result = generator.run(clean=clean)
    for path in result.written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Serve a built site with the development file server.")
def serve(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to site config", env_var="DOCSITE_CONFIG")
    ] = None,
    root: typ.Annotated[
        Path | None, Parameter(help="Override the folder to serve", env_var="DOCSITE_ROOT")
    ] = None,
    host: typ.Annotated[
        str | None, Parameter(help="Interface to bind", env_var="DOCSITE_HOST")
    ] = None,
    port: typ.Annotated[
        int | None, Parameter(help="Port to bind", env_var="DOCSITE_PORT")
    ] = None,
    sidecar: typ.Annotated[
        list[str] | None,
        Parameter(help="Filename served from the root wherever it is requested"),
    ] = None,
    verbose: bool = False,
) -> None:
    """Serve the output root until interrupted.

    Parameters
    ----------
    config : Path or None, optional
        Path to the ``site.yaml`` configuration file holding a ``server`` block.
    root : Path or None, optional
        Override the served folder (defaults to the site's output directory).
    host : str or None, optional
        Override the bind interface.
    port : int or None, optional
        Override the bind port.
    sidecar : list[str] or None, optional
        Extra sidecar filenames added to the configured ones.
    verbose : bool, optional
        Enable debug logging, including one line per request.
    """
    _configure_logging(verbose)
    server_config = load_server_config(_resolve_config_path(config))
    resolved = ServerConfig(
        root=root or server_config.root,
        host=host or server_config.host,
        port=server_config.port if port is None else port,
        sidecar_files=server_config.sidecar_files + tuple(sidecar or ()),
    )
    print(f"serving {_format_path(resolved.root)} at http://{resolved.host}:{resolved.port}/")
    serve_directory(
        resolved.root,
        host=resolved.host,
        port=resolved.port,
        sidecar_files=resolved.sidecar_files,
    )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docsite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
