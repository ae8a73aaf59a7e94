"""Build and serve static documentation sites from Markdown.

This package exposes the CLI entry points used by ``docsite build`` and
``docsite serve`` to render a flat Markdown directory into a static site and
to preview it locally.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsite import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
