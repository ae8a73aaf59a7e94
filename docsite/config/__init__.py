"""Load and validate site configuration YAML for docsite builds.

This subpackage parses the project's ``site.yaml`` file, applies the selected
deployment profile (``development`` or ``production`` by default), and
produces frozen dataclasses (:class:`SiteConfig`, :class:`ServerConfig`) that
the builder and the development server consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docsite.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"), profile="production")  # doctest: +SKIP
>>> site.base_path  # doctest: +SKIP
'/opencode-serve'
"""

from .loader import DEFAULT_PROFILE, load_server_config, load_site_config
from .models import ServerConfig, SiteConfig, SiteConfigError

__all__ = [
    "DEFAULT_PROFILE",
    "ServerConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_server_config",
    "load_site_config",
]
