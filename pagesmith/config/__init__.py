"""Load and validate site configuration YAML for pagesmith builds.

The configuration names the theme templates, the topics to render, the
output format, and the theme settings shared by every page. The primary entry
point is :func:`load_site_config`, which applies defaults, resolves relative
directories against the configuration file, and returns a
:class:`SiteConfig`.

Examples
--------
>>> from pathlib import Path
>>> from pagesmith.config import load_site_config
>>> site = load_site_config(Path("pagesmith.yaml"))  # doctest: +SKIP
>>> site.topic_order  # doctest: +SKIP
['README.md', 'guides/getting-started']
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
