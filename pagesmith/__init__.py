"""Render documentation models and markdown topics into themed pages.

pagesmith turns a documentation model (namespaces, types, members, topics)
into HTML or Markdown pages with Jinja2 theme templates. Values printed by a
template are formatted by type: comments become markup, members and
namespaces become links, topics render their own content.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pagesmith import main
>>> main()  # doctest: +SKIP
>>> from pagesmith import app
>>> app(["build", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
