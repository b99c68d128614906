"""Cyclopts CLI entrypoint for rendering pagesmith documentation sites.

The ``pagesmith`` console script reads a ``pagesmith.yaml`` site
configuration, renders every topic through the theme templates, and prints
the path of each written page.

Examples
--------
Build the site described by the default configuration:

>>> from pagesmith.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with per-page progress:

>>> from pagesmith.cli import app
>>> app.run(["build", "--output-dir", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import GENERATOR_NAME, VERSION
from .config import load_site_config
from .generator import DocumentationGenerator
from .reporting import ActivityReporter

DEFAULT_CONFIG = Path("pagesmith.yaml")
LOG_FORMAT = "[%(levelname)s] %(message)s"

app = App(
    name=GENERATOR_NAME,
    version=VERSION,
    config=cyclopts.config.Env("PAGESMITH_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render documentation pages from topics and theme templates.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="PAGESMITH_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="PAGESMITH_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Report every rendered page")
    ] = False,
) -> None:
    """Render the documentation site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``pagesmith.yaml`` configuration file (overridable via
        ``PAGESMITH_CONFIG``).
    output_dir : Path or None, optional
        Override for the output directory named in the configuration.
    verbose : bool, optional
        Log each template load and page render, not only the activities.

    Returns
    -------
    None
        Writes rendered pages and prints one ``wrote <path>`` line per page.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    site_config = load_site_config(config)
    reporter = ActivityReporter()
    generator = DocumentationGenerator(
        site_config, reporter=reporter, output_dir=output_dir
    )
    for path in generator.run():
        print(f"wrote {_format_path(path)}")
    if reporter.warning_count:
        print(f"{reporter.warning_count} warning(s) reported")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pagesmith` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
