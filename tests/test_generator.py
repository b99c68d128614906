"""End-to-end tests for rendering a documentation site from disk."""

from __future__ import annotations

import logging
import typing as typ

import pytest
from bs4 import BeautifulSoup

from pagesmith import cli
from pagesmith.config import load_site_config
from pagesmith.generator import DocumentationGenerator
from pagesmith.reporting import ActivityReporter
from pagesmith.templates.errors import TemplateExecutionError

if typ.TYPE_CHECKING:
    from pathlib import Path

CONFIG_TEMPLATE = """
theme_dir: theme
topics_dir: docs
output_dir: public
output_format: {output_format}
topic_order:
  - guides/setup.md
settings:
  project_name: Demo
  footer: "Built for **{{{{ project_name }}}}**"
markdown_settings:
  - footer
"""

TOPIC_PAGE = (
    "<html><head><title>{{ model.title }} | {{ project_name }}</title></head>"
    "<body><main>{{ model }}</main>"
    '<footer>{% include "footer_partial" %}</footer>'
    "</body></html>\n"
)


def _write_site(tmp_path: Path, output_format: str = "html") -> Path:
    theme = tmp_path / "theme"
    theme.mkdir()
    (theme / "topic_page.jinja").write_text(TOPIC_PAGE, encoding="utf-8")

    docs = tmp_path / "docs"
    (docs / "guides").mkdir(parents=True)
    (docs / "README.md").write_text(
        "# Demo Project\n\nRead the [setup guide](guides/setup.md).\n",
        encoding="utf-8",
    )
    (docs / "guides" / "setup.md").write_text(
        "# Setup\n\nGo back [home](../README.md) or visit "
        "[the web](https://example.com).\n",
        encoding="utf-8",
    )
    (docs / "glossary.md").write_text("# Glossary\n\nTerms.\n", encoding="utf-8")

    config = tmp_path / "pagesmith.yaml"
    config.write_text(
        CONFIG_TEMPLATE.format(output_format=output_format), encoding="utf-8"
    )
    return config


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


def test_renders_html_site(tmp_path: Path) -> None:
    """Topics become HTML pages with rewritten links and rendered settings."""
    config = load_site_config(_write_site(tmp_path))
    written = DocumentationGenerator(config).run()

    public = tmp_path / "public"
    assert written == [
        public / "index.html",
        public / "guides" / "setup.html",
        public / "glossary.html",
    ], f"unexpected pages or order: {written!r}"

    home = _soup(public / "index.html")
    assert home.title is not None, "home page should have a title"
    assert home.title.get_text() == "Demo Project | Demo", "home title mismatch"
    link = home.select_one("main a")
    assert link is not None, "home page should link to the guide"
    assert link["href"] == "/guides/setup.html", "topic link not rewritten"
    footer = home.select_one("footer")
    assert footer is not None, "footer partial missing"
    assert footer.get_text() == "Built for Demo", "footer expression not evaluated"
    assert footer.select_one("strong") is not None, "footer markdown not rendered"

    setup = _soup(public / "guides" / "setup.html")
    hrefs = [anchor["href"] for anchor in setup.select("main a")]
    assert hrefs == ["/index.html", "https://example.com"], (
        f"unexpected links on the setup page: {hrefs!r}"
    )


def test_renders_markdown_site(tmp_path: Path) -> None:
    """Markdown output keeps topic sources and uses the ``.md`` extension."""
    config = load_site_config(_write_site(tmp_path, "markdown"))
    written = DocumentationGenerator(config, output_dir=tmp_path / "md").run()

    assert [path.name for path in written] == ["index.md", "setup.md", "glossary.md"], (
        f"unexpected pages: {written!r}"
    )
    text = (tmp_path / "md" / "guides" / "setup.md").read_text(encoding="utf-8")
    assert "Go back [home](/index.md)" in text, "topic link not rewritten"
    assert "[the web](https://example.com)" in text, "external link changed"
    home = (tmp_path / "md" / "index.md").read_text(encoding="utf-8")
    assert "[setup guide](/guides/setup.md)" in home, "home link not rewritten"
    assert "Built for **Demo**" in text, "markdown footer not evaluated"


def test_templated_api_topic(tmp_path: Path) -> None:
    """An ``api`` theme template renders the API page when no API.md exists."""
    config_path = _write_site(tmp_path)
    (tmp_path / "theme" / "api.jinja").write_text(
        "<p class=\"api\">Reference for {{ project_name }}</p>", encoding="utf-8"
    )
    written = DocumentationGenerator(load_site_config(config_path)).run()

    api_page = tmp_path / "public" / "api.html"
    assert api_page in written, "API page should be written"
    paragraph = _soup(api_page).select_one("main p.api")
    assert paragraph is not None, "API template output missing"
    assert paragraph.get_text() == "Reference for Demo", "API template data missing"


def test_warns_without_home_page(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A site without WELCOME.md or README.md is built with a warning."""
    config_path = _write_site(tmp_path)
    (tmp_path / "docs" / "README.md").unlink()
    reporter = ActivityReporter()

    with caplog.at_level(logging.WARNING, logger="pagesmith"):
        written = DocumentationGenerator(
            load_site_config(config_path), reporter=reporter
        ).run()

    assert reporter.warning_count == 1, "one warning expected"
    assert "No home page found" in caplog.text, "warning text missing"
    assert all(path.name != "index.html" for path in written), (
        "no home page should be written"
    )


def test_missing_theme_directory(tmp_path: Path) -> None:
    """Building without a theme directory fails clearly."""
    config_path = _write_site(tmp_path)
    for template in (tmp_path / "theme").iterdir():
        template.unlink()
    (tmp_path / "theme").rmdir()

    with pytest.raises(FileNotFoundError, match="Theme directory"):
        DocumentationGenerator(load_site_config(config_path)).run()


def test_failed_render_leaves_no_partial_page(tmp_path: Path) -> None:
    """A page whose render fails is not written at all."""
    config_path = _write_site(tmp_path)
    (tmp_path / "theme" / "topic_page.jinja").write_text(
        "<main>{{ model }}</main>{{ 60 // (model.title | length - 5) }}\n",
        encoding="utf-8",
    )

    with pytest.raises(TemplateExecutionError, match="topic_page"):
        DocumentationGenerator(load_site_config(config_path)).run()

    public = tmp_path / "public"
    assert (public / "index.html").is_file(), "pages before the failure are kept"
    assert not (public / "guides" / "setup.html").exists(), (
        "the failing page must not be left truncated on disk"
    )

def test_cli_build_reports_pages(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The ``build`` command prints one line per written page."""
    config_path = _write_site(tmp_path)

    cli.build(config=config_path, output_dir=tmp_path / "site")

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3, f"expected three pages, got {lines!r}"
    assert all(line.startswith("wrote ") for line in lines), (
        f"unexpected output: {lines!r}"
    )
    assert (tmp_path / "site" / "index.html").is_file(), "index page missing"
