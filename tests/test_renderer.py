"""Tests for blockdoc.renderer."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from blockdoc.config import Configuration
from blockdoc.models import Section, SourceEntry
from blockdoc.renderer import Renderer


@pytest.fixture
def config(tmp_path: Path) -> Configuration:
    return Configuration.resolve({"output": str(tmp_path / "docs")})


def _entry(config: Configuration, name: str, relative: str, sections: list[Section]) -> SourceEntry:
    return SourceEntry(
        full_path=f"/src/{name}",
        name=name,
        relative_name=relative,
        output_path=os.path.join(config.output, *relative.split("/")) + ".html",
        sections=sections,
    )


def test_title_from_leading_heading(config: Configuration) -> None:
    entry = _entry(
        config,
        "a.js",
        "a",
        [Section(docs_text="", code_text="var a;"), Section(docs_text="# Title\n\nText", code_text="")],
    )
    assert Renderer(config).extract_title(entry) == ("Title", True)


def test_setext_heading_counts_as_title(config: Configuration) -> None:
    entry = _entry(config, "a.md", "a", [Section(docs_text="Title\n=====\n\nBody", code_text="")])
    assert Renderer(config).extract_title(entry) == ("Title", True)


def test_title_falls_back_to_name(config: Configuration) -> None:
    entry = _entry(
        config,
        "lib/a.js",
        "lib/a",
        [Section(docs_text="Intro paragraph.\n\n# Later heading", code_text="")],
    )
    assert Renderer(config).extract_title(entry) == ("lib/a.js", False)


def test_second_level_heading_is_not_a_title(config: Configuration) -> None:
    entry = _entry(config, "a.md", "a", [Section(docs_text="## Subtitle", code_text="")])
    assert Renderer(config).extract_title(entry) == ("a.md", False)


def test_no_docs_uses_name(config: Configuration) -> None:
    entry = _entry(config, "a.js", "a", [Section(docs_text="", code_text="var a;")])
    assert Renderer(config).extract_title(entry) == ("a.js", False)


def test_render_fills_section_html(config: Configuration) -> None:
    section = Section(docs_text="Some *emphasis*.", code_text="var answer = 42;\n")
    entry = _entry(config, "a.js", "a", [section])

    html = Renderer(config).render(entry, [entry])

    assert "<em>emphasis</em>" in section.docs_html
    assert section.code_html.startswith("<div class='highlight'><pre>")
    assert section.code_html.endswith("</pre></div>")
    assert "answer" in section.code_html
    assert "\n</pre>" not in section.code_html
    assert section.docs_html in html
    assert "<title>a.js</title>" in html


def test_render_empty_code(config: Configuration) -> None:
    renderer = Renderer(config)
    assert renderer.highlight_code("") == "<div class='highlight'><pre></pre></div>"


def test_destination_links_are_relative(config: Configuration) -> None:
    nested = _entry(config, "util/b.js", "util/b", [Section(docs_text="B", code_text="")])
    top = _entry(config, "a.js", "a", [Section(docs_text="A", code_text="")])

    html = Renderer(config).render(nested, [top, nested])

    assert 'href="../a.html"' in html
    assert 'href="b.html"' in html
    assert 'href="../public/style.css"' in html


def test_fenced_code_in_docs_is_highlighted(config: Configuration) -> None:
    docs = "Example:\n\n```javascript\nvar x = 1;\n```\n"
    html = Renderer(config).render_docs(docs)
    assert "codehilite" in html
