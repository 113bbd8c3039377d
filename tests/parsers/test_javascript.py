"""Tests for the JavaScript block comment splitter."""

from __future__ import annotations

from blockdoc.parsers.javascript import comment_description, extract_comments, split_javascript

SOURCE = (
    'var fs = require("fs");\n'
    "\n"
    "/**\n"
    " * Reads a file.\n"
    " *\n"
    " * @param {string} name\n"
    " */\n"
    "function read(name) {\n"
    "\treturn fs.readFileSync(name);\n"
    "}\n"
)


def test_split_produces_preamble_and_comment_section() -> None:
    sections = split_javascript(SOURCE)

    assert len(sections) == 2
    preamble, documented = sections
    assert preamble.docs_text == ""
    assert preamble.code_text == 'var fs = require("fs");\n'
    assert documented.docs_text == "Reads a file."
    assert documented.code_text == (
        "function read(name) {\n"
        "    return fs.readFileSync(name);\n"
        "}\n"
    )


def test_split_without_comments_returns_nothing() -> None:
    assert split_javascript("var a = 1;\n// line comments are code\n") == []


def test_split_skips_blank_preamble() -> None:
    sections = split_javascript("\n\n/** Docs */\nvar a = 1;")

    assert len(sections) == 1
    assert sections[0].docs_text == "Docs"
    assert sections[0].code_text == "var a = 1;"


def test_code_span_stops_at_next_comment() -> None:
    code = (
        "/** First */\n"
        "\n"
        "var a = 1;\n"
        "\n"
        "/* Second */\n"
        "var b = 2;"
    )
    sections = split_javascript(code)

    assert [section.docs_text for section in sections] == ["First", "Second"]
    assert sections[0].code_text == "\nvar a = 1;\n"
    assert sections[1].code_text == "var b = 2;"


def test_only_leading_tabs_are_expanded() -> None:
    code = "/** Docs */\nif (a) {\n\t\tcall('\\t', b);\t// trailing\n}"
    sections = split_javascript(code)

    lines = sections[0].code_text.split("\n")
    assert lines[1] == "        call('\\t', b);\t// trailing"


def test_comment_markers_inside_strings_are_ignored() -> None:
    code = 'var s = "/** not a comment */";\n'
    assert extract_comments(code) == []


def test_extract_comments_reports_lines() -> None:
    code = "var a;\n/**\n * Hello\n */\nfunction hello() {}\n/** inline */ var b;\n"
    comments = extract_comments(code)

    assert [(comment.line, comment.end_line) for comment in comments] == [(2, 4), (6, 6)]
    assert comments[0].trailing_code is False
    assert comments[1].trailing_code is True
    assert comments[0].code_start == 5
    assert comments[1].code_start == 6


def test_code_lines_cover_the_file_once() -> None:
    code = (
        "'use strict';\n"
        "/** One */\n"
        "var one = 1;\n"
        "/** Two */\n"
        "var two = 2;\n"
        "var three = 3;"
    )
    sections = split_javascript(code)
    joined = "\n".join(section.code_text for section in sections)

    assert joined == "'use strict';\nvar one = 1;\nvar two = 2;\nvar three = 3;"


def test_comment_description_strips_gutter_and_tags() -> None:
    raw = "/**\n * # Title\n *\n * Body text.\n * @returns {number}\n */"
    assert comment_description(raw) == "# Title\n\nBody text."


def test_comment_description_tag_only_is_empty() -> None:
    assert comment_description("/** @private */") == ""


def test_comment_description_keeps_markdown_lists_without_gutter() -> None:
    raw = "/*\n * - one\n * - two\n */"
    assert comment_description(raw) == "- one\n- two"


def test_blank_lines_after_comment_stay_in_code() -> None:
    code = "/** A */\n\nvar a = 1;\n/** B */\n\n\nvar b = 2;"
    sections = split_javascript(code)

    assert [section.code_text for section in sections] == ["\nvar a = 1;", "\n\nvar b = 2;"]
    assert "\n".join(section.code_text for section in sections) == "\nvar a = 1;\n\n\nvar b = 2;"
