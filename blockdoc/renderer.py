"""HTML rendering of parsed source entries."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple, Union
from xml.etree import ElementTree

import markdown
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import JavascriptLexer

from .config import Configuration
from .models import Section, SourceEntry


class Renderer:
    """Turns the sections of a source entry into a finished HTML page."""

    CODE_WRAPPER = "<div class='highlight'><pre>{code}</pre></div>"

    def __init__(self, config: Configuration) -> None:
        self.config = config
        self._markdown = markdown.Markdown(
            extensions=list(config.markdown.extensions),
            extension_configs=config.markdown.extension_configs,
        )
        self._lexer = JavascriptLexer()
        self._formatter = HtmlFormatter(nowrap=True)

    def render(
        self,
        entry: SourceEntry,
        entries: Sequence[SourceEntry],
        context: Optional[dict[str, Any]] = None,
    ) -> str:
        """Return the HTML page for ``entry``.

        ``entries`` is the full list of documented sources so templates can
        link between pages. Extra ``context`` keys are passed to the template
        as-is.
        """
        for section in entry.sections:
            section.code_html = self.highlight_code(section.code_text)
            section.docs_html = self.render_docs(section.docs_text)

        title, has_title = self.extract_title(entry)
        out_dir = os.path.dirname(entry.output_path)

        def destination(target: Union[SourceEntry, str]) -> str:
            if isinstance(target, SourceEntry):
                target = target.output_path
            return Path(os.path.relpath(os.path.join(self.config.output, target), out_dir)).as_posix()

        return self.config.template.render(
            source=entry,
            sources=entries,
            title=title,
            has_title=has_title,
            sections=entry.sections,
            destination=destination,
            css=destination(os.path.basename(self.config.css)) if self.config.css else None,
            **(context or {}),
        )

    def highlight_code(self, code: str) -> str:
        if not code:
            return self.CODE_WRAPPER.format(code="")
        highlighted = highlight(code, self._lexer, self._formatter)
        return self.CODE_WRAPPER.format(code=highlighted.rstrip())

    def render_docs(self, text: str) -> str:
        self._markdown.reset()
        return self._markdown.convert(text)

    def extract_title(self, entry: SourceEntry) -> Tuple[str, bool]:
        """Use a leading level-one heading as the page title.

        Only the first block of the first section with documentation is
        considered; otherwise the entry's display name is the title.
        """
        first = next((section for section in entry.sections if section.docs_text), None)
        if first is not None:
            block = self._first_block(first)
            if block is not None and block.tag == "h1":
                return (block.text or "").strip(), True
        return entry.name, False

    def _first_block(self, section: Section) -> Optional[ElementTree.Element]:
        md = self._markdown
        md.reset()
        lines = section.docs_text.split("\n")
        for preprocessor in md.preprocessors:
            lines = preprocessor.run(lines)
        root = md.parser.parseDocument(lines).getroot()
        return next(iter(root), None)


__all__ = ["Renderer"]
