"""Markdown files are documentation from top to bottom."""

from __future__ import annotations

from typing import List

from ..models import Section


def split_markdown(code: str) -> List[Section]:
    return [Section(docs_text=code, code_text="")]


__all__ = ["split_markdown"]
