"""Tree-sitter powered block comment splitter for JavaScript."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from ..models import Section

_GUTTER = re.compile(r"^[ \t]*\* ?", re.MULTILINE)
_LEADING_TABS = re.compile(r"^\t+")

_parser: Optional[Parser] = None


@dataclass
class BlockComment:
    """A block comment located in a JavaScript file.

    ``line`` is the 1-based line the comment opens on, ``end_line`` the line
    holding its closing ``*/``. ``trailing_code`` is true when code follows
    the comment on that closing line.
    """

    line: int
    end_line: int
    trailing_code: bool
    description: str

    @property
    def code_start(self) -> int:
        """The 1-based line where the code following this comment begins."""
        return self.end_line if self.trailing_code else self.end_line + 1


def _get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(Language(tree_sitter_javascript.language()))
    return _parser


def _iter_comment_nodes(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            yield node
            continue
        stack.extend(reversed(node.children))


def comment_description(raw: str) -> str:
    """Return the prose of a block comment, without its gutter or tags."""
    body = raw[2:-2] if raw.endswith("*/") else raw[2:]
    if body[:1] in ("*", "!"):
        body = body[1:]
    body = _GUTTER.sub("", body).strip()
    if body.startswith("@"):
        return ""
    return body.split("\n@", 1)[0].rstrip()


def extract_comments(code: str) -> List[BlockComment]:
    """Return every block comment in ``code`` in source order."""
    source = code.encode("utf-8")
    tree = _get_parser().parse(source)

    comments: List[BlockComment] = []
    for node in _iter_comment_nodes(tree.root_node):
        raw = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
        if not raw.startswith("/*"):
            continue
        line_end = source.find(b"\n", node.end_byte)
        rest = source[node.end_byte : line_end if line_end != -1 else len(source)]
        comments.append(
            BlockComment(
                line=node.start_point[0] + 1,
                end_line=node.end_point[0] + 1,
                trailing_code=bool(rest.strip()),
                description=comment_description(raw),
            )
        )
    comments.sort(key=lambda comment: comment.line)
    return comments


def _expand_tabs(line: str) -> str:
    return _LEADING_TABS.sub(lambda match: "    " * len(match.group(0)), line)


def split_javascript(code: str) -> List[Section]:
    """Split JavaScript source into sections keyed on its block comments."""
    comments = extract_comments(code)
    if not comments:
        return []

    lines = code.split("\n")
    sections: List[Section] = []

    preamble = "\n".join(lines[: comments[0].line - 1])
    if preamble.strip():
        sections.append(Section(docs_text="", code_text=preamble))

    for position, comment in enumerate(comments):
        following = comments[position + 1] if position + 1 < len(comments) else None
        code_end = following.line - 1 if following is not None else len(lines)
        span = [_expand_tabs(line) for line in lines[comment.code_start - 1 : code_end]]
        sections.append(Section(docs_text=comment.description, code_text="\n".join(span)))

    return sections


__all__ = ["BlockComment", "comment_description", "extract_comments", "split_javascript"]
