"""Core data models shared across blockdoc components."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Section:
    """One documentation/code pairing extracted from a source file."""

    docs_text: str
    code_text: str
    docs_html: str = ""
    code_html: str = ""


@dataclass
class SourceEntry:
    """A single input file and the page it will be written to."""

    full_path: str
    name: str
    relative_name: str
    output_path: str
    is_index: bool = False
    sections: List[Section] = field(default_factory=list)
