"""Layout lookup and template loading."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import FrozenSet

from jinja2 import Environment, FileSystemLoader, Template

from .errors import InvalidLayout, MissingTemplate

BUILTIN_LAYOUT_DIR = Path(__file__).with_name("layouts")
ASSETS_DIRNAME = "public"


class LayoutRegistry:
    """Read-only lookup of the layouts bundled in a directory.

    The directory is only listed the first time a name is looked up.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or BUILTIN_LAYOUT_DIR

    @cached_property
    def names(self) -> FrozenSet[str]:
        if not self.root.is_dir():
            return frozenset()
        return frozenset(child.name for child in self.root.iterdir() if child.is_dir())

    def resolve(self, layout: str) -> Path:
        """Return the directory for a built-in layout name or a layout path."""
        if layout in self.names:
            return self.root / layout

        candidate = Path(layout).expanduser().resolve()
        if candidate.is_dir():
            return candidate

        raise InvalidLayout(f"Not a valid layout: '{layout}'")


def load_template(layout_dir: Path, template: str) -> Template:
    """Compile ``template`` (relative to ``layout_dir``) with Jinja2."""
    path = layout_dir / template
    if not path.is_file():
        raise MissingTemplate(f"Template file '{template}' is missing.")

    loader = FileSystemLoader(str(path.parent))
    env = Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)
    return env.get_template(path.name)


__all__ = ["ASSETS_DIRNAME", "BUILTIN_LAYOUT_DIR", "LayoutRegistry", "load_template"]
