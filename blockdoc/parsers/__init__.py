"""Section splitters and the registry that dispatches on file type."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List, Optional

from ..errors import UnsupportedFileType
from ..logging import get_logger
from ..models import Section
from .javascript import split_javascript
from .markdown import split_markdown

Splitter = Callable[[str], List[Section]]

_ENTRY_POINT_GROUP = "blockdoc.splitters"

_BUILTIN_SPLITTERS: Dict[str, Splitter] = {
    "js": split_javascript,
    "mjs": split_javascript,
    "cjs": split_javascript,
    "md": split_markdown,
    "markdown": split_markdown,
}

logger = get_logger("parsers")


def normalise_type(type_tag: str) -> str:
    """Turn an extension such as ``.JS`` into a registry key such as ``js``."""
    if type_tag.startswith("."):
        type_tag = type_tag[1:]
    return type_tag.lower()


class SplitterRegistry:
    """Maps file types to the splitter that turns their contents into sections."""

    def __init__(self, splitters: Optional[Dict[str, Splitter]] = None, *, load_plugins: bool = True) -> None:
        self._splitters: Dict[str, Splitter] = dict(_BUILTIN_SPLITTERS if splitters is None else splitters)
        self._plugins_loaded = not load_plugins

    def register(self, type_tag: str, splitter: Splitter) -> None:
        if not callable(splitter):
            raise TypeError(f"Splitter for '{type_tag}' must be callable")
        self._splitters[normalise_type(type_tag)] = splitter

    def get(self, type_tag: str) -> Optional[Splitter]:
        """Return the splitter for ``type_tag`` or ``None`` when unsupported."""
        self._load_plugins()
        return self._splitters.get(normalise_type(type_tag))

    def split(self, code: str, type_tag: str) -> List[Section]:
        splitter = self.get(type_tag)
        if splitter is None:
            raise UnsupportedFileType(type_tag)
        return splitter(code)

    def types(self) -> List[str]:
        self._load_plugins()
        return sorted(self._splitters)

    def _load_plugins(self) -> None:
        if self._plugins_loaded:
            return
        self._plugins_loaded = True
        for entry in _iter_entry_points():
            if normalise_type(entry.name) in self._splitters:
                logger.debug("Built-in splitter for '%s' takes precedence over plugin", entry.name)
                continue
            try:
                loaded = entry.load()
            except Exception as exc:  # pragma: no cover - third-party plugin failure
                logger.warning("Failed to load splitter plugin '%s': %s", entry.name, exc)
                continue
            self.register(entry.name, loaded)


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


default_registry = SplitterRegistry()


def register_splitter(type_tag: str, splitter: Splitter) -> None:
    """Register ``splitter`` for ``type_tag`` on the default registry."""
    default_registry.register(type_tag, splitter)


def splitter_for(type_tag: str) -> Optional[Splitter]:
    return default_registry.get(type_tag)


def split(code: str, type_tag: str) -> List[Section]:
    """Split ``code`` into sections using the splitter registered for ``type_tag``.

    Raises :class:`UnsupportedFileType` when no splitter handles the type.
    """
    return default_registry.split(code, type_tag)


__all__ = [
    "Splitter",
    "SplitterRegistry",
    "default_registry",
    "normalise_type",
    "register_splitter",
    "split",
    "split_javascript",
    "split_markdown",
    "splitter_for",
]
