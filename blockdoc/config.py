"""Run configuration for blockdoc."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml
from jinja2 import Template

from .errors import ConfigError
from .layout import LayoutRegistry, load_template
from .logging import get_logger

DEFAULT_MARKDOWN: Dict[str, Any] = {
    "extensions": ["fenced_code", "tables", "codehilite"],
    "extension_configs": {"codehilite": {"guess_lang": False}},
}

DEFAULTS: Dict[str, Any] = {
    "output": "docs",
    "layout": "parallel",
    "template": "page.html",
    "assets": True,
    "index": None,
    "silent": True,
    "recursive": False,
    "css": None,
    "markdown": None,
}

logger = get_logger("run")


@dataclass(frozen=True)
class MarkdownOptions:
    """Extensions and extension settings handed to Python-Markdown."""

    extensions: Tuple[str, ...] = tuple(DEFAULT_MARKDOWN["extensions"])
    extension_configs: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: {
            name: dict(settings) for name, settings in DEFAULT_MARKDOWN["extension_configs"].items()
        }
    )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MarkdownOptions":
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("Markdown options must be a mapping")
        merged = {**DEFAULT_MARKDOWN, **data}
        extensions = merged.get("extensions") or []
        configs = merged.get("extension_configs") or {}
        if not isinstance(extensions, (list, tuple)) or not all(isinstance(item, str) for item in extensions):
            raise ConfigError("Markdown 'extensions' must be a list of extension names")
        if not isinstance(configs, Mapping):
            raise ConfigError("Markdown 'extension_configs' must be a mapping")
        return cls(
            extensions=tuple(extensions),
            extension_configs={str(name): dict(settings or {}) for name, settings in configs.items()},
        )


@dataclass(frozen=True)
class Configuration:
    """Resolved, read-only parameters for a single documentation run."""

    output: str
    layout: str
    template_name: str
    template: Template
    assets: bool = True
    index: Optional[str] = None
    silent: bool = True
    recursive: bool = False
    css: Optional[str] = None
    markdown: MarkdownOptions = field(default_factory=MarkdownOptions)

    @classmethod
    def resolve(
        cls,
        options: Optional[Mapping[str, Any]] = None,
        *,
        layouts: Optional[LayoutRegistry] = None,
    ) -> "Configuration":
        """Merge ``options`` over :data:`DEFAULTS` and resolve paths, layout and template."""
        options = dict(options or {})
        unknown = sorted(set(options) - set(DEFAULTS))
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
        merged = {**DEFAULTS, **{key: value for key, value in options.items() if value is not None}}

        registry = layouts or LayoutRegistry()
        layout_dir = registry.resolve(str(merged["layout"]))
        template_name = str(merged["template"])
        template = load_template(layout_dir, template_name)

        css = merged["css"]
        if css is not None:
            css_path = Path(css).expanduser().resolve()
            if not css_path.is_file():
                raise ConfigError(f"Stylesheet '{css}' does not exist")
            css = str(css_path)

        index = merged["index"]
        return cls(
            output=_absolute(merged["output"]),
            layout=str(layout_dir),
            template_name=template_name,
            template=template,
            assets=bool(merged["assets"]),
            index=_absolute(index) if index else None,
            silent=bool(merged["silent"]),
            recursive=bool(merged["recursive"]),
            css=css,
            markdown=MarkdownOptions.from_mapping(merged["markdown"]),
        )

    def log(self, message: str, *args: Any) -> None:
        """Report progress unless the run is silent."""
        if self.silent:
            return
        logger.info(message, *args)

    def warn(self, message: str, *args: Any) -> None:
        """Report a recoverable problem; silent runs only record it at debug level."""
        logger.log(logging.DEBUG if self.silent else logging.WARNING, message, *args)


def _absolute(path: Any) -> str:
    # Same form as the keys of sources.resolve_paths: symlinks are not followed.
    return os.path.abspath(os.path.expanduser(str(path)))


def load_options(path: Path) -> Dict[str, Any]:
    """Load run options from a YAML file whose root is a mapping."""
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return data


def load_markdown_options(path: Path) -> Dict[str, Any]:
    """Load Markdown options from a YAML or JSON file."""
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping of Markdown options")
    MarkdownOptions.from_mapping(data)
    return data


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


__all__ = [
    "DEFAULTS",
    "DEFAULT_MARKDOWN",
    "Configuration",
    "MarkdownOptions",
    "load_markdown_options",
    "load_options",
]
