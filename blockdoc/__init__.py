"""Generate HTML documentation pages from block comments and Markdown files."""

from .config import Configuration
from .errors import (
    BlockdocError,
    ConfigError,
    FilesystemError,
    InvalidLayout,
    MissingTemplate,
    NoValidSources,
    PathNotFound,
    UnsupportedFileType,
)
from .models import Section, SourceEntry
from .parsers import register_splitter, split
from .pipeline import Pipeline, PipelineState, document

__version__ = "0.3.0"

__all__ = [
    "BlockdocError",
    "ConfigError",
    "Configuration",
    "FilesystemError",
    "InvalidLayout",
    "MissingTemplate",
    "NoValidSources",
    "PathNotFound",
    "Pipeline",
    "PipelineState",
    "Section",
    "SourceEntry",
    "UnsupportedFileType",
    "__version__",
    "document",
    "register_splitter",
    "split",
]
