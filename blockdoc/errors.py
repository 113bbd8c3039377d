"""Exception hierarchy for blockdoc runs."""

from __future__ import annotations


class BlockdocError(RuntimeError):
    """Base class for every error raised by blockdoc."""


class NoValidSources(BlockdocError):
    """Raised when no source files remain after resolving the inputs."""


class InvalidLayout(BlockdocError):
    """Raised when a layout name or path does not resolve to a directory."""


class MissingTemplate(BlockdocError):
    """Raised when the layout does not contain the requested template file."""


class UnsupportedFileType(BlockdocError):
    """Raised when no splitter is registered for a file type."""

    def __init__(self, type_tag: str) -> None:
        super().__init__(f"Unsupported file type: '{type_tag}'")
        self.type_tag = type_tag


class FilesystemError(BlockdocError):
    """Raised when reading or writing a file fails."""


class PathNotFound(BlockdocError, FileNotFoundError):
    """Raised when an input path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No such file or directory: '{path}'")
        self.path = path


class ConfigError(BlockdocError):
    """Raised when an options file cannot be parsed."""


__all__ = [
    "BlockdocError",
    "ConfigError",
    "FilesystemError",
    "InvalidLayout",
    "MissingTemplate",
    "NoValidSources",
    "PathNotFound",
    "UnsupportedFileType",
]
