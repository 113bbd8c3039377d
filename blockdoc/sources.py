"""Input path resolution and output path derivation."""

from __future__ import annotations

import os
import posixpath
import stat
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import FilesystemError, PathNotFound
from .logging import get_logger
from .models import SourceEntry

logger = get_logger("sources")


@dataclass(frozen=True)
class _PendingPath:
    """A path waiting to be visited by the resolver."""

    path: str
    # Directory that started the traversal; ``None`` for top-level arguments.
    origin: Optional[str]


def resolve_paths(paths: Sequence[str], recursive: bool = False) -> Dict[str, str]:
    """Return an ordered mapping of absolute file path to display name.

    Top-level files are named by their base name. Files found by walking a
    directory are named relative to the top-level directory the walk started
    from. Top-level directories are always walked one level deep; nested
    directories are only entered when ``recursive`` is enabled.
    """
    resolved: Dict[str, str] = {}
    stack: List[_PendingPath] = [_PendingPath(os.path.normpath(p), None) for p in reversed(paths)]

    while stack:
        item = stack.pop()
        full_path = os.path.abspath(item.path)
        try:
            mode = os.stat(full_path).st_mode
        except FileNotFoundError as exc:
            raise PathNotFound(item.path) from exc
        except OSError as exc:
            raise FilesystemError(f"Failed to stat '{item.path}': {exc}") from exc

        if stat.S_ISREG(mode):
            resolved[full_path] = _display_name(item)
            continue

        if not stat.S_ISDIR(mode) or (item.origin is not None and not recursive):
            continue

        origin = item.origin if item.origin is not None else item.path
        try:
            children = sorted(os.listdir(full_path))
        except OSError as exc:
            raise FilesystemError(f"Failed to list '{item.path}': {exc}") from exc
        for child in reversed(children):
            stack.append(_PendingPath(os.path.join(item.path, child), origin))

    return resolved


def _display_name(item: _PendingPath) -> str:
    if item.origin is None:
        return os.path.basename(item.path)
    return Path(os.path.relpath(item.path, item.origin)).as_posix()


def common_directory(names: Sequence[str]) -> str:
    """Return the longest directory prefix (POSIX form) shared by ``names``."""
    if not names:
        return ""
    prefix: Optional[List[str]] = None
    for name in names:
        parts = list(PurePosixPath(name).parent.parts)
        if prefix is None:
            prefix = parts
            continue
        shared = 0
        for left, right in zip(prefix, parts):
            if left != right:
                break
            shared += 1
        prefix = prefix[:shared]
    return "/".join(prefix or [])


def relative_name(name: str, common: str) -> str:
    """Strip ``common`` and the extension from a display name."""
    stem = posixpath.splitext(name)[0]
    if common and stem.startswith(common + "/"):
        stem = stem[len(common) + 1 :]
    return stem


def map_outputs(
    resolved: Mapping[str, str],
    output_dir: str,
    index: Optional[str] = None,
) -> List[SourceEntry]:
    """Build source entries with their destination paths.

    ``output_dir`` and ``index`` are expected to be absolute paths. The entry
    whose path equals ``index`` is always written to ``index.html``.
    """
    common = common_directory(list(resolved.values()))
    entries: List[SourceEntry] = []

    for full_path, name in resolved.items():
        is_index = index is not None and full_path == index
        rel_name = "index" if is_index else relative_name(name, common)
        output_path = os.path.normpath(os.path.join(output_dir, *rel_name.split("/")) + ".html")

        entries.append(
            SourceEntry(
                full_path=full_path,
                name=name,
                relative_name=rel_name,
                output_path=output_path,
                is_index=is_index,
            )
        )
    return entries


def resolve_sources(
    paths: Sequence[str],
    output_dir: str,
    *,
    recursive: bool = False,
    index: Optional[str] = None,
) -> List[SourceEntry]:
    """Resolve input paths and derive their output paths in one step."""
    resolved = resolve_paths(paths, recursive=recursive)
    logger.debug("Resolved %d source files", len(resolved))
    return map_outputs(resolved, output_dir, index=index)


def find_collisions(entries: Sequence[SourceEntry]) -> List[Tuple[SourceEntry, SourceEntry]]:
    """Return (earlier, later) pairs of entries that share an output path."""
    claimed: Dict[str, SourceEntry] = {}
    collisions: List[Tuple[SourceEntry, SourceEntry]] = []
    for entry in entries:
        previous = claimed.get(entry.output_path)
        if previous is not None:
            collisions.append((previous, entry))
        claimed[entry.output_path] = entry
    return collisions


__all__ = [
    "common_directory",
    "find_collisions",
    "map_outputs",
    "relative_name",
    "resolve_paths",
    "resolve_sources",
]
