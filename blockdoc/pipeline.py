"""Pipeline orchestration for a documentation run."""

from __future__ import annotations

import os
import shutil
from collections import deque
from concurrent.futures import Future
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Deque, List, Mapping, Optional, Sequence, Union

from .config import Configuration
from .errors import FilesystemError, NoValidSources
from .layout import ASSETS_DIRNAME, LayoutRegistry
from .logging import get_logger
from .models import SourceEntry
from .parsers import SplitterRegistry, default_registry
from .renderer import Renderer
from .sources import find_collisions, resolve_sources


class PipelineState(Enum):
    INIT = "init"
    RESOLVED = "resolved"
    FILTERED = "filtered"
    OUTPUT_READY = "output_ready"
    ASSETS_COPIED = "assets_copied"
    WRITTEN = "written"
    DONE = "done"


def _relativize(path: str) -> str:
    try:
        return str(Path(path).relative_to(Path.cwd()))
    except ValueError:
        return path


class Pipeline:
    """Coordinates resolving, parsing, rendering and writing documentation.

    Construction resolves the configuration and source list; :meth:`run`
    performs every remaining step in order.
    """

    def __init__(
        self,
        paths: Union[str, Sequence[str], None],
        options: Optional[Mapping[str, Any]] = None,
        *,
        layouts: LayoutRegistry | None = None,
        splitters: SplitterRegistry | None = None,
    ) -> None:
        if paths is None:
            paths = []
        elif isinstance(paths, (str, os.PathLike)):
            paths = [paths]
        self.logger = get_logger("pipeline")
        self.options = Configuration.resolve(options, layouts=layouts)
        self.splitters = splitters or default_registry
        self.state = PipelineState.INIT

        self.sources: List[SourceEntry] = resolve_sources(
            [os.fspath(path) for path in paths],
            self.options.output,
            recursive=self.options.recursive,
            index=self.options.index,
        )
        if not self.sources:
            raise NoValidSources("No valid sources provided.")
        self.state = PipelineState.RESOLVED
        self._renderer = Renderer(self.options)

    def run(self) -> List[SourceEntry]:
        """Generate documentation and return the entries that were written."""
        sources = self.parse_sources()
        if not sources:
            self.logger.debug("Nothing to document")
            self.state = PipelineState.DONE
            return []

        try:
            os.makedirs(self.options.output, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Failed to create '{self.options.output}': {exc}") from exc
        self.state = PipelineState.OUTPUT_READY

        if self.options.assets:
            self.copy_layout_assets()
        if self.options.css:
            self.copy_stylesheet()
        self.state = PipelineState.ASSETS_COPIED

        queue: Deque[SourceEntry] = deque(sources)
        while queue:
            self.write(queue.popleft())
        self.state = PipelineState.WRITTEN
        self.options.log("Documented %d file(s) into '%s'", len(sources), _relativize(self.options.output))
        self.state = PipelineState.DONE
        return sources

    def parse_sources(self) -> List[SourceEntry]:
        """Drop unsupported or empty files and attach sections to the rest."""
        kept: List[SourceEntry] = []
        for source in self.sources:
            extension = os.path.splitext(source.full_path)[1]
            splitter = self.splitters.get(extension) if extension else None
            if splitter is None:
                self.options.log("Ignoring unsupported file: '%s'", _relativize(source.full_path))
                continue

            try:
                with open(source.full_path, encoding="utf-8", errors="replace") as handle:
                    code = handle.read()
            except OSError as exc:
                raise FilesystemError(f"Failed to read '{source.full_path}': {exc}") from exc

            source.sections = splitter(code)
            if not source.sections:
                self.options.log("Ignoring file without documentation: '%s'", _relativize(source.full_path))
                continue
            kept.append(source)

        for earlier, later in find_collisions(kept):
            self.options.warn(
                "'%s' and '%s' both map to '%s'; the later file overwrites the earlier one",
                _relativize(earlier.full_path),
                _relativize(later.full_path),
                _relativize(later.output_path),
            )

        self.sources = kept
        self.state = PipelineState.FILTERED
        return kept

    def copy_layout_assets(self) -> None:
        """Copy the layout's ``public/`` directory into the output directory."""
        source = os.path.join(self.options.layout, ASSETS_DIRNAME)
        target = os.path.join(self.options.output, ASSETS_DIRNAME)
        if not os.path.isdir(source):
            return
        try:
            shutil.copytree(source, target, dirs_exist_ok=True)
        except (OSError, shutil.Error) as exc:
            raise FilesystemError(f"Failed to copy layout assets to '{target}': {exc}") from exc
        self.options.log("Copied layout assets to '%s'", _relativize(target))

    def copy_stylesheet(self) -> None:
        css = self.options.css
        if not css:
            return
        target = os.path.join(self.options.output, os.path.basename(css))
        try:
            shutil.copyfile(css, target)
        except OSError as exc:
            raise FilesystemError(f"Failed to copy stylesheet to '{target}': {exc}") from exc
        self.options.log("Copied stylesheet to '%s'", _relativize(target))

    def format(self, source: SourceEntry) -> str:
        """Render ``source`` to HTML without touching the filesystem."""
        return self._renderer.render(source, self.sources, {"blockdoc": self})

    def write(self, source: SourceEntry) -> None:
        """Render ``source`` and write it to its output path."""
        try:
            os.makedirs(os.path.dirname(source.output_path), exist_ok=True)
            html = self.format(source)
            with open(source.output_path, "w", encoding="utf-8") as handle:
                handle.write(html)
        except OSError as exc:
            raise FilesystemError(f"Failed to write '{source.output_path}': {exc}") from exc
        self.options.log("%s -> %s", _relativize(source.full_path), _relativize(source.output_path))


def document(
    paths: Union[str, Sequence[str], None],
    options: Optional[Mapping[str, Any]] = None,
    callback: Optional[Callable[[Optional[BaseException]], None]] = None,
) -> "Future[List[SourceEntry]]":
    """Run a pipeline and return a future holding its outcome.

    The run happens before this function returns; the future is already
    resolved with the written entries or the error that stopped the run. When
    ``callback`` is given it receives ``None`` on success or the exception.
    Wrap the future with :func:`asyncio.wrap_future` to await it.
    """
    future: "Future[List[SourceEntry]]" = Future()
    if callback is not None:
        future.add_done_callback(lambda done: callback(done.exception()))
    future.set_running_or_notify_cancel()
    try:
        future.set_result(Pipeline(paths, options).run())
    except Exception as exc:
        future.set_exception(exc)
    return future


__all__ = ["Pipeline", "PipelineState", "document"]
