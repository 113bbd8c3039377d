from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.source_tree import SourceTreeBuilder


@pytest.fixture
def source_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SourceTreeBuilder:
    """Provide a source tree rooted under tmp_path and make it the working directory."""
    builder = SourceTreeBuilder(tmp_path)
    monkeypatch.chdir(builder.path())
    return builder


@pytest.fixture(autouse=True)
def _reset_blockdoc_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("blockdoc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
