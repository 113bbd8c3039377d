"""CLI entrypoint for blockdoc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Sequence

from . import __version__
from .config import load_markdown_options, load_options
from .errors import BlockdocError
from .logging import configure_logging, get_logger
from .pipeline import Pipeline


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockdoc",
        usage="%(prog)s [options] FILES...",
        description="Generate HTML documentation from block comments in JavaScript and Markdown files.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILES",
        help="Source files or directories to document.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Directory to write documentation into (default: docs).",
    )
    parser.add_argument(
        "-l",
        "--layout",
        help="Built-in layout name (parallel, linear) or path to a layout directory.",
    )
    parser.add_argument(
        "-t",
        "--template",
        help="Template file, relative to the layout directory (default: page.html).",
    )
    parser.add_argument(
        "-i",
        "--index",
        help="Source file to publish as index.html.",
    )
    parser.add_argument(
        "-c",
        "--css",
        help="Custom stylesheet to copy into the output directory.",
    )
    parser.add_argument(
        "-m",
        "--markdown",
        type=Path,
        help="YAML or JSON file with Markdown extension options.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with default options; command-line flags take precedence.",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        default=None,
        help="Look for documentable files in nested directories.",
    )
    parser.add_argument(
        "--no-assets",
        dest="assets",
        action="store_false",
        default=None,
        help="Do not copy the layout's public/ assets.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also append log records to this file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _collect_options(args: argparse.Namespace) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if args.config is not None:
        options.update(load_options(args.config))
    if args.markdown is not None:
        options["markdown"] = load_markdown_options(args.markdown)
    for key in ("output", "layout", "template", "index", "css", "recursive", "assets"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    options["silent"] = False
    return options


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint for blockdoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        options = _collect_options(args)
        Pipeline(args.files, options).run()
    except (BlockdocError, OSError) as exc:
        logger.debug("Run failed", exc_info=True)
        parser.exit(1, f"blockdoc: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
