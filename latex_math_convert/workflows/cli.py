"""Command-line entry point.

Usage examples:
  # Print converted files to stdout
  latex-math-convert notes.md docs/

  # Rewrite every .md/.markdown file under docs/ in place
  latex-math-convert --write docs/

  # Filter mode
  cat notes.md | latex-math-convert --stdin > converted.md

Converted documents go to stdout; all logging goes to stderr so piping the
output never mixes in status messages.
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from latex_math_convert import __version__
from latex_math_convert.settings import ConverterSettings
from latex_math_convert.workflows.processor import ConversionWorkflow

DESCRIPTION = """\
Convert LaTeX bracket-style math delimiters to dollar-style in Markdown files.

Rewrites:
  \\( ... \\)  ->  $ ... $
  \\[ ... \\]  ->  $$ ... $$

Skips code blocks (``` and ~~~) and inline code (`...`).
Directories are searched recursively for .md and .markdown files.
"""


def _configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr only; stdout carries documents."""
    logger.remove()
    logger.add(sys.stderr, level=level, format="{level}: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="latex-math-convert",
        description=DESCRIPTION,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Markdown files or directories to convert.",
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="Overwrite files in place (when paths are provided).",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print converted output to stdout, even with --write (default when using --stdin).",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read markdown from stdin and print the converted document.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error logs.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=__version__,
        help="Print version and exit.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ConverterSettings.from_env()
    except ValidationError as e:
        _configure_logging("ERROR")
        logger.error(f"Invalid configuration in environment: {e}")
        return 1

    if args.quiet:
        level = "ERROR"
    elif args.verbose:
        level = "DEBUG"
    else:
        level = settings.log_level
    _configure_logging(level)

    workflow = ConversionWorkflow(
        settings=settings,
        write=args.write,
        force_stdout=args.stdout,
    )

    if args.stdin:
        if args.paths:
            logger.warning("--stdin given; ignoring path arguments.")
        try:
            workflow.convert_stream()
        except Exception:
            logger.exception("Failed to convert standard input")
            return 1
        return 0

    if not args.paths:
        parser.print_help()
        return 1

    try:
        summary = workflow.run(args.paths)
    except Exception:
        logger.exception("Conversion aborted by an unexpected error")
        return 1

    if summary.failures:
        logger.error(
            f"{len(summary.failures)} of {len(summary.outcomes)} item(s) failed."
        )
    elif not summary.outcomes:
        logger.warning("No markdown files found.")
    return summary.exit_code


def cli_main():
    """Synchronous wrapper for setuptools console_scripts entry point."""
    return main()


if __name__ == "__main__":
    sys.exit(cli_main())
