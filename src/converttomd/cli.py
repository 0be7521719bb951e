"""Command line interface for converting JIRA XML exports to Markdown."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

from .config import PROGRAM_NAME, VERSION, build_config
from .converter import convert_file
from .errors import ConfigError, ConverterError
from .logging_config import configure_logging, get_logger

LOGGER = get_logger(__name__)

_EPILOG = """\
Examples:
  %(prog)s AI-538.xml
  %(prog)s --output output.md AI-538.xml
  %(prog)s --details off AI-538.xml
  %(prog)s *.xml
"""


def _load_local_dotenv() -> None:
    """Load a ``.env`` file from the working directory when one exists."""

    env_path = Path.cwd() / ".env"
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        usage="%(prog)s [OPTIONS] FILE [FILE...]",
        description="Convert JIRA XML exports to Markdown format.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="JIRA XML export(s) to convert")
    parser.add_argument(
        "-o",
        "--output",
        help="Output file path (defaults to *.details.md or *.md)",
    )
    parser.add_argument(
        "-d",
        "--details",
        help="Include custom fields details (on|off|enabled|disabled|1|0), default enabled",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Verbose output",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=None,
        help="Force overwrite existing files",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{PROGRAM_NAME} version {VERSION}",
        help="Show version",
    )
    parser.add_argument(
        "--config",
        help="Path to a YAML defaults file (defaults to ./converttomd.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))

    if not args.files:
        print("Error: no input files specified", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    _load_local_dotenv()
    try:
        config = build_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.effective_log_level)
    LOGGER.debug(
        "Configuration resolved",
        extra={
            "files": [str(path) for path in config.input_files],
            "include_details": config.include_details,
            "force": config.force,
        },
    )

    for input_file in config.input_files:
        try:
            convert_file(input_file, config)
        except ConverterError as exc:
            LOGGER.error("Conversion failed", extra={"source": str(input_file), **exc.context})
            print(f"Error processing {input_file}: {exc}", file=sys.stderr)
            return 1

    return 0


__all__ = ["build_parser", "main"]
