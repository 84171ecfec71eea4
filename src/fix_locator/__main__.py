"""Command line entry point for fix-locator.

Subcommands:
- locate: Find where original markup lives in a source file
- rank: Rank candidate files by how well they match the original markup
- apply: Apply a fixed snippet to a source file
- convert: Convert a fixed HTML snippet to JSX

Results are printed to stdout as JSON; logs go to stderr.
"""

import argparse
import dataclasses
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

from fix_locator._version import __version__

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
    file_path: Path | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
    """
    from fix_locator.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    fmt = LogFormat(log_format.lower()) if isinstance(log_format, str) else log_format

    configure_logging(
        level=level,
        log_format=fmt,
        file_path=file_path,
        file_enabled=file_enabled,
    )


def to_jsonable(value: Any) -> Any:
    """Convert result dataclasses and enums to JSON-compatible values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


def _read_markup(inline: str | None, path: Path | None) -> str:
    if path is not None:
        return path.read_text(encoding="utf-8")
    if inline is None:
        raise ValueError("Markup must be given inline or as a file")
    return inline


def _add_markup_args(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(f"--{name}", help=help_text)
    group.add_argument(f"--{name}-file", type=Path, help=f"File containing the {help_text.lower()}")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="fix-locator",
        description="Locate scanner-reported markup in source files and apply fixes",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: built-in defaults)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    locate = subparsers.add_parser("locate", help="Find the original markup in a source file")
    locate.add_argument("file", type=Path, help="Source file to search")
    _add_markup_args(locate, "html", "Original markup")
    locate.add_argument("--text", default=None, help="Text anchor (default: from markup)")

    rank = subparsers.add_parser("rank", help="Rank candidate files against the original markup")
    rank.add_argument("files", type=Path, nargs="+", help="Candidate source files")
    _add_markup_args(rank, "html", "Original markup")
    rank.add_argument("--text", default=None, help="Text anchor (default: from markup)")

    apply = subparsers.add_parser("apply", help="Apply a fixed snippet to a source file")
    apply.add_argument("file", type=Path, help="Source file to modify")
    _add_markup_args(apply, "html", "Original markup")
    _add_markup_args(apply, "fixed", "Fixed markup")
    apply.add_argument(
        "--write",
        action="store_true",
        help="Write the result back to the file when the fix was applied",
    )

    convert = subparsers.add_parser("convert", help="Convert fixed HTML to JSX")
    _add_markup_args(convert, "html", "Markup")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    return build_parser().parse_args(argv)


def run_command(args: argparse.Namespace) -> Any:
    """Execute a parsed subcommand.

    Returns:
        The command result, ready for to_jsonable

    Raises:
        FileNotFoundError: If an input or config file is missing
        OSError: If an input file cannot be read or written
        ValueError: If the configuration or input is invalid
    """
    from fix_locator.config import FixLocatorConfig, load_config
    from fix_locator.core.dialect import apply_fix, html_to_jsx
    from fix_locator.core.extraction import extract_text_content
    from fix_locator.core.locator import CodeLocator
    from fix_locator.core.ranker import rank_search_results
    from fix_locator.models import CandidateFile

    if args.config:
        config = load_config(args.config)
        if not args.debug:
            # Reconfigure logging from config file settings
            from fix_locator.utils.logging import configure_logging

            configure_logging(
                level=config.logging.level,
                log_format=config.logging.format,
                file_path=config.logging.file.path if config.logging.file.enabled else None,
                file_enabled=config.logging.file.enabled,
            )
    else:
        config = FixLocatorConfig()

    original_html = _read_markup(args.html, args.html_file)

    if args.command == "convert":
        return {"jsx": html_to_jsx(original_html)}

    if args.command == "locate":
        content = args.file.read_text(encoding="utf-8")
        return CodeLocator(config.locator).locate(content, original_html, args.text)

    if args.command == "rank":
        text_content = args.text if args.text is not None else extract_text_content(original_html)
        candidates = [
            CandidateFile(path=str(path), content=path.read_text(encoding="utf-8"))
            for path in args.files
        ]
        return rank_search_results(candidates, original_html, text_content)

    # apply
    content = args.file.read_text(encoding="utf-8")
    fixed_html = _read_markup(args.fixed, args.fixed_file)
    result = apply_fix(content, original_html, fixed_html)
    if args.write and result.applied:
        args.file.write_text(result.content, encoding="utf-8")
        log.info("fix_written", path=str(args.file), method=result.method.value)
    return result


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(
        debug=args.debug,
        log_format=args.format,
    )

    try:
        result = run_command(args)
    except FileNotFoundError as e:
        log.error("file_not_found", error=str(e))
        return 1
    except OSError as e:
        log.error("file_access_failed", error=str(e))
        return 1
    except ValueError as e:
        log.error("invalid_input", error=str(e))
        return 1

    print(json.dumps(to_jsonable(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
