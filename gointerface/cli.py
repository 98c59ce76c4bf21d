"""CLI entrypoint for gointerface."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import GoInterfaceConfig, load_config
from .errors import ConfigError, GoInterfaceError
from .formatting import FORMATTER_CHOICES, resolve_formatter
from .generator import InterfaceGenerator
from .logging import configure_logging, get_logger
from .source_scanner import SourceScanner


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gointerface",
        description="Generate Go interface declarations from the methods of concrete types.",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=None,
        help="Input file or directory. By default, the program reads from stdin.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file. By default, the program writes content to stdout.",
    )
    parser.add_argument(
        "-t",
        "--types",
        default=None,
        help="Specify the types. Multiple types are separated by comma(,). Extract all types if not specified.",
    )
    parser.add_argument(
        "-p",
        "--package",
        default=None,
        help="Package name of the generated file (defaults to the input package).",
    )
    parser.add_argument(
        "--private",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include private methods (--no-private overrides the config file).",
    )
    parser.add_argument(
        "--formatter",
        choices=FORMATTER_CHOICES,
        default=None,
        help="Formatter for the generated code (auto uses gofmt when available).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .gointerface.yml file (defaults to the one next to the input).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )
    return parser


def parse_types(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated type list; None or blank means every type."""
    if value is None:
        return None
    types = [item.strip() for item in value.split(",") if item.strip()]
    return types or None


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gointerface."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    try:
        config = _load_config(args)
    except ConfigError as exc:
        parser.exit(1, f"gointerface: {exc}\n")

    types = parse_types(args.types)
    if types is None and config.types:
        types = list(config.types)
    private = args.private if args.private is not None else config.private
    output = Path(args.output) if args.output else config.output

    try:
        formatter = resolve_formatter(args.formatter or config.formatter)
    except ValueError as exc:
        parser.exit(1, f"gointerface: {exc}\n")

    generator = InterfaceGenerator(
        include_unexported=bool(private),
        allow_list=set(types) if types is not None else None,
        package_name=args.package or config.package,
        formatter=formatter,
    )
    scanner = SourceScanner(include_tests=config.include_tests)

    try:
        code = generator.generate_from_sources(scanner.collect(args.input))
    except (GoInterfaceError, OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"gointerface: {exc}\n")

    if output is None:
        sys.stdout.write(code)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(code, encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"gointerface: cannot write {output}: {exc}\n")
    logger.info("Wrote interfaces to %s", output)


def _load_config(args: argparse.Namespace) -> GoInterfaceConfig:
    if args.config:
        return load_config(Path(args.config))
    if args.input and args.input != "-":
        return load_config(Path(args.input))
    return load_config(Path.cwd())


if __name__ == "__main__":
    main(sys.argv[1:])
