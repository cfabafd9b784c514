"""
Command-line entry point.

Takes one JSON configuration argument (``inputPath``, ``outputPath``,
``verbose`` and the ``config`` options), compiles the registry and reports
the outcome through the process exit code.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from . import __version__
from .codegen import CompileConfig, CompileError, ConfigError, WriterError, load_config, morphe_to_pydantic
from .logging_config import get_logger, setup_logging
from .utils import RegistryLoaderError

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_COMPILE_FAILED = 1
EXIT_MISSING_CONFIG = 3
EXIT_INVALID_CONFIG = 4
EXIT_INPUT_PATH_ERROR = 12
EXIT_OUTPUT_PATH_ERROR = 13

EXAMPLE_ARGUMENT = '{"inputPath":"./morphe","outputPath":"./output","verbose":true}'

console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = EXIT_COMPILE_FAILED) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="morphe-pydantic",
        description="Compile a Morphe registry into Pydantic models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  morphe-pydantic '{EXAMPLE_ARGUMENT}'
  morphe-pydantic --config-file morphe.json --verbose
        """.strip(),
    )

    parser.add_argument("config", nargs="?", help="Compile configuration as a JSON object")
    parser.add_argument("--config-file", metavar="FILE", help="JSON configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug diagnostics")
    parser.add_argument("--workers", type=int, metavar="N", help="Compile definitions on N threads")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_config(args: argparse.Namespace) -> CompileConfig:
    """Turn parsed arguments into a validated configuration.

    Raises:
        CLIError: Carrying the exit code matching the problem.
    """
    if not args.config and not args.config_file:
        raise CLIError(
            f"a JSON configuration argument is required, for example: {EXAMPLE_ARGUMENT}",
            EXIT_MISSING_CONFIG,
        )

    overrides: dict[str, Any] = {}
    if args.config:
        try:
            overrides = json.loads(args.config)
        except json.JSONDecodeError as e:
            raise CLIError(f"Error parsing config JSON: {e}", EXIT_INVALID_CONFIG) from e
        if not isinstance(overrides, dict):
            raise CLIError("Configuration must be a JSON object", EXIT_INVALID_CONFIG)

    if args.verbose:
        overrides["verbose"] = True
    if args.workers is not None:
        overrides["workers"] = args.workers

    try:
        config = load_config(custom_config=overrides, config_file=args.config_file)
    except ConfigError as e:
        raise CLIError(str(e), EXIT_INVALID_CONFIG) from e

    if not config.input_path:
        raise CLIError("inputPath is required", EXIT_INPUT_PATH_ERROR)
    if not config.output_path:
        raise CLIError("outputPath is required", EXIT_OUTPUT_PATH_ERROR)

    config.input_path = str(Path(config.input_path).resolve())
    config.output_path = str(Path(config.output_path).resolve())

    problems = config.validate()
    if problems:
        raise CLIError(f"Invalid configuration: {'; '.join(problems)}", EXIT_INVALID_CONFIG)

    return config


def main(argv: list[str] | None = None) -> int:
    """Run the compiler and return the process exit code."""
    args = create_parser().parse_args(argv)

    try:
        config = parse_config(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return e.exit_code

    setup_logging(config.verbose)
    logger.info("Processing Morphe registry from: '%s'", config.input_path)
    logger.info("Output Pydantic types to: '%s'", config.output_path)

    try:
        results = morphe_to_pydantic(config)
    except (RegistryLoaderError, CompileError, WriterError, ConfigError) as e:
        console.print(f"[red]✗ Compilation failed:[/red] {escape(str(e))}")
        logger.debug("Compilation failed", exc_info=True)
        return EXIT_COMPILE_FAILED

    total = sum(len(modules) for modules in results.values())
    logger.info("Compilation completed successfully")
    if config.verbose:
        console.print(f"[green]✓[/green] Generated {total} module(s) in {config.output_path}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
