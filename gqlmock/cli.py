# File: gqlmock/cli.py
"""
gqlmock - Command-Line Interface
=================================
CLI built with the standard-library ``argparse`` module.

Usage examples::

    # Print the mock module to stdout
    python -m gqlmock --schema schema.graphql

    # Write to a file using a codegen config
    gqlmock -s schema.graphql -c codegen.yaml -o mocks.py

    # Override options from the command line
    gqlmock -s schema.graphql -o mocks.py \\
        --types-file types.py --add-typename --terminate-circular-relationships

Exit codes:
    0 — success
    2 — generation error
    3 — write error
    4 — input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, NoReturn, Optional, Sequence

from gqlmock.models import NamingConvention

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("gqlmock")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_GENERATION_ERROR: int = 2
EXIT_WRITE_ERROR: int = 3
EXIT_INPUT_ERROR: int = 4

_CONVENTION_CHOICES: List[str] = [c.value for c in NamingConvention]


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root gqlmock logger based on verbosity level.

    Args:
        verbosity: -1 = ERROR, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity == 0:
        level = logging.WARNING
    else:
        level = logging.ERROR

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("gqlmock")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from gqlmock import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="gqlmock",
        description=(
            "gqlmock — deterministic mock factories from GraphQL schemas.\n\n"
            "Reads SDL or an introspection result and writes a Python module "
            "with one factory function per object and input type."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -s schema.graphql\n"
            "  %(prog)s -s schema.graphql -c codegen.yaml -o mocks.py\n"
            "  %(prog)s -s introspection.json -o mocks.py --add-typename\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gqlmock v{__version__}",
    )

    # --- Input / output ---
    parser.add_argument(
        "-s", "--schema",
        type=str,
        required=True,
        metavar="PATH",
        help="Path to the GraphQL schema (SDL, or introspection .json).",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Path to a YAML or JSON config file.",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Output module path. Prints to stdout when omitted.",
    )

    # --- Config overrides ---
    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--types-file",
        type=str,
        default=None,
        metavar="FILE",
        help="Module the generated code imports its types from.",
    )
    config_group.add_argument(
        "--prefix",
        type=str,
        default=None,
        metavar="PREFIX",
        help="Static factory-name prefix instead of a/an.",
    )
    config_group.add_argument(
        "--types-prefix",
        type=str,
        default=None,
        metavar="PREFIX",
        help="Prefix for every referenced type name.",
    )
    config_group.add_argument(
        "--typenames",
        type=str,
        default=None,
        choices=_CONVENTION_CHOICES,
        help="Naming convention for type names.",
    )
    config_group.add_argument(
        "--enum-values",
        type=str,
        default=None,
        choices=_CONVENTION_CHOICES,
        help="Naming convention for enum members.",
    )
    config_group.add_argument(
        "--add-typename",
        action="store_true",
        default=None,
        help="Add a __typename key to object factories.",
    )
    config_group.add_argument(
        "--terminate-circular-relationships",
        action="store_true",
        default=None,
        help="Guard nested factory calls against cycles.",
    )

    # --- Verbosity ---
    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Config override builder
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, object]:
    """Build a config override dictionary (config-file key names) from CLI arguments."""
    overrides: Dict[str, object] = {}

    if args.types_file is not None:
        overrides["typesFile"] = args.types_file
    if args.prefix is not None:
        overrides["prefix"] = args.prefix
    if args.types_prefix is not None:
        overrides["typesPrefix"] = args.types_prefix
    if args.typenames is not None:
        overrides["typenames"] = args.typenames
    if args.enum_values is not None:
        overrides["enumValues"] = args.enum_values
    if args.add_typename:
        overrides["addTypename"] = True
    if args.terminate_circular_relationships:
        overrides["terminateCircularRelationships"] = True

    return overrides


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _run_generation(
    schema_path: Path,
    config_path: Optional[Path],
    output_path: Optional[Path],
    args: argparse.Namespace,
) -> int:
    """
    Run the generation pipeline.

    Returns the appropriate exit code.
    """
    from gqlmock.generator import GenerationReport, MockGenerator

    report: GenerationReport = MockGenerator().generate_from_file(
        schema_path=schema_path,
        config_path=config_path,
        output_path=output_path,
        config_overrides=_build_config_overrides(args) or None,
    )

    if output_path is None and report.success:
        sys.stdout.write(report.content)
        if args.verbose >= 1:
            print(report.summary(), file=sys.stderr)
    elif not args.quiet:
        print(report.summary(), file=sys.stdout if output_path is not None else sys.stderr)

    if not report.success:
        if report.input_errors:
            return EXIT_INPUT_ERROR
        if report.write_errors:
            return EXIT_WRITE_ERROR
        return EXIT_GENERATION_ERROR

    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    verbosity: int = -1 if args.quiet else args.verbose
    _setup_logging(verbosity)

    # --- Input paths ---
    schema_path: Path = Path(args.schema).resolve()
    if not schema_path.is_file():
        logger.error("Schema file not found: %s", schema_path)
        sys.exit(EXIT_INPUT_ERROR)

    config_path: Optional[Path] = None
    if args.config is not None:
        config_path = Path(args.config).resolve()
        if not config_path.is_file():
            logger.error("Config file not found: %s", config_path)
            sys.exit(EXIT_INPUT_ERROR)

    output_path: Optional[Path] = Path(args.output).resolve() if args.output else None

    logger.info("Schema:  %s", schema_path)
    logger.info("Config:  %s", config_path or "<defaults>")
    logger.info("Output:  %s", output_path or "<stdout>")

    exit_code: int = _run_generation(schema_path, config_path, output_path, args)

    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)

    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_GENERATION_ERROR",
    "EXIT_WRITE_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("gqlmock.cli loaded.")
