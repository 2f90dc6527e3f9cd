"""Main CLI entry point for the sdfmaze command-line tool.

Provides subcommands to re-format SDF files, validate them, and generate a
maze world for the Gazebo simulator.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from sdfmaze import __version__
from sdfmaze.api import SDFParser
from sdfmaze.maze import WorldBuilder, generate_maze
from sdfmaze.shared import AppConfig, ConfigError, SDFError, get_logger

logger = get_logger(__name__, None, "cli")


def load_config(config_path: Optional[Path]) -> AppConfig:
    """Load an AppConfig from a JSON file, or the default configuration."""
    if config_path is None:
        return AppConfig.default()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
    return AppConfig.from_json(text)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="sdfmaze",
        description="SDF markup parser and maze world generator for Gazebo"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Parse and re-indent an SDF file")
    format_parser.add_argument(
        "path",
        type=Path,
        help="SDF file to format"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate SDF files")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="SDF files to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Maze command
    maze_parser = subparsers.add_parser("maze", help="Generate a maze world")
    maze_parser.add_argument(
        "width",
        type=int,
        help="Maze width (odd, >= 3)"
    )
    maze_parser.add_argument(
        "height",
        type=int,
        help="Maze height (odd, >= 3)"
    )
    maze_parser.add_argument(
        "--seed", "-s",
        type=int,
        help="Random seed for a reproducible maze"
    )
    maze_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output world file (default: maze.world)"
    )
    maze_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    maze_parser.add_argument(
        "--draw",
        action="store_true",
        help="Print the maze to stdout"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    parser = SDFParser(load_config(args.config))
    with parser.parse_file(args.path) as document:
        parser.serialize(document, args.output)

    if args.output:
        print(f"Formatted {args.path} -> {args.output}", file=sys.stderr)
    return 0


def validate_file(parser: SDFParser, path: Path) -> Dict[str, Any]:
    """Parse one file and describe the outcome."""
    try:
        with parser.parse_file(path) as document:
            statistics = document.statistics()
            processing_time = document.metrics.processing_time_ms
    except SDFError as e:
        diagnostic = e.to_diagnostic()
        return {
            "file": str(path),
            "valid": False,
            "error": e.message,
            "kind": e.kind.name,
            "position": diagnostic.position,
        }

    return {
        "file": str(path),
        "valid": True,
        "processing_time_ms": processing_time,
        **statistics,
    }


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    parser = SDFParser()
    results = [validate_file(parser, path) for path in args.paths]

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        print(format_validation(results))

    valid_count = sum(1 for r in results if r["valid"])
    return 0 if valid_count == len(results) else 1


def format_validation(results: List[Dict[str, Any]]) -> str:
    """Render validation results as text."""
    valid_count = sum(1 for r in results if r["valid"])
    lines = [f"Validated {len(results)} files, {valid_count} valid", "-" * 50]

    for result in results:
        status = "✓" if result["valid"] else "✗"
        lines.append(f"{status} {result['file']}")
        if result["valid"]:
            lines.append(
                f"   Elements: {result['element_count']}, "
                f"Attributes: {result['attribute_count']}, "
                f"Depth: {result['max_depth']}"
            )
        else:
            lines.append(f"   Error: {result['error']}")

    return "\n".join(lines)


def cmd_maze(args: argparse.Namespace) -> int:
    """Handle maze command."""
    config = load_config(args.config)
    overrides: Dict[str, Any] = {"maze__width": args.width, "maze__height": args.height}
    if args.seed is not None:
        overrides["maze__seed"] = args.seed
    if args.output:
        overrides["world__output_path"] = str(args.output)
    config = config.override(**overrides)

    maze = generate_maze(config.maze.width, config.maze.height, seed=config.maze.seed)
    if args.draw:
        print(maze.draw())

    builder = WorldBuilder(config)
    with builder.build(maze) as document:
        destination = builder.write(document)

    print(f"World written to {destination}", file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        import logging
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        import logging
        logging.basicConfig(level=logging.ERROR)

    # Route to appropriate command handler
    try:
        if args.command == "format":
            return cmd_format(args)
        elif args.command == "validate":
            return cmd_validate(args)
        elif args.command == "maze":
            return cmd_maze(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except (SDFError, ConfigError) as e:
        logger.debug("Command failed", extra={"command": args.command})
        print(f"error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
