"""Command line interface for depviz.

Scans a source tree for package declarations and imports, and renders the
resulting module dependency graph with Graphviz.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config import Settings, setup_logging
from .graph import add_prefix_root, build_dependency_tree, get_statistics, scan_directory
from .render import RenderError, generate_dot_content, render_graph, renderer_command

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RENDER_ERROR = 1
EXIT_CONFIG_ERROR = 2


def non_negative_int(value: str) -> int:
    """argparse type for depth bounds."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth must be non-negative, got {number}")
    return number


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="depviz",
        description="Generate module dependency graphs from a tree of source files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  depviz graph -p src/main/java                     # Whole tree, graph.svg
  depviz graph -p src -c com.example.api            # Rooted at a prefix, com.example.api.svg
  depviz graph -p src -c com.example -d 2 -r tb     # Two levels, top to bottom
  depviz graph -p src -g deps.png -f png            # PNG output
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    graph = subparsers.add_parser(
        "graph",
        help="Generate a graphviz graph from a folder of source files",
    )
    graph.add_argument(
        "-p", "--path",
        required=True,
        help="Path to the folder containing source files",
    )
    graph.add_argument(
        "-g", "--graph-out",
        default=None,
        help="Output file name (default: <prefix>.<format>, or graph.<format> without a prefix)",
    )
    graph.add_argument(
        "-c", "--class-prefix",
        default=None,
        help="Root identity prefix to use as the starting point",
    )
    graph.add_argument(
        "-d", "--depth",
        type=non_negative_int,
        default=None,
        help="Maximum depth to traverse from the roots (default: unbounded)",
    )
    graph.add_argument(
        "-r", "--rank-dir",
        default=None,
        help="Layout direction: lr, rl, tb or bt (default: lr)",
    )
    graph.add_argument(
        "-f", "--format",
        dest="output_format",
        default=None,
        help="Renderer output format (default: svg)",
    )
    graph.add_argument(
        "--sequential",
        action="store_true",
        help="Scan the tree on a single thread",
    )
    graph.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Worker pool size for parallel scans",
    )
    graph.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(args)


def load_settings(parsed: argparse.Namespace) -> Settings:
    """Build settings from the environment, overridden by command line flags."""
    overrides: dict[str, Any] = {}
    if parsed.rank_dir is not None:
        overrides["rank_dir"] = parsed.rank_dir
    if parsed.output_format is not None:
        overrides["output_format"] = parsed.output_format
    if parsed.workers is not None:
        overrides["max_workers"] = parsed.workers
    if parsed.log_level is not None:
        overrides["log_level"] = parsed.log_level
    if parsed.sequential:
        overrides["parallel"] = False
    return Settings(**overrides)


def default_output_path(root_prefix: str | None, output_format: str) -> Path:
    """Output file used when none is given: named after the prefix if any."""
    if root_prefix is not None:
        return Path(f"{root_prefix}.{output_format}")
    return Path(f"graph.{output_format}")


def run_graph(parsed: argparse.Namespace) -> int:
    """Scan, build, serialize and render."""
    try:
        settings = load_settings(parsed)
    except ValidationError as e:
        print(f"Error: invalid configuration:\n{e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(settings.log_level)

    source_path = Path(parsed.path)
    if not source_path.is_dir():
        print(f"Error: '{parsed.path}' is not a directory", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    root_prefix = parsed.class_prefix
    output_path = (
        Path(parsed.graph_out)
        if parsed.graph_out
        else default_output_path(root_prefix, settings.output_format)
    )

    imports_map = scan_directory(
        source_path,
        extension=settings.source_extension,
        parallel=settings.parallel,
        max_workers=settings.max_workers,
    )
    print(f"Found {len(imports_map)} packages")

    imports = imports_map.snapshot()
    if root_prefix is not None:
        imports = add_prefix_root(imports, root_prefix)

    dependency_tree = build_dependency_tree(
        imports,
        root_prefix=root_prefix,
        max_depth=parsed.depth,
    )
    stats = get_statistics(dependency_tree)
    logger.info(
        f"Dependency graph: {stats['nodes']} nodes, {stats['edges']} edges "
        f"({stats['dangling']} not expanded)"
    )

    dot_content = generate_dot_content(dependency_tree, settings.rank_dir)

    print(f"Generating {settings.output_format} file...")
    try:
        render_graph(
            dot_content,
            output_path,
            command=renderer_command(settings.renderer_command, settings.output_format),
        )
    except RenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RENDER_ERROR

    print(f"Output written to: {output_path}")
    return EXIT_OK


def main(args=None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    if parsed.command == "graph":
        return run_graph(parsed)
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
