"""Graph module for module dependency analysis."""

from .builder import DependencySubgraph, add_prefix_root, build_dependency_tree, select_roots
from .import_map import ImportMap
from .scanner import TreeScanner, scan_directory
from .storage import get_statistics, to_digraph

__all__ = [
    # Import map
    "ImportMap",
    # Scanning
    "TreeScanner",
    "scan_directory",
    # Builder
    "DependencySubgraph",
    "add_prefix_root",
    "build_dependency_tree",
    "select_roots",
    # Statistics
    "get_statistics",
    "to_digraph",
]
