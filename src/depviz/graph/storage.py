"""NetworkX view of a dependency subgraph."""

import logging
from collections.abc import Mapping, Sequence

import networkx as nx

logger = logging.getLogger(__name__)


def to_digraph(subgraph: Mapping[str, Sequence[str]]) -> nx.DiGraph:
    """Convert a subgraph into a NetworkX DiGraph.

    Duplicate references collapse into a single edge, matching the strict
    graph declaration of the rendered description.

    Args:
        subgraph: Identity -> references mapping

    Returns:
        Directed graph with one node per identity or reference
    """
    graph = nx.DiGraph()
    for identity, references in subgraph.items():
        graph.add_node(identity, expanded=True)
        for reference in references:
            if reference not in graph:
                graph.add_node(reference, expanded=False)
            graph.add_edge(identity, reference)
    return graph


def get_statistics(subgraph: Mapping[str, Sequence[str]]) -> dict[str, int]:
    """Get subgraph statistics.

    Returns:
        Dictionary with counts of nodes, distinct edges, emitted edge
        statements and dangling references (referenced but never expanded)
    """
    graph = to_digraph(subgraph)
    dangling = sum(
        1 for _, data in graph.nodes(data=True) if not data.get("expanded", False)
    )
    return {
        "nodes": graph.number_of_nodes(),
        "edges": graph.number_of_edges(),
        "edge_statements": sum(len(references) for references in subgraph.values()),
        "dangling": dangling,
    }
