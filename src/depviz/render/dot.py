"""Graphviz DOT serialization of dependency subgraphs."""

from collections.abc import Mapping, Sequence
from enum import Enum


class RankDir(str, Enum):
    """Layout directions of the rendered graph."""

    LR = "lr"  # Left to right
    RL = "rl"  # Right to left
    TB = "tb"  # Top to bottom
    BT = "bt"  # Bottom to top

    @classmethod
    def parse(cls, token: str) -> "RankDir":
        """Parse a direction token, case-insensitively.

        Raises:
            ValueError: If the token is not one of lr, rl, tb, bt
        """
        try:
            return cls(token.strip().lower())
        except ValueError:
            valid = ", ".join(d.value for d in cls)
            raise ValueError(f"Invalid rank direction: {token!r}. Must be one of {valid}") from None

    @property
    def dot_value(self) -> str:
        """Value of the DOT rankdir attribute."""
        return self.value.upper()


GRAPH_STYLE = (
    "  graph [bgcolor=black];",
    '  graph [label="Orthogonal edges", splines=ortho, nodesep=0.8];',
    "  edge [color=white];",
    "  graph[ratio=fill,center=1];",
    "  node[style=filled, shape=box];",
)


def escape_identifier(token: str) -> str:
    """Make an identity safe to embed in a quoted DOT id.

    Double quotes become apostrophes and slashes become underscores.
    Applying it twice gives the same result as applying it once.
    """
    return token.replace('"', "'").replace("/", "_")


def format_edge(source: str, target: str) -> str:
    """Format one edge statement."""
    return f'  "{escape_identifier(source)}" -> "{escape_identifier(target)}";'


def generate_dot_content(
    subgraph: Mapping[str, Sequence[str]],
    rank_dir: RankDir = RankDir.LR,
) -> str:
    """Serialize a subgraph as a strict digraph.

    Edges are emitted in subgraph iteration order, then reference order, so a
    given subgraph always produces the same text. Duplicate references are
    emitted as-is; the strict declaration lets the layout engine merge them.

    Args:
        subgraph: Identity -> references mapping
        rank_dir: Layout direction

    Returns:
        DOT description, without a trailing newline
    """
    lines = ["strict digraph G {", f"  rankdir={rank_dir.dot_value};"]
    lines.extend(GRAPH_STYLE)

    for identity, references in subgraph.items():
        for reference in references:
            lines.append(format_edge(identity, reference))

    lines.append("}")
    return "\n".join(lines)
