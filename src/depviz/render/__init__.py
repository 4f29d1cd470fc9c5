"""Render module for turning dependency subgraphs into diagrams."""

from .dot import RankDir, escape_identifier, format_edge, generate_dot_content
from .renderer import RenderError, render_graph, renderer_command

__all__ = [
    # DOT serialization
    "RankDir",
    "escape_identifier",
    "format_edge",
    "generate_dot_content",
    # Renderer
    "RenderError",
    "render_graph",
    "renderer_command",
]
