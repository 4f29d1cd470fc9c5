"""depviz: module dependency graphs from package and import declarations."""

__version__ = "0.1.0"
