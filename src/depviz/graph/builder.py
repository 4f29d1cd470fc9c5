"""Bounded dependency tree construction from an import map."""

import logging
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)

DependencySubgraph = dict[str, list[str]]


def select_roots(import_map: Mapping[str, Sequence[str]], root_prefix: str | None = None) -> list[str]:
    """Pick the traversal roots of an import map.

    Args:
        import_map: Identity -> references mapping
        root_prefix: Only identities starting with this prefix are roots;
                     every identity is a root when omitted

    Returns:
        Root identities in map iteration order
    """
    if root_prefix is None:
        return list(import_map)
    return [identity for identity in import_map if identity.startswith(root_prefix)]


def build_dependency_tree(
    import_map: Mapping[str, Sequence[str]],
    root_prefix: str | None = None,
    max_depth: int | None = None,
) -> DependencySubgraph:
    """Derive the subgraph reachable from the roots within a depth bound.

    Traversal is depth-first over an explicit LIFO stack of (identity, depth)
    pairs. Each identity is expanded at most once, so cyclic maps terminate.
    A node reachable through several paths keeps the depth of whichever path
    was popped first, not necessarily the shortest one.

    An identity whose expansion was cut by the visited set or the depth bound
    may appear with an empty reference list, or only as a reference value.

    Args:
        import_map: Identity -> references mapping (read only)
        root_prefix: Restrict roots to identities starting with this prefix
        max_depth: Deepest level to expand (roots are depth 0); unbounded if None

    Returns:
        Mapping of reached identity -> its references, in expansion order
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    tree: DependencySubgraph = {}
    visited: set[str] = set()

    stack: list[tuple[str, int]] = [
        (identity, 0) for identity in select_roots(import_map, root_prefix)
    ]

    while stack:
        identity, depth = stack.pop()

        if max_depth is not None and depth > max_depth:
            continue
        if identity in visited:
            continue

        visited.add(identity)
        references = tree.setdefault(identity, [])

        for reference in import_map.get(identity, ()):
            references.append(reference)
            stack.append((reference, depth + 1))

    logger.debug(
        f"Built dependency tree with {len(tree)} nodes "
        f"(prefix={root_prefix!r}, max_depth={max_depth})"
    )
    return tree


def add_prefix_root(
    import_map: Mapping[str, Sequence[str]], root_prefix: str
) -> dict[str, list[str]]:
    """Return a copy of the map with a synthetic node named after the prefix.

    The node references every identity that starts with the prefix, which
    gives a prefixed graph one entry point. It is placed first in the copy, so
    it is pushed first and expanded last. Real prefix matches are expanded
    from their own depth 0 entries rather than one level below it, and its
    edges are still emitted. A prefix that already names a module is left
    alone so its own references are kept.

    Args:
        import_map: Identity -> references mapping (not modified)
        root_prefix: Prefix of the identities to group

    Returns:
        New mapping, led by the synthetic node when one was added
    """
    if root_prefix in import_map:
        logger.debug(f"Prefix {root_prefix!r} is already a module; no prefix root added")
        return {identity: list(references) for identity, references in import_map.items()}

    matching = select_roots(import_map, root_prefix)
    extended = {root_prefix: matching}
    extended.update((identity, list(references)) for identity, references in import_map.items())
    logger.debug(f"Added prefix root {root_prefix!r} over {len(matching)} modules")
    return extended
