"""Graph algorithms for dependency graph operations."""

from collections.abc import Collection, Hashable, Iterable, Mapping


def reachable[T: Hashable](start: Iterable[T], edges: Mapping[T, Collection[T]]) -> frozenset[T]:
    """Collect every node reachable from ``start`` by following ``edges``.

    The start nodes themselves are only included when they are reached
    through an edge.

    Args:
        start: Nodes to start the walk from.
        edges: Mapping from node to the nodes it points to. Following
            predecessor edges yields ancestors, successor edges descendants.

    Returns:
        Set of reached nodes.

    Example:
        >>> # 2 depends on 0 and 1, 3 depends on 2
        >>> sorted(reachable([3], {3: [2], 2: [0, 1]}))
        [0, 1, 2]

    """
    visited: set[T] = set()
    stack = [nxt for node in start for nxt in edges.get(node, ())]
    while stack:
        current = stack.pop()
        if current not in visited:
            visited.add(current)
            stack.extend(edges.get(current, ()))
    return frozenset(visited)
