"""Structural view of a circuit's operand relationships."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ._algorithms import reachable


@dataclass(frozen=True, slots=True)
class DependencyGraph[T]:
    """An immutable directed acyclic graph of "consumes" relationships.

    The graph represents operand edges of a circuit:
    - predecessors[c] = {a, b} means "c consumes a and b"
    - successors[a] = {c} means "a is consumed by c"

    Every node of the circuit is present, including isolated ones.

    Attributes:
        _predecessors: Mapping from node to its direct operands.
        _successors: Mapping from node to nodes that consume it.

    """

    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)
    _successors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_operands(cls, operands: Mapping[T, Iterable[T]]) -> DependencyGraph[T]:
        """Build a graph from a mapping of node to its operands.

        Args:
            operands: Mapping from every node to the nodes it consumes.
                Nodes without operands map to an empty iterable.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> graph = DependencyGraph.from_operands({0: (), 1: (), 2: (0, 1)})
            >>> graph.predecessors(2)
            frozenset({0, 1})

        """
        predecessors: dict[T, set[T]] = {}
        successors: defaultdict[T, set[T]] = defaultdict(set)

        for node, deps in operands.items():
            predecessors.setdefault(node, set()).update(deps)
            successors.setdefault(node, set())
            for dep in deps:
                successors[dep].add(node)
                predecessors.setdefault(dep, set())

        return cls(
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._predecessors)

    def predecessors(self, node: T) -> frozenset[T]:
        """Get the direct operands of a node."""
        return self._predecessors.get(node, frozenset())

    def successors(self, node: T) -> frozenset[T]:
        """Get the nodes that directly consume a node."""
        return self._successors.get(node, frozenset())

    def roots(self) -> frozenset[T]:
        """Get nodes without operands (inputs, constants, operand-less hints)."""
        return frozenset(n for n, deps in self._predecessors.items() if not deps)

    def leaves(self) -> frozenset[T]:
        """Get nodes that nothing consumes."""
        return frozenset(n for n in self._predecessors if not self._successors.get(n))

    def ancestors(self, *nodes: T) -> frozenset[T]:
        """Get all transitive operands of the given nodes.

        Args:
            nodes: The nodes to query.

        Returns:
            Set of every node that one of ``nodes`` transitively depends on.
            The queried nodes are not included unless one depends on another.

        """
        return reachable(nodes, self._predecessors)

    def descendants(self, *nodes: T) -> frozenset[T]:
        """Get all nodes that transitively consume the given nodes."""
        return reachable(nodes, self._successors)

    def closure(self, nodes: Iterable[T]) -> frozenset[T]:
        """Get the given nodes together with all of their ancestors."""
        targets = frozenset(nodes)
        return targets | self.ancestors(*targets)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors
