"""Errors raised by circuit construction and evaluation."""

from collections.abc import Iterable, Mapping

from ._node import NodeId, NodeKind


class CircuitError(Exception):
    """Base class for all circuit errors."""


class UnknownNodeError(CircuitError):
    """Raised when a node id does not exist in the circuit."""

    def __init__(self, node_id: object) -> None:
        self.node_id = node_id
        super().__init__(f"Unknown node: {node_id!r}")


class MissingInputError(CircuitError):
    """Raised when a fill needs input values the assignment does not provide."""

    def __init__(self, node_ids: Iterable[NodeId], labels: Mapping[NodeId, str] | None = None) -> None:
        self.node_ids = tuple(node_ids)
        labels = labels or {}
        names = [f"#{node_id} ({labels[node_id]})" if node_id in labels else f"#{node_id}" for node_id in self.node_ids]
        super().__init__(f"Missing value for input node(s): {', '.join(names)}")


class UnsupportedNodeKindError(CircuitError):
    """Raised when evaluation reaches a node kind it cannot compute."""

    def __init__(self, node_id: NodeId, kind: NodeKind) -> None:
        self.node_id = node_id
        self.kind = kind
        super().__init__(f"Node #{node_id} of kind '{kind}' cannot be evaluated")
