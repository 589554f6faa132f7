"""Circuit construction and structural queries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._constraints import Constraint, ConstraintKind
from ._errors import UnknownNodeError
from ._graph import DependencyGraph
from ._node import Node, NodeId, NodeKind
from ._scalar import as_scalar

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ._scalar import Scalar

logger = logging.getLogger(__name__)


class Circuit:
    """An append-only computation graph of arithmetic nodes.

    Nodes are stored in creation order and identified by their position.
    Every operation may only reference nodes that already exist, so the
    graph is acyclic by construction and creation order is a valid
    topological order.

    Example:
        Build ``F(x) = x^2 + x + 5``:

        >>> circuit = Circuit("poly")
        >>> x = circuit.add_input("x")
        >>> x_squared = circuit.add_mul(x, x)
        >>> five = circuit.add_constant(5)
        >>> out = circuit.add_add(circuit.add_add(x_squared, five), x)
        >>> circuit.mark_output(out)

    """

    def __init__(self, name: str = "circuit") -> None:
        self.name = name
        self._nodes: list[Node] = []
        self._outputs: list[NodeId] = []
        self._equalities: list[Constraint] = []

    # --- construction ---

    def add_input(self, label: str | None = None) -> NodeId:
        """Create an input node whose value is supplied at evaluation time.

        Args:
            label: Optional name used to bind the input by name.

        Returns:
            The id of the new node.

        """
        node = self._append(NodeKind.INPUT, label=label)
        logger.debug("Initialized input node: %s", node)
        return node.id

    def add_constant(self, value: Any, label: str | None = None) -> NodeId:  # noqa: ANN401
        """Create a constant node holding ``value``.

        Args:
            value: Anything accepted by ``as_scalar``.
            label: Optional name for display.

        Returns:
            The id of the new node.

        Raises:
            TypeError: If the value has an unsupported type.
            ValueError: If the value cannot be represented exactly.

        """
        node = self._append(NodeKind.CONSTANT, value=as_scalar(value), label=label)
        logger.debug("Initialized node with constant value: %s", node)
        return node.id

    def add_add(self, lhs: NodeId, rhs: NodeId) -> NodeId:
        """Create a node computing ``lhs + rhs``.

        Raises:
            UnknownNodeError: If either operand does not exist.

        """
        node = self._append(NodeKind.ADD, operands=(lhs, rhs))
        logger.debug("add node: %s", node)
        return node.id

    def add_mul(self, lhs: NodeId, rhs: NodeId) -> NodeId:
        """Create a node computing ``lhs * rhs``.

        Raises:
            UnknownNodeError: If either operand does not exist.

        """
        node = self._append(NodeKind.MUL, operands=(lhs, rhs))
        logger.debug("mul node: %s", node)
        return node.id

    def add_hint(self, *operands: NodeId, label: str | None = None) -> NodeId:
        """Create a hint node, whose value comes from an external computation.

        Hints keep the graph shape stable for circuits that will rely on
        out-of-band values. The synchronous evaluator cannot fill them.

        Raises:
            UnknownNodeError: If any operand does not exist.

        """
        node = self._append(NodeKind.HINT, operands=operands, label=label)
        logger.debug("hint node: %s", node)
        return node.id

    def mark_output(self, node: NodeId) -> None:
        """Designate a node as an output of the circuit. Marking twice is a no-op.

        Raises:
            UnknownNodeError: If the node does not exist.

        """
        node_id = self._check(node)
        if node_id not in self._outputs:
            self._outputs.append(node_id)
            logger.debug("Marked node #%d as output", node_id)

    def assert_equal(self, a: NodeId, b: NodeId) -> None:
        """Record the constraint that two nodes hold the same value.

        The assertion does not affect filling; it is checked afterwards with
        ``FillResult.check_constraints``.

        Raises:
            UnknownNodeError: If either node does not exist.

        """
        constraint = Constraint(ConstraintKind.EQUAL, (self._check(a), self._check(b)))
        self._equalities.append(constraint)
        logger.debug("equality constraint between #%d and #%d added", a, b)

    def _append(
        self,
        kind: NodeKind,
        *,
        operands: tuple[NodeId, ...] = (),
        value: Scalar | None = None,
        label: str | None = None,
    ) -> Node:
        # Validate everything before mutating so a failed call leaves the graph unchanged
        checked = tuple(self._check(op) for op in operands)
        node = Node(id=NodeId(len(self._nodes)), kind=kind, operands=checked, value=value, label=label)
        self._nodes.append(node)
        return node

    def _check(self, node: object) -> NodeId:
        if isinstance(node, bool) or not isinstance(node, int) or not 0 <= node < len(self._nodes):
            raise UnknownNodeError(node)
        return NodeId(node)

    # --- queries ---

    def node(self, node: NodeId) -> Node:
        """Get a node by id.

        Raises:
            UnknownNodeError: If the node does not exist.

        """
        return self._nodes[self._check(node)]

    def kind(self, node: NodeId) -> NodeKind:
        return self.node(node).kind

    def operands(self, node: NodeId) -> tuple[NodeId, ...]:
        return self.node(node).operands

    def value(self, node: NodeId) -> Scalar | None:
        """Get the value known at construction time (constants only)."""
        return self.node(node).value

    def topological_order(self) -> list[NodeId]:
        """Return every node id with operands before the nodes consuming them."""
        return [node.id for node in self._nodes]

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def inputs(self) -> tuple[NodeId, ...]:
        """Ids of the input nodes, in creation order."""
        return tuple(node.id for node in self._nodes if node.is_input())

    @property
    def outputs(self) -> tuple[NodeId, ...]:
        """Ids of the designated outputs, in the order they were marked."""
        return tuple(self._outputs)

    @property
    def constraints(self) -> list[Constraint]:
        """Gate constraints for every operation node, then equality assertions."""
        gates = [
            Constraint(ConstraintKind(node.kind), (*node.operands, node.id))
            for node in self._nodes
            if node.is_operation()
        ]
        return gates + self._equalities

    def find_input(self, label: str) -> NodeId:
        """Get the id of the first input node with the given label.

        Raises:
            UnknownNodeError: If no input carries that label.

        """
        for node in self._nodes:
            if node.is_input() and node.label == label:
                return node.id
        raise UnknownNodeError(label)

    def assign(self, *values: Any) -> dict[NodeId, Scalar]:  # noqa: ANN401
        """Build an assignment binding ``values`` to the inputs in creation order.

        Raises:
            ValueError: If the number of values differs from the number of inputs.

        """
        inputs = self.inputs
        if len(values) != len(inputs):
            msg = f"Expected {len(inputs)} input value(s), got {len(values)}"
            raise ValueError(msg)
        return {node_id: as_scalar(value) for node_id, value in zip(inputs, values, strict=True)}

    def dependency_graph(self) -> DependencyGraph[NodeId]:
        """Build the operand graph of the circuit."""
        return DependencyGraph.from_operands({node.id: node.operands for node in self._nodes})

    def __len__(self) -> int:
        """Return the number of nodes in the circuit."""
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        """Check if a node id exists in the circuit."""
        try:
            self._check(node)
        except UnknownNodeError:
            return False
        return True

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Circuit(name={self.name!r}, nodes={len(self._nodes)}, outputs={list(self._outputs)})"
