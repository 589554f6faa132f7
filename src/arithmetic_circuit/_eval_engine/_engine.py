"""Core fill engine for arithmetic circuits."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from arithmetic_circuit._constraints import ConstraintStatus, check_constraints
from arithmetic_circuit._errors import MissingInputError, UnknownNodeError, UnsupportedNodeKindError
from arithmetic_circuit._node import NodeId, NodeKind
from arithmetic_circuit._scalar import add, as_scalar, mul

if TYPE_CHECKING:
    from collections.abc import Iterable

    from arithmetic_circuit._circuit import Circuit
    from arithmetic_circuit._constraints import Constraint
    from arithmetic_circuit._scalar import Scalar

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class FillResult(Mapping[NodeId, "Scalar"]):
    """Values produced by filling a circuit.

    Behaves as a read-only mapping from every visited node id to its value,
    and compares equal to any mapping with the same items.
    Intermediate nodes are included, not only the targets.

    Attributes:
        circuit: The circuit that was filled.
        values: Mapping from visited node id to its value.
        targets: The node ids the fill was requested for.

    """

    circuit: Circuit
    values: dict[NodeId, Scalar] = field(default_factory=dict)
    targets: tuple[NodeId, ...] = ()

    def __getitem__(self, node: NodeId) -> Scalar:
        return self.values[node]

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def value(self, node: NodeId) -> Scalar | None:
        """Get the value of a node, or None if the fill did not visit it.

        Raises:
            UnknownNodeError: If the node does not exist in the circuit.

        """
        if node not in self.circuit:
            raise UnknownNodeError(node)
        return self.values.get(node)

    @property
    def outputs(self) -> dict[NodeId, Scalar]:
        """Values of the requested targets."""
        return {target: self.values[target] for target in self.targets}

    def constraint_report(self) -> list[tuple[Constraint, ConstraintStatus]]:
        """Check every circuit constraint against the filled values."""
        return check_constraints(self.circuit.constraints, self.values)

    def check_constraints(self) -> bool:
        """Check if all constraints in the circuit hold.

        Constraints over nodes the fill did not visit count as not holding.
        """
        return all(status == ConstraintStatus.SATISFIED for _, status in self.constraint_report())


def _resolve_targets(circuit: Circuit, targets: Iterable[NodeId] | None) -> tuple[NodeId, ...]:
    if targets is None:
        return circuit.outputs or tuple(circuit.topological_order())

    resolved: list[NodeId] = []
    for target in targets:
        if target not in circuit:
            raise UnknownNodeError(target)
        if target not in resolved:
            resolved.append(NodeId(target))
    return tuple(resolved)


def fill(
    circuit: Circuit,
    assignment: Mapping[NodeId, Any],
    targets: Iterable[NodeId] | None = None,
) -> FillResult:
    """Compute the value of every node needed for the given targets.

    Only the targets and their ancestors are visited, in topological order,
    so each node is computed once and after all of its operands.

    Args:
        circuit: The circuit to evaluate. It is not modified.
        assignment: Values for input nodes. Entries for other ids are ignored.
        targets: Nodes to compute. Defaults to the circuit's marked outputs,
            or to every node when no output is marked.

    Returns:
        FillResult mapping every visited node id to its value.

    Raises:
        UnknownNodeError: If a target does not exist.
        MissingInputError: If a reachable input has no value in the assignment.
        UnsupportedNodeKindError: If a reachable node is a hint.
        TypeError: If an assigned value is not a number.
        ValueError: If an assigned value cannot be represented exactly.

    Example:
        >>> circuit = Circuit()
        >>> x = circuit.add_input()
        >>> c = circuit.add_add(circuit.add_mul(x, x), circuit.add_constant(3))
        >>> fill(circuit, {x: 5}, [c])[c]
        28

    """
    resolved_targets = _resolve_targets(circuit, targets)
    required = circuit.dependency_graph().closure(resolved_targets)
    order = [node_id for node_id in circuit.topological_order() if node_id in required]

    missing = [node_id for node_id in order if circuit.kind(node_id) == NodeKind.INPUT and node_id not in assignment]
    if missing:
        labels = {node_id: label for node_id in missing if (label := circuit.node(node_id).label)}
        raise MissingInputError(missing, labels)

    logger.debug("Starting fill of %d nodes for %d target(s)", len(order), len(resolved_targets))

    values: dict[NodeId, Scalar] = {}
    for node_id in order:
        node = circuit.node(node_id)
        match node.kind:
            case NodeKind.INPUT:
                result = as_scalar(assignment[node_id])
            case NodeKind.CONSTANT:
                result = node.value
            case NodeKind.ADD:
                lhs, rhs = node.operands
                result = add(values[lhs], values[rhs])
            case NodeKind.MUL:
                lhs, rhs = node.operands
                result = mul(values[lhs], values[rhs])
            case _:
                raise UnsupportedNodeKindError(node_id, node.kind)

        values[node_id] = result
        logger.debug("Filled node #%d (%s) = %s", node_id, node.kind, result)

    logger.info("Evaluation completed for %d nodes", len(values))

    return FillResult(circuit=circuit, values=values, targets=resolved_targets)
