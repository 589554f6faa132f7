"""Constraints (gates and equality assertions) checked against filled values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._node import NodeId
    from ._scalar import Scalar


class ConstraintKind(StrEnum):
    """The relation a constraint asserts."""

    ADD = auto()  # lhs + rhs == out
    MUL = auto()  # lhs * rhs == out
    EQUAL = auto()  # a == b


class ConstraintStatus(StrEnum):
    """Outcome of checking a constraint against filled values."""

    SATISFIED = auto()
    VIOLATED = auto()
    UNEVALUATED = auto()  # At least one referenced node has no value


@dataclass(frozen=True, slots=True)
class Constraint:
    """A relation between circuit nodes.

    Gates (ADD, MUL) are created for every operation node and reference
    ``(lhs, rhs, out)``. Equalities are asserted explicitly and reference
    ``(a, b)``.

    Attributes:
        kind: Which relation is asserted.
        nodes: Ids of the nodes the relation ranges over.

    """

    kind: ConstraintKind
    nodes: tuple[NodeId, ...]

    def evaluate(self, values: Mapping[NodeId, Scalar]) -> ConstraintStatus:
        """Check the constraint against a mapping of node values.

        Args:
            values: Filled node values, e.g. a ``FillResult``.

        Returns:
            UNEVALUATED if a referenced node has no value, otherwise
            SATISFIED or VIOLATED.

        """
        if any(node not in values for node in self.nodes):
            return ConstraintStatus.UNEVALUATED

        operands = [values[node] for node in self.nodes]
        match self.kind:
            case ConstraintKind.ADD:
                lhs, rhs, out = operands
                holds = lhs + rhs == out
            case ConstraintKind.MUL:
                lhs, rhs, out = operands
                holds = lhs * rhs == out
            case ConstraintKind.EQUAL:
                a, b = operands
                holds = a == b

        return ConstraintStatus.SATISFIED if holds else ConstraintStatus.VIOLATED

    def __str__(self) -> str:
        match self.kind:
            case ConstraintKind.ADD:
                lhs, rhs, out = self.nodes
                return f"#{lhs} + #{rhs} == #{out}"
            case ConstraintKind.MUL:
                lhs, rhs, out = self.nodes
                return f"#{lhs} * #{rhs} == #{out}"
            case ConstraintKind.EQUAL:
                a, b = self.nodes
                return f"#{a} == #{b}"


def check_constraints(
    constraints: Iterable[Constraint],
    values: Mapping[NodeId, Scalar],
) -> list[tuple[Constraint, ConstraintStatus]]:
    """Evaluate every constraint against filled values.

    Args:
        constraints: Constraints to check, e.g. ``circuit.constraints``.
        values: Filled node values.

    Returns:
        List of (constraint, status) in the order given.

    """
    return [(constraint, constraint.evaluate(values)) for constraint in constraints]
