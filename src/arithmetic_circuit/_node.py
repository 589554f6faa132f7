"""Node model for arithmetic circuits."""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import NewType

from ._scalar import Scalar

NodeId = NewType("NodeId", int)


class NodeKind(StrEnum):
    """The kind of node in the circuit."""

    INPUT = auto()  # Supplied per evaluation
    CONSTANT = auto()  # Fixed at construction
    ADD = auto()
    MUL = auto()
    HINT = auto()  # Supplied by an external computation (not evaluated yet)


# Kinds computed from exactly two operands
OPERATION_KINDS = frozenset({NodeKind.ADD, NodeKind.MUL})


@dataclass(frozen=True, slots=True)
class Node:
    """A single node of the circuit.

    Nodes refer to each other only through their ``NodeId``; a node never
    holds another node. Values computed during a fill are not stored here.

    Attributes:
        id: Position of the node in the circuit, assigned at creation.
        kind: What the node computes.
        operands: Ids of the nodes this node consumes, in order.
        value: The stored value of a CONSTANT node, ``None`` for other kinds.
        label: Optional human-readable name (e.g. ``"x"`` for an input).

    """

    id: NodeId
    kind: NodeKind
    operands: tuple[NodeId, ...] = ()
    value: Scalar | None = None
    label: str | None = None

    def is_input(self) -> bool:
        return self.kind == NodeKind.INPUT

    def is_operation(self) -> bool:
        """Check if the node is derived algebraically from its operands."""
        return self.kind in OPERATION_KINDS

    def __str__(self) -> str:
        name = f"#{self.id}"
        if self.label:
            name += f" ({self.label})"
        match self.kind:
            case NodeKind.CONSTANT:
                return f"{name} = {self.value}"
            case NodeKind.ADD | NodeKind.MUL | NodeKind.HINT:
                args = ", ".join(f"#{op}" for op in self.operands)
                return f"{name} = {self.kind}({args})"
            case _:
                return f"{name} = {self.kind}"
