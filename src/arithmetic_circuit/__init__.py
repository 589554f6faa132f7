"""Polynomial functions as arithmetic circuits."""

__all__ = [
    "Circuit",
    "CircuitError",
    "Constraint",
    "ConstraintKind",
    "ConstraintStatus",
    "DependencyGraph",
    "FillResult",
    "MissingInputError",
    "Node",
    "NodeId",
    "NodeKind",
    "Scalar",
    "UnknownNodeError",
    "UnsupportedNodeKindError",
    "as_scalar",
    "check_constraints",
    "fill",
    "parse_scalar",
]

from ._circuit import Circuit
from ._constraints import Constraint, ConstraintKind, ConstraintStatus, check_constraints
from ._errors import CircuitError, MissingInputError, UnknownNodeError, UnsupportedNodeKindError
from ._eval_engine import FillResult, fill
from ._graph import DependencyGraph
from ._node import Node, NodeId, NodeKind
from ._scalar import Scalar, as_scalar, parse_scalar
