"""Circuit query functions for CLI commands.

This module provides pure functions for inspecting circuits and turning
command-line arguments into node ids and assignments.
These are the functional core - no I/O, no Rich rendering.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arithmetic_circuit._errors import UnknownNodeError
from arithmetic_circuit._node import NodeId, NodeKind
from arithmetic_circuit._scalar import parse_scalar

if TYPE_CHECKING:
    from collections.abc import Iterable

    from arithmetic_circuit._circuit import Circuit
    from arithmetic_circuit._node import Node
    from arithmetic_circuit._scalar import Scalar


class BindingError(ValueError):
    """Raised when a NAME=VALUE argument cannot be parsed."""


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """Basic information about a node for listing."""

    node: Node
    consumer_count: int
    is_output: bool


@dataclass(slots=True)
class TreeNode:
    """A node in a dependency tree for rendering."""

    node: Node
    children: list[TreeNode]


def list_nodes(circuit: Circuit, *, kinds: Iterable[NodeKind] | None = None) -> list[NodeInfo]:
    """List nodes in creation order, optionally filtered by kind."""
    graph = circuit.dependency_graph()
    outputs = set(circuit.outputs)
    wanted = set(kinds) if kinds is not None else None
    return [
        NodeInfo(node=node, consumer_count=len(graph.successors(node.id)), is_output=node.id in outputs)
        for node in circuit
        if wanted is None or node.kind in wanted
    ]


def count_kinds(circuit: Circuit) -> dict[NodeKind, int]:
    """Count nodes per kind, including kinds with no nodes."""
    counts = Counter(node.kind for node in circuit)
    return {kind: counts.get(kind, 0) for kind in NodeKind}


def resolve_node_ref(circuit: Circuit, ref: str) -> NodeId:
    """Resolve a numeric id (``"3"``, ``"#3"``) or a node label to a node id.

    Raises:
        UnknownNodeError: If no node matches.

    """
    text = ref.strip().removeprefix("#")
    if text.isascii() and text.isdigit():
        node_id = int(text)
        if node_id not in circuit:
            raise UnknownNodeError(node_id)
        return NodeId(node_id)

    for node in circuit:
        if node.label == text:
            return node.id
    raise UnknownNodeError(ref)


def parse_binding(text: str) -> tuple[str, Scalar]:
    """Split a ``NAME=VALUE`` argument.

    Raises:
        BindingError: If the text has no '=' or the value is not a number.

    """
    name, sep, raw_value = text.partition("=")
    if not sep or not name.strip():
        msg = f"Invalid binding '{text}'. Expected NAME=VALUE"
        raise BindingError(msg)
    try:
        value = parse_scalar(raw_value)
    except ValueError as e:
        msg = f"Invalid value in binding '{text}': {e}"
        raise BindingError(msg) from e
    return name.strip(), value


def build_assignment(circuit: Circuit, bindings: Iterable[str]) -> dict[NodeId, Scalar]:
    """Build an assignment from ``NAME=VALUE`` arguments.

    ``NAME`` is an input label or a node id.

    Raises:
        BindingError: If an argument is malformed.
        UnknownNodeError: If a name matches no node.

    """
    assignment: dict[NodeId, Scalar] = {}
    for binding in bindings:
        name, value = parse_binding(binding)
        assignment[resolve_node_ref(circuit, name)] = value
    return assignment


def get_dependency_tree(circuit: Circuit, node_id: NodeId, *, max_depth: int | None = None) -> TreeNode:
    """Build the tree of operands below a node.

    Each node is expanded once. Later occurrences of an already expanded
    operand are shown as leaves, so shared operands do not blow up the tree.

    Args:
        circuit: The circuit to inspect.
        node_id: Root of the tree.
        max_depth: Maximum depth to expand, None for unlimited.

    Raises:
        UnknownNodeError: If the node does not exist.

    """
    root = TreeNode(node=circuit.node(node_id), children=[])
    visited: set[NodeId] = {node_id}
    # Explicit stack so deep chains do not hit the recursion limit
    stack: list[tuple[TreeNode, NodeId, int]] = []
    if max_depth is None or max_depth > 0:
        stack.extend((root, op, 1) for op in reversed(root.node.operands))

    while stack:
        parent, current, depth = stack.pop()
        child = TreeNode(node=circuit.node(current), children=[])
        parent.children.append(child)
        if current in visited:
            continue
        visited.add(current)
        if max_depth is None or depth < max_depth:
            stack.extend((child, op, depth + 1) for op in reversed(child.node.operands))

    return root
