"""Rich rendering utilities for circuit commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from arithmetic_circuit._constraints import ConstraintStatus
from arithmetic_circuit._node import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from arithmetic_circuit._constraints import Constraint
    from arithmetic_circuit._eval_engine import FillResult
    from arithmetic_circuit._node import Node, NodeId

    from .graph_query import NodeInfo, TreeNode


def render_kind_summary(counts: dict[NodeKind, int], console: Console) -> None:
    """Render node counts per kind as a Rich table."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="bold")
    table.add_column("Nodes", justify="right")

    for kind, count in counts.items():
        style = _get_kind_style(kind)
        table.add_row(f"[{style}]{kind.upper()}[/{style}]", str(count))

    console.print(table)


def render_node_table(nodes: list[NodeInfo], console: Console) -> None:
    """Render node list as a Rich table.

    Args:
        nodes: List of NodeInfo to render.
        console: Rich Console to output to.

    """
    if not nodes:
        console.print("[dim]Circuit has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Id", justify="right")
    table.add_column("Kind")
    table.add_column("Label", style="dim")
    table.add_column("Operands")
    table.add_column("Consumers", justify="right")
    table.add_column("Output")

    for info in nodes:
        node = info.node
        style = _get_kind_style(node.kind)
        operands = ", ".join(f"#{op}" for op in node.operands)
        if node.kind == NodeKind.CONSTANT:
            operands = str(node.value)
        table.add_row(
            f"#{node.id}",
            f"[{style}]{node.kind.upper()}[/{style}]",
            escape(node.label or ""),
            operands,
            str(info.consumer_count),
            "[green]yes[/green]" if info.is_output else "",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(nodes)} nodes[/dim]")


def render_values(result: FillResult, node_ids: list[NodeId], console: Console) -> None:
    """Render the filled values of the given nodes."""
    if not node_ids:
        console.print("[dim]No nodes were filled[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Node")
    table.add_column("Kind")
    table.add_column("Value", justify="right", style="bold")

    for node_id in node_ids:
        node = result.circuit.node(node_id)
        style = _get_kind_style(node.kind)
        table.add_row(_node_name(node), f"[{style}]{node.kind.upper()}[/{style}]", str(result[node_id]))

    console.print(table)


def render_constraint_report(report: list[tuple[Constraint, ConstraintStatus]], console: Console) -> None:
    """Render constraint statuses as a Rich table."""
    if not report:
        console.print("[dim]Circuit has no constraints[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Constraint", style="dim")
    table.add_column("Kind")
    table.add_column("Status")

    for constraint, status in report:
        match status:
            case ConstraintStatus.SATISFIED:
                status_text = "[green]✓ SATISFIED[/green]"
            case ConstraintStatus.VIOLATED:
                status_text = "[red]✗ VIOLATED[/red]"
            case ConstraintStatus.UNEVALUATED:
                status_text = "[yellow]? UNEVALUATED[/yellow]"
        table.add_row(str(constraint), constraint.kind.upper(), status_text)

    console.print(table)


def render_tree(tree_node: TreeNode, console: Console) -> None:
    """Render a dependency tree using Rich Tree."""
    rich_tree = Tree(f"[bold]{_node_name(tree_node.node)}[/bold]")
    stack = [(rich_tree, child) for child in reversed(tree_node.children)]
    while stack:
        parent, child = stack.pop()
        child_tree = parent.add(_node_name(child.node))
        stack.extend((child_tree, grandchild) for grandchild in reversed(child.children))
    console.print(rich_tree)


def _node_name(node: Node) -> str:
    style = _get_kind_style(node.kind)
    return f"[{style}]{escape(str(node))}[/{style}]"


def _get_kind_style(kind: NodeKind) -> str:
    """Get Rich style string for a node kind."""
    match kind:
        case NodeKind.INPUT:
            return "blue"
        case NodeKind.CONSTANT:
            return "magenta"
        case NodeKind.ADD | NodeKind.MUL:
            return "green"
        case NodeKind.HINT:
            return "yellow"
