import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from arithmetic_circuit._circuit import Circuit
from arithmetic_circuit._errors import CircuitError
from arithmetic_circuit._eval_engine import fill

from .config import TOOL_SECTION, ConfigError, get_config, resolve_log_level
from .discover import load_circuit, load_circuit_from_source
from .graph_query import BindingError, build_assignment, count_kinds, get_dependency_tree, list_nodes, resolve_node_ref
from .graph_render import (
    render_constraint_report,
    render_kind_summary,
    render_node_table,
    render_tree,
    render_values,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

PathArgument = Annotated[
    str | None,
    typer.Argument(
        help="Path to Python script or module path (e.g., examples.polynomial:circuit). "
        "Defaults to the circuit configured in pyproject.toml",
    ),
]
CircuitOption = Annotated[
    str | None,
    typer.Option("--circuit", help="Name of the circuit variable (for script paths only)"),
]


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    return typer.Exit(code=1)


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),  # noqa: FBT003
) -> None:
    """Build and fill arithmetic circuits."""
    try:
        log_level = resolve_log_level(verbose=verbose, config=get_config())
    except ConfigError as e:
        raise _fail(str(e)) from e

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load(path: str | None, circuit_var: str | None) -> Circuit:
    try:
        if path is not None:
            err_console.print(f"[cyan]Loading circuit from:[/cyan] {escape(path)}")
            return load_circuit(path, circuit_var)

        config = get_config()
        if config.circuit is None:
            msg = f"No circuit given and no [tool.{TOOL_SECTION}].circuit configured in pyproject.toml"
            raise _fail(msg)
        err_console.print("[cyan]Loading circuit from pyproject.toml configuration[/cyan]")
        return load_circuit_from_source(config.circuit)
    except (ConfigError, ImportError, ValueError, TypeError) as e:
        raise _fail(str(e)) from e


@app.command("fill")
def fill_command(  # noqa: PLR0913
    path: PathArgument = None,
    *,
    bindings: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Input value as NAME=VALUE, where NAME is an input label or node id"),
    ] = None,
    targets: Annotated[
        list[str] | None,
        typer.Option("--target", "-t", help="Node to compute (label or id). Defaults to the circuit outputs"),
    ] = None,
    circuit_var: CircuitOption = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", help="Show every filled node, not only the targets"),
    ] = False,
    check: Annotated[
        bool,
        typer.Option("--check", help="Check all constraints (exit non-zero if any does not hold)"),
    ] = False,
) -> None:
    """Fill a circuit with input values and print the results."""
    circuit = _load(path, circuit_var)
    err_console.print(f"[cyan]Circuit:[/cyan] [bold]{escape(circuit.name)}[/bold] ({len(circuit)} nodes)")

    try:
        assignment = build_assignment(circuit, bindings or [])
        if targets:
            requested = [resolve_node_ref(circuit, ref) for ref in targets]
        else:
            requested = list(circuit.outputs or circuit.topological_order())
        fill_targets = list(requested)
        if check:
            # Constraints can only be checked on nodes the fill visits
            fill_targets.extend(node for constraint in circuit.constraints for node in constraint.nodes)
        result = fill(circuit, assignment, fill_targets)
    except (CircuitError, BindingError, TypeError, ValueError) as e:
        raise _fail(str(e)) from e

    render_values(result, list(result) if show_all else requested, out_console)

    if check:
        err_console.print()
        render_constraint_report(result.constraint_report(), err_console)
        if not result.check_constraints():
            err_console.print()
            raise _fail("Some constraints do not hold")
        err_console.print()
        err_console.print("[green]✓ All constraints hold[/green]")

    raise typer.Exit(code=0)


@app.command()
def show(
    path: PathArgument = None,
    *,
    circuit_var: CircuitOption = None,
) -> None:
    """List the nodes of a circuit."""
    circuit = _load(path, circuit_var)
    out_console.print(f"[bold]{escape(circuit.name)}[/bold]")
    render_kind_summary(count_kinds(circuit), out_console)
    render_node_table(list_nodes(circuit), out_console)


@app.command()
def tree(
    node: Annotated[str, typer.Argument(help="Node id or label to show the operands of")],
    path: PathArgument = None,
    *,
    circuit_var: CircuitOption = None,
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", help="Maximum depth to expand"),
    ] = None,
) -> None:
    """Show the dependency tree of a node."""
    circuit = _load(path, circuit_var)
    try:
        tree_node = get_dependency_tree(circuit, resolve_node_ref(circuit, node), max_depth=depth)
    except CircuitError as e:
        raise _fail(str(e)) from e
    render_tree(tree_node, out_console)


def main() -> None:
    app()
