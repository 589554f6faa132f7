"""Tests for circuit query functions used by CLI commands."""

from fractions import Fraction

import pytest

from arithmetic_circuit import Circuit, NodeKind, UnknownNodeError
from arithmetic_circuit._cli.graph_query import (
    BindingError,
    TreeNode,
    build_assignment,
    count_kinds,
    get_dependency_tree,
    list_nodes,
    parse_binding,
    resolve_node_ref,
)

# --- Fixtures ---


@pytest.fixture
def circuit() -> Circuit:
    """x * y + 2, with x and y labelled."""
    circuit = Circuit("test")
    x = circuit.add_input("x")
    y = circuit.add_input("y")
    product = circuit.add_mul(x, y)
    two = circuit.add_constant(2, label="two")
    circuit.mark_output(circuit.add_add(product, two))
    return circuit


class TestListNodes:
    def test_all_nodes(self, circuit: Circuit) -> None:
        nodes = list_nodes(circuit)
        assert [info.node.id for info in nodes] == [0, 1, 2, 3, 4]
        assert [info.consumer_count for info in nodes] == [1, 1, 1, 1, 0]
        assert [info.is_output for info in nodes] == [False, False, False, False, True]

    def test_filter_by_kind(self, circuit: Circuit) -> None:
        nodes = list_nodes(circuit, kinds=[NodeKind.INPUT])
        assert [info.node.label for info in nodes] == ["x", "y"]

    def test_count_kinds(self, circuit: Circuit) -> None:
        assert count_kinds(circuit) == {
            NodeKind.INPUT: 2,
            NodeKind.CONSTANT: 1,
            NodeKind.ADD: 1,
            NodeKind.MUL: 1,
            NodeKind.HINT: 0,
        }


class TestResolveNodeRef:
    @pytest.mark.parametrize(("ref", "expected"), [("0", 0), ("#4", 4), ("y", 1), ("two", 3)])
    def test_resolves(self, circuit: Circuit, ref: str, expected: int) -> None:
        assert resolve_node_ref(circuit, ref) == expected

    @pytest.mark.parametrize("ref", ["5", "z", "-1", "²", "#¹"])
    def test_unknown(self, circuit: Circuit, ref: str) -> None:
        with pytest.raises(UnknownNodeError):
            resolve_node_ref(circuit, ref)


class TestBindings:
    def test_parse_binding(self) -> None:
        assert parse_binding("x = 3/4") == ("x", Fraction(3, 4))

    @pytest.mark.parametrize("text", ["x", "=3", "x=abc"])
    def test_invalid_binding(self, text: str) -> None:
        with pytest.raises(BindingError):
            parse_binding(text)

    def test_build_assignment(self, circuit: Circuit) -> None:
        assert build_assignment(circuit, ["x=2", "1=-3"]) == {0: 2, 1: -3}

    def test_build_assignment_unknown_name(self, circuit: Circuit) -> None:
        with pytest.raises(UnknownNodeError):
            build_assignment(circuit, ["z=1"])


class TestDependencyTree:
    def test_tree(self, circuit: Circuit) -> None:
        tree = get_dependency_tree(circuit, 4)
        assert tree.node.id == 4
        assert [child.node.id for child in tree.children] == [2, 3]
        assert [leaf.node.id for leaf in tree.children[0].children] == [0, 1]
        assert tree.children[1].children == []

    def test_max_depth(self, circuit: Circuit) -> None:
        tree = get_dependency_tree(circuit, 4, max_depth=1)
        assert [child.node.id for child in tree.children] == [2, 3]
        assert tree.children[0].children == []

    def test_unknown_root(self, circuit: Circuit) -> None:
        with pytest.raises(UnknownNodeError):
            get_dependency_tree(circuit, 9)

    def test_shared_operand_expanded_once(self, circuit: Circuit) -> None:
        # (x*y + 2) * (x*y + 2): the sum is expanded under the first operand only
        square = circuit.add_mul(4, 4)
        tree = get_dependency_tree(circuit, square)
        first, second = tree.children
        assert first.node.id == second.node.id == 4
        assert [child.node.id for child in first.children] == [2, 3]
        assert second.children == []

    def test_repeated_squaring_stays_linear(self) -> None:
        circuit = Circuit()
        node = circuit.add_input("x")
        for _ in range(18):
            node = circuit.add_mul(node, node)

        def count(tree: TreeNode) -> int:
            return 1 + sum(count(child) for child in tree.children)

        # Each of the 18 products shows one expanded operand and one leaf
        assert count(get_dependency_tree(circuit, node)) == 1 + 2 * 18

    def test_deep_chain(self) -> None:
        circuit = Circuit()
        x = circuit.add_input("x")
        node = x
        for _ in range(3000):
            node = circuit.add_add(node, x)
        tree = get_dependency_tree(circuit, node)
        depth = 0
        while tree.children:
            tree = tree.children[0]
            depth += 1
        assert depth == 3000
        assert tree.node.id == x
