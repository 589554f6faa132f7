"""Tests for DependencyGraph and graph algorithms."""

from arithmetic_circuit._graph import DependencyGraph, reachable


class TestReachable:
    """Tests for the reachable algorithm."""

    def test_empty_graph(self) -> None:
        assert reachable([], {}) == frozenset()

    def test_start_not_included(self) -> None:
        assert reachable(["a"], {"a": []}) == frozenset()

    def test_linear_chain(self) -> None:
        # c consumes b, b consumes a
        assert reachable(["c"], {"c": ["b"], "b": ["a"], "a": []}) == frozenset({"a", "b"})

    def test_diamond_visits_shared_node_once(self) -> None:
        edges = {"d": ["b", "c"], "b": ["a"], "c": ["a"], "a": []}
        assert reachable(["d"], edges) == frozenset({"a", "b", "c"})

    def test_multiple_starts(self) -> None:
        edges = {"c": ["a"], "d": ["b"]}
        assert reachable(["c", "d"], edges) == frozenset({"a", "b"})

    def test_start_reached_from_other_start(self) -> None:
        edges = {"b": ["a"], "a": []}
        assert reachable(["a", "b"], edges) == frozenset({"a"})

    def test_works_with_integers(self) -> None:
        assert reachable([3], {3: [2], 2: [0, 1]}) == frozenset({0, 1, 2})


class TestDependencyGraphConstruction:
    """Tests for DependencyGraph construction."""

    def test_empty_graph(self) -> None:
        graph = DependencyGraph.from_operands({})
        assert graph.nodes == frozenset()
        assert len(graph) == 0

    def test_isolated_nodes_are_kept(self) -> None:
        graph = DependencyGraph.from_operands({0: (), 1: ()})
        assert graph.nodes == frozenset({0, 1})
        assert len(graph) == 2

    def test_operand_edges(self) -> None:
        graph = DependencyGraph.from_operands({0: (), 1: (), 2: (0, 1)})
        assert graph.predecessors(2) == frozenset({0, 1})
        assert graph.successors(0) == frozenset({2})
        assert graph.successors(1) == frozenset({2})

    def test_repeated_operand(self) -> None:
        # x * x
        graph = DependencyGraph.from_operands({0: (), 1: (0, 0)})
        assert graph.predecessors(1) == frozenset({0})
        assert graph.successors(0) == frozenset({1})

    def test_contains(self) -> None:
        graph = DependencyGraph.from_operands({0: (), 1: (0,)})
        assert 0 in graph
        assert 1 in graph
        assert 2 not in graph


class TestDependencyGraphQueries:
    """Tests for DependencyGraph query methods."""

    def setup_method(self) -> None:
        # 0, 1 inputs; 2 = 0 * 0; 3 = 2 + 1; 4 = 1 + 1 (unrelated branch)
        self.graph = DependencyGraph.from_operands({0: (), 1: (), 2: (0, 0), 3: (2, 1), 4: (1, 1)})

    def test_unknown_node_has_no_edges(self) -> None:
        assert self.graph.predecessors(99) == frozenset()
        assert self.graph.successors(99) == frozenset()

    def test_roots(self) -> None:
        assert self.graph.roots() == frozenset({0, 1})

    def test_leaves(self) -> None:
        assert self.graph.leaves() == frozenset({3, 4})

    def test_ancestors(self) -> None:
        assert self.graph.ancestors(3) == frozenset({0, 1, 2})
        assert self.graph.ancestors(0) == frozenset()

    def test_ancestors_of_several_nodes(self) -> None:
        assert self.graph.ancestors(2, 4) == frozenset({0, 1})

    def test_descendants(self) -> None:
        assert self.graph.descendants(1) == frozenset({3, 4})
        assert self.graph.descendants(0) == frozenset({2, 3})

    def test_closure_includes_targets(self) -> None:
        assert self.graph.closure([2]) == frozenset({0, 2})
        assert self.graph.closure([]) == frozenset()
