"""Tests for the graph data model (msa_solver.graph)."""

import numpy as np
import pytest

from msa_solver.errors import InvalidArgument, MSAError
from msa_solver.graph import Edge, GraphSnapshot, WEIGHT_LIMIT, validate_problem


# ── Fixtures ────────────────────────────────────────────────────

@pytest.fixture
def small_graph():
    return GraphSnapshot.from_edges(
        4, 0, [(0, 1, 3), (1, 2, -2), (2, 2, 9), Edge(0, 3, 5)])


class TestEdge:

    def test_fields(self):
        e = Edge(1, 2, -7)
        assert (e.source, e.target, e.weight) == (1, 2, -7)

    def test_is_a_tuple(self):
        assert Edge(0, 1, 2) == (0, 1, 2)


class TestValidateProblem:

    def test_returns_edges(self):
        out = validate_problem(3, 1, [(0, 1, 2), [2, 0, -1]])
        assert out == [Edge(0, 1, 2), Edge(2, 0, -1)]
        assert all(isinstance(e, Edge) for e in out)

    def test_bool_is_not_an_integer(self):
        with pytest.raises(InvalidArgument):
            validate_problem(True, 0, [])

    def test_weight_just_below_limit_ok(self):
        validate_problem(2, 0, [(0, 1, WEIGHT_LIMIT - 1)])
        validate_problem(2, 0, [(0, 1, -(WEIGHT_LIMIT - 1))])

    def test_error_names_edge_index(self):
        with pytest.raises(InvalidArgument, match="edge #1"):
            validate_problem(2, 0, [(0, 1, 1), (0, 9, 1)])

    def test_errors_share_base_class(self):
        with pytest.raises(MSAError):
            validate_problem(0, 0, [])

    def test_accepts_generator(self):
        gen = ((0, v, v) for v in range(1, 4))
        assert len(validate_problem(4, 0, gen)) == 3


class TestGraphSnapshot:

    def test_arrays(self, small_graph):
        assert small_graph.sources.dtype == np.int64
        assert small_graph.sources.tolist() == [0, 1, 2, 0]
        assert small_graph.targets.tolist() == [1, 2, 2, 3]
        assert small_graph.weights.tolist() == [3, -2, 9, 5]
        assert small_graph.n_edges == 4

    def test_arrays_read_only(self, small_graph):
        with pytest.raises(ValueError):
            small_graph.weights[0] = 100

    def test_frozen(self, small_graph):
        with pytest.raises(AttributeError):
            small_graph.n = 10

    def test_constructor_copies(self):
        w = np.array([1, 2])
        g = GraphSnapshot(3, 0, [0, 0], [1, 2], w)
        w[0] = 99
        assert g.weights.tolist() == [1, 2]

    def test_mismatched_arrays(self):
        with pytest.raises(InvalidArgument):
            GraphSnapshot(3, 0, [0, 0], [1], [1, 2])

    def test_edges_iteration(self, small_graph):
        assert list(small_graph.edges())[1] == Edge(1, 2, -2)
        assert small_graph.edge_list()[3] == (0, 3, 5)

    def test_empty(self):
        g = GraphSnapshot.from_edges(1, 0, [])
        assert g.n_edges == 0
        assert g.edge_list() == []

    def test_in_degree_skips_self_loops(self, small_graph):
        assert small_graph.in_degree().tolist() == [0, 1, 1, 1]

    def test_equality(self, small_graph):
        same = GraphSnapshot.from_edges(4, 0, small_graph.edge_list())
        assert same == small_graph
        other = GraphSnapshot.from_edges(4, 1, small_graph.edge_list())
        assert other != small_graph

    def test_repr(self, small_graph):
        assert repr(small_graph) == "GraphSnapshot(n=4, root=0, 4 edges)"

    def test_from_edges_without_validation(self):
        g = GraphSnapshot.from_edges(2, 0, [(0, 1, 1)], validate=False)
        assert g.edge_list() == [(0, 1, 1)]


class TestCheck:

    def test_valid_returns_self(self, small_graph):
        assert small_graph.check() is small_graph

    @pytest.mark.parametrize("n, root, src, dst, w", [
        (0, 0, [], [], []),
        (3, 3, [], [], []),
        (3, 0, [0], [3], [1]),
        (3, 0, [-1], [1], [1]),
        (3, 0, [0], [1], [WEIGHT_LIMIT]),
        (3, 0, [0], [1], [-WEIGHT_LIMIT]),
        (3, 0, [0], [1], [np.iinfo(np.int64).min]),
    ])
    def test_invalid(self, n, root, src, dst, w):
        with pytest.raises(InvalidArgument):
            GraphSnapshot(n, root, src, dst, w).check()


class TestUnreachable:

    def test_all_reachable(self, small_graph):
        assert small_graph.unreachable_nodes().tolist() == []

    def test_isolated_nodes(self):
        g = GraphSnapshot.from_edges(5, 0, [(0, 1, 1), (3, 4, 1), (4, 3, 1)])
        assert g.unreachable_nodes().tolist() == [2, 3, 4]

    def test_direction_matters(self):
        g = GraphSnapshot.from_edges(2, 0, [(1, 0, 1)])
        assert g.unreachable_nodes().tolist() == [1]

    def test_nonzero_root(self):
        g = GraphSnapshot.from_edges(3, 2, [(2, 0, 1), (0, 1, 1)])
        assert g.unreachable_nodes().tolist() == []

    def test_no_edges(self):
        g = GraphSnapshot.from_edges(3, 1, [])
        assert g.unreachable_nodes().tolist() == [0, 2]
