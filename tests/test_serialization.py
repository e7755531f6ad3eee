"""Tests for problem serialisation (msa_solver.serialization).

Verifies the dict/JSON format and file save/load.
"""

import json
from pathlib import Path

import numpy as np
import pytest

from msa_solver import solve_snapshot
from msa_solver.errors import InvalidArgument
from msa_solver.graph import GraphSnapshot
from msa_solver.serialization import (
    FORMAT_VERSION,
    graph_from_dict,
    graph_from_json,
    graph_to_dict,
    graph_to_json,
    load_graph,
    save_graph,
)


# ── Fixtures ────────────────────────────────────────────────────

@pytest.fixture
def cycle_graph():
    return GraphSnapshot.from_edges(
        4, 0, [(0, 1, 10), (0, 2, 12), (1, 2, 5), (2, 1, 3), (0, 3, 20)])


class TestDict:

    def test_layout(self, cycle_graph):
        d = graph_to_dict(cycle_graph)
        assert d["version"] == FORMAT_VERSION
        assert d["n"] == 4
        assert d["root"] == 0
        assert d["edges"][0] == [0, 1, 10]
        assert "metadata" not in d

    def test_native_types(self, cycle_graph):
        d = graph_to_dict(cycle_graph, metadata={"seed": np.int64(3)})
        assert type(d["n"]) is int
        assert type(d["edges"][0][2]) is int
        assert type(d["metadata"]["seed"]) is int
        json.dumps(d)

    def test_restore(self, cycle_graph):
        g, meta = graph_from_dict(graph_to_dict(cycle_graph, {"name": "x"}))
        assert g == cycle_graph
        assert meta == {"name": "x"}

    def test_missing_keys(self):
        with pytest.raises(InvalidArgument, match="missing"):
            graph_from_dict({"n": 3, "edges": []})

    def test_version_optional(self):
        g, meta = graph_from_dict({"n": 2, "root": 0, "edges": [[0, 1, 4]]})
        assert g.edge_list() == [(0, 1, 4)]
        assert meta == {}

    def test_null_metadata_is_empty(self):
        _, meta = graph_from_dict(
            {"n": 2, "root": 0, "edges": [[0, 1, 4]], "metadata": None})
        assert meta == {}

    def test_non_mapping_metadata_rejected(self):
        with pytest.raises(InvalidArgument, match="metadata"):
            graph_from_dict(
                {"n": 2, "root": 0, "edges": [[0, 1, 4]], "metadata": [1, 2]})

    def test_invalid_problem_rejected(self):
        with pytest.raises(InvalidArgument):
            graph_from_dict({"n": 2, "root": 0, "edges": [[0, 5, 4]]})


class TestJson:

    def test_json_text(self, cycle_graph):
        text = graph_to_json(cycle_graph)
        assert json.loads(text)["n"] == 4

    def test_json_restore_solves_the_same(self, cycle_graph):
        g, _ = graph_from_json(graph_to_json(cycle_graph))
        assert solve_snapshot(g).weight == 35


class TestFiles:

    def test_save_and_load(self, tmp_path, cycle_graph):
        path = save_graph(tmp_path / "sub" / "p.json", cycle_graph,
                          metadata={"name": "alt path"})
        assert path.exists()
        g, meta = load_graph(path)
        assert g == cycle_graph
        assert meta["name"] == "alt path"

    def test_load_accepts_str(self, tmp_path, cycle_graph):
        path = save_graph(str(tmp_path / "p.json"), cycle_graph)
        assert isinstance(path, Path)
        g, _ = load_graph(str(path))
        assert g.n == 4

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "nope.json")
