"""JSON serialisation of arborescence problems.

A problem file holds one graph::

    {
      "version": 1,
      "n": 3,
      "root": 0,
      "edges": [[0, 1, 10], [0, 2, 5]],
      "metadata": {"source": "..."}
    }

``metadata`` is optional and returned untouched.

Workflow
--------
>>> g = GraphSnapshot.from_edges(3, 0, [(0, 1, 10), (0, 2, 5)])
>>> save_graph("problem.json", g, metadata={"name": "simple tree"})
>>> g2, meta = load_graph("problem.json")
>>> solve_snapshot(g2).weight
15
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .errors import InvalidArgument
from .graph import GraphSnapshot

__all__ = [
    "FORMAT_VERSION",
    "graph_to_dict",
    "graph_from_dict",
    "graph_to_json",
    "graph_from_json",
    "save_graph",
    "load_graph",
]

FORMAT_VERSION = 1


def _numpy_safe(obj: Any) -> Any:
    """Recursively convert numpy scalars/arrays to native Python types."""
    if isinstance(obj, dict):
        return {k: _numpy_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_numpy_safe(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


# ═══════════════════════════════════════════════════════════════════
# dict / JSON
# ═══════════════════════════════════════════════════════════════════

def graph_to_dict(
    graph: GraphSnapshot,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Convert a snapshot to a JSON-serialisable dict."""
    d: Dict[str, Any] = {
        "version": FORMAT_VERSION,
        "n": graph.n,
        "root": graph.root,
        "edges": [list(e) for e in graph.edges()],
    }
    if metadata:
        d["metadata"] = _numpy_safe(metadata)
    return d


def graph_from_dict(
    d: Dict[str, Any], *, validate: bool = True,
) -> Tuple[GraphSnapshot, Dict[str, Any]]:
    """Rebuild a snapshot from :func:`graph_to_dict` output.

    Returns
    -------
    graph : GraphSnapshot
    metadata : dict

    Raises
    ------
    InvalidArgument
        If ``n``, ``root`` or ``edges`` is missing, ``metadata`` is
        present but not a mapping, or the problem is invalid and
        ``validate`` is set.
    """
    missing = [k for k in ("n", "root", "edges") if k not in d]
    if missing:
        raise InvalidArgument(f"problem dict is missing keys: {missing}")
    metadata = d.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise InvalidArgument(
            f"metadata must be a mapping, got {type(metadata).__name__}")
    graph = GraphSnapshot.from_edges(
        d["n"], d["root"], d["edges"], validate=validate)
    return graph, dict(metadata)


def graph_to_json(
    graph: GraphSnapshot,
    metadata: Optional[Dict[str, Any]] = None,
) -> str:
    return json.dumps(graph_to_dict(graph, metadata), indent=2)


def graph_from_json(
    text: str, *, validate: bool = True,
) -> Tuple[GraphSnapshot, Dict[str, Any]]:
    return graph_from_dict(json.loads(text), validate=validate)


# ═══════════════════════════════════════════════════════════════════
# Files
# ═══════════════════════════════════════════════════════════════════

def save_graph(
    path: str | Path,
    graph: GraphSnapshot,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a problem file.  Parent directories are created.  Returns the path."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(graph_to_json(graph, metadata), encoding="utf-8")
    return path


def load_graph(
    path: str | Path, *, validate: bool = True,
) -> Tuple[GraphSnapshot, Dict[str, Any]]:
    """Read a problem file written by :func:`save_graph`.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"No problem file at {path}")
    return graph_from_json(path.read_text(encoding="utf-8"), validate=validate)
