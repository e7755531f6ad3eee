"""Baseline methods for comparison.

Exhaustive search — the ground-truth reference for small graphs.  It
tries every combination of one incoming edge per non-root node and
keeps the cheapest combination that forms an arborescence.  Runtime is
the product of the in-degrees, so it is only usable for a handful of
nodes, which is exactly what randomised cross-checks need.
"""

from itertools import product
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .graph import GraphSnapshot

__all__ = [
    "exhaustive_weight",
    "is_arborescence",
    "count_combinations",
]


def is_arborescence(parent: Sequence[int], root: int) -> bool:
    """True if following ``parent`` from every node reaches ``root``.

    ``parent[root]`` is ignored.  A parent chain longer than ``n`` steps
    can only be a cycle.
    """
    n = len(parent)
    for v in range(n):
        u, steps = v, 0
        while u != root:
            u = parent[u]
            steps += 1
            if steps > n:
                return False
    return True


def _incoming(graph: GraphSnapshot) -> List[List[int]]:
    incoming: List[List[int]] = [[] for _ in range(graph.n)]
    for i, (u, v, _) in enumerate(graph.edges()):
        if u != v and v != graph.root:
            incoming[v].append(i)
    return incoming


def count_combinations(graph: GraphSnapshot) -> int:
    """Number of parent assignments :func:`exhaustive_weight` would try."""
    sizes = [len(c) for v, c in enumerate(_incoming(graph)) if v != graph.root]
    return int(np.prod(sizes, dtype=object)) if sizes else 1


def exhaustive_weight(
    n: int,
    root: int,
    edges: Iterable[Sequence[int]],
    max_combinations: int = 200_000,
) -> Optional[int]:
    """Minimum arborescence weight by brute force, or None if none exists.

    Parameters
    ----------
    n, root, edges
        Same meaning as for :func:`msa_solver.solve`.
    max_combinations : int
        Refuse inputs whose search space is larger than this.

    Raises
    ------
    ValueError
        If the search space exceeds ``max_combinations``.
    """
    graph = GraphSnapshot.from_edges(n, root, edges)
    incoming = _incoming(graph)
    others = [v for v in range(n) if v != root]
    if any(not incoming[v] for v in others):
        return None

    total = count_combinations(graph)
    if total > max_combinations:
        raise ValueError(
            f"Search space of {total} combinations exceeds "
            f"max_combinations={max_combinations}")

    src = graph.sources.tolist()
    w = graph.weights.tolist()
    best: Optional[int] = None
    parent = [root] * n
    for choice in product(*(incoming[v] for v in others)):
        for v, e in zip(others, choice):
            parent[v] = src[e]
        if not is_arborescence(parent, root):
            continue
        cost = sum(w[e] for e in choice)
        if best is None or cost < best:
            best = cost
    return best
