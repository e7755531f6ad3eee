"""Graph snapshot — the immutable per-round input of the solver.

A :class:`GraphSnapshot` is ``(n, root, edges)`` with the edge list held
as three parallel, read-only ``int64`` arrays.  The solver never edits a
snapshot; each contraction round builds a new one from the previous
round's arrays, so every round boundary can be inspected on its own.

Usage
-----
>>> from msa_solver.graph import GraphSnapshot, Edge
>>> g = GraphSnapshot.from_edges(3, 0, [(0, 1, 10), Edge(0, 2, 5)])
>>> g.n_edges
2
>>> list(g.edges())
[Edge(source=0, target=1, weight=10), Edge(source=0, target=2, weight=5)]
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import breadth_first_order

from .errors import InvalidArgument

__all__ = [
    "Edge",
    "GraphSnapshot",
    "WEIGHT_LIMIT",
    "validate_problem",
]

# |weight| must stay below this so reduced costs (w - w_min) fit in int64.
WEIGHT_LIMIT: int = 2 ** 62


class Edge(NamedTuple):
    """Directed weighted edge ``source → target``."""
    source: int
    target: int
    weight: int


def _is_int(x) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


# ═══════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════

def validate_problem(n, root, edges: Iterable) -> List[Edge]:
    """Check the call contract and return the edges as :class:`Edge` s.

    Raises
    ------
    InvalidArgument
        If ``n`` is not a positive integer, ``root`` is outside
        ``[0, n)``, or any edge is malformed, out of range, or carries a
        weight whose magnitude reaches :data:`WEIGHT_LIMIT`.
    """
    if not _is_int(n) or n < 1:
        raise InvalidArgument(f"n must be a positive integer, got {n!r}")
    if not _is_int(root) or not 0 <= root < n:
        raise InvalidArgument(f"root must lie in [0, {n}), got {root!r}")

    checked: List[Edge] = []
    for i, e in enumerate(edges):
        try:
            u, v, w = e
        except (TypeError, ValueError):
            raise InvalidArgument(
                f"edge #{i} is not a (source, target, weight) triple: {e!r}"
            ) from None
        if not (_is_int(u) and _is_int(v) and _is_int(w)):
            raise InvalidArgument(f"edge #{i} has non-integer fields: {e!r}")
        if not (0 <= u < n and 0 <= v < n):
            raise InvalidArgument(
                f"edge #{i} endpoints {u}→{v} outside [0, {n})")
        if abs(w) >= WEIGHT_LIMIT:
            raise InvalidArgument(
                f"edge #{i} weight {w} exceeds ±2**62")
        checked.append(Edge(int(u), int(v), int(w)))
    return checked


# ═══════════════════════════════════════════════════════════════════
# GraphSnapshot
# ═══════════════════════════════════════════════════════════════════

def _frozen(a) -> np.ndarray:
    arr = np.array(a, dtype=np.int64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class GraphSnapshot:
    """One round's graph: node count, root and edge arrays.

    Parameters
    ----------
    n : int
        Number of nodes; ids are ``0 … n-1``.
    root : int
        Root index.
    sources, targets, weights : (E,) int64 arrays
        Edge ``i`` is ``sources[i] → targets[i]`` with ``weights[i]``.
        Edge order matters only for tie-breaking.

    Notes
    -----
    Arrays are copied and marked read-only on construction.
    """

    n: int
    root: int
    sources: np.ndarray
    targets: np.ndarray
    weights: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "n", int(self.n))
        object.__setattr__(self, "root", int(self.root))
        for name in ("sources", "targets", "weights"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        if not (len(self.sources) == len(self.targets) == len(self.weights)):
            raise InvalidArgument("edge arrays have different lengths")

    # ── construction ────────────────────────────────────────────

    @classmethod
    def from_edges(
        cls,
        n: int,
        root: int,
        edges: Iterable[Sequence[int]],
        *,
        validate: bool = True,
    ) -> "GraphSnapshot":
        """Build a snapshot from ``(source, target, weight)`` triples."""
        if validate:
            edge_list = validate_problem(n, root, edges)
        else:
            edge_list = [Edge(*e) for e in edges]
        if edge_list:
            src, dst, w = zip(*edge_list)
        else:
            src, dst, w = (), (), ()
        return cls(n, root, src, dst, w)

    # ── read ────────────────────────────────────────────────────

    @property
    def n_edges(self) -> int:
        return len(self.weights)

    def edges(self) -> Iterator[Edge]:
        """Iterate the edges in order as :class:`Edge` tuples."""
        for u, v, w in zip(self.sources.tolist(), self.targets.tolist(),
                           self.weights.tolist()):
            yield Edge(u, v, w)

    def edge_list(self) -> List[Tuple[int, int, int]]:
        return [tuple(e) for e in self.edges()]

    def in_degree(self) -> np.ndarray:
        """Per-node count of incoming edges, self-loops excluded."""
        keep = self.sources != self.targets
        return np.bincount(self.targets[keep], minlength=self.n)

    def check(self) -> "GraphSnapshot":
        """Range-check ``n``, ``root`` and the edge arrays; return self.

        The vectorised counterpart of :func:`validate_problem` for
        snapshots built directly from arrays.
        """
        if self.n < 1:
            raise InvalidArgument(f"n must be a positive integer, got {self.n}")
        if not 0 <= self.root < self.n:
            raise InvalidArgument(
                f"root must lie in [0, {self.n}), got {self.root}")
        if self.n_edges:
            ends = np.concatenate([self.sources, self.targets])
            if ends.min() < 0 or ends.max() >= self.n:
                raise InvalidArgument(
                    f"edge endpoints outside [0, {self.n})")
            if (self.weights.max() >= WEIGHT_LIMIT
                    or self.weights.min() <= -WEIGHT_LIMIT):
                raise InvalidArgument("edge weight exceeds ±2**62")
        return self

    def unreachable_nodes(self) -> np.ndarray:
        """Sorted ids of nodes with no directed path from the root."""
        adj = csr_matrix(
            (np.ones(self.n_edges, dtype=np.float64),
             (self.sources, self.targets)),
            shape=(self.n, self.n),
        )
        reached = breadth_first_order(
            adj, self.root, directed=True, return_predecessors=False)
        return np.setdiff1d(np.arange(self.n), reached)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphSnapshot):
            return NotImplemented
        return (self.n == other.n and self.root == other.root
                and np.array_equal(self.sources, other.sources)
                and np.array_equal(self.targets, other.targets)
                and np.array_equal(self.weights, other.weights))

    def __repr__(self) -> str:
        return (f"GraphSnapshot(n={self.n}, root={self.root}, "
                f"{self.n_edges} edges)")
