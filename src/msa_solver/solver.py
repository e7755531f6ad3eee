"""Chu-Liu-Edmonds minimum spanning arborescence.

Given ``n`` nodes, a root and a list of directed integer-weighted edges,
find the total weight of the cheapest spanning arborescence: every
non-root node keeps exactly one incoming edge and the root reaches
every node.

The solver is one loop over immutable :class:`GraphSnapshot` s:

1. **Select** — each non-root node keeps its cheapest incoming edge
   (self-loops ignored, first edge in order wins ties).  A node with no
   candidate ends the run: no arborescence exists.
2. **Accumulate** — the selected weights join the running total.
3. **Detect cycles** — the selections form a functional graph; an
   iterative three-colour walk finds its cycles.
4. **Terminate** when there is no cycle; the total is the answer.
5. **Contract** — each cycle becomes one node; every crossing edge
   ``u → v`` is re-weighted to ``w - w(selected edge of v)``, edges
   inside a cycle are dropped, and the loop restarts on the new snapshot.

Every contraction removes at least one node, so there are at most ``n``
rounds.  A round is linear in ``n + E``; the whole run is
``O(n · (n + E))``.

Usage
-----
>>> from msa_solver import solve, minimum_arborescence_weight
>>> minimum_arborescence_weight(3, 0, [(0, 1, 10), (1, 2, 20), (2, 1, 5)])
30
>>> res = solve(3, 0, [(0, 1, 10)])
>>> res.found, res.failure.stranded
(False, (2,))
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import NoArborescenceExists
from .graph import GraphSnapshot
from .options import DEFAULT_OPTIONS, SolverOptions
from .result import MSAResult
from .trace import RoundTrace, SolveTrace

__all__ = [
    "solve",
    "solve_snapshot",
    "minimum_arborescence_weight",
    "select_min_incoming",
    "stranded_nodes",
    "find_cycles",
    "contract",
]

logger = logging.getLogger(__name__)

NO_EDGE = -1
NO_CYCLE = -1

# Walk states for cycle detection
_UNVISITED = 0
_IN_PROGRESS = 1
_FINALIZED = 2

_INT64_MAX = np.iinfo(np.int64).max


# ═══════════════════════════════════════════════════════════════════
# Select
# ═══════════════════════════════════════════════════════════════════

def select_min_incoming(graph: GraphSnapshot) -> np.ndarray:
    """Index of each node's cheapest incoming edge, or ``NO_EDGE``.

    Self-loops and edges into the root are never selected.  Among equal
    weights the edge with the lowest index wins, i.e. a sequential scan
    that replaces its candidate only on a strictly smaller weight.

    Returns
    -------
    in_edge : (n,) int64 array
    """
    src, dst, w = graph.sources, graph.targets, graph.weights
    in_edge = np.full(graph.n, NO_EDGE, dtype=np.int64)

    cand = np.flatnonzero((src != dst) & (dst != graph.root))
    if cand.size == 0:
        return in_edge

    best_w = np.full(graph.n, _INT64_MAX, dtype=np.int64)
    np.minimum.at(best_w, dst[cand], w[cand])

    ties = cand[w[cand] == best_w[dst[cand]]]
    first = np.full(graph.n, graph.n_edges, dtype=np.int64)
    np.minimum.at(first, dst[ties], ties)

    chosen = first < graph.n_edges
    in_edge[chosen] = first[chosen]
    return in_edge


def stranded_nodes(graph: GraphSnapshot, in_edge: np.ndarray) -> np.ndarray:
    """Non-root nodes left without a selected incoming edge."""
    missing = in_edge == NO_EDGE
    missing[graph.root] = False
    return np.flatnonzero(missing)


# ═══════════════════════════════════════════════════════════════════
# Detect cycles
# ═══════════════════════════════════════════════════════════════════

def find_cycles(
    pred: Sequence[int], root: int,
) -> Tuple[List[int], List[List[int]]]:
    """Find the cycles of a functional graph without recursion.

    Parameters
    ----------
    pred : sequence of int
        ``pred[v]`` is the source of ``v``'s selected edge.  Must be a
        valid node for every ``v != root``; ``pred[root]`` is not read.
    root : int
        Pre-marked finalised, so every walk that reaches it stops.

    Returns
    -------
    cycle_of : list[int]
        Cycle id per node, ``NO_CYCLE`` for nodes on no cycle.
    cycles : list[list[int]]
        Members of each cycle, listed by following ``pred`` from the
        node where the walk closed.
    """
    n = len(pred)
    state = [_UNVISITED] * n
    state[root] = _FINALIZED
    cycle_of = [NO_CYCLE] * n
    cycles: List[List[int]] = []

    for start in range(n):
        if state[start] != _UNVISITED:
            continue

        u = start
        while state[u] == _UNVISITED:
            state[u] = _IN_PROGRESS
            u = pred[u]

        # Stopped on a node of this walk: u lies on a new cycle.
        if state[u] == _IN_PROGRESS:
            cid = len(cycles)
            members = []
            v = u
            while True:
                cycle_of[v] = cid
                members.append(v)
                v = pred[v]
                if v == u:
                    break
            cycles.append(members)

        u = start
        while state[u] != _FINALIZED:
            state[u] = _FINALIZED
            u = pred[u]

    return cycle_of, cycles


# ═══════════════════════════════════════════════════════════════════
# Contract
# ═══════════════════════════════════════════════════════════════════

def contract(
    graph: GraphSnapshot,
    in_edge: np.ndarray,
    cycle_of: Sequence[int],
    n_cycles: int,
) -> Tuple[GraphSnapshot, np.ndarray]:
    """Collapse every cycle into one node and re-weight crossing edges.

    New ids are handed out in ascending order of the old ids: a node off
    any cycle gets its own id, a cycle gets one id when its lowest
    member is reached.  Edge order is preserved.

    Returns
    -------
    contracted : GraphSnapshot
    new_id : (n,) int64 array
        Old node id → new node id.
    """
    new_id = np.empty(graph.n, dtype=np.int64)
    cycle_id = [NO_CYCLE] * n_cycles
    next_id = 0
    for v in range(graph.n):
        c = cycle_of[v]
        if c == NO_CYCLE:
            new_id[v] = next_id
            next_id += 1
        else:
            if cycle_id[c] == NO_CYCLE:
                cycle_id[c] = next_id
                next_id += 1
            new_id[v] = cycle_id[c]

    # Weight already paid for each node's in-edge; the root paid nothing.
    paid = np.zeros(graph.n, dtype=np.int64)
    has = in_edge != NO_EDGE
    paid[has] = graph.weights[in_edge[has]]

    u = new_id[graph.sources]
    v = new_id[graph.targets]
    keep = u != v
    contracted = GraphSnapshot(
        n=next_id,
        root=new_id[graph.root],
        sources=u[keep],
        targets=v[keep],
        weights=graph.weights[keep] - paid[graph.targets[keep]],
    )
    return contracted, new_id


# ═══════════════════════════════════════════════════════════════════
# Solve
# ═══════════════════════════════════════════════════════════════════

def _run(graph: GraphSnapshot, options: SolverOptions) -> MSAResult:
    original = graph
    total = 0
    rounds: List[RoundTrace] = []
    round_index = 0

    while True:
        in_edge = select_min_incoming(graph)

        missing = stranded_nodes(graph, in_edge)
        if missing.size:
            rounds.append(RoundTrace(
                round_index=round_index,
                n_nodes=graph.n,
                root=graph.root,
                n_edges=graph.n_edges,
            ))
            unreachable = (original.unreachable_nodes()
                           if options.diagnose_unreachable else ())
            failure = NoArborescenceExists(round_index, missing, unreachable)
            logger.info(f"No arborescence: {failure}")
            trace = (SolveTrace(tuple(rounds), None, False)
                     if options.record_trace else None)
            return MSAResult.no_arborescence(
                failure, n_rounds=round_index + 1, trace=trace)

        chosen = in_edge[in_edge != NO_EDGE]
        added = sum(graph.weights[chosen].tolist())
        total += added

        pred = np.full(graph.n, NO_EDGE, dtype=np.int64)
        has = in_edge != NO_EDGE
        pred[has] = graph.sources[in_edge[has]]
        cycle_of, cycles = find_cycles(pred.tolist(), graph.root)

        rounds.append(RoundTrace(
            round_index=round_index,
            n_nodes=graph.n,
            root=graph.root,
            n_edges=graph.n_edges,
            selected_weight=added,
            cycle_sizes=tuple(len(c) for c in cycles),
        ))
        logger.debug(
            f"round {round_index}: n={graph.n} E={graph.n_edges} "
            f"added={added} cycles={len(cycles)}"
        )

        if not cycles:
            trace = (SolveTrace(tuple(rounds), total, True)
                     if options.record_trace else None)
            return MSAResult.success(
                total, n_rounds=round_index + 1, trace=trace)

        graph, _ = contract(graph, in_edge, cycle_of, len(cycles))
        round_index += 1


def solve_snapshot(
    graph: GraphSnapshot,
    *,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> MSAResult:
    """Minimum spanning arborescence weight of a prepared snapshot.

    Raises
    ------
    InvalidArgument
        If ``options.validate`` and the snapshot is out of range.
    """
    if options.validate:
        graph.check()
    return _run(graph, options)


def solve(
    n: int,
    root: int,
    edges: Iterable[Sequence[int]],
    *,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> MSAResult:
    """Minimum spanning arborescence of ``(n, root, edges)``.

    Parameters
    ----------
    n : int
        Node count (``>= 1``).
    root : int
        Root index in ``[0, n)``.
    edges : iterable of (source, target, weight)
        Integer triples.  Parallel edges and self-loops are allowed.
    options : SolverOptions
        See :class:`~msa_solver.options.SolverOptions`.

    Returns
    -------
    MSAResult
        ``found`` with the total weight, or carrying a
        :class:`NoArborescenceExists` failure.

    Raises
    ------
    InvalidArgument
        If ``options.validate`` and the arguments break the contract.
    """
    graph = GraphSnapshot.from_edges(n, root, edges, validate=options.validate)
    return _run(graph, options)


def minimum_arborescence_weight(
    n: int,
    root: int,
    edges: Iterable[Sequence[int]],
    *,
    options: SolverOptions = DEFAULT_OPTIONS,
) -> int:
    """Like :func:`solve` but return the weight or raise.

    Raises
    ------
    NoArborescenceExists
        If some node cannot be reached from ``root``.
    """
    return solve(n, root, edges, options=options).unwrap()
