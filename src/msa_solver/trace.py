"""SolveTrace — round-by-round audit trail of one solver call.

Each Select/Contract round leaves one :class:`RoundTrace`: the size of
the graph it ran on, the weight it added to the running total, and the
sizes of the cycles it contracted.  The final round has no cycles, or
is the round in which the missing in-edge was detected.

Usage
-----
>>> from msa_solver import solve, DEFAULT_OPTIONS
>>> res = solve(3, 0, [(0, 1, 10), (1, 2, 20), (2, 1, 5)],
...             options=DEFAULT_OPTIONS.replace(record_trace=True))
>>> res.trace.n_rounds
2
>>> print(res.trace.summary())
found weight=30 in 2 round(s) (n: 3 → 2)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "RoundTrace",
    "SolveTrace",
]


# ═══════════════════════════════════════════════════════════════════
# RoundTrace — one Select/Contract round
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RoundTrace:
    """What a single round saw and did.

    ``selected_weight`` is ``None`` for a round that failed during
    selection (nothing was accumulated).
    """

    round_index: int
    n_nodes: int
    root: int
    n_edges: int
    selected_weight: Optional[int] = None
    cycle_sizes: Tuple[int, ...] = ()

    @property
    def n_cycles(self) -> int:
        return len(self.cycle_sizes)

    @property
    def nodes_removed(self) -> int:
        """How many nodes the contraction after this round removes."""
        return sum(s - 1 for s in self.cycle_sizes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_index": self.round_index,
            "n_nodes": self.n_nodes,
            "root": self.root,
            "n_edges": self.n_edges,
            "selected_weight": self.selected_weight,
            "cycle_sizes": list(self.cycle_sizes),
        }


# ═══════════════════════════════════════════════════════════════════
# SolveTrace — the full run
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SolveTrace:
    """Every round of one solver call, in order."""

    rounds: Tuple[RoundTrace, ...]
    total: Optional[int]
    found: bool

    @property
    def n_rounds(self) -> int:
        return len(self.rounds)

    @property
    def n_contractions(self) -> int:
        return sum(1 for r in self.rounds if r.n_cycles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": self.found,
            "total": self.total,
            "n_rounds": self.n_rounds,
            "rounds": [r.to_dict() for r in self.rounds],
        }

    def summary(self) -> str:
        """One-line human-readable summary."""
        if self.rounds:
            sizes = f"n: {self.rounds[0].n_nodes} → {self.rounds[-1].n_nodes}"
        else:
            sizes = "no rounds"
        head = f"found weight={self.total}" if self.found else "no arborescence"
        return f"{head} in {self.n_rounds} round(s) ({sizes})"

    def explain(self) -> str:
        """Multi-line table of the rounds."""
        lines = [self.summary(), ""]
        lines.append(f"  {'round':>5s} {'nodes':>6s} {'edges':>6s} "
                     f"{'root':>5s} {'added':>10s}  cycles")
        running = 0
        for r in self.rounds:
            if r.selected_weight is None:
                added = "failed"
            else:
                running += r.selected_weight
                added = f"{r.selected_weight:+d}"
            cycles = ", ".join(str(s) for s in r.cycle_sizes) or "-"
            lines.append(f"  {r.round_index:>5d} {r.n_nodes:>6d} "
                         f"{r.n_edges:>6d} {r.root:>5d} {added:>10s}  "
                         f"{cycles}")
        if self.found:
            lines.append(f"  total = {running}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"SolveTrace(found={self.found}, total={self.total}, "
                f"rounds={self.n_rounds})")
