"""Named acceptance scenarios and a runner that reports on them.

Quick start
-----------
>>> from msa_solver.scenarios import ACCEPTANCE_SCENARIOS, run_scenarios
>>> report = run_scenarios(ACCEPTANCE_SCENARIOS)
>>> print(report.summary())

Corpus conventions
------------------
Each entry is a :class:`Scenario` with ``(name, n, root, edges,
expected)``.  ``expected`` is the minimum arborescence weight, or
``None`` when no arborescence exists.
"""

from __future__ import annotations

import datetime
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .graph import GraphSnapshot
from .options import DEFAULT_OPTIONS, SolverOptions
from .solver import solve_snapshot

__all__ = [
    "Scenario",
    "ScenarioResult",
    "ScenarioReport",
    "ACCEPTANCE_SCENARIOS",
    "SAMPLE_SCENARIO",
    "run_scenarios",
]


# ═══════════════════════════════════════════════════════════════════
# Data types
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Scenario:
    """One graph with its known answer."""
    name: str
    n: int
    root: int
    edges: Tuple[Tuple[int, int, int], ...]
    expected: Optional[int]

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot.from_edges(self.n, self.root, self.edges)

    def __repr__(self) -> str:
        want = "none" if self.expected is None else self.expected
        return (f"Scenario({self.name!r}, n={self.n}, root={self.root}, "
                f"{len(self.edges)} edges, expected={want})")


@dataclass
class ScenarioResult:
    """Outcome of running one scenario."""
    scenario: Scenario
    weight: Optional[int]
    passed: bool
    n_rounds: int = 0
    time_s: float = 0.0
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.scenario.name


@dataclass
class ScenarioReport:
    """Pass/fail results over a scenario corpus."""

    results: List[ScenarioResult]
    timestamp: str = ""
    total_time_s: float = 0.0

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.datetime.now().isoformat()

    @property
    def n_total(self) -> int:
        return len(self.results)

    @property
    def n_passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def all_passed(self) -> bool:
        return self.n_passed == self.n_total

    @property
    def failures(self) -> List[ScenarioResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        """Human-readable summary string."""
        lines = [
            f"Scenario Report — {self.timestamp}",
            f"{'=' * 55}",
            f"Passed: {self.n_passed}/{self.n_total}",
            "",
        ]
        for r in self.results:
            mark = "ok  " if r.passed else "FAIL"
            got = "none" if r.weight is None else r.weight
            want = ("none" if r.scenario.expected is None
                    else r.scenario.expected)
            line = (f"  {mark} {r.name:<32s} got={got!s:<6} "
                    f"expected={want!s:<6} rounds={r.n_rounds}")
            if r.error:
                line += f"  [{r.error}]"
            lines.append(line)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "total_time_s": self.total_time_s,
            "n_passed": self.n_passed,
            "n_total": self.n_total,
            "results": [
                {
                    "name": r.name,
                    "expected": r.scenario.expected,
                    "weight": r.weight,
                    "passed": r.passed,
                    "n_rounds": r.n_rounds,
                    "time_s": r.time_s,
                    "error": r.error,
                }
                for r in self.results
            ],
        }

    def save(self, path: str | Path) -> None:
        """Save report to JSON file."""
        Path(path).write_text(
            json.dumps(self.to_dict(), indent=2), encoding="utf-8")


# ═══════════════════════════════════════════════════════════════════
# Corpus
# ═══════════════════════════════════════════════════════════════════

def _sc(name, n, root, edges, expected) -> Scenario:
    return Scenario(name, n, root, tuple(tuple(e) for e in edges), expected)


SAMPLE_SCENARIO = _sc(
    "sample", 5, 0,
    [(0, 1, 4), (0, 2, 2), (1, 2, 5), (2, 3, 2), (3, 4, 3), (4, 3, 1)],
    11,
)

ACCEPTANCE_SCENARIOS: List[Scenario] = [
    _sc("simple_tree", 3, 0, [(0, 1, 10), (0, 2, 5)], 15),
    _sc("simple_cycle", 3, 0, [(0, 1, 10), (1, 2, 20), (2, 1, 5)], 30),
    _sc("unreachable_node", 3, 0, [(0, 1, 10)], None),
    _sc("complex_cycle", 4, 0,
        [(0, 1, 10), (1, 2, 10), (2, 3, 10), (3, 1, 10), (0, 3, 30)], 30),
    _sc("alt_path_after_contraction", 4, 0,
        [(0, 1, 10), (0, 2, 12), (1, 2, 5), (2, 1, 3), (0, 3, 20)], 35),
    _sc("two_disjoint_cycles", 5, 4,
        [(4, 0, 10), (0, 1, 5), (1, 0, 6), (4, 2, 12),
         (2, 3, 7), (3, 2, 8), (4, 1, 18), (4, 3, 22)], 34),
    _sc("node_without_in_edge", 3, 0, [(1, 0, 10), (1, 2, 5)], None),
    _sc("disconnected", 4, 0, [(0, 1, 10), (2, 3, 5)], None),
    _sc("single_node", 1, 0, [], 0),
    _sc("two_nodes_path", 2, 0, [(0, 1, 5)], 5),
    _sc("two_nodes_no_path", 2, 0, [], None),
    _sc("negative_weights", 3, 0, [(0, 1, 10), (1, 2, -5), (0, 2, 8)], 5),
    _sc("negative_weight_cycle", 3, 0,
        [(0, 1, 10), (1, 2, 5), (2, 1, -8)], 15),
    SAMPLE_SCENARIO,
]


# ═══════════════════════════════════════════════════════════════════
# Runner
# ═══════════════════════════════════════════════════════════════════

def run_scenarios(
    scenarios: Sequence[Scenario] = tuple(ACCEPTANCE_SCENARIOS),
    *,
    options: SolverOptions = DEFAULT_OPTIONS,
    verbose: bool = False,
    on_done: Optional[Callable[[ScenarioResult], None]] = None,
) -> ScenarioReport:
    """Solve every scenario and compare with its expected answer.

    A scenario that raises is recorded as failed with its error message;
    the remaining scenarios still run.
    """
    results: List[ScenarioResult] = []
    t_total = time.perf_counter()

    for i, sc in enumerate(scenarios):
        t0 = time.perf_counter()
        try:
            res = solve_snapshot(sc.snapshot(), options=options)
            weight = res.weight
            result = ScenarioResult(
                scenario=sc,
                weight=weight,
                passed=(weight == sc.expected),
                n_rounds=res.n_rounds,
                time_s=round(time.perf_counter() - t0, 6),
            )
        except Exception as exc:
            result = ScenarioResult(
                scenario=sc, weight=None, passed=False,
                time_s=round(time.perf_counter() - t0, 6),
                error=f"{type(exc).__name__}: {exc}",
            )

        if verbose:
            status = "ok" if result.passed else "FAIL"
            print(f"[{i+1}/{len(scenarios)}] {sc.name} … {status}",
                  flush=True)
        if on_done:
            on_done(result)
        results.append(result)

    return ScenarioReport(
        results=results,
        total_time_s=round(time.perf_counter() - t_total, 6),
    )
