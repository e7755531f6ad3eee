"""SolverOptions — the solver's tunable switches in one immutable place.

Usage
-----
>>> from msa_solver.options import DEFAULT_OPTIONS
>>> DEFAULT_OPTIONS.validate
True
>>> traced = DEFAULT_OPTIONS.replace(record_trace=True)
>>> traced.diff(DEFAULT_OPTIONS)
{'record_trace': (True, False)}
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Tuple

__all__ = [
    "SolverOptions",
    "DEFAULT_OPTIONS",
]


@dataclass(frozen=True)
class SolverOptions:
    """Immutable solver configuration.

    Parameters
    ----------
    validate : bool
        Check ``n``, ``root`` and every edge before the first round and
        raise :class:`~msa_solver.errors.InvalidArgument` on violation.
        Turn off only for inputs already known to be well formed.
    record_trace : bool
        Attach a :class:`~msa_solver.trace.SolveTrace` to the result.
    diagnose_unreachable : bool
        On failure, compute which original nodes the root cannot reach
        (one BFS over the input graph).
    """

    validate: bool = True
    record_trace: bool = False
    diagnose_unreachable: bool = True

    def replace(self, **overrides: Any) -> "SolverOptions":
        """Return a copy with selected fields overridden.

        Raises
        ------
        KeyError
            If an override names an unknown option.
        """
        valid = {f.name for f in fields(self)}
        for k in overrides:
            if k not in valid:
                raise KeyError(
                    f"Unknown solver option {k!r}. "
                    f"Valid options: {sorted(valid)}"
                )
        merged = asdict(self)
        merged.update(overrides)
        return SolverOptions(**merged)

    def diff(self, other: "SolverOptions") -> Dict[str, Tuple[Any, Any]]:
        """Return ``{name: (self_value, other_value)}`` for differing fields."""
        mine, theirs = asdict(self), asdict(other)
        return {k: (mine[k], theirs[k]) for k in mine if mine[k] != theirs[k]}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_OPTIONS = SolverOptions()
