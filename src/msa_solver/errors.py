"""Exception hierarchy for the arborescence solver.

Two failure kinds exist:

* :class:`NoArborescenceExists` — a structural property of the input;
  some node cannot be reached from the root.  Never transient.
* :class:`InvalidArgument` — the caller broke the call contract
  (bad ``n``, ``root`` or edge).  Raised eagerly, before any round runs.
"""

from __future__ import annotations

from typing import Sequence, Tuple

__all__ = [
    "MSAError",
    "NoArborescenceExists",
    "InvalidArgument",
]


class MSAError(Exception):
    """Base class for every error raised by :mod:`msa_solver`."""


class NoArborescenceExists(MSAError):
    """No spanning arborescence rooted at ``root`` covers every node.

    Parameters
    ----------
    round_index : int
        0-based contraction round in which the missing in-edge was found.
    stranded : sequence of int
        Node ids *of that round's graph* with no incoming candidate.
    unreachable : sequence of int
        Node ids of the *original* graph that the root cannot reach.
        Empty when the diagnosis was switched off.
    """

    def __init__(
        self,
        round_index: int = 0,
        stranded: Sequence[int] = (),
        unreachable: Sequence[int] = (),
    ):
        self.round_index = int(round_index)
        self.stranded: Tuple[int, ...] = tuple(int(v) for v in stranded)
        self.unreachable: Tuple[int, ...] = tuple(int(v) for v in unreachable)
        super().__init__(self._message())

    def _message(self) -> str:
        msg = (f"no arborescence exists: {len(self.stranded)} node(s) "
               f"without an incoming edge in round {self.round_index}")
        if self.unreachable:
            shown = ", ".join(str(v) for v in self.unreachable[:10])
            more = "…" if len(self.unreachable) > 10 else ""
            msg += f"; unreachable from root: [{shown}{more}]"
        return msg


class InvalidArgument(MSAError, ValueError):
    """The arguments violate the solver's call contract."""
