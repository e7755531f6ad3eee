"""MSAResult — explicit success/failure outcome of a solver call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import NoArborescenceExists
from .trace import SolveTrace

__all__ = ["MSAResult"]


@dataclass(frozen=True)
class MSAResult:
    """Either a total weight or a :class:`NoArborescenceExists` failure.

    Exactly one of ``weight`` / ``failure`` is set.  Totals may be
    negative, so there is no numeric sentinel for "not found".
    """

    weight: Optional[int] = None
    failure: Optional[NoArborescenceExists] = None
    n_rounds: int = 0
    trace: Optional[SolveTrace] = None

    def __post_init__(self):
        if (self.weight is None) == (self.failure is None):
            raise ValueError("MSAResult needs exactly one of weight/failure")

    @classmethod
    def success(cls, weight: int, **kwargs) -> "MSAResult":
        return cls(weight=int(weight), **kwargs)

    @classmethod
    def no_arborescence(cls, failure: NoArborescenceExists,
                        **kwargs) -> "MSAResult":
        return cls(failure=failure, **kwargs)

    @property
    def found(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.found

    def unwrap(self) -> int:
        """Return the weight, or raise the carried failure."""
        if self.failure is not None:
            raise self.failure
        return self.weight

    def weight_or(self, default: Any) -> Any:
        return self.weight if self.found else default

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "found": self.found,
            "weight": self.weight,
            "n_rounds": self.n_rounds,
        }
        if self.failure is not None:
            d["failure"] = {
                "round_index": self.failure.round_index,
                "stranded": list(self.failure.stranded),
                "unreachable": list(self.failure.unreachable),
            }
        if self.trace is not None:
            d["trace"] = self.trace.to_dict()
        return d

    def __repr__(self) -> str:
        if self.found:
            return f"MSAResult(weight={self.weight}, rounds={self.n_rounds})"
        return (f"MSAResult(no arborescence, "
                f"round={self.failure.round_index})")
