from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class MarkerKind(Enum):
    """The two marker pools: breadcrumbs on the floor, chalk on walls."""

    FLOOR = "floor"
    WALL = "wall"


class Failure(Enum):
    """Expected, recoverable reasons an action did not happen."""

    CAPACITY_EXHAUSTED = "capacity_exhausted"
    NO_SURFACE_HIT = "no_surface_hit"
    OUT_OF_RANGE = "out_of_range"
    PATH_UNAVAILABLE = "path_unavailable"
    CANDIDATES_UNAVAILABLE = "candidates_unavailable"
    HINTS_EXHAUSTED = "hints_exhausted"


_MESSAGES = {
    (Failure.CAPACITY_EXHAUSTED, MarkerKind.FLOOR): "No breadcrumbs left",
    (Failure.CAPACITY_EXHAUSTED, MarkerKind.WALL): "No chalk left",
    (Failure.NO_SURFACE_HIT, None): "No wall in sight",
    (Failure.OUT_OF_RANGE, None): "Too far from wall",
    (Failure.PATH_UNAVAILABLE, None): "Already at the exit",
    (Failure.CANDIDATES_UNAVAILABLE, None): "No spot near the exit",
    (Failure.HINTS_EXHAUSTED, None): "No hints left",
}


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Discriminated result: either ``value`` or a ``failure``.

    ``kind`` tells capacity failures of the two marker pools apart.
    """

    value: Optional[T] = None
    failure: Optional[Failure] = None
    kind: Optional[MarkerKind] = None

    @classmethod
    def success(cls, value: T, kind: Optional[MarkerKind] = None) -> "Outcome[T]":
        return cls(value=value, kind=kind)

    @classmethod
    def fail(cls, failure: Failure, kind: Optional[MarkerKind] = None) -> "Outcome[T]":
        return cls(failure=failure, kind=kind)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        """Short user-facing notice for a failure; empty on success."""
        if self.failure is None:
            return ""
        key_kind = self.kind if self.failure is Failure.CAPACITY_EXHAUSTED else None
        return _MESSAGES.get((self.failure, key_kind), self.failure.value.replace("_", " "))


__all__ = [
    "Failure",
    "MarkerKind",
    "Outcome",
]
