"""
Template exercise prescriptions.

A template exercise either prescribes a fixed rep count, a rep range or
nothing, and independently a fixed RIR, an RIR range or nothing. The wire
format flattens these into optional columns; they are decoded here once,
when the request body is validated, so nothing downstream has to reason
about which combination of `None`s it was handed.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True, slots=True)
class Unset:
    """Nothing prescribed."""

    def columns(self, kind: str) -> dict[str, Any]:
        if kind == "reps":
            return {"reps": None, "rep_range_min": None, "rep_range_max": None, "weight": None}
        return {"rir": None, "rir_range_min": None, "rir_range_max": None}


UNSET = Unset()


@dataclass(frozen=True, slots=True)
class FixedReps:
    reps: Optional[int]
    weight: Optional[float] = None

    def columns(self, kind: str = "reps") -> dict[str, Any]:
        return {"reps": self.reps, "rep_range_min": None, "rep_range_max": None, "weight": self.weight}


@dataclass(frozen=True, slots=True)
class RepRange:
    min: int
    max: int
    weight: Optional[float] = None

    def columns(self, kind: str = "reps") -> dict[str, Any]:
        return {"reps": None, "rep_range_min": self.min, "rep_range_max": self.max, "weight": self.weight}


@dataclass(frozen=True, slots=True)
class FixedRir:
    rir: int

    def columns(self, kind: str = "rir") -> dict[str, Any]:
        return {"rir": self.rir, "rir_range_min": None, "rir_range_max": None}


@dataclass(frozen=True, slots=True)
class RirRange:
    min: int
    max: int

    def columns(self, kind: str = "rir") -> dict[str, Any]:
        return {"rir": None, "rir_range_min": self.min, "rir_range_max": self.max}


RepPrescription = Union[FixedReps, RepRange, Unset]
RirPrescription = Union[FixedRir, RirRange, Unset]


def _range(lo: Optional[int], hi: Optional[int], label: str) -> Optional[tuple[int, int]]:
    if lo is None and hi is None:
        return None
    if lo is None or hi is None:
        raise ValueError(f"{label} range needs both min and max")
    if lo > hi:
        raise ValueError(f"{label} range min must not exceed max")
    return lo, hi


def decode_reps(
    reps: Optional[int],
    weight: Optional[float],
    range_min: Optional[int],
    range_max: Optional[int],
) -> RepPrescription:
    rng = _range(range_min, range_max, "rep")
    if rng is not None:
        if reps is not None:
            raise ValueError("give either reps or a rep range, not both")
        return RepRange(rng[0], rng[1], weight)
    if reps is None and weight is None:
        return UNSET
    return FixedReps(reps, weight)


def decode_rir(
    rir: Optional[int],
    range_min: Optional[int],
    range_max: Optional[int],
) -> RirPrescription:
    rng = _range(range_min, range_max, "rir")
    if rng is not None:
        if rir is not None:
            raise ValueError("give either rir or an rir range, not both")
        return RirRange(*rng)
    if rir is None:
        return UNSET
    return FixedRir(rir)
