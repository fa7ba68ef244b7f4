"""Filtering, zooming and sorting of yearly snapshot sequences."""

import dataclasses
from collections.abc import Iterable

from retirement_sim.simulation import YearlySnapshot

PHASES = ("all", "accumulation", "decumulation")
SORT_KEYS = tuple(f.name for f in dataclasses.fields(YearlySnapshot)) + ("variation",)


def filter_by_phase(
    snapshots: Iterable[YearlySnapshot], phase: str = "all",
) -> list[YearlySnapshot]:
    if phase not in PHASES:
        raise ValueError(f"unknown phase {phase!r}; expected one of {', '.join(PHASES)}")
    if phase == "all":
        return list(snapshots)
    retired = phase == "decumulation"
    return [s for s in snapshots if s.is_retired == retired]


def zoom(
    snapshots: Iterable[YearlySnapshot],
    start_year: int | None = None,
    end_year: int | None = None,
) -> list[YearlySnapshot]:
    """Snapshots within [start_year, end_year]; None leaves that side open."""
    return [
        s for s in snapshots
        if (start_year is None or s.year >= start_year)
        and (end_year is None or s.year <= end_year)
    ]


def sort_snapshots(
    snapshots: Iterable[YearlySnapshot], key: str, descending: bool = False,
) -> list[YearlySnapshot]:
    """Sort by any snapshot field. Ties keep their original order in both directions."""
    if key not in SORT_KEYS:
        raise ValueError(f"unknown sort key {key!r}")
    # sorted(reverse=True) is still stable
    return sorted(snapshots, key=lambda s: getattr(s, key), reverse=descending)
