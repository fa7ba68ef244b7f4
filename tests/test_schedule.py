"""Tests for snapshot filtering, zooming and sorting."""

import pytest
from retirement_sim import FixedAmount, SimulationParams, project
from retirement_sim.schedule import filter_by_phase, sort_snapshots, zoom


@pytest.fixture(scope="module")
def snapshots():
    params = SimulationParams(
        initial_capital=50000, monthly_contribution=0,
        annual_growth_rate=0.0, annual_inflation_rate=0.0,
        current_age=60, retirement="63", horizon_max_age=70,
        withdrawal_strategy=FixedAmount(1000), start_year=2025,
    )
    return project(params).snapshots


class TestFilterByPhase:
    def test_all(self, snapshots):
        assert filter_by_phase(snapshots, "all") == list(snapshots)

    def test_accumulation(self, snapshots):
        rows = filter_by_phase(snapshots, "accumulation")
        assert [s.age for s in rows] == [60, 61, 62]

    def test_decumulation(self, snapshots):
        rows = filter_by_phase(snapshots, "decumulation")
        assert [s.age for s in rows] == list(range(63, 71))

    def test_unknown_phase(self, snapshots):
        with pytest.raises(ValueError, match="unknown phase"):
            filter_by_phase(snapshots, "retired")


class TestZoom:
    def test_inclusive_range(self, snapshots):
        assert [s.year for s in zoom(snapshots, 2027, 2029)] == [2027, 2028, 2029]

    def test_open_ends(self, snapshots):
        assert zoom(snapshots, None, 2025)[-1].year == 2025
        assert zoom(snapshots, 2035)[0].year == 2035
        assert zoom(snapshots) == list(snapshots)

    def test_empty_window(self, snapshots):
        assert zoom(snapshots, 2040, 2050) == []


class TestSortSnapshots:
    def test_ascending_by_capital(self, snapshots):
        rows = sort_snapshots(snapshots, "capital")
        capitals = [s.capital for s in rows]
        assert capitals == sorted(capitals)

    def test_descending(self, snapshots):
        rows = sort_snapshots(snapshots, "year", descending=True)
        assert [s.year for s in rows] == list(range(2035, 2024, -1))

    def test_ties_keep_original_order(self, snapshots):
        """Accumulation years all hold 50,000: ties stay in year order."""
        rows = sort_snapshots(snapshots, "capital", descending=True)
        tied = [s.year for s in rows if s.capital == 50000]
        assert tied == [2025, 2026, 2027]

    def test_boolean_field_stable(self, snapshots):
        rows = sort_snapshots(snapshots, "is_retired", descending=True)
        assert [s.year for s in rows[:8]] == list(range(2028, 2036))
        assert [s.year for s in rows[8:]] == [2025, 2026, 2027]

    def test_derived_variation(self, snapshots):
        rows = sort_snapshots(snapshots, "variation")
        assert rows[0].variation <= rows[-1].variation

    def test_unknown_key(self, snapshots):
        with pytest.raises(ValueError, match="unknown sort key"):
            sort_snapshots(snapshots, "balance")
