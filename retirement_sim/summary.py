"""Derived statistics over a projection result."""

from dataclasses import dataclass

from retirement_sim.annuity import deflate
from retirement_sim.params import FixedAmount, SimulationParams
from retirement_sim.simulation import SimulationResult
from retirement_sim.strategies import required_capital


class EmptyResult(ValueError):
    """Statistics were requested over a result with no snapshots."""


@dataclass(frozen=True)
class SummaryStatistics:
    birth_year: int
    retirement_year: int
    retirement_age: int
    horizon_age: int
    retirement_duration: int
    # Shortened to the realized span when a fixed withdrawal depletes early
    effective_retirement_duration: int

    initial_capital: float
    final_capital: float
    capital_at_retirement: float
    estimated_capital_needed: float

    is_depleted: bool
    depletion_year: int | None
    depletion_age: int | None

    total_invested: float  # includes initial capital
    total_contributions: float  # excludes initial capital
    total_withdrawn: float

    # Today's money
    inflation_adjusted_invested: float
    inflation_adjusted_final_capital: float

    # 0-100, scaled to the larger of have / need
    have_bar_height: float
    need_bar_height: float

    growth_percentage: float | None
    annualized_return: float | None
    final_monthly_contribution: float
    final_monthly_withdrawal: float
    monthly_withdrawal_at_retirement: float


def _bar_heights(have: float, need: float) -> tuple[float, float]:
    top = max(have, need)
    if top <= 0:
        return 0.0, 0.0
    return have / top * 100, need / top * 100


def summarize(result: SimulationResult, params: SimulationParams) -> SummaryStatistics:
    """Summarize a projection. Raises EmptyResult when there are no snapshots."""
    snapshots = result.snapshots
    if not snapshots:
        raise EmptyResult("cannot summarize a projection with no snapshots")

    timeline = result.timeline
    inflation = params.inflation
    first, last = snapshots[0], snapshots[-1]

    retirement_index = next(
        (i for i, s in enumerate(snapshots) if s.year >= timeline.retirement_year), None
    )
    capital_at_retirement = (
        snapshots[retirement_index].capital if retirement_index is not None else 0.0
    )

    is_depleted = last.capital <= 0
    depletion_index = None
    if is_depleted:
        # Depletion is absorbing: report the first zero, not the trailing ones
        depletion_index = next(
            (i for i, s in enumerate(snapshots) if s.is_retired and s.capital <= 0),
            len(snapshots) - 1,
        )
    depletion = snapshots[depletion_index] if depletion_index is not None else None

    retirement_duration = timeline.retirement_duration
    effective_duration = retirement_duration
    if (
        isinstance(params.withdrawal_strategy, FixedAmount)
        and depletion_index is not None
        and retirement_index is not None
    ):
        effective_duration = depletion_index - retirement_index + 1

    needed = required_capital(
        result.monthly_withdrawal_at_retirement, params, effective_duration
    )
    have_bar, need_bar = _bar_heights(capital_at_retirement, needed)

    total_invested = last.cumulative_invested
    total_contributions = total_invested - params.initial_capital
    total_withdrawn = last.cumulative_withdrawn

    final_pv = 0.0
    if last.capital > 0:
        final_pv = deflate(last.capital, inflation, last.year - timeline.start_year)

    base = params.initial_capital + total_contributions
    growth_percentage = None
    if base > 0:
        growth_percentage = (
            (last.capital - params.initial_capital - total_contributions + total_withdrawn)
            / base * 100
        )

    annualized_return = None
    if params.initial_capital > 0 and len(snapshots) > 1:
        annualized_return = (
            (last.capital / params.initial_capital) ** (1 / len(snapshots)) - 1
        ) * 100

    pre_retirement = next(
        (s for s in snapshots if s.year == timeline.retirement_year - 1), None
    )
    final_monthly_contribution = (
        pre_retirement.ending_monthly_contribution
        if pre_retirement is not None else first.ending_monthly_contribution
    )

    return SummaryStatistics(
        birth_year=timeline.birth_year,
        retirement_year=timeline.retirement_year,
        retirement_age=timeline.retirement_age,
        horizon_age=timeline.horizon_age,
        retirement_duration=retirement_duration,
        effective_retirement_duration=effective_duration,
        initial_capital=params.initial_capital,
        final_capital=last.capital,
        capital_at_retirement=capital_at_retirement,
        estimated_capital_needed=needed,
        is_depleted=is_depleted,
        depletion_year=depletion.year if depletion else None,
        depletion_age=depletion.age if depletion else None,
        total_invested=total_invested,
        total_contributions=total_contributions,
        total_withdrawn=total_withdrawn,
        inflation_adjusted_invested=deflate(
            total_invested, inflation, timeline.years_to_retirement
        ),
        inflation_adjusted_final_capital=final_pv,
        have_bar_height=have_bar,
        need_bar_height=need_bar,
        growth_percentage=growth_percentage,
        annualized_return=annualized_return,
        final_monthly_contribution=final_monthly_contribution,
        final_monthly_withdrawal=last.ending_monthly_withdrawal,
        monthly_withdrawal_at_retirement=result.monthly_withdrawal_at_retirement,
    )
