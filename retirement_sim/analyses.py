"""What-if improvement analysis over a projection summary.

Every figure is a quick estimate derived from the summary and the parameters
that produced it. Nothing here re-runs the projection.
"""

from dataclasses import dataclass

from retirement_sim.formatting import format_money
from retirement_sim.params import MONTHS_PER_YEAR, SimulationParams
from retirement_sim.summary import SummaryStatistics

CONTRIBUTION_INCREASE = 0.20
WITHDRAWAL_REDUCTION = 0.10
RETURN_IMPROVEMENT = 0.5  # percentage points
DELAY_YEARS = 2
# Final capital below this share of retirement capital is a thin reserve
LOW_RESERVE_RATIO = 0.3
SAFETY_MARGIN_STEP = 5


@dataclass(frozen=True)
class Recommendation:
    change: str
    impact: str
    priority: str  # "High" | "Medium" | "Low"


@dataclass(frozen=True)
class ImprovementAnalysis:
    # Contributing CONTRIBUTION_INCREASE more every month until retirement
    contribution_increase: float
    additional_contributions: float
    estimated_additional_returns: float
    contribution_benefit: float

    # Retiring DELAY_YEARS later
    delay_years: int
    yearly_delay_impact: float
    delayed_capital: float

    # Withdrawing WITHDRAWAL_REDUCTION less every month of retirement
    withdrawal_reduction: float
    withdrawal_savings: float
    withdrawal_additional_years: int

    # Earning RETURN_IMPROVEMENT points more until retirement
    return_improvement: float
    return_benefit: float
    improved_capital: float

    # None when there is no withdrawal to measure against
    years_remaining: int | None
    safety_margin: int | None
    depletion_risk: str
    recommendations: tuple[Recommendation, ...]


def _recommendations(
    params: SimulationParams,
    monthly_withdrawal: float,
    years_saving: int,
    needs_changes: bool,
    currency: str,
) -> tuple[Recommendation, ...]:
    contribution = params.monthly_contribution
    recommendations = []
    if needs_changes:
        if years_saving > 5:
            recommendations.append(Recommendation(
                "Increase monthly contribution",
                f"+{format_money(contribution * 0.3, currency)}/month",
                "High",
            ))
        recommendations.append(Recommendation("Delay retirement", "+3 years", "High"))
        recommendations.append(Recommendation(
            "Reduce withdrawal",
            f"-{format_money(monthly_withdrawal * 0.15, currency)}/month",
            "Medium",
        ))
    else:
        recommendations.append(Recommendation(
            "Increase monthly contribution",
            f"+{format_money(contribution * 0.1, currency)}/month",
            "Medium",
        ))
        recommendations.append(Recommendation(
            "Improve investment returns", f"+{RETURN_IMPROVEMENT:.1f}% return rate", "Medium",
        ))
    recommendations.append(Recommendation("Reduce investment fees", "Find lower cost options", "Low"))
    return tuple(recommendations)


def analyze(
    summary: SummaryStatistics, params: SimulationParams, currency: str = "USD",
) -> ImprovementAnalysis:
    """Estimate the effect of common plan changes and rank suggestions.

    currency only affects the wording of the recommendation impacts.
    """
    years_saving = max(0, summary.retirement_age - params.current_age)
    capital = summary.capital_at_retirement
    withdrawal = summary.monthly_withdrawal_at_retirement
    yearly_withdrawal = withdrawal * MONTHS_PER_YEAR

    increase = params.monthly_contribution * CONTRIBUTION_INCREASE
    additional = increase * MONTHS_PER_YEAR * years_saving
    # Extra money is assumed to earn the same multiple as the money already in
    multiple = capital / summary.total_invested - 1 if summary.total_invested > 0 else 0.0
    extra_returns = additional * multiple

    yearly_delay = params.monthly_contribution * MONTHS_PER_YEAR + capital * params.growth

    reduction = withdrawal * WITHDRAWAL_REDUCTION
    savings = reduction * MONTHS_PER_YEAR * summary.retirement_duration
    extra_years = int(savings // yearly_withdrawal) if yearly_withdrawal > 0 else 0

    improved_growth = (1 + params.growth + RETURN_IMPROVEMENT / 100) / (1 + params.growth)
    improved_capital = capital * improved_growth ** years_saving

    thin_reserve = capital <= 0 or summary.final_capital / capital < LOW_RESERVE_RATIO
    if summary.is_depleted:
        risk = "High"
        years_remaining = 0
        short_by = summary.horizon_age - summary.depletion_age
        safety_margin = -(short_by // SAFETY_MARGIN_STEP) * SAFETY_MARGIN_STEP
    else:
        risk = "Medium" if thin_reserve else "Low"
        years_remaining = safety_margin = None
        if yearly_withdrawal > 0:
            years_remaining = int(summary.final_capital // yearly_withdrawal)
            safety_margin = years_remaining // SAFETY_MARGIN_STEP * SAFETY_MARGIN_STEP

    return ImprovementAnalysis(
        contribution_increase=increase,
        additional_contributions=additional,
        estimated_additional_returns=extra_returns,
        contribution_benefit=additional + extra_returns,
        delay_years=DELAY_YEARS,
        yearly_delay_impact=yearly_delay,
        delayed_capital=capital + yearly_delay * DELAY_YEARS,
        withdrawal_reduction=reduction,
        withdrawal_savings=savings,
        withdrawal_additional_years=extra_years,
        return_improvement=RETURN_IMPROVEMENT,
        return_benefit=improved_capital - capital,
        improved_capital=improved_capital,
        years_remaining=years_remaining,
        safety_margin=safety_margin,
        depletion_risk=risk,
        recommendations=_recommendations(
            params, withdrawal, years_saving, summary.is_depleted or thin_reserve, currency,
        ),
    )
