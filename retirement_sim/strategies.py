"""Withdrawal strategy resolution.

Converts a withdrawal strategy into the monthly amount the projection loop
withdraws, and supplies the checkpoints at which that amount is re-derived:
once at retirement for every strategy, and at the start of every decumulation
month (or year, under annual compounding) for RateOfCapital.
"""

import math

from retirement_sim.annuity import (
    future_value,
    inflation_adjust,
    monthly_rate,
    payment_for_annuity,
    present_value_of_annuity,
    real_rate,
    simple_real_rate,
)
from retirement_sim.params import (
    MONTHS_PER_YEAR,
    Compounding,
    FixedAmount,
    RateOfCapital,
    SimulationParams,
    TargetEndAge,
    Timeline,
    WithdrawalStrategy,
)


def _finite_or_zero(amount: float) -> float:
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def estimate_capital_at_retirement(params: SimulationParams, timeline: Timeline) -> float:
    """Closed-form capital at the start of the retirement year.

    Uses the same convention as the loop: monthly compounding is an ordinary
    annuity over years*12 months; annual compounding lands each year's
    contributions before interest (annuity due). Contributions are taken at
    today's rate, so the loop (which inflates them) never projects less.
    """
    years = timeline.years_to_retirement
    if params.compounding is Compounding.MONTHLY:
        return future_value(
            params.initial_capital,
            monthly_rate(params.growth),
            years * MONTHS_PER_YEAR,
            params.monthly_contribution,
        )
    return future_value(
        params.initial_capital,
        params.growth,
        years,
        params.monthly_contribution * MONTHS_PER_YEAR,
        due=True,
    )


def sustainable_withdrawal(
    capital: float, params: SimulationParams, duration_years: float,
) -> float:
    """Monthly withdrawal (in first-year money) that exhausts capital over duration_years.

    Solved at the Fisher real rate because the loop inflates withdrawals. A real
    rate at or below zero degrades to straight-line division.
    """
    if duration_years <= 0:
        return 0.0
    months = duration_years * MONTHS_PER_YEAR
    if simple_real_rate(params.growth, params.inflation) <= 0:
        return _finite_or_zero(capital / months)

    real = real_rate(params.growth, params.inflation)
    if params.compounding is Compounding.MONTHLY:
        payment = payment_for_annuity(capital, monthly_rate(real), months)
    else:
        payment = payment_for_annuity(capital, real, duration_years, due=True) / MONTHS_PER_YEAR
    return _finite_or_zero(payment)


def required_capital(
    monthly_withdrawal: float, params: SimulationParams, duration_years: float,
) -> float:
    """Capital needed at retirement to fund monthly_withdrawal for duration_years.

    The withdrawal is inflated to the middle of the period before discounting
    at the real rate, which approximates an inflation-indexed stream.
    """
    if duration_years <= 0:
        return 0.0
    midpoint = inflation_adjust(monthly_withdrawal, params.inflation, duration_years / 2)
    months = duration_years * MONTHS_PER_YEAR
    if simple_real_rate(params.growth, params.inflation) <= 0:
        return _finite_or_zero(midpoint * months)

    real = real_rate(params.growth, params.inflation)
    if params.compounding is Compounding.MONTHLY:
        needed = present_value_of_annuity(midpoint, monthly_rate(real), months)
    else:
        needed = present_value_of_annuity(
            midpoint * MONTHS_PER_YEAR, real, duration_years, due=True,
        )
    return _finite_or_zero(needed)


def rate_withdrawal(capital: float, annual_rate: float) -> float:
    """Monthly withdrawal for a percent-of-capital rule (annual_rate in percent)."""
    return _finite_or_zero(capital * annual_rate / 100 / MONTHS_PER_YEAR)


def resolve_initial_withdrawal(
    params: SimulationParams, timeline: Timeline, estimated_capital: float,
) -> float:
    """Monthly withdrawal implied by the strategy and the closed-form estimate."""
    match params.withdrawal_strategy:
        case FixedAmount(monthly_withdrawal=amount):
            return amount
        case TargetEndAge(max_age=max_age):
            return sustainable_withdrawal(
                estimated_capital, params, max_age - timeline.retirement_age
            )
        case RateOfCapital(annual_rate=rate):
            return rate_withdrawal(estimated_capital, rate)
        case other:
            raise TypeError(f"unknown withdrawal strategy: {other!r}")


def withdrawal_at_retirement(
    params: SimulationParams,
    timeline: Timeline,
    current_withdrawal: float,
    opening_capital: float,
) -> float:
    """Withdrawal in force when decumulation starts.

    TargetEndAge is re-solved from the reconciled opening capital, so the
    amount matches the capital actually projected rather than the estimate.
    """
    match params.withdrawal_strategy:
        case FixedAmount():
            return current_withdrawal
        case TargetEndAge(max_age=max_age):
            return sustainable_withdrawal(
                opening_capital, params, max_age - timeline.retirement_age
            )
        case RateOfCapital(annual_rate=rate):
            return rate_withdrawal(opening_capital, rate)
        case other:
            raise TypeError(f"unknown withdrawal strategy: {other!r}")


def next_withdrawal(
    strategy: WithdrawalStrategy, current_withdrawal: float, capital: float,
) -> float:
    """Withdrawal for the decumulation block about to start."""
    match strategy:
        case RateOfCapital(annual_rate=rate):
            return rate_withdrawal(capital, rate)
        case FixedAmount() | TargetEndAge():
            return current_withdrawal
        case other:
            raise TypeError(f"unknown withdrawal strategy: {other!r}")
