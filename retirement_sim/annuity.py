"""Closed-form time-value-of-money primitives.

All rates here are fractions per period (0.05 = 5%). Negative period counts and
rates at or below -100% are rejected with InvalidParameters. A periodic rate at
or below zero makes the annuity identities degenerate; payment and present value
then fall back to straight-line division instead of dividing by ~0.
"""

from retirement_sim.params import InvalidParameters, MONTHS_PER_YEAR

_EPSILON = 1e-12


def _check(periodic_rate: float, periods: float) -> None:
    if periods < 0:
        raise InvalidParameters(f"period count {periods} must not be negative")
    if periodic_rate <= -1:
        raise InvalidParameters(f"periodic rate {periodic_rate} must be above -100%")


def monthly_rate(annual_rate: float) -> float:
    """True monthly-equivalent rate: (1 + annual)^(1/12) - 1, not annual / 12."""
    _check(annual_rate, 0)
    return (1 + annual_rate) ** (1 / MONTHS_PER_YEAR) - 1


def real_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Fisher relation: (1 + nominal) / (1 + inflation) - 1."""
    return (1 + nominal_rate) / (1 + inflation_rate) - 1


def simple_real_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Subtraction approximation; only used to detect a degenerate real rate."""
    return nominal_rate - inflation_rate


def future_value(
    principal: float,
    rate: float,
    periods: float,
    contribution: float = 0.0,
    due: bool = False,
) -> float:
    """Future value of principal plus an annuity of contribution per period.

    due=False is an ordinary annuity (payment at period end); due=True pays at
    period start, matching annual compounding where the year's cash flow lands
    before interest.
    """
    _check(rate, periods)
    if periods == 0:
        return principal
    growth = (1 + rate) ** periods
    if abs(rate) < _EPSILON:
        annuity = contribution * periods
    else:
        annuity = contribution * (growth - 1) / rate
        if due:
            annuity *= 1 + rate
    return principal * growth + annuity


def payment_for_annuity(
    present_value: float, rate: float, periods: float, due: bool = False,
) -> float:
    """Constant payment that exhausts present_value over periods.

    Zero periods → 0 (nothing can be paid out).
    """
    _check(rate, periods)
    if periods == 0:
        return 0.0
    if rate <= _EPSILON:
        return present_value / periods
    payment = present_value * rate / (1 - (1 + rate) ** -periods)
    if due:
        payment /= 1 + rate
    return payment


def present_value_of_annuity(
    payment: float, rate: float, periods: float, due: bool = False,
) -> float:
    """Capital required to fund payment for periods. Inverse of payment_for_annuity."""
    _check(rate, periods)
    if periods == 0:
        return 0.0
    if rate <= _EPSILON:
        return payment * periods
    value = payment * (1 - (1 + rate) ** -periods) / rate
    if due:
        value *= 1 + rate
    return value


def inflation_adjust(amount: float, annual_inflation: float, years: float) -> float:
    """Nominal value after years of inflation."""
    _check(annual_inflation, years)
    return amount * (1 + annual_inflation) ** years


def deflate(amount: float, annual_inflation: float, years: float) -> float:
    """Present (today's money) value of a nominal amount years from now."""
    _check(annual_inflation, years)
    return amount / (1 + annual_inflation) ** years
