"""Simulation parameters, withdrawal strategies and timeline resolution."""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

DEFAULT_HORIZON_AGE = 95
MONTHS_PER_YEAR = 12
# Retirement date inside the transition year when no birth month is known
TRANSITION_MONTH = 6


class InvalidParameters(ValueError):
    """Parameters that cannot describe a terminating projection."""


class Compounding(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass(frozen=True)
class Age:
    value: int


@dataclass(frozen=True)
class CalendarYear:
    value: int


RetirementSpec = Age | CalendarYear


@dataclass(frozen=True)
class FixedAmount:
    """Withdraw a literal monthly amount, inflated monthly once retired."""

    monthly_withdrawal: float


@dataclass(frozen=True)
class TargetEndAge:
    """Solve for the withdrawal that exhausts capital at max_age."""

    max_age: int


@dataclass(frozen=True)
class RateOfCapital:
    """Withdraw annual_rate % of current capital per year, re-derived monthly."""

    annual_rate: float


WithdrawalStrategy = FixedAmount | TargetEndAge | RateOfCapital


def classify_retirement_input(raw: str | int) -> RetirementSpec:
    """Interpret a user-entered retirement value as an age or a calendar year.

    Only a four-digit value starting with "20" is a year (e.g. "2050");
    anything else ("65", "7", "150", "1990") is read as an age.
    """
    text = str(raw).strip()
    try:
        value = int(text)
    except ValueError:
        raise InvalidParameters(f"retirement input {raw!r} is not an integer") from None
    if len(text) == 4 and text.startswith("20"):
        return CalendarYear(value)
    return Age(value)


@dataclass(frozen=True)
class SimulationParams:

    # Capital and cash flows
    initial_capital: float = 10000.0
    monthly_contribution: float = 500.0

    # Rates in percent (5.0 = 5%)
    annual_growth_rate: float = 5.0
    annual_inflation_rate: float = 2.0

    # Ages and dates
    current_age: int = 40
    retirement: RetirementSpec | int | str = "65"
    horizon_max_age: int = DEFAULT_HORIZON_AGE
    start_year: int | None = None  # None = today's calendar year

    withdrawal_strategy: WithdrawalStrategy = field(
        default_factory=lambda: FixedAmount(2000.0)
    )
    compounding: Compounding = Compounding.MONTHLY

    @property
    def growth(self) -> float:
        return self.annual_growth_rate / 100

    @property
    def inflation(self) -> float:
        return self.annual_inflation_rate / 100

    def resolve_start_year(self) -> int:
        if self.start_year is not None:
            return self.start_year
        return date.today().year

    def retirement_spec(self) -> RetirementSpec:
        if isinstance(self.retirement, (Age, CalendarYear)):
            return self.retirement
        return classify_retirement_input(self.retirement)

    def horizon_age(self) -> int:
        """TargetEndAge sets its own horizon; other strategies use horizon_max_age."""
        if isinstance(self.withdrawal_strategy, TargetEndAge):
            return self.withdrawal_strategy.max_age
        return self.horizon_max_age


@dataclass(frozen=True)
class Timeline:
    """Calendar anchors of one run, resolved once before the loop starts."""

    start_year: int
    current_age: int
    retirement_year: int
    horizon_age: int

    @property
    def birth_year(self) -> int:
        return self.start_year - self.current_age

    @property
    def retirement_age(self) -> int:
        return self.retirement_year - self.birth_year

    @property
    def years_to_retirement(self) -> int:
        return self.retirement_year - self.start_year

    @property
    def retirement_duration(self) -> int:
        return self.horizon_age - self.retirement_age

    @property
    def n_years(self) -> int:
        return self.horizon_age - self.current_age + 1


def _retirement_year(spec: RetirementSpec, start_year: int, current_age: int) -> int:
    if isinstance(spec, Age):
        return start_year + (spec.value - current_age)
    return spec.value


def validate_params(params: SimulationParams) -> list[str]:
    """Validate parameters. Returns list of error messages (empty = valid)."""
    errors = []

    if not math.isfinite(params.initial_capital):
        errors.append(f"initial capital {params.initial_capital} must be a finite number")
    elif params.initial_capital < 0:
        errors.append(f"initial capital {params.initial_capital} must not be negative")
    if not math.isfinite(params.monthly_contribution):
        errors.append(f"monthly contribution {params.monthly_contribution} must be a finite number")
    elif params.monthly_contribution < 0:
        errors.append(f"monthly contribution {params.monthly_contribution} must not be negative")
    if not math.isfinite(params.annual_growth_rate):
        errors.append(f"growth rate {params.annual_growth_rate} must be a finite number")
    elif params.annual_growth_rate <= -100:
        errors.append(f"growth rate {params.annual_growth_rate}% must be above -100%")
    if not math.isfinite(params.annual_inflation_rate):
        errors.append(f"inflation rate {params.annual_inflation_rate} must be a finite number")
    elif params.annual_inflation_rate < 0:
        errors.append(f"inflation rate {params.annual_inflation_rate}% must not be negative")
    if params.current_age < 0:
        errors.append(f"current age {params.current_age} must not be negative")
    if not isinstance(params.compounding, Compounding):
        errors.append(f"unknown compounding convention {params.compounding!r}")

    strategy = params.withdrawal_strategy
    if isinstance(strategy, FixedAmount):
        if not math.isfinite(strategy.monthly_withdrawal):
            errors.append(f"monthly withdrawal {strategy.monthly_withdrawal} must be a finite number")
        elif strategy.monthly_withdrawal < 0:
            errors.append(f"monthly withdrawal {strategy.monthly_withdrawal} must not be negative")
    elif isinstance(strategy, RateOfCapital):
        if not math.isfinite(strategy.annual_rate):
            errors.append(f"withdrawal rate {strategy.annual_rate} must be a finite number")
        elif strategy.annual_rate <= 0:
            errors.append(f"withdrawal rate {strategy.annual_rate}% must be positive")
    elif not isinstance(strategy, TargetEndAge):
        errors.append(f"unknown withdrawal strategy {strategy!r}")

    horizon = params.horizon_age()
    if horizon <= params.current_age:
        errors.append(f"horizon age {horizon} must be after current age {params.current_age}")

    try:
        spec = params.retirement_spec()
    except InvalidParameters as e:
        errors.append(str(e))
        return errors

    start_year = params.resolve_start_year()
    retirement_age = _retirement_year(spec, start_year, params.current_age) - (
        start_year - params.current_age
    )
    if retirement_age <= params.current_age:
        errors.append(
            f"retirement age {retirement_age} must be after current age {params.current_age}"
        )
    if isinstance(strategy, TargetEndAge) and strategy.max_age <= retirement_age:
        errors.append(
            f"target end age {strategy.max_age} must be after retirement age {retirement_age}"
        )
    elif retirement_age > horizon:
        errors.append(f"retirement age {retirement_age} is beyond horizon age {horizon}")

    return errors


def resolve_timeline(params: SimulationParams) -> Timeline:
    """Validate params and pin the run's calendar. Raises InvalidParameters."""
    errors = validate_params(params)
    if errors:
        raise InvalidParameters("\n".join(errors))
    start_year = params.resolve_start_year()
    return Timeline(
        start_year=start_year,
        current_age=params.current_age,
        retirement_year=_retirement_year(params.retirement_spec(), start_year, params.current_age),
        horizon_age=params.horizon_age(),
    )
