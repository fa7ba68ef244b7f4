"""Core projection engine."""

from dataclasses import dataclass

from retirement_sim.annuity import monthly_rate
from retirement_sim.params import (
    MONTHS_PER_YEAR,
    TRANSITION_MONTH,
    Compounding,
    SimulationParams,
    Timeline,
    WithdrawalStrategy,
    resolve_timeline,
)
from retirement_sim.strategies import (
    estimate_capital_at_retirement,
    next_withdrawal,
    resolve_initial_withdrawal,
    withdrawal_at_retirement,
)


@dataclass(frozen=True)
class YearlySnapshot:
    year: int
    age: int
    capital: float
    # Principal track: invested minus withdrawn, ignoring all interest
    capital_excluding_interest: float
    # Capital at the start of the year, after retirement reconciliation
    opening_capital: float
    is_retired: bool
    is_depleted: bool
    contribution_this_year: float
    withdrawal_this_year: float
    interest_this_year: float
    net_cash_flow_excluding_interest: float
    ending_monthly_contribution: float
    ending_monthly_withdrawal: float
    cumulative_invested: float
    cumulative_withdrawn: float
    is_horizon_year: bool = False

    @property
    def variation(self) -> float:
        return self.capital - self.opening_capital


@dataclass(frozen=True)
class SimulationResult:
    snapshots: tuple[YearlySnapshot, ...]
    timeline: Timeline
    estimated_capital_at_retirement: float
    monthly_withdrawal_at_retirement: float

    def __len__(self) -> int:
        return len(self.snapshots)


@dataclass
class _Account:
    """Mutable working state of one run. Never shared between runs."""

    capital: float
    contribution: float
    withdrawal: float
    cumulative_invested: float
    cumulative_withdrawn: float = 0.0
    depleted: bool = False

    # Per-year accumulators, reset by begin_year()
    opening: float = 0.0
    contributed: float = 0.0
    withdrawn: float = 0.0
    interest: float = 0.0

    def begin_year(self) -> None:
        self.opening = self.capital
        self.contributed = 0.0
        self.withdrawn = 0.0
        self.interest = 0.0

    def accrue(self, rate: float) -> None:
        interest = self.capital * rate
        self.capital += interest
        self.interest += interest

    def deposit(self, amount: float) -> None:
        self.capital += amount
        self.contributed += amount
        self.cumulative_invested += amount

    def withdraw(self, amount: float) -> None:
        """Take up to amount; hitting zero depletes the account for good."""
        taken = min(amount, self.capital)
        self.capital -= taken
        self.withdrawn += taken
        self.cumulative_withdrawn += taken
        if self.capital <= 0:
            self.deplete()

    def deplete(self) -> None:
        self.capital = 0.0
        self.depleted = True


def _accumulation_months(year_index: int, year: int, retirement_year: int) -> int:
    """Months of the year spent contributing; the rest are decumulation months."""
    if year < retirement_year:
        return MONTHS_PER_YEAR
    if year == retirement_year and year_index > 0:
        return TRANSITION_MONTH
    return 0


def _step_year_monthly(
    account: _Account,
    strategy: WithdrawalStrategy,
    accumulation_months: int,
    growth_rate: float,
    inflation_rate: float,
) -> None:
    """Walk twelve months: interest, then cash flow, then inflate the active rate."""
    for month in range(MONTHS_PER_YEAR):
        if month < accumulation_months:
            account.accrue(growth_rate)
            account.deposit(account.contribution)
            account.contribution *= 1 + inflation_rate
            continue

        if account.depleted or account.capital <= 0:
            account.deplete()
            return
        account.accrue(growth_rate)
        account.withdrawal = next_withdrawal(strategy, account.withdrawal, account.capital)
        account.withdraw(account.withdrawal)
        account.withdrawal *= 1 + inflation_rate
        if account.depleted:
            return


def _step_year_annual(
    account: _Account,
    strategy: WithdrawalStrategy,
    accumulation_months: int,
    growth_rate: float,
    inflation_rate: float,
) -> None:
    """Lump-sum cash flows, then one year of interest, then one inflation step."""
    decumulation_months = MONTHS_PER_YEAR - accumulation_months

    if accumulation_months:
        account.deposit(account.contribution * accumulation_months)
    if decumulation_months:
        if account.capital <= 0:
            account.deplete()
            return
        account.withdrawal = next_withdrawal(strategy, account.withdrawal, account.capital)
        account.withdraw(account.withdrawal * decumulation_months)
        if account.depleted:
            return

    account.accrue(growth_rate)

    if accumulation_months:
        account.contribution *= (1 + inflation_rate) ** (accumulation_months / MONTHS_PER_YEAR)
    if decumulation_months:
        account.withdrawal *= (1 + inflation_rate) ** (decumulation_months / MONTHS_PER_YEAR)


def project(params: SimulationParams) -> SimulationResult:
    """Project capital year by year from the current age to the horizon age.

    Raises InvalidParameters before any work if params cannot terminate.
    """
    timeline = resolve_timeline(params)
    estimate = estimate_capital_at_retirement(params, timeline)

    if params.compounding is Compounding.MONTHLY:
        step_year = _step_year_monthly
        growth_rate = monthly_rate(params.growth)
        inflation_rate = monthly_rate(params.inflation)
    else:
        step_year = _step_year_annual
        growth_rate = params.growth
        inflation_rate = params.inflation

    account = _Account(
        capital=params.initial_capital,
        contribution=params.monthly_contribution,
        withdrawal=resolve_initial_withdrawal(params, timeline, estimate),
        cumulative_invested=params.initial_capital,
    )
    retirement_withdrawal = None

    snapshots = []
    for year_index in range(timeline.n_years):
        year = timeline.start_year + year_index
        age = timeline.current_age + year_index
        accumulation_months = _accumulation_months(
            year_index, year, timeline.retirement_year
        )

        # Never let the closed-form estimate pull capital below its natural path
        if year == timeline.retirement_year and year_index > 0 and not account.depleted:
            account.capital = max(account.capital, estimate)

        account.begin_year()
        if accumulation_months < MONTHS_PER_YEAR and retirement_withdrawal is None:
            account.withdrawal = withdrawal_at_retirement(
                params, timeline, account.withdrawal, account.capital
            )
            retirement_withdrawal = account.withdrawal

        if not account.depleted:
            step_year(
                account,
                params.withdrawal_strategy,
                accumulation_months,
                growth_rate,
                inflation_rate,
            )

        active = not account.depleted
        snapshots.append(YearlySnapshot(
            year=year,
            age=age,
            capital=account.capital,
            capital_excluding_interest=(
                max(0.0, account.cumulative_invested - account.cumulative_withdrawn)
                if active else 0.0
            ),
            opening_capital=account.opening,
            is_retired=year >= timeline.retirement_year,
            is_depleted=account.depleted,
            contribution_this_year=account.contributed,
            withdrawal_this_year=account.withdrawn,
            interest_this_year=account.interest,
            net_cash_flow_excluding_interest=account.contributed - account.withdrawn,
            ending_monthly_contribution=account.contribution if accumulation_months else 0.0,
            ending_monthly_withdrawal=(
                account.withdrawal
                if active and accumulation_months < MONTHS_PER_YEAR else 0.0
            ),
            cumulative_invested=account.cumulative_invested,
            cumulative_withdrawn=account.cumulative_withdrawn,
            is_horizon_year=age == timeline.horizon_age,
        ))

    return SimulationResult(
        snapshots=tuple(snapshots),
        timeline=timeline,
        estimated_capital_at_retirement=estimate,
        monthly_withdrawal_at_retirement=retirement_withdrawal or 0.0,
    )
