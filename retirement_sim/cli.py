"""CLI entry point for a single retirement projection."""

import argparse
import sys

from retirement_sim.analyses import ImprovementAnalysis, analyze
from retirement_sim.config import parse_args, build_params
from retirement_sim.formatting import format_money, format_percent
from retirement_sim.params import FixedAmount, RateOfCapital, SimulationParams, TargetEndAge
from retirement_sim.schedule import PHASES, SORT_KEYS, filter_by_phase, sort_snapshots
from retirement_sim.simulation import SimulationResult, YearlySnapshot, project
from retirement_sim.summary import SummaryStatistics, summarize


def _describe_strategy(params: SimulationParams, currency: str) -> str:
    match params.withdrawal_strategy:
        case FixedAmount(monthly_withdrawal=amount):
            return f"fixed {format_money(amount, currency)}/month"
        case TargetEndAge(max_age=age):
            return f"deplete by age {age}"
        case RateOfCapital(annual_rate=rate):
            return f"{rate:g}% of capital per year"
        case other:
            raise TypeError(f"unknown withdrawal strategy: {other!r}")


def _print_header(params: SimulationParams, result: SimulationResult, currency: str):
    t = result.timeline
    print("=" * 80)
    print(f"Retirement projection (age {t.current_age}-{t.horizon_age}, {t.n_years} years)")
    print(
        f"  Initial capital: {format_money(params.initial_capital, currency)}"
        f" / contribution: {format_money(params.monthly_contribution, currency)}/month"
    )
    print(
        f"  Growth: {params.annual_growth_rate:g}%/year / inflation: {params.annual_inflation_rate:g}%/year"
        f" / compounding: {params.compounding.value}"
    )
    print(f"  Retirement: {t.retirement_year} (age {t.retirement_age})")
    print(f"  Withdrawal: {_describe_strategy(params, currency)}")
    print("=" * 80)
    print()


def _print_summary(s: SummaryStatistics, currency: str):
    m = lambda v: format_money(v, currency)
    print("[Summary]")
    print("-" * 80)
    print(f"  Capital at retirement:        {m(s.capital_at_retirement):>16}")
    print(f"  Estimated capital needed:     {m(s.estimated_capital_needed):>16}")
    print(f"  Final capital (age {s.horizon_age}):      {m(s.final_capital):>16}")
    print(f"    in today's money:           {m(s.inflation_adjusted_final_capital):>16}")
    print(f"  Total invested:               {m(s.total_invested):>16}")
    print(f"    in today's money:           {m(s.inflation_adjusted_invested):>16}")
    print(f"  Total withdrawn:              {m(s.total_withdrawn):>16}")
    print(f"  Last monthly contribution:    {m(s.final_monthly_contribution):>16}")
    print(f"  Last monthly withdrawal:      {m(s.final_monthly_withdrawal):>16}")
    print(f"  Growth on money put in:       {format_percent(s.growth_percentage):>16}")
    print(f"  Annualized return:            {format_percent(s.annualized_return):>16}")
    print(f"  Have / need:                  {s.have_bar_height:>7.1f} / {s.need_bar_height:<7.1f}")
    if s.is_depleted:
        print(f"  ⚠ Capital depleted in {s.depletion_year} (age {s.depletion_age})")
    else:
        print(f"  Capital lasts through age {s.horizon_age}")
    print("-" * 80)


def _print_analysis(a: ImprovementAnalysis, currency: str):
    m = lambda v: format_money(v, currency)
    print("\n[Improvement analysis]")
    print("-" * 80)
    print(
        f"  Contribute {m(a.contribution_increase)}/month more:"
        f" {m(a.contribution_benefit)} more at retirement"
    )
    print(
        f"  Retire {a.delay_years} years later:"
        f" {m(a.delayed_capital)} at retirement (+{m(a.yearly_delay_impact)}/year)"
    )
    print(
        f"  Withdraw {m(a.withdrawal_reduction)}/month less:"
        f" {m(a.withdrawal_savings)} saved, about {a.withdrawal_additional_years} more years"
    )
    print(
        f"  Earn {a.return_improvement:.1f}% more:"
        f" {m(a.improved_capital)} at retirement ({m(a.return_benefit)})"
    )
    if a.years_remaining is not None:
        print(f"  Years of withdrawals left at horizon: {a.years_remaining}")
    if a.safety_margin is not None:
        print(f"  Safety margin: {a.safety_margin:+d} years")
    print(f"  Risk of running out: {a.depletion_risk}")
    print("  Recommended changes:")
    for r in a.recommendations:
        print(f"    [{r.priority:<6}] {r.change}: {r.impact}")
    print("-" * 80)


def _print_yearly_log(snapshots: list[YearlySnapshot], currency: str):
    print("\n[Yearly schedule]")
    print("-" * 112)
    print(
        f"{'Year':<6} {'Age':<4} {'Phase':<7} {'Contributed':>14} {'Withdrawn':>14}"
        f" {'Interest':>14} {'Capital':>16} {'Excl. interest':>16}"
    )
    print("-" * 112)
    for s in snapshots:
        phase = "retired" if s.is_retired else "saving"
        print(
            f"{s.year:<6} {s.age:<4} {phase:<7}"
            f" {format_money(s.contribution_this_year, currency):>14}"
            f" {format_money(s.withdrawal_this_year, currency):>14}"
            f" {format_money(s.interest_this_year, currency):>14}"
            f" {format_money(s.capital, currency):>16}"
            f" {format_money(s.capital_excluding_interest, currency):>16}"
        )
    print("-" * 112)


def _add_schedule_args(parser: argparse.ArgumentParser):
    parser.add_argument("--phase", choices=PHASES, default="all", help="rows to show (default: all)")
    parser.add_argument("--sort", choices=SORT_KEYS, default=None, help="sort rows by this field")
    parser.add_argument("--descending", action="store_true", help="sort descending")
    parser.add_argument("--every", type=int, default=5, help="show every Nth year when unsorted, 1=all (default: 5)")


def _select_rows(snapshots, phase: str, sort_key: str | None, descending: bool, every: int):
    rows = filter_by_phase(snapshots, phase)
    if sort_key:
        return sort_snapshots(rows, sort_key, descending=descending)
    step = max(1, every)
    return [s for i, s in enumerate(rows) if i % step == 0 or i == len(rows) - 1]


def main(argv: list[str] | None = None):
    """Run one projection and print the report."""
    r, args = parse_args("Retirement capital projection", _add_schedule_args, argv)
    currency = r["currency"]
    try:
        params = build_params(r)
        result = project(params)
    except ValueError as e:
        print(f"Cannot run projection:\n{e}", file=sys.stderr)
        raise SystemExit(1)
    summary = summarize(result, params)

    _print_header(params, result, currency)
    _print_summary(summary, currency)
    _print_analysis(analyze(summary, params, currency), currency)
    rows = _select_rows(result.snapshots, args.phase, args.sort, args.descending, args.every)
    _print_yearly_log(rows, currency)


if __name__ == "__main__":
    main()
