"""CLI entry point for scenario comparison."""

import argparse
import sys

from retirement_sim.config import build_params, parse_args
from retirement_sim.formatting import format_money
from retirement_sim.runner import Projection
from retirement_sim.scenarios import SCENARIO_ORDER, SCENARIOS, run_scenarios


def print_parameters():
    """Print scenario parameters"""
    print("=" * 100)
    print("[Macro scenario comparison]")
    print("=" * 100)
    print()
    print(f"{'Scenario':<16} {'Growth':>10} {'Inflation':>10} {'Real (Fisher)':>14}")
    print("-" * 100)
    for name in SCENARIO_ORDER:
        scenario = SCENARIOS[name]
        growth = scenario["annual_growth_rate"]
        inflation = scenario["annual_inflation_rate"]
        real = ((1 + growth / 100) / (1 + inflation / 100) - 1) * 100
        print(f"{name:<16} {growth:>9.1f}% {inflation:>9.1f}% {real:>13.2f}%")
    print("-" * 100)
    print()


def _format_cell(p: Projection, key: str, currency: str) -> str:
    if not p.ok:
        return f"{'---':>18}"
    return f"{format_money(getattr(p.summary, key), currency):>18}"


def print_results(results: dict[str, Projection], currency: str):
    print("=" * 100)
    print("[Results by scenario]")
    print("=" * 100)
    print(
        f"{'Scenario':<16} {'At retirement':>18} {'Needed':>18} {'Final':>18}"
        f" {'Final (today)':>18}  Depletion"
    )
    print("-" * 100)
    for name in SCENARIO_ORDER:
        p = results[name]
        if not p.ok:
            print(f"{name:<16}  --- {p.error.splitlines()[0]} ---")
            continue
        s = p.summary
        depletion = f"age {s.depletion_age} ({s.depletion_year})" if s.is_depleted else "-"
        print(
            f"{name:<16} "
            + _format_cell(p, "capital_at_retirement", currency) + " "
            + _format_cell(p, "estimated_capital_needed", currency) + " "
            + _format_cell(p, "final_capital", currency) + " "
            + _format_cell(p, "inflation_adjusted_final_capital", currency)
            + f"  {depletion}"
        )
    print("-" * 100)
    print()


def _add_scenario_args(parser: argparse.ArgumentParser):
    parser.add_argument("--workers", type=int, default=None, help="worker processes (default: run serially)")


def main(argv: list[str] | None = None):
    r, args = parse_args("Macro scenario comparison", _add_scenario_args, argv)
    try:
        base_params = build_params(r)
    except ValueError as e:
        print(f"Cannot build parameters: {e}", file=sys.stderr)
        raise SystemExit(1)

    print_parameters()
    results = run_scenarios(base_params, max_workers=args.workers)
    failed = [name for name, p in results.items() if not p.ok]
    for name in failed:
        print(f"{name}: {results[name].error}", file=sys.stderr)
    print_results(results, r["currency"])
    if len(failed) == len(results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
