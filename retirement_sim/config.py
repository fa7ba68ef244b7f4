"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from collections.abc import Callable
from pathlib import Path

from retirement_sim.params import (
    DEFAULT_HORIZON_AGE,
    Compounding,
    FixedAmount,
    RateOfCapital,
    SimulationParams,
    TargetEndAge,
    WithdrawalStrategy,
)

DEFAULT_CONFIG_PATH = Path("config.toml")

WITHDRAWAL_MODES = ("amount", "age", "rate")

DEFAULTS = {
    "initial_capital": 10000.0,
    "monthly_contribution": 500.0,
    "growth_rate": 5.0,
    "inflation": 2.0,
    "current_age": 40,
    "retirement": "65",
    "withdrawal_mode": "amount",
    "monthly_withdrawal": 2000.0,
    "max_age": DEFAULT_HORIZON_AGE,
    "withdrawal_rate": 4.0,
    "compounding": "monthly",
    "currency": "USD",
    "start_year": None,
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # retirement may be written as 65 or "2050"; classification works on text
    if "retirement" in raw:
        raw["retirement"] = str(raw["retirement"])
    # Accept "USD" / "usd"
    if "currency" in raw:
        raw["currency"] = str(raw["currency"]).upper()
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file path (default: config.toml)")
    parser.add_argument("--initial-capital", type=float, default=None, help=f"capital today (default: {d['initial_capital']:.0f})")
    parser.add_argument("--monthly-contribution", type=float, default=None, help=f"monthly contribution until retirement (default: {d['monthly_contribution']:.0f})")
    parser.add_argument("--growth-rate", type=float, default=None, help=f"nominal annual growth, percent (default: {d['growth_rate']})")
    parser.add_argument("--inflation", type=float, default=None, help=f"annual inflation, percent (default: {d['inflation']})")
    parser.add_argument("--current-age", type=int, default=None, help=f"age today (default: {d['current_age']})")
    parser.add_argument("--retirement", type=str, default=None, help=f"retirement age (e.g. 65) or calendar year (e.g. 2050) (default: {d['retirement']})")
    parser.add_argument("--withdrawal-mode", choices=WITHDRAWAL_MODES, default=None, help="amount=fixed monthly withdrawal, age=deplete at --max-age, rate=percent of capital (default: amount)")
    parser.add_argument("--monthly-withdrawal", type=float, default=None, help=f"monthly withdrawal for mode 'amount' (default: {d['monthly_withdrawal']:.0f})")
    parser.add_argument("--max-age", type=int, default=None, help=f"projection horizon; target end age for mode 'age' (default: {d['max_age']})")
    parser.add_argument("--withdrawal-rate", type=float, default=None, help=f"annual withdrawal percent for mode 'rate' (default: {d['withdrawal_rate']})")
    parser.add_argument("--compounding", choices=[c.value for c in Compounding], default=None, help="interest convention (default: monthly)")
    parser.add_argument("--currency", type=str.upper, default=None, help=f"currency code for display (default: {d['currency']})")
    parser.add_argument("--start-year", type=int, default=None, help="calendar year of the first snapshot (default: this year)")
    return parser


def build_strategy(r: dict) -> WithdrawalStrategy:
    mode = r["withdrawal_mode"]
    if mode == "amount":
        return FixedAmount(float(r["monthly_withdrawal"]))
    if mode == "age":
        return TargetEndAge(int(r["max_age"]))
    if mode == "rate":
        return RateOfCapital(float(r["withdrawal_rate"]))
    raise ValueError(f"unknown withdrawal mode {mode!r}; expected one of {', '.join(WITHDRAWAL_MODES)}")


def build_params(r: dict) -> SimulationParams:
    """Build SimulationParams from resolved config dict."""
    start_year = r["start_year"]
    return SimulationParams(
        initial_capital=float(r["initial_capital"]),
        monthly_contribution=float(r["monthly_contribution"]),
        annual_growth_rate=float(r["growth_rate"]),
        annual_inflation_rate=float(r["inflation"]),
        current_age=int(r["current_age"]),
        retirement=str(r["retirement"]),
        horizon_max_age=int(r["max_age"]),
        start_year=int(start_year) if start_year is not None else None,
        withdrawal_strategy=build_strategy(r),
        compounding=Compounding(r["compounding"]),
    )


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
    argv: list[str] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace). namespace carries any extra
    arguments added via add_args_fn.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args(argv)
    config = load_config(args.config)
    return resolve(args, config), args


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved
