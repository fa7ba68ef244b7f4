"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from retirement_sim.charts import plot_have_vs_need, plot_trajectory
from retirement_sim.config import build_params, create_parser, load_config, resolve
from retirement_sim.runner import run_projection
from retirement_sim.scenarios import run_scenarios


def _build_parser():
    parser = create_parser("Retirement projection charts")
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="output filename suffix (e.g. 40 → trajectory-40.png)",
    )
    parser.add_argument(
        "--scenarios", action="store_true",
        help="overlay every macro scenario on the trajectory chart",
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="worker processes for --scenarios (default: run serially)",
    )
    return parser


def main(argv: list[str] | None = None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    config_file = load_config(args.config)
    r = resolve(args, config_file)
    currency = r["currency"]
    output_dir = args.output
    chart_name = args.name

    try:
        params = build_params(r)
    except ValueError as e:
        print(f"Cannot build parameters: {e}", file=sys.stderr)
        raise SystemExit(1)

    print("Projecting...", file=sys.stderr)
    projection = run_projection(params)
    if not projection.ok:
        print(f"Cannot run projection:\n{projection.error}", file=sys.stderr)
        raise SystemExit(1)

    lines = [("Projection", projection.result)]
    if args.scenarios:
        lines = []
        for label, scenario in run_scenarios(params, max_workers=args.workers).items():
            if not scenario.ok:
                print(f"  {label}: {scenario.error} (skipped)", file=sys.stderr)
                continue
            lines.append((label, scenario.result))

    path = plot_trajectory(lines, output_dir, name=chart_name, currency=currency)
    print(f"  → {path}", file=sys.stderr)

    path = plot_have_vs_need(projection.summary, output_dir, name=chart_name, currency=currency)
    print(f"  → {path}", file=sys.stderr)

    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
