"""Request/response execution of projections, serially or on a process pool.

The engine itself never depends on this module: project() and summarize()
can always be called directly.
"""

import dataclasses
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from retirement_sim.params import InvalidParameters, SimulationParams
from retirement_sim.simulation import SimulationResult, project
from retirement_sim.summary import EmptyResult, SummaryStatistics, summarize


@dataclass(frozen=True)
class Projection:
    """Completed run: either result and summary, or an error message."""

    params: SimulationParams
    result: SimulationResult | None = None
    summary: SummaryStatistics | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_projection(params: SimulationParams) -> Projection:
    try:
        result = project(params)
        summary = summarize(result, params)
    except (InvalidParameters, EmptyResult) as e:
        return Projection(params=params, error=str(e))
    return Projection(params=params, result=result, summary=summary)


def _pin_start_year(params: SimulationParams) -> SimulationParams:
    # Workers must not each read the clock; a batch shares one calendar
    if params.start_year is not None:
        return params
    return dataclasses.replace(params, start_year=params.resolve_start_year())


def run_batch(
    params_list: list[SimulationParams], max_workers: int | None = None,
) -> list[Projection]:
    """Run independent projections. Results come back in input order.

    max_workers None or <= 1 runs serially in this process.
    """
    pinned = [_pin_start_year(p) for p in params_list]
    if max_workers is None or max_workers <= 1 or len(pinned) <= 1:
        return [run_projection(p) for p in pinned]

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(run_projection, p) for p in pinned]
        return [f.result() for f in futures]
