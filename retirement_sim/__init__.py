"""Retirement Capital Projection Package."""

from retirement_sim.params import (
    SimulationParams,
    Timeline,
    Compounding,
    Age,
    CalendarYear,
    FixedAmount,
    TargetEndAge,
    RateOfCapital,
    InvalidParameters,
    classify_retirement_input,
    validate_params,
    resolve_timeline,
    DEFAULT_HORIZON_AGE,
    TRANSITION_MONTH,
)
from retirement_sim.annuity import (
    monthly_rate,
    future_value,
    payment_for_annuity,
    present_value_of_annuity,
    inflation_adjust,
    deflate,
    real_rate,
)
from retirement_sim.simulation import project, SimulationResult, YearlySnapshot
from retirement_sim.summary import summarize, SummaryStatistics, EmptyResult
from retirement_sim.analyses import analyze, ImprovementAnalysis, Recommendation
from retirement_sim.runner import Projection, run_projection, run_batch

__all__ = [
    "SimulationParams",
    "Timeline",
    "Compounding",
    "Age",
    "CalendarYear",
    "FixedAmount",
    "TargetEndAge",
    "RateOfCapital",
    "InvalidParameters",
    "classify_retirement_input",
    "validate_params",
    "resolve_timeline",
    "DEFAULT_HORIZON_AGE",
    "TRANSITION_MONTH",
    "monthly_rate",
    "future_value",
    "payment_for_annuity",
    "present_value_of_annuity",
    "inflation_adjust",
    "deflate",
    "real_rate",
    "project",
    "SimulationResult",
    "YearlySnapshot",
    "summarize",
    "SummaryStatistics",
    "EmptyResult",
    "analyze",
    "ImprovementAnalysis",
    "Recommendation",
    "Projection",
    "run_projection",
    "run_batch",
]
