"""Tests for the what-if improvement analysis."""

import pytest
from retirement_sim import FixedAmount, SimulationParams, analyze, project, summarize
from retirement_sim.analyses import DELAY_YEARS, Recommendation


def _zero_rate_params(**kwargs) -> SimulationParams:
    base = dict(
        initial_capital=100000, monthly_contribution=500,
        annual_growth_rate=0.0, annual_inflation_rate=0.0,
        current_age=40, retirement="42", horizon_max_age=60,
        withdrawal_strategy=FixedAmount(100), start_year=2025,
    )
    base.update(kwargs)
    return SimulationParams(**base)


def _analyze(params: SimulationParams, currency: str = "USD"):
    summary = summarize(project(params), params)
    return summary, analyze(summary, params, currency)


class TestHealthyPlan:
    def setup_method(self):
        # 115k invested, 114.4k at retirement, 92.8k left at 60
        self.summary, self.analysis = _analyze(_zero_rate_params())

    def test_contribution_increase(self):
        a = self.analysis
        assert a.contribution_increase == pytest.approx(100)
        assert a.additional_contributions == pytest.approx(100 * 12 * 2)
        assert a.contribution_benefit == pytest.approx(2400 * 114400 / 115000)

    def test_withdrawal_reduction(self):
        a = self.analysis
        assert a.withdrawal_reduction == pytest.approx(10)
        assert a.withdrawal_savings == pytest.approx(10 * 12 * 18)
        assert a.withdrawal_additional_years == 1

    def test_return_improvement(self):
        a = self.analysis
        assert a.return_improvement == 0.5
        assert a.improved_capital == pytest.approx(114400 * 1.005 ** 2)
        assert a.return_benefit == pytest.approx(114400 * (1.005 ** 2 - 1))

    def test_years_remaining_and_margin(self):
        assert self.analysis.years_remaining == 92800 // 1200
        assert self.analysis.safety_margin == 75
        assert self.analysis.depletion_risk == "Low"

    def test_recommendations(self):
        assert self.analysis.recommendations == (
            Recommendation("Increase monthly contribution", "+$50/month", "Medium"),
            Recommendation("Improve investment returns", "+0.5% return rate", "Medium"),
            Recommendation("Reduce investment fees", "Find lower cost options", "Low"),
        )


class TestDepletedPlan:
    def setup_method(self):
        # 1000/month from 54k at retirement runs out at 47
        self.summary, self.analysis = _analyze(_zero_rate_params(
            initial_capital=60000, monthly_contribution=0,
            withdrawal_strategy=FixedAmount(1000),
        ))

    def test_high_risk_with_negative_margin(self):
        a = self.analysis
        assert self.summary.depletion_age == 47
        assert a.depletion_risk == "High"
        assert a.years_remaining == 0
        assert a.safety_margin == -10

    def test_nothing_from_zero_contribution(self):
        assert self.analysis.contribution_benefit == 0

    def test_recommendations_short_saving_period(self):
        assert self.analysis.recommendations == (
            Recommendation("Delay retirement", "+3 years", "High"),
            Recommendation("Reduce withdrawal", "-$150/month", "Medium"),
            Recommendation("Reduce investment fees", "Find lower cost options", "Low"),
        )

    def test_long_saving_period_adds_contribution_advice(self):
        _, a = _analyze(_zero_rate_params(
            initial_capital=10000, monthly_contribution=100, current_age=30,
            withdrawal_strategy=FixedAmount(5000), horizon_max_age=70,
        ), currency="EUR")
        assert a.depletion_risk == "High"
        assert a.recommendations[0] == Recommendation(
            "Increase monthly contribution", "+30 €/month", "High",
        )


class TestThinReserve:
    def test_medium_risk(self):
        # 97.9k at retirement, 350/month over 18 more years leaves 22.3k
        _, a = _analyze(_zero_rate_params(
            initial_capital=100000, monthly_contribution=0,
            withdrawal_strategy=FixedAmount(350),
        ))
        assert a.depletion_risk == "Medium"
        assert a.recommendations[0].change == "Delay retirement"


class TestGrowthPlan:
    def setup_method(self):
        self.params = SimulationParams(
            initial_capital=50000, monthly_contribution=500,
            annual_growth_rate=5.0, annual_inflation_rate=2.0,
            current_age=40, retirement="65", start_year=2025,
        )
        self.summary, self.analysis = _analyze(self.params)

    def test_delay_adds_contributions_and_growth(self):
        a = self.analysis
        yearly = 500 * 12 + self.summary.capital_at_retirement * 0.05
        assert a.delay_years == DELAY_YEARS
        assert a.yearly_delay_impact == pytest.approx(yearly)
        assert a.delayed_capital == pytest.approx(
            self.summary.capital_at_retirement + yearly * DELAY_YEARS
        )

    def test_return_improvement_over_saving_years(self):
        capital = self.summary.capital_at_retirement
        assert self.analysis.improved_capital == pytest.approx(capital * (1.055 / 1.05) ** 25)
        assert self.analysis.return_benefit > 0

    def test_no_withdrawal_leaves_years_remaining_open(self):
        _, a = _analyze(_zero_rate_params(withdrawal_strategy=FixedAmount(0)))
        assert a.years_remaining is None
        assert a.safety_margin is None
        assert a.withdrawal_additional_years == 0
