"""Tests for the closed-form annuity functions."""

import pytest
from retirement_sim import InvalidParameters
from retirement_sim.annuity import (
    deflate,
    future_value,
    inflation_adjust,
    monthly_rate,
    payment_for_annuity,
    present_value_of_annuity,
    real_rate,
    simple_real_rate,
)


class TestFutureValue:
    @pytest.mark.parametrize("rate", [0.0, 0.004, 0.07, -0.5])
    def test_zero_periods_returns_principal(self, rate):
        assert future_value(12345.0, rate, 0, 500.0) == 12345.0

    @pytest.mark.parametrize("periods", [1, 12, 600])
    def test_zero_rate_no_contribution_is_fixed_point(self, periods):
        assert future_value(1000.0, 0.0, periods, 0.0) == 1000.0

    def test_zero_rate_contributions_are_linear(self):
        assert future_value(100.0, 0.0, 12, 10.0) == pytest.approx(220.0)

    def test_lump_sum(self):
        assert future_value(1000.0, 0.05, 10) == pytest.approx(1000 * 1.05 ** 10)

    def test_ordinary_annuity(self):
        expected = 100 * (1.01 ** 12 - 1) / 0.01
        assert future_value(0.0, 0.01, 12, 100.0) == pytest.approx(expected)

    def test_annuity_due_earns_one_extra_period(self):
        ordinary = future_value(0.0, 0.01, 12, 100.0)
        due = future_value(0.0, 0.01, 12, 100.0, due=True)
        assert due == pytest.approx(ordinary * 1.01)

    def test_negative_periods_rejected(self):
        with pytest.raises(InvalidParameters):
            future_value(1000.0, 0.05, -1)

    def test_rate_at_minus_100_percent_rejected(self):
        with pytest.raises(InvalidParameters):
            future_value(1000.0, -1.0, 10)


class TestPaymentForAnnuity:
    @pytest.mark.parametrize("rate,periods", [(0.004, 360), (0.05, 30), (0.0001, 12)])
    def test_round_trip_with_present_value(self, rate, periods):
        pv = 250000.0
        payment = payment_for_annuity(pv, rate, periods)
        assert present_value_of_annuity(payment, rate, periods) == pytest.approx(pv)

    def test_round_trip_annuity_due(self):
        payment = payment_for_annuity(100000.0, 0.03, 20, due=True)
        assert present_value_of_annuity(payment, 0.03, 20, due=True) == pytest.approx(100000.0)

    def test_due_payment_is_smaller(self):
        assert payment_for_annuity(1000.0, 0.05, 10, due=True) < payment_for_annuity(1000.0, 0.05, 10)

    def test_exhausts_present_value(self):
        """Balance after the last payment is zero."""
        rate, periods = 0.005, 24
        payment = payment_for_annuity(10000.0, rate, periods)
        balance = 10000.0
        for _ in range(periods):
            balance = balance * (1 + rate) - payment
        assert balance == pytest.approx(0.0, abs=1e-6)

    def test_zero_rate_straight_line(self):
        assert payment_for_annuity(1200.0, 0.0, 12) == pytest.approx(100.0)

    def test_negative_rate_straight_line(self):
        assert payment_for_annuity(1200.0, -0.01, 12) == pytest.approx(100.0)

    def test_zero_periods(self):
        assert payment_for_annuity(1200.0, 0.01, 0) == 0.0

    def test_negative_periods_rejected(self):
        with pytest.raises(InvalidParameters):
            payment_for_annuity(1200.0, 0.01, -12)


class TestPresentValueOfAnnuity:
    def test_zero_rate_straight_line(self):
        assert present_value_of_annuity(100.0, 0.0, 12) == pytest.approx(1200.0)

    def test_discounting_reduces_value(self):
        assert present_value_of_annuity(100.0, 0.01, 12) < 1200.0

    def test_zero_periods(self):
        assert present_value_of_annuity(100.0, 0.01, 0) == 0.0

    def test_rate_below_minus_100_percent_rejected(self):
        with pytest.raises(InvalidParameters):
            present_value_of_annuity(100.0, -1.5, 12)


class TestRates:
    def test_monthly_rate_compounds_to_annual(self):
        assert (1 + monthly_rate(0.05)) ** 12 == pytest.approx(1.05)

    def test_monthly_rate_is_below_simple_division(self):
        assert monthly_rate(0.05) < 0.05 / 12

    def test_monthly_rate_zero(self):
        assert monthly_rate(0.0) == 0.0

    def test_fisher_real_rate(self):
        assert real_rate(0.05, 0.02) == pytest.approx(1.05 / 1.02 - 1)

    def test_fisher_below_subtraction(self):
        assert real_rate(0.05, 0.02) < simple_real_rate(0.05, 0.02)

    def test_equal_rates_give_zero_real_rate(self):
        assert real_rate(0.03, 0.03) == pytest.approx(0.0)
        assert simple_real_rate(0.03, 0.03) == 0.0


class TestInflation:
    def test_inflation_adjust(self):
        assert inflation_adjust(100.0, 0.02, 10) == pytest.approx(100 * 1.02 ** 10)

    def test_deflate_inverts_inflation_adjust(self):
        assert deflate(inflation_adjust(5000.0, 0.03, 17), 0.03, 17) == pytest.approx(5000.0)

    def test_zero_years(self):
        assert deflate(5000.0, 0.03, 0) == 5000.0

    def test_negative_years_rejected(self):
        with pytest.raises(InvalidParameters):
            deflate(5000.0, 0.03, -1)
