"""Tests for the caller-side request limits."""

import math
from decimal import Decimal

import pytest

from amortization.engine.errors import InputValidationError, NonAmortizingPaymentError
from amortization.engine.limits import enforce_request_limits, estimate_payoff_periods
from amortization.models.schedule import ScheduleRequest


class TestEstimatePayoffPeriods:
    def test_zero_rate(self):
        assert estimate_payoff_periods(1000, 0, 100) == 10

    def test_standard_mortgage(self):
        assert estimate_payoff_periods(200000, 0.005, 1199.10) == pytest.approx(360, abs=0.1)

    def test_non_amortizing(self):
        assert math.isinf(estimate_payoff_periods(100000, 0.01, 500))

    def test_zero_payment(self):
        assert math.isinf(estimate_payoff_periods(1000, 0.01, 0))


class TestEnforceRequestLimits:
    def test_accepts_30yr_mortgage(self, mortgage_request):
        enforce_request_limits(mortgage_request)

    def test_interest_cap(self):
        with pytest.raises(InputValidationError, match="Interest rate is too large"):
            enforce_request_limits(ScheduleRequest(
                purchase_price=1000, annual_interest_percent=1001, term_periods=12,
            ))

    def test_term_at_cap(self):
        enforce_request_limits(ScheduleRequest(purchase_price=1000, term_periods=1200))

    def test_term_over_cap(self):
        with pytest.raises(InputValidationError, match="Max allowed is 1200 months"):
            enforce_request_limits(ScheduleRequest(purchase_price=1000, term_periods=1201))

    def test_weekly_cap(self):
        with pytest.raises(InputValidationError, match="5200 weeks"):
            enforce_request_limits(ScheduleRequest(purchase_price=1000, term_type="Week", term_periods=5201))

    def test_custom_years(self):
        with pytest.raises(InputValidationError, match="=30 years"):
            enforce_request_limits(ScheduleRequest(purchase_price=1000, term_periods=361), max_years=30)

    def test_payment_below_interest(self):
        with pytest.raises(NonAmortizingPaymentError):
            enforce_request_limits(ScheduleRequest(
                purchase_price=Decimal("100000"),
                annual_interest_percent=Decimal("12"),
                periodic_payment=Decimal("500"),
            ))

    def test_payoff_too_long(self):
        """$100K at 0% paying $10/mo takes 10,000 months."""
        with pytest.raises(InputValidationError, match="~10000 months"):
            enforce_request_limits(ScheduleRequest(purchase_price=100000, periodic_payment=10))

    def test_payoff_within_cap(self):
        enforce_request_limits(ScheduleRequest(
            purchase_price=Decimal("200000"),
            annual_interest_percent=Decimal("6"),
            periodic_payment=Decimal("1500"),
        ))

    def test_zero_principal_skipped(self):
        enforce_request_limits(ScheduleRequest(
            purchase_price=1000, down_payment=1000, annual_interest_percent=12, periodic_payment=1,
        ))

    def test_malformed_term_left_to_engine(self):
        enforce_request_limits(ScheduleRequest(purchase_price=1000, term_periods=-5))
