"""Canonical test fixtures used across engine and API tests.

Fixture: $250K purchase, $50K down, 6% annual, 30yr monthly
(the textbook $200K mortgage at $1,199.10/mo).
"""

import pytest
from decimal import Decimal

from fastapi.testclient import TestClient

from amortization.api.app import app
from amortization.models.schedule import ScheduleRequest, TermType


@pytest.fixture
def mortgage_request() -> ScheduleRequest:
    """$200K principal, 6%, 360 months."""
    return ScheduleRequest(
        purchase_price=Decimal("250000"),
        down_payment=Decimal("50000"),
        annual_interest_percent=Decimal("6"),
        term_type=TermType.MONTH,
        term_periods=360,
    )


@pytest.fixture
def straight_line_request() -> ScheduleRequest:
    """$1,200 at 0% over 12 months: $100/mo."""
    return ScheduleRequest(
        purchase_price=Decimal("1200"),
        down_payment=Decimal("0"),
        annual_interest_percent=Decimal("0"),
        term_periods=12,
    )


@pytest.fixture
def mortgage_body() -> dict:
    """Same loan as mortgage_request, in the web client's wire format."""
    return {
        "purchasePrice": 250000,
        "downPayment": 50000,
        "interest": 6,
        "term": 360,
        "termType": "Month",
    }


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
