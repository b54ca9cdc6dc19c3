"""Caller-side request limits.

The engine itself never caps a schedule. Interactive surfaces (API, CLI) run
these checks first so a single request cannot produce a century-plus table.
"""

import logging
import math
from decimal import Decimal

from amortization.engine.errors import InputValidationError, NonAmortizingPaymentError
from amortization.engine.validation import parse_term_type, to_decimal
from amortization.models.schedule import ScheduleRequest

logger = logging.getLogger(__name__)

DEFAULT_MAX_YEARS = 100
DEFAULT_MAX_INTEREST_PERCENT = Decimal("1000")
INTEREST_EPSILON = 1e-9


def estimate_payoff_periods(principal: float, periodic_rate: float, payment: float) -> float:
    """Periods needed to retire `principal` at a level `payment`.

    n = -ln(1 - rP/A) / ln(1 + r); straight-line P/A at a zero rate.
    Returns inf when the payment never amortizes the loan.
    """
    if payment <= 0:
        return math.inf
    if periodic_rate == 0:
        return principal / payment
    inside = 1 - (periodic_rate * principal) / payment
    if inside <= 0:
        return math.inf
    return -math.log(inside) / math.log1p(periodic_rate)


def enforce_request_limits(
    request: ScheduleRequest,
    max_years: int = DEFAULT_MAX_YEARS,
    max_interest_percent: Decimal = DEFAULT_MAX_INTEREST_PERCENT,
) -> None:
    """Reject requests whose schedule would exceed `max_years` of periods.

    Only inspects fields that are already well-formed; malformed input is left
    to the engine's validator so the error messages stay in one place.
    """
    term_type = parse_term_type(request.term_type)
    max_periods = term_type.periods_per_year * max_years
    unit = term_type.value.lower()

    interest_percent = to_decimal(request.annual_interest_percent, "Interest rate")
    if interest_percent > max_interest_percent:
        raise InputValidationError(
            f"Interest rate is too large. Please use a value <= {max_interest_percent}%."
        )

    term = request.term_periods
    if term is not None and not isinstance(term, bool) and isinstance(term, int) and term > max_periods:
        raise InputValidationError(
            f"Term is too large for {term_type.value}. Max allowed is {max_periods} {unit}s "
            f"(={max_years} years)."
        )

    if term is not None or request.periodic_payment is None:
        return

    payment = float(to_decimal(request.periodic_payment, "Payment"))
    principal = float(
        to_decimal(request.purchase_price, "Purchase price") - to_decimal(request.down_payment, "Down payment")
    )
    if payment <= 0 or principal <= 0:
        return

    rate = float(interest_percent) / 100 / term_type.periods_per_year
    if rate > 0 and payment <= principal * rate + INTEREST_EPSILON:
        raise NonAmortizingPaymentError(
            "Payment is too low to cover interest. Increase payment or lower interest rate."
        )

    estimated = estimate_payoff_periods(principal, rate, payment)
    if not math.isfinite(estimated) or estimated <= 0:
        raise InputValidationError("Inputs produce an invalid payoff estimate. Please adjust payment/interest.")
    if estimated > max_periods:
        logger.info("Rejecting payment-only request: ~%d %ss to payoff", math.ceil(estimated), unit)
        raise InputValidationError(
            f"With the current payment, payoff would take ~{math.ceil(estimated)} {unit}s, "
            f"which exceeds the {max_years}-year cap. Increase payment or provide a term."
        )
