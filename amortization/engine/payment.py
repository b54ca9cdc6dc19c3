"""Periodic payment for a fully amortizing fixed-rate loan.

Only the (1 + r)^-n step runs in binary floating point; everything around it
stays in Decimal.
"""

import math
from decimal import Decimal

from amortization.engine.errors import InputValidationError, NumericOverflowError

MIN_DENOMINATOR = 1e-18


def solve_payment(principal: Decimal, periodic_rate: Decimal, periods: int) -> Decimal:
    """Payment that retires `principal` over `periods` at `periodic_rate` per period.

    Straight-line when the rate is zero, otherwise the annuity formula:
        A = P * r / (1 - (1 + r)^-n)
    """
    if periods <= 0:
        raise InputValidationError("Term must be > 0.")

    if periodic_rate == 0:
        return principal / periods

    p = float(principal)
    r = float(periodic_rate)
    n = float(periods)
    if not all(math.isfinite(v) for v in (p, r, n)):
        raise NumericOverflowError("Invalid values in payment calculation.")

    try:
        power = (1.0 + r) ** (-n)
    except OverflowError:
        raise NumericOverflowError(
            "Invalid exponentiation in payment calculation. Check interest/term."
        ) from None
    if not math.isfinite(power):
        raise NumericOverflowError("Invalid exponentiation in payment calculation. Check interest/term.")

    denominator = 1.0 - power
    if denominator == 0.0 or abs(denominator) < MIN_DENOMINATOR:
        raise NumericOverflowError("Invalid denominator in payment calculation. Check interest/term.")

    payment = p * r / denominator
    if not math.isfinite(payment) or payment <= 0.0:
        raise NumericOverflowError("Invalid payment produced by calculation. Check inputs.")

    return Decimal(str(payment))
