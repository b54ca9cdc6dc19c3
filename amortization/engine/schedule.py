"""Amortization schedule computation.

Pure functions: request in, Schedule out. No I/O, no shared state.
"""

import logging
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    localcontext,
)

from amortization.engine.errors import (
    NonAmortizingPaymentError,
    NumericOverflowError,
    UnboundedScheduleError,
)
from amortization.engine.payment import solve_payment
from amortization.engine.validation import validate_request
from amortization.models.schedule import (
    ResolvedRequest,
    Schedule,
    ScheduleRequest,
    ScheduleRow,
    ZERO_ROW,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
BALANCE_EPSILON = Decimal("0.0000001")
MAX_PERIOD_COUNTER = 2**31 - 1

ENGINE_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, Overflow, DivisionByZero],
)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero. -0.00 comes back as 0.00."""
    rounded = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return rounded + ZERO if rounded.is_zero() else rounded


def _amortize_period(
    balance: Decimal,
    payment: Decimal,
    rate: Decimal,
    force_payoff: bool,
) -> tuple[ScheduleRow, Decimal]:
    """One period: returns the rounded row and the unrounded ending balance."""
    interest = balance * rate
    principal_paid = payment - interest

    if principal_paid <= 0:
        raise NonAmortizingPaymentError(
            "Payment is too low to cover interest. Increase payment or lower interest rate."
        )

    period_payment = payment
    if force_payoff or principal_paid >= balance:
        principal_paid = balance
        period_payment = principal_paid + interest

    ending = balance - principal_paid
    if ending < 0 or abs(ending) < BALANCE_EPSILON:
        ending = ZERO

    row = ScheduleRow(
        beginning_balance=round_money(balance),
        payment=round_money(period_payment),
        interest=round_money(interest),
        principal=round_money(principal_paid),
        ending_balance=round_money(ending),
    )
    return row, ending


def _check_cap(count: int, max_periods: int | None) -> None:
    if count >= MAX_PERIOD_COUNTER:
        raise UnboundedScheduleError(
            "Schedule is too long to compute (period counter overflow). Consider providing a term."
        )
    if max_periods is not None and count >= max_periods:
        raise UnboundedScheduleError(
            f"Schedule would exceed the maximum of {max_periods} periods. "
            "Increase payment or provide a shorter term."
        )


def _generate_rows(
    resolved: ResolvedRequest,
    payment: Decimal,
    max_periods: int | None,
) -> list[ScheduleRow]:
    rate = resolved.periodic_rate
    balance = resolved.principal
    rows: list[ScheduleRow] = []

    if resolved.is_fixed_term:
        term = resolved.term_periods
        for period in range(1, term + 1):
            if balance <= 0:
                break
            _check_cap(len(rows), max_periods)
            row, balance = _amortize_period(balance, payment, rate, force_payoff=(period == term))
            rows.append(row)
        return rows

    while balance > 0:
        _check_cap(len(rows), max_periods)
        row, balance = _amortize_period(balance, payment, rate, force_payoff=False)
        rows.append(row)
    return rows


def compute_schedule(request: ScheduleRequest, max_periods: int | None = None) -> Schedule:
    """Generate the full amortization schedule for a request.

    Args:
        request: Loan inputs with exactly one of term_periods / periodic_payment
        max_periods: Optional cap on emitted rows; None means no cap

    Raises:
        InputValidationError, NonAmortizingPaymentError,
        NumericOverflowError, UnboundedScheduleError
    """
    with localcontext(ENGINE_CONTEXT):
        try:
            resolved = validate_request(request)

            if resolved.principal <= 0:
                logger.debug("Zero principal, returning single zero row")
                return Schedule(rows=(ZERO_ROW,), periodic_payment=round_money(ZERO), term_type=resolved.term_type)

            if resolved.periodic_payment is not None:
                payment = resolved.periodic_payment
            else:
                payment = solve_payment(resolved.principal, resolved.periodic_rate, resolved.term_periods)

            logger.debug(
                "Amortizing principal=%s rate=%s payment=%s term=%s",
                resolved.principal, resolved.periodic_rate, payment, resolved.term_periods,
            )
            rows = _generate_rows(resolved, payment, max_periods)
            nominal = round_money(payment)
        except (InvalidOperation, Overflow, DivisionByZero):
            raise NumericOverflowError(
                "Values are too large during schedule calculation. Reduce inputs."
            ) from None

    logger.debug("Generated %d periods", len(rows))
    return Schedule(rows=tuple(rows), periodic_payment=nominal, term_type=resolved.term_type)
