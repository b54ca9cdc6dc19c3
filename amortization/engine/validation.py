"""Request validation.

Turns a ScheduleRequest into a ResolvedRequest in the decimal domain, or raises
an InputValidationError naming the first rule that failed.
"""

from decimal import Decimal, InvalidOperation

from amortization.engine.errors import InputValidationError, NumericOverflowError
from amortization.models.schedule import ResolvedRequest, ScheduleRequest, TermType

HUNDRED = Decimal("100")

# Amounts at or above this cannot be quantized to cents with 28 significant digits.
MAX_AMOUNT = Decimal("1E+26")


def to_decimal(value, field_name: str) -> Decimal:
    """Convert a float/int/str/Decimal to Decimal, rejecting NaN and infinities."""
    if isinstance(value, bool) or value is None:
        raise InputValidationError(f"{field_name} must be a number.")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() keeps the shortest float repr (0.1 -> 0.1, not 0.1000000000000000055...)
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InputValidationError(f"{field_name} must be a number.") from None
    if not result.is_finite():
        raise InputValidationError(f"{field_name} must be a finite number.")
    return result


def parse_term_type(value: TermType | str | None) -> TermType:
    """Strict term type lookup. None falls back to Month."""
    if value is None:
        return TermType.MONTH
    if isinstance(value, TermType):
        return value
    try:
        return TermType(str(value).strip())
    except ValueError:
        raise InputValidationError("termType must be one of: Week, Month, Year.") from None


def _check_magnitude(value: Decimal, field_name: str) -> None:
    if abs(value) >= MAX_AMOUNT:
        raise NumericOverflowError(f"{field_name} is too large for calculation. Reduce inputs.")


def validate_request(request: ScheduleRequest) -> ResolvedRequest:
    # 1. Finite numbers
    purchase_price = to_decimal(request.purchase_price, "Purchase price")
    down_payment = to_decimal(request.down_payment, "Down payment")
    interest_percent = to_decimal(request.annual_interest_percent, "Interest rate")
    payment = None
    if request.periodic_payment is not None:
        payment = to_decimal(request.periodic_payment, "Payment")

    # 2. Signs and ordering
    if purchase_price < 0:
        raise InputValidationError("Purchase price must be >= 0.")
    if down_payment < 0:
        raise InputValidationError("Down payment must be >= 0.")
    if down_payment > purchase_price:
        raise InputValidationError("Down payment cannot exceed purchase price.")
    if interest_percent < 0:
        raise InputValidationError("Interest rate must be >= 0.")

    # 3. Term type
    term_type = parse_term_type(request.term_type)

    # 4. Exactly one of term / payment
    term = request.term_periods
    if term is not None and payment is not None:
        raise InputValidationError("Provide either payment or term, not both.")
    if term is None and payment is None:
        raise InputValidationError("Payment or term must be provided.")
    if term is not None:
        if isinstance(term, bool) or not isinstance(term, int):
            raise InputValidationError("Term must be a whole number of periods.")
        if term <= 0:
            raise InputValidationError("Term must be > 0 if provided.")
    if payment is not None:
        if payment <= 0:
            raise InputValidationError("Payment must be > 0 if provided.")
        _check_magnitude(payment, "Payment")

    _check_magnitude(purchase_price, "Purchase price")
    principal = purchase_price - down_payment

    try:
        periodic_rate = interest_percent / HUNDRED / term_type.periods_per_year
    except ArithmeticError:
        raise NumericOverflowError("Interest rate is too large for calculation.") from None

    # 5. Zero principal is resolved as-is; the generator emits a single zero row
    return ResolvedRequest(
        principal=principal,
        periodic_rate=periodic_rate,
        term_type=term_type,
        term_periods=term,
        periodic_payment=payment,
    )
