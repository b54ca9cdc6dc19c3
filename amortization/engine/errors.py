"""Schedule errors.

All subclass ValueError so callers that only know about ValueError keep working.
"""


class ScheduleError(ValueError):
    """Base class for a rejected schedule request."""


class InputValidationError(ScheduleError):
    """Malformed, missing, or out-of-range input."""


class NonAmortizingPaymentError(ScheduleError):
    """Payment does not exceed the interest charge, so the balance never falls."""


class NumericOverflowError(ScheduleError):
    """An intermediate value is too large or extreme to compute reliably."""


class UnboundedScheduleError(ScheduleError):
    """A payment-only schedule would run past the period counter limit."""
