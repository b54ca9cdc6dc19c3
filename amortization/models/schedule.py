from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class TermType(str, Enum):
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"

    @property
    def periods_per_year(self) -> int:
        return PERIODS_PER_YEAR[self]


PERIODS_PER_YEAR: dict[TermType, int] = {
    TermType.WEEK: 52,
    TermType.MONTH: 12,
    TermType.YEAR: 1,
}


@dataclass(frozen=True)
class ScheduleRequest:
    """Loan inputs. Exactly one of term_periods / periodic_payment is set."""
    purchase_price: Decimal | float
    down_payment: Decimal | float = Decimal("0")
    annual_interest_percent: Decimal | float = Decimal("0")  # 6 means 6%
    term_type: TermType | str = TermType.MONTH
    term_periods: int | None = None
    periodic_payment: Decimal | float | None = None
    loan_start_date: date | None = None  # Labels only, never used in the math

    @property
    def principal(self) -> Decimal:
        return Decimal(str(self.purchase_price)) - Decimal(str(self.down_payment))


@dataclass(frozen=True)
class ResolvedRequest:
    """Validated request in the decimal domain."""
    principal: Decimal
    periodic_rate: Decimal
    term_type: TermType
    term_periods: int | None = None
    periodic_payment: Decimal | None = None

    @property
    def periods_per_year(self) -> int:
        return self.term_type.periods_per_year

    @property
    def is_fixed_term(self) -> bool:
        return self.term_periods is not None


@dataclass(frozen=True)
class ScheduleRow:
    beginning_balance: Decimal
    payment: Decimal
    interest: Decimal
    principal: Decimal
    ending_balance: Decimal


ZERO_ROW = ScheduleRow(
    beginning_balance=Decimal("0.00"),
    payment=Decimal("0.00"),
    interest=Decimal("0.00"),
    principal=Decimal("0.00"),
    ending_balance=Decimal("0.00"),
)


@dataclass(frozen=True)
class Schedule:
    rows: tuple[ScheduleRow, ...]
    periodic_payment: Decimal  # Nominal payment; the final row may differ
    term_type: TermType = TermType.MONTH

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    @property
    def periods_per_year(self) -> int:
        return self.term_type.periods_per_year

    @property
    def total_interest(self) -> Decimal:
        return sum((r.interest for r in self.rows), Decimal("0.00"))

    @property
    def total_principal(self) -> Decimal:
        return sum((r.principal for r in self.rows), Decimal("0.00"))

    @property
    def total_paid(self) -> Decimal:
        return sum((r.payment for r in self.rows), Decimal("0.00"))
