"""Table view of a schedule: period labels, running interest, filter and sort.

Pure functions over already-rounded rows. Nothing here feeds back into the math.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation

from dateutil.relativedelta import relativedelta

from amortization.engine.errors import InputValidationError
from amortization.models.schedule import Schedule, TermType

COLUMNS = (
    "period",
    "beginning_balance",
    "payment",
    "interest",
    "total_interest_paid",
    "principal",
    "ending_balance",
)


@dataclass(frozen=True)
class TableRow:
    period: int
    label: str
    beginning_balance: Decimal
    payment: Decimal
    interest: Decimal
    total_interest_paid: Decimal
    principal: Decimal
    ending_balance: Decimal
    due_date: date | None = None


def add_periods(start: date, offset: int, term_type: TermType) -> date:
    """Date `offset` periods after `start` (weeks of 7 days, calendar months/years)."""
    if term_type is TermType.WEEK:
        return start + timedelta(weeks=offset)
    if term_type is TermType.MONTH:
        return start + relativedelta(months=offset)
    return start + relativedelta(years=offset)


def format_date(d: date) -> str:
    # Matches en-US "Jan 05, 2026"
    return d.strftime("%b %d, %Y")


def column_header(term_type: TermType, loan_start_date: date | None = None) -> str:
    header = term_type.value
    return f"{header} (Date)" if loan_start_date else header


def decorate(schedule: Schedule, loan_start_date: date | None = None) -> list[TableRow]:
    """Attach 1-based period numbers, date labels, and cumulative interest."""
    rows: list[TableRow] = []
    running_interest = Decimal("0.00")

    for index, row in enumerate(schedule.rows):
        period = index + 1
        running_interest += row.interest
        due = None
        label = str(period)
        if loan_start_date is not None:
            due = add_periods(loan_start_date, index, schedule.term_type)
            label = f"{period} ({format_date(due)})"

        rows.append(TableRow(
            period=period,
            label=label,
            beginning_balance=row.beginning_balance,
            payment=row.payment,
            interest=row.interest,
            total_interest_paid=running_interest,
            principal=row.principal,
            ending_balance=row.ending_balance,
            due_date=due,
        ))

    return rows


def parse_filter(text: str | None) -> Decimal | None:
    """Numeric filter value, or None when the filter is blank or not a number."""
    cleaned = (text or "").strip().replace(",", "").replace("$", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _matches(value, needle: Decimal) -> bool:
    # Substring match on the plain number, so "199" finds 1199.10 and 199.10
    return _plain(needle) in _plain(value)


def _plain(value) -> str:
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def filter_rows(rows: list[TableRow], filters: dict[str, str | None]) -> list[TableRow]:
    """Keep rows matching every numeric column filter. Unknown columns are errors."""
    active: dict[str, Decimal] = {}
    for column, text in filters.items():
        if column not in COLUMNS:
            raise InputValidationError(f"Unknown filter column: {column}")
        needle = parse_filter(text)
        if needle is not None:
            active[column] = needle

    if not active:
        return list(rows)
    return [
        row for row in rows
        if all(_matches(getattr(row, column), needle) for column, needle in active.items())
    ]


def sort_rows(rows: list[TableRow], column: str | None, direction: str | None = "asc") -> list[TableRow]:
    """Stable sort by a column. No column (or no direction) keeps period order."""
    if not column or not direction:
        return list(rows)
    if column not in COLUMNS:
        raise InputValidationError(f"Unknown sort column: {column}")
    if direction not in ("asc", "desc"):
        raise InputValidationError("Sort direction must be 'asc' or 'desc'.")
    return sorted(rows, key=lambda row: getattr(row, column), reverse=(direction == "desc"))
