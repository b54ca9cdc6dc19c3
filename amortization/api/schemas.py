"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from amortization.models.schedule import ScheduleRequest


# ---- Request schemas ----

class ScheduleRequestBody(BaseModel):
    """Loan inputs, using the wire names the web client already sends."""
    model_config = ConfigDict(populate_by_name=True)

    interest: float = Field(..., description="Annual interest rate in percent (6 = 6%)")
    purchase_price: float = Field(..., alias="purchasePrice")
    down_payment: float = Field(0.0, alias="downPayment")
    term: int | None = Field(None, description="Number of periods (exclusive with paymentFrequency)")
    payment_frequency: float | None = Field(
        None,
        alias="paymentFrequency",
        description="Payment per period (exclusive with term)",
    )
    term_type: str | None = Field("Month", alias="termType", description="Week, Month or Year")
    loan_start_date: datetime | date | None = Field(None, alias="loanStartDate")

    @property
    def start_date(self) -> date | None:
        if isinstance(self.loan_start_date, datetime):
            return self.loan_start_date.date()
        return self.loan_start_date

    def to_request(self) -> ScheduleRequest:
        return ScheduleRequest(
            purchase_price=self.purchase_price,
            down_payment=self.down_payment,
            annual_interest_percent=self.interest,
            term_type=self.term_type,
            term_periods=self.term,
            periodic_payment=self.payment_frequency,
            loan_start_date=self.start_date,
        )


# ---- Response schemas ----

class LegacyRowResponse(BaseModel):
    beginningBalance: float
    payment: float
    interest: float
    principal: float
    endingBalance: float


class ScheduleRowResponse(BaseModel):
    period: int
    label: str
    due_date: date | None = None
    beginning_balance: Decimal
    payment: Decimal
    interest: Decimal
    total_interest_paid: Decimal
    principal: Decimal
    ending_balance: Decimal


class ScheduleResponse(BaseModel):
    term_type: str
    periods_per_year: int
    periodic_payment: Decimal
    number_of_periods: int
    total_interest: Decimal
    total_principal: Decimal
    total_paid: Decimal
    rows: list[ScheduleRowResponse]


class ErrorResponse(BaseModel):
    detail: str
    error: str
