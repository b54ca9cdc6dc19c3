"""Original web client route: flat list of rows, camelCase fields."""

from fastapi import APIRouter, Depends

from amortization.api.deps import get_settings
from amortization.api.routes.schedule import run_schedule
from amortization.api.schemas import LegacyRowResponse, ScheduleRequestBody
from amortization.config import Settings

router = APIRouter(prefix="/Amortization", tags=["legacy"])


@router.post("/CalculateAmortizationSchedule", response_model=list[LegacyRowResponse])
def calculate_amortization_schedule(
    body: ScheduleRequestBody,
    settings: Settings = Depends(get_settings),
):
    result = run_schedule(body, settings)
    return [
        LegacyRowResponse(
            beginningBalance=float(r.beginning_balance),
            payment=float(r.payment),
            interest=float(r.interest),
            principal=float(r.principal),
            endingBalance=float(r.ending_balance),
        )
        for r in result.rows
    ]
