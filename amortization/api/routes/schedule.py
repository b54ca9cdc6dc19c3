"""Schedule routes: table view and Excel export."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Response

from amortization.api.deps import TableQuery, get_settings
from amortization.api.schemas import ScheduleRequestBody, ScheduleResponse, ScheduleRowResponse
from amortization.config import Settings
from amortization.engine.export import XLSX_MEDIA_TYPE, export_filename, schedule_to_xlsx
from amortization.engine.limits import enforce_request_limits
from amortization.engine.schedule import compute_schedule
from amortization.engine.table import TableRow, decorate, filter_rows, sort_rows
from amortization.models.schedule import Schedule

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["schedule"])


def run_schedule(body: ScheduleRequestBody, settings: Settings) -> Schedule:
    """Apply request limits (if enabled), then run the engine."""
    request = body.to_request()
    if settings.enforce_request_limits:
        enforce_request_limits(
            request,
            max_years=settings.max_years,
            max_interest_percent=settings.max_interest_percent,
        )
    schedule = compute_schedule(request, max_periods=settings.max_schedule_periods)
    logger.info("Computed %d-period %s schedule", len(schedule), schedule.term_type.value)
    return schedule


def _table(schedule: Schedule, body: ScheduleRequestBody, query: TableQuery) -> list[TableRow]:
    rows = decorate(schedule, body.start_date)
    rows = filter_rows(rows, query.filters)
    return sort_rows(rows, query.sort, query.direction)


@router.post("/schedule", response_model=ScheduleResponse)
def calculate_schedule(
    body: ScheduleRequestBody,
    query: TableQuery = Depends(),
    settings: Settings = Depends(get_settings),
):
    """Amortization schedule with period labels and running interest.

    Totals always cover the whole schedule; filters only narrow `rows`.
    """
    result = run_schedule(body, settings)
    rows = _table(result, body, query)

    return ScheduleResponse(
        term_type=result.term_type.value,
        periods_per_year=result.periods_per_year,
        periodic_payment=result.periodic_payment,
        number_of_periods=len(result),
        total_interest=result.total_interest,
        total_principal=result.total_principal,
        total_paid=result.total_paid,
        rows=[
            ScheduleRowResponse(
                period=r.period,
                label=r.label,
                due_date=r.due_date,
                beginning_balance=r.beginning_balance,
                payment=r.payment,
                interest=r.interest,
                total_interest_paid=r.total_interest_paid,
                principal=r.principal,
                ending_balance=r.ending_balance,
            )
            for r in rows
        ],
    )


@router.post("/schedule/export")
def export_schedule(
    body: ScheduleRequestBody,
    query: TableQuery = Depends(),
    settings: Settings = Depends(get_settings),
):
    """Same table as /schedule, as an .xlsx download."""
    result = run_schedule(body, settings)
    rows = _table(result, body, query)
    content = schedule_to_xlsx(rows, result.term_type, body.start_date)
    filename = export_filename(result.term_type, date.today())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
