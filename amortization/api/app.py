"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from amortization.api.routes import legacy, schedule
from amortization.config import settings
from amortization.engine.errors import (
    InputValidationError,
    NonAmortizingPaymentError,
    NumericOverflowError,
    ScheduleError,
    UnboundedScheduleError,
)

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InputValidationError: 400,
    NonAmortizingPaymentError: 400,
    NumericOverflowError: 422,
    UnboundedScheduleError: 422,
}

app = FastAPI(
    title="Amortization Table",
    description="Loan amortization schedules with table view and Excel export",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schedule.router)
app.include_router(legacy.router)


@app.exception_handler(ScheduleError)
async def schedule_error_handler(request: Request, exc: ScheduleError):
    status = ERROR_STATUS.get(type(exc), 400)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
