"""Report endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from uretim.api.middleware.rate_limit import limiter, reports_rate_limit
from uretim.exceptions import ReportValidationError
from uretim.models.reports import DailyReport, ProductionReport
from uretim.models.responses import ApiResponse, exception_messages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ApiResponse.error_result(message, errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get("/production", response_model=ApiResponse[ProductionReport])
@limiter.limit(reports_rate_limit)
async def get_production_report(
    request: Request,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
):
    """Finished production grouped by product type for an inclusive day range."""
    if start_date > end_date:
        return error_response(400, "startDate cannot be after endDate")

    service = request.app.state.reporting_service
    try:
        report = await service.get_production_report(start_date, end_date)
    except ReportValidationError as exc:
        return error_response(400, str(exc))
    except Exception as exc:
        logger.exception("Error while generating production report")
        return error_response(500, "Internal server error", exception_messages(exc))
    return ApiResponse[ProductionReport].success_result(report, "Production report retrieved")


@router.get("/daily", response_model=ApiResponse[DailyReport])
@limiter.limit(reports_rate_limit)
async def get_daily_report(
    request: Request,
    day: date = Query(..., alias="date"),
):
    """Production, shipments and carryover for one calendar day."""
    service = request.app.state.reporting_service
    try:
        report = await service.get_daily_report(day)
    except Exception as exc:
        logger.exception("Error while generating daily report")
        return error_response(500, "Internal server error", exception_messages(exc))
    return ApiResponse[DailyReport].success_result(report, "Daily report retrieved")


@router.get("/total-produced", response_model=ApiResponse[int])
@limiter.limit(reports_rate_limit)
async def get_total_produced(
    request: Request,
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
):
    """Total finished quantity for an inclusive day range."""
    if start_date > end_date:
        return error_response(400, "startDate cannot be after endDate")

    service = request.app.state.reporting_service
    try:
        total = await service.get_total_produced(start_date, end_date)
    except ReportValidationError as exc:
        return error_response(400, str(exc))
    except Exception as exc:
        logger.exception("Error while computing total produced")
        return error_response(500, "Internal server error", exception_messages(exc))
    return ApiResponse[int].success_result(total, "Total produced retrieved")
