"""
Report API endpoints.

Serves range reports from the ReportAggregator in the camelCase shape the
analytics view consumes.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from backend.dependencies import get_report_aggregator
from backend.schemas import ErrorResponse, ReportResponse
from taskplanner.reports.aggregator import Report, ReportAggregator

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
    responses={400: {"model": ErrorResponse, "description": "Malformed date"}},
)


def _report_to_response(report: Report) -> ReportResponse:
    return ReportResponse.model_validate(asdict(report))


@router.get("", response_model=ReportResponse)
async def get_default_report(
    aggregator: ReportAggregator = Depends(get_report_aggregator),
):
    """Report for the default range (the last 30 days unless configured)."""
    start_date, end_date = aggregator.default_range()
    return _report_to_response(aggregator.generate(start_date, end_date))


@router.get("/{start_date}/{end_date}", response_model=ReportResponse)
async def get_report(
    start_date: str,
    end_date: str,
    aggregator: ReportAggregator = Depends(get_report_aggregator),
):
    """
    Report for an inclusive date range.

    Aggregates:
    - Task totals, completion rate and planned hours
    - Counts by priority and by category
    - Per-day task listings
    """
    return _report_to_response(aggregator.generate(start_date, end_date))
