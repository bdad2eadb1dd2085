"""
Customer Feedback Report Endpoints

Reports over the customerFeedback collection.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
import structlog

from apre.database.models import ChannelRatingByMonth, SalespersonFeedback
from apre.database.reports import ReportRepository
from apre.errors import NotFoundError, ValidationError
from apre.serving.api.dependencies import get_reports

router = APIRouter()
logger = structlog.get_logger(__name__)

MONTH_REQUIRED_MESSAGE = "month and channel are required"


def parse_month(month: Optional[str]) -> int:
    """
    Validate the month query parameter.

    Raises:
        ValidationError: If month is absent or not an integer in 1-12
    """
    if not month:
        raise ValidationError(MONTH_REQUIRED_MESSAGE)
    try:
        value = int(month)
    except ValueError:
        raise ValidationError("month must be an integer between 1 and 12")
    if not 1 <= value <= 12:
        raise ValidationError("month must be an integer between 1 and 12")
    return value


@router.get("/channel-rating-by-month", response_model=List[ChannelRatingByMonth])
async def get_channel_rating_by_month(
    month: Optional[str] = Query(None, description="Calendar month, 1-12"),
    reports: ReportRepository = Depends(get_reports),
) -> List[ChannelRatingByMonth]:
    """
    Get average customer feedback ratings by channel for a month.

    Example:
        GET /channel-rating-by-month?month=1
    """
    month_number = parse_month(month)
    logger.info("get_channel_rating_by_month called", month=month_number)

    result = await reports.channel_rating_by_month(month_number)

    logger.info("Channel rating query completed", month=month_number, rows=len(result))
    return result


@router.get(
    "/feedback-by-salesperson/{salesperson:path}",
    response_model=List[SalespersonFeedback],
)
async def get_feedback_by_salesperson(
    salesperson: str,
    reports: ReportRepository = Depends(get_reports),
) -> List[SalespersonFeedback]:
    """
    Get feedback count and average rating per channel for a salesperson.

    Any name is accepted, including names containing "/"; a salesperson
    with no feedback yields an empty list.
    """
    if not salesperson:
        raise NotFoundError()

    logger.info("get_feedback_by_salesperson called", salesperson=salesperson)

    result = await reports.feedback_by_salesperson(salesperson)

    logger.info("Feedback query completed", salesperson=salesperson, channels=len(result))
    return result


@router.get("/salespeople", response_model=List[str])
async def get_salespeople(
    reports: ReportRepository = Depends(get_reports),
) -> List[str]:
    """Get the distinct salespeople with customer feedback."""
    return await reports.feedback_salespeople()
