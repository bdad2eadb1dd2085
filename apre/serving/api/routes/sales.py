"""
Sales Report Endpoints

Reports over the sales collection.
"""

from typing import List

from fastapi import APIRouter, Depends
import structlog

from apre.database.models import RegionSales
from apre.database.reports import ReportRepository
from apre.errors import NotFoundError
from apre.serving.api.dependencies import get_reports

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/regions", response_model=List[str])
async def get_regions(
    reports: ReportRepository = Depends(get_reports),
) -> List[str]:
    """Get the distinct sales regions."""
    return await reports.regions()


@router.get("/regions/{region:path}", response_model=List[RegionSales])
async def get_sales_by_region(
    region: str,
    reports: ReportRepository = Depends(get_reports),
) -> List[RegionSales]:
    """
    Get total sales per salesperson for a region.

    Unknown regions yield an empty list. Region names may contain "/".
    """
    if not region:
        raise NotFoundError()

    logger.info("get_sales_by_region called", region=region)

    result = await reports.sales_by_region(region)

    logger.info("Sales by region query completed", region=region, salespeople=len(result))
    return result


@router.get("/salespeople", response_model=List[str])
async def get_salespeople(
    reports: ReportRepository = Depends(get_reports),
) -> List[str]:
    """Get the distinct salespeople in the sales collection."""
    return await reports.sales_salespeople()
