"""
Report Queries

Runs the report pipelines and distinct-values queries against the store
and validates the rows into report models.
"""

from typing import Any, Dict, List, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from pymongo.asynchronous.database import AsyncDatabase

from apre.config import get_settings
from apre.database import pipelines
from apre.database.connection import store_errors
from apre.database.models import (
    ChannelRatingByMonth,
    RegionSales,
    SalespersonFeedback,
)
from apre.errors import UpstreamError

logger = structlog.get_logger(__name__)
settings = get_settings()

RowT = TypeVar("RowT", bound=BaseModel)


def unique_values(values: List[Any]) -> List[str]:
    """Keep the first occurrence of each string value, dropping nulls."""
    return list(dict.fromkeys(v for v in values if isinstance(v, str)))


def validate_rows(model: Type[RowT], rows: List[Dict[str, Any]], report: str) -> List[RowT]:
    """Validate pipeline output against the report row model."""
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.error("Report rows failed validation", report=report, error=str(e))
        raise UpstreamError(f"{report} returned malformed rows") from e


class ReportRepository:
    """Read-only report queries over one database handle"""

    def __init__(self, db: AsyncDatabase):
        self.db = db
        self.feedback = db[settings.mongo.feedback_collection]
        self.sales = db[settings.mongo.sales_collection]

    async def _aggregate(self, collection, name: str, pipeline: pipelines.Pipeline) -> List[Dict[str, Any]]:
        async with store_errors("aggregate", report=name):
            cursor = await collection.aggregate(pipeline)
            rows = await cursor.to_list()
        logger.debug("Report query completed", report=name, rows=len(rows))
        return rows

    async def _distinct(self, collection, field: str) -> List[str]:
        async with store_errors("distinct", field=field):
            values = await collection.distinct(field)
        return unique_values(values)

    # -------------------------------------------------------------------------
    # Customer feedback
    # -------------------------------------------------------------------------

    async def channel_rating_by_month(self, month: int) -> List[ChannelRatingByMonth]:
        rows = await self._aggregate(
            self.feedback,
            "channel-rating-by-month",
            pipelines.channel_rating_by_month(month),
        )
        return validate_rows(ChannelRatingByMonth, rows, "channel-rating-by-month")

    async def feedback_by_salesperson(self, salesperson: str) -> List[SalespersonFeedback]:
        rows = await self._aggregate(
            self.feedback,
            "feedback-by-salesperson",
            pipelines.feedback_by_salesperson(salesperson),
        )
        return validate_rows(SalespersonFeedback, rows, "feedback-by-salesperson")

    async def feedback_salespeople(self) -> List[str]:
        return await self._distinct(self.feedback, "salesperson")

    # -------------------------------------------------------------------------
    # Sales
    # -------------------------------------------------------------------------

    async def regions(self) -> List[str]:
        return await self._distinct(self.sales, "region")

    async def sales_by_region(self, region: str) -> List[RegionSales]:
        rows = await self._aggregate(
            self.sales,
            "sales-by-region",
            pipelines.sales_by_region(region),
        )
        return validate_rows(RegionSales, rows, "sales-by-region")

    async def sales_salespeople(self) -> List[str]:
        return await self._distinct(self.sales, "salesperson")
