"""
Report Pages

One page per gateway report. A page holds its filter form, calls the
gateway on submit and rebuilds its chart and table from the response.

Page contract:
- submit is a no-op while the required filter has no valid value
- submit is ignored while a previous submit is still waiting
- display data is rebuilt from scratch on every successful submit
- on failure the error is logged and the previous display is kept
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import polars as pl
import structlog

from apre.console.client import GatewayClient, GatewayError
from apre.database.models import ChannelRatingByMonth, RegionSales, SalespersonFeedback

logger = structlog.get_logger(__name__)

# Chart label for rows the store grouped under a null key
UNNAMED = "(none)"


@dataclass
class ChartData:
    """Chart definition handed to a renderer"""
    type: str
    label: str = ""
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)


class ReportPage:
    """Base report page with a single required filter field"""

    name: str = ""
    title: str = ""
    field_name: str = ""
    chart_type: str = "bar"

    def __init__(self, client: GatewayClient):
        self.client = client
        self.form: Dict[str, Any] = {self.field_name: None}
        self.options: List[str] = []
        self.rows: List[Any] = []
        self.chart = ChartData(type=self.chart_type)
        self.report_title = ""
        self.error: Optional[str] = None
        self._submitting = False

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        return self.form[self.field_name]

    def set_value(self, value: Any) -> None:
        self.form[self.field_name] = value

    def is_valid(self) -> bool:
        value = self.value
        return value is not None and value != ""

    @property
    def can_submit(self) -> bool:
        return self.is_valid() and not self._submitting

    @property
    def has_data(self) -> bool:
        return len(self.rows) > 0

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """Load the values offered for the filter field, if the page has any."""
        try:
            self.options = await self.fetch_options()
        except GatewayError as e:
            logger.error("Error fetching options", page=self.name, error=e.message)

    async def fetch_options(self) -> List[str]:
        return []

    async def submit(self) -> bool:
        """
        Run the report for the current filter value.

        Returns:
            True when the display was rebuilt from a fresh response
        """
        if not self.is_valid():
            logger.debug("Submit skipped, form is invalid", page=self.name, value=self.value)
            return False
        if self._submitting:
            logger.warning("Submit ignored, request already in flight", page=self.name)
            return False

        value = self.value
        self._submitting = True
        try:
            rows = await self.fetch(value)
        except GatewayError as e:
            logger.error("Error fetching report data", page=self.name, value=value, error=e.message)
            self.error = e.message
            return False
        finally:
            self._submitting = False

        self.rows = rows
        self.chart = self.build_chart(value, rows)
        self.report_title = f"{self.title} - {self.display_value(value)}"
        self.error = None
        logger.info("Report data loaded", page=self.name, value=value, rows=len(rows))
        return True

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    async def fetch(self, value: Any) -> List[Any]:
        raise NotImplementedError

    def build_chart(self, value: Any, rows: Sequence[Any]) -> ChartData:
        raise NotImplementedError

    def table(self) -> pl.DataFrame:
        raise NotImplementedError

    def display_value(self, value: Any) -> str:
        return str(value)


class FeedbackBySalespersonPage(ReportPage):
    """Feedback totals and average rating per channel for a salesperson"""

    name = "feedback-by-salesperson"
    title = "Feedback by Salesperson"
    field_name = "salesperson"
    chart_type = "pie"

    rows: List[SalespersonFeedback]

    async def fetch_options(self) -> List[str]:
        return await self.client.feedback_salespeople()

    async def fetch(self, value: str) -> List[SalespersonFeedback]:
        return await self.client.feedback_by_salesperson(value)

    def build_chart(self, value: str, rows: Sequence[SalespersonFeedback]) -> ChartData:
        chart = ChartData(type=self.chart_type, label=f"Feedback for {value}")
        for row in rows:
            channel = row.channel_name or UNNAMED
            chart.values.append(row.total_sales)
            chart.labels.append(f"{channel} Total Sales")
            chart.values.append(flatten_rating(row.average_rating))
            chart.labels.append(f"{channel} Average Rating")
        return chart

    def table(self) -> pl.DataFrame:
        return pl.DataFrame(
            {
                "channelName": [row.channel_name for row in self.rows],
                "totalSales": [row.total_sales for row in self.rows],
                "averageRating": [row.average_rating for row in self.rows],
            },
            schema={"channelName": pl.Utf8, "totalSales": pl.Int64, "averageRating": pl.Float64},
        )


def flatten_rating(value) -> float:
    """Reduce a per-channel rating entry to a single number, treating null as 0."""
    if value is None:
        return 0.0
    if isinstance(value, list):
        ratings = [v for v in value if v is not None]
        return sum(ratings) / len(ratings) if ratings else 0.0
    return float(value)


class ChannelRatingByMonthPage(ReportPage):
    """Average rating per channel for a month"""

    name = "channel-rating-by-month"
    title = "Channel Rating by Month"
    field_name = "month"
    chart_type = "bar"

    rows: List[ChannelRatingByMonth]

    def set_value(self, value: Any) -> None:
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        super().set_value(value)

    def is_valid(self) -> bool:
        value = self.value
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 12

    async def fetch(self, value: int) -> List[ChannelRatingByMonth]:
        return await self.client.channel_rating_by_month(value)

    def build_chart(self, value: int, rows: Sequence[ChannelRatingByMonth]) -> ChartData:
        chart = ChartData(type=self.chart_type, label=f"Average rating for month {value}")
        for row in rows:
            for channel, rating in zip(row.channels, row.rating_avg):
                chart.labels.append(channel or UNNAMED)
                chart.values.append(flatten_rating(rating))
        return chart

    def table(self) -> pl.DataFrame:
        return pl.DataFrame(
            {"channel": self.chart.labels, "ratingAvg": self.chart.values},
            schema={"channel": pl.Utf8, "ratingAvg": pl.Float64},
        )


class SalesByRegionPage(ReportPage):
    """Total sales per salesperson within a region"""

    name = "sales-by-region"
    title = "Sales by Region"
    field_name = "region"
    chart_type = "bar"

    rows: List[RegionSales]

    async def fetch_options(self) -> List[str]:
        return await self.client.regions()

    async def fetch(self, value: str) -> List[RegionSales]:
        return await self.client.sales_by_region(value)

    def build_chart(self, value: str, rows: Sequence[RegionSales]) -> ChartData:
        return ChartData(
            type=self.chart_type,
            label=f"Sales in {value}",
            labels=[row.salesperson or UNNAMED for row in rows],
            values=[row.total_sales for row in rows],
        )

    def table(self) -> pl.DataFrame:
        return pl.DataFrame(
            {
                "salesperson": [row.salesperson for row in self.rows],
                "totalSales": [row.total_sales for row in self.rows],
            },
            schema={"salesperson": pl.Utf8, "totalSales": pl.Float64},
        )


PAGES = {
    page.name: page
    for page in (FeedbackBySalespersonPage, ChannelRatingByMonthPage, SalesByRegionPage)
}
