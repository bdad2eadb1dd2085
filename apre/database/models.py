"""
Document and Report Models

Pydantic models for the externally owned collections and for the rows the
report pipelines produce. Report rows keep the camelCase field names the
console reads, exposed through aliases.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RATING_MIN = 1
RATING_MAX = 5


# =============================================================================
# STORE DOCUMENTS
# =============================================================================

class FeedbackRecord(BaseModel):
    """Document in the customerFeedback collection"""
    model_config = ConfigDict(extra="allow")

    salesperson: str
    channel: str
    rating: float = Field(ge=RATING_MIN, le=RATING_MAX)
    date: Union[datetime, str]
    region: Optional[str] = None
    customer: Optional[str] = None


class SalesRecord(BaseModel):
    """Document in the sales collection"""
    model_config = ConfigDict(extra="allow")

    region: str
    salesperson: str
    amount: float = Field(ge=0)
    date: Optional[datetime] = None
    product: Optional[str] = None
    channel: Optional[str] = None


# =============================================================================
# REPORT ROWS
# =============================================================================

class ReportRow(BaseModel):
    """Base for report rows: parse and serialize with camelCase aliases"""
    model_config = ConfigDict(populate_by_name=True)


class ChannelRatingByMonth(ReportRow):
    """Average rating per channel for one month, channel-major"""
    channels: List[Optional[str]]
    rating_avg: List[Union[List[Optional[float]], float, None]] = Field(alias="ratingAvg")


class SalespersonFeedback(ReportRow):
    """Feedback totals for one salesperson on one channel"""
    # Documents without a channel group under null; $avg over non-numeric ratings is null
    channel_name: Optional[str] = Field(alias="channelName")
    total_sales: int = Field(ge=0, alias="totalSales")
    average_rating: Optional[float] = Field(ge=0, le=RATING_MAX, alias="averageRating")


class RegionSales(ReportRow):
    """Sales total for one salesperson within a region"""
    salesperson: Optional[str]
    total_sales: float = Field(ge=0, alias="totalSales")
