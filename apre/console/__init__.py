"""
Report Console Module
"""
from .client import GatewayClient, GatewayError
from .pages import (
    ChartData,
    ReportPage,
    FeedbackBySalespersonPage,
    ChannelRatingByMonthPage,
    SalesByRegionPage,
)

__all__ = [
    "GatewayClient",
    "GatewayError",
    "ChartData",
    "ReportPage",
    "FeedbackBySalespersonPage",
    "ChannelRatingByMonthPage",
    "SalesByRegionPage",
]
