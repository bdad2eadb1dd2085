"""
API Routes Module
"""
from .health import router as health_router
from .customer_feedback import router as customer_feedback_router
from .sales import router as sales_router

__all__ = [
    "health_router",
    "customer_feedback_router",
    "sales_router",
]
