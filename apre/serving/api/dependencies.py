"""
Shared route dependencies
"""

from fastapi import Depends
from pymongo.asynchronous.database import AsyncDatabase

from apre.database.connection import get_db_dependency
from apre.database.reports import ReportRepository


def get_reports(db: AsyncDatabase = Depends(get_db_dependency)) -> ReportRepository:
    """Report queries bound to the request's database handle."""
    return ReportRepository(db)
