"""
Database Module
"""
from .connection import init_database, close_database, get_db, get_db_dependency
from .reports import ReportRepository

__all__ = [
    "init_database",
    "close_database",
    "get_db",
    "get_db_dependency",
    "ReportRepository",
]
