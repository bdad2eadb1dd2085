"""
Data Module
"""
from .generators import ReportDataGenerator, CHANNELS, REGIONS

__all__ = ["ReportDataGenerator", "CHANNELS", "REGIONS"]
