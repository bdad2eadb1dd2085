"""
APRE Reporting

Report gateway and report console for customer feedback and sales data.
"""

__version__ = "1.0.0"
