"""
Ingestion Module
"""
