"""
Seed the report store with synthetic feedback and sales documents.

Usage:
    python -m apre.ingestion.seed_db --feedback 500 --sales 1000 --drop
"""

import argparse
import asyncio
from typing import Any, Dict, List, Type

from pydantic import BaseModel
import polars as pl
import structlog

from apre.config import get_settings
from apre.config.logging import configure_logging
from apre.data.generators import ReportDataGenerator
from apre.database.connection import close_database, get_db, init_database
from apre.database.models import FeedbackRecord, SalesRecord

logger = structlog.get_logger(__name__)
settings = get_settings()

CHUNK_SIZE = 1000


def to_documents(df: pl.DataFrame, model: Type[BaseModel]) -> List[Dict[str, Any]]:
    """Validate frame rows against the document model."""
    return [
        model.model_validate(row).model_dump(exclude_none=True)
        for row in df.to_dicts()
    ]


async def insert_documents(collection_name: str, documents: List[Dict[str, Any]], drop: bool = False) -> int:
    """Insert documents in chunks, optionally clearing the collection first."""
    async with get_db() as db:
        collection = db[collection_name]
        if drop:
            result = await collection.delete_many({})
            logger.info("Cleared collection", collection=collection_name, deleted=result.deleted_count)

        for i in range(0, len(documents), CHUNK_SIZE):
            await collection.insert_many(documents[i:i + CHUNK_SIZE])

    logger.info("Inserted documents", collection=collection_name, count=len(documents))
    return len(documents)


async def seed(feedback: int = 500, sales: int = 1000, drop: bool = False, seed_value: int = 42) -> Dict[str, int]:
    """Generate and load both report collections."""
    generator = ReportDataGenerator(seed=seed_value)

    await init_database()
    try:
        counts = {
            settings.mongo.feedback_collection: await insert_documents(
                settings.mongo.feedback_collection,
                to_documents(generator.feedback(feedback), FeedbackRecord),
                drop=drop,
            ),
            settings.mongo.sales_collection: await insert_documents(
                settings.mongo.sales_collection,
                to_documents(generator.sales(sales), SalesRecord),
                drop=drop,
            ),
        }
    finally:
        await close_database()

    logger.info("Seeding complete", **counts)
    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed APRE report collections")
    parser.add_argument("--feedback", type=int, default=500, help="Feedback documents to generate")
    parser.add_argument("--sales", type=int, default=1000, help="Sales documents to generate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--drop", action="store_true", help="Delete existing documents first")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(seed(args.feedback, args.sales, drop=args.drop, seed_value=args.seed))
