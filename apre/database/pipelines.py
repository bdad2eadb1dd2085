"""
Aggregation Pipelines

Fixed MongoDB aggregation pipelines for each report. Builders are pure:
the same filter values always produce the same pipeline.
"""

from typing import Any, Dict, List

Pipeline = List[Dict[str, Any]]


def channel_rating_by_month(month: int) -> Pipeline:
    """
    Average rating per channel for a calendar month.

    Ratings are averaged per (channel, month), filtered to the requested
    month, then folded into a single document whose ``channels`` and
    ``ratingAvg`` arrays line up index by index.
    """
    return [
        {"$addFields": {"date": {"$toDate": "$date"}}},
        {
            "$group": {
                "_id": {
                    "channel": "$channel",
                    "month": {"$month": "$date"},
                },
                "ratingAvg": {"$avg": "$rating"},
            }
        },
        {"$match": {"_id.month": month}},
        {
            "$group": {
                "_id": "$_id.channel",
                "ratingAvg": {"$push": "$ratingAvg"},
            }
        },
        {"$project": {"_id": 0, "channel": "$_id", "ratingAvg": 1}},
        {
            "$group": {
                "_id": None,
                "channels": {"$push": "$channel"},
                "ratingAvg": {"$push": "$ratingAvg"},
            }
        },
        {"$project": {"_id": 0, "channels": 1, "ratingAvg": 1}},
    ]


def feedback_by_salesperson(salesperson: str) -> Pipeline:
    """Feedback count and average rating per channel for one salesperson."""
    return [
        {"$match": {"salesperson": salesperson}},
        {
            "$group": {
                "_id": {"channel": "$channel"},
                "totalSales": {"$sum": 1},
                "averageRating": {"$avg": "$rating"},
            }
        },
        {
            "$project": {
                "_id": 0,
                "channelName": "$_id.channel",
                "totalSales": 1,
                "averageRating": 1,
            }
        },
    ]


def sales_by_region(region: str) -> Pipeline:
    """Total sales amount per salesperson within a region."""
    return [
        {"$match": {"region": region}},
        {
            "$group": {
                "_id": "$salesperson",
                "totalSales": {"$sum": "$amount"},
            }
        },
        {"$project": {"_id": 0, "salesperson": "$_id", "totalSales": 1}},
        {"$sort": {"salesperson": 1}},
    ]
