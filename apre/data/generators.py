"""
Synthetic Data Generator

Generates customer feedback and sales documents for development and
demos. Output is reproducible for a given seed.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

import numpy as np
import polars as pl
from faker import Faker


# =============================================================================
# CONFIGURATION
# =============================================================================

CHANNELS = ["Online", "Retail", "Phone", "Email", "Social Media"]
REGIONS = ["North", "South", "East", "West"]
PRODUCTS = [
    ("Laptop", 1200.0),
    ("Smartphone", 800.0),
    ("Tablet", 450.0),
    ("Headphones", 150.0),
    ("Monitor", 300.0),
    ("Keyboard", 60.0),
]

# Ratings skew positive, as customer feedback usually does
RATING_WEIGHTS = [0.05, 0.10, 0.20, 0.35, 0.30]


# =============================================================================
# GENERATORS
# =============================================================================

class ReportDataGenerator:
    """Generate feedback and sales documents for a shared salesforce"""

    def __init__(
        self,
        seed: int = 42,
        salespeople: int = 8,
        start: Optional[datetime] = None,
        days: int = 365,
    ):
        self.rng = np.random.default_rng(seed)
        self.random = random.Random(seed)
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.start = start or datetime(2024, 1, 1)
        self.days = days
        self.salespeople = self._salesforce(salespeople)

    def _salesforce(self, n: int) -> List[dict]:
        """Each salesperson works one region."""
        names = []
        while len(names) < n:
            name = self.fake.name()
            if name not in names:
                names.append(name)
        return [
            {"salesperson": name, "region": REGIONS[i % len(REGIONS)]}
            for i, name in enumerate(names)
        ]

    def _dates(self, n: int) -> List[datetime]:
        offsets = self.rng.integers(0, self.days * 24 * 60, size=n)
        return [self.start + timedelta(minutes=int(m)) for m in offsets]

    def feedback(self, n: int = 500) -> pl.DataFrame:
        """Generate n customerFeedback documents."""
        staff = [self.random.choice(self.salespeople) for _ in range(n)]
        ratings = self.rng.choice([1, 2, 3, 4, 5], size=n, p=RATING_WEIGHTS)

        return pl.DataFrame({
            "salesperson": [s["salesperson"] for s in staff],
            "region": [s["region"] for s in staff],
            "channel": self.rng.choice(CHANNELS, size=n).tolist(),
            "rating": ratings.astype(float).tolist(),
            # Stored as strings; the report pipeline converts with $toDate
            "date": [d.isoformat() for d in self._dates(n)],
            "customer": [self.fake.name() for _ in range(n)],
        })

    def sales(self, n: int = 1000) -> pl.DataFrame:
        """Generate n sales documents."""
        staff = [self.random.choice(self.salespeople) for _ in range(n)]
        picks = self.rng.integers(0, len(PRODUCTS), size=n)
        quantities = self.rng.integers(1, 5, size=n)

        return pl.DataFrame({
            "salesperson": [s["salesperson"] for s in staff],
            "region": [s["region"] for s in staff],
            "product": [PRODUCTS[i][0] for i in picks],
            "amount": [
                round(PRODUCTS[i][1] * int(q), 2) for i, q in zip(picks, quantities)
            ],
            "channel": self.rng.choice(CHANNELS, size=n).tolist(),
            "date": self._dates(n),
        })
