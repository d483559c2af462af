"""
Keyword categorizer — assign one spending category per transaction.

Categories are tested in declaration order and the first one with a
keyword contained in the lowercased description wins. Order matters:
"subway" is both Food & Dining and Transportation, and "gas" is both
Transportation and Bills & Utilities.
"""

from __future__ import annotations

from collections.abc import Iterable

from spendsight.models.transaction import Transaction

OTHER_CATEGORY = "Other"

CATEGORY_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    ("Food & Dining", frozenset({
        "restaurant", "food", "dining", "cafe", "coffee", "grocery", "supermarket",
        "takeout", "delivery", "uber eats", "doordash", "grubhub", "starbucks",
        "mcdonalds", "subway", "pizza", "burger", "sandwich", "salad",
    })),
    ("Transportation", frozenset({
        "uber", "lyft", "taxi", "transit", "parking", "fuel", "gas", "metro",
        "subway", "bus", "amtrak", "airline", "flight", "airport", "parking meter",
    })),
    ("Shopping", frozenset({
        "amazon", "walmart", "target", "store", "shop", "retail", "marketplace",
        "mall", "best buy", "costco", "home depot", "ikea", "nike", "adidas",
        "clothing", "apparel", "electronics", "furniture",
    })),
    ("Bills & Utilities", frozenset({
        "electric", "water", "gas", "internet", "phone", "rent", "mortgage",
        "insurance", "subscription", "verizon", "comcast", "spectrum", "netflix",
        "spotify", "hulu", "disney+", "utility", "cable",
    })),
    ("Entertainment", frozenset({
        "netflix", "spotify", "movie", "theater", "concert", "sports", "gym",
        "fitness", "streaming", "youtube", "twitch", "steam", "playstation",
        "xbox", "nintendo", "game", "gaming", "ticketmaster", "eventbrite",
    })),
    ("Healthcare", frozenset({
        "pharmacy", "doctor", "medical", "health", "dental", "hospital", "clinic",
        "prescription", "cvs", "walgreens", "rite aid", "insurance", "copay",
        "deductible", "drugstore", "medical center",
    })),
    ("Education", frozenset({
        "school", "university", "college", "course", "training", "textbook",
        "tuition", "campus", "student", "academic", "library", "bookstore",
        "courseware", "online learning", "udemy", "coursera",
    })),
    ("Travel", frozenset({
        "hotel", "airline", "flight", "booking", "airbnb", "resort", "vacation",
        "expedia", "hotels.com", "kayak", "priceline", "tripadvisor", "cruise",
        "tour", "travel agency", "visa", "passport",
    })),
)


def categorize(description: str) -> str:
    """Return the first matching category name, or ``"Other"``."""
    lowered = description.lower()
    for name, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return name
    return OTHER_CATEGORY


def categorize_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return categorized copies, leaving the inputs untouched."""
    return [
        txn.model_copy(update={"category": categorize(txn.description)})
        for txn in transactions
    ]
