"""
dashboard.database_indexes — MongoDB index definitions for the six
dashboard collections.

Run ``ensure_all_indexes(db)`` at startup and after every reseed (a staged
swap renames collections, which drops their indexes).

Collections managed here:

  users           — role / country filters, email lookups
  productstats    — joined to products on productId
  transactions    — dashboard "latest" list, per-user search
  overallstats    — one document per year
  affiliatestats  — joined to users on userId
"""

from __future__ import annotations

import logging
from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


INDEXES: dict[str, list[IndexModel]] = {
    "users": [
        IndexModel([("role", ASCENDING)], name="role"),
        IndexModel([("country", ASCENDING)], name="country"),
        IndexModel([("email", ASCENDING)], name="email"),
    ],
    "productstats": [
        IndexModel([("productId", ASCENDING)], name="product_id"),
    ],
    "transactions": [
        IndexModel([("userId", ASCENDING)], name="user_id"),
        IndexModel([("createdAt", DESCENDING)], name="created_at_desc"),
    ],
    "overallstats": [
        IndexModel([("year", DESCENDING)], name="year_desc"),
    ],
    "affiliatestats": [
        IndexModel([("userId", ASCENDING)], name="user_id"),
    ],
}


def ensure_all_indexes(db) -> None:
    """
    Create all indexes defined above.

    Safe to call repeatedly — MongoDB is idempotent for existing indexes
    (it only errors if an index with the same name but different options
    exists).

    Args:
        db: Open ``Database`` wrapper (has ``db.db`` pymongo Database attribute).
    """
    mongo_db = db.db
    for collection_name, index_models in INDEXES.items():
        try:
            mongo_db[collection_name].create_indexes(index_models)
            logger.debug("Indexes ensured for collection: %s", collection_name)
        except PyMongoError as exc:
            # An incompatible existing index is for the operator to resolve.
            logger.warning("Index creation warning for %s: %s", collection_name, exc)

    logger.info("database_indexes: all index definitions applied")


def describe_indexes() -> dict:
    """Plain-dict description of the index blueprints."""
    out = {}
    for col, models in INDEXES.items():
        out[col] = [
            {
                "keys": m.document["key"],
                "name": m.document.get("name"),
                "unique": m.document.get("unique", False),
            }
            for m in models
        ]
    return out
