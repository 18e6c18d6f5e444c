"""
MongoDB Database Layer for the Admin Dashboard API
Owns the pooled client and every read the route handlers perform.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING, MongoClient
from pymongo.errors import ConfigurationError

from dashboard import config
from dashboard.core.errors import InvalidRequestError, NotFoundError, StoreConnectionError
from dashboard.domain.enums import Role
from dashboard.domain.models import (
    AffiliateStat,
    OverallStat,
    Product,
    ProductStat,
    Transaction,
    User,
)

logger = logging.getLogger(__name__)

def _public_user_projection() -> Dict[str, int]:
    # A fresh dict per call; drivers may add keys to the one they are given.
    return {"password": 0}

_TRANSACTION_TOPOLOGIES = {"ReplicaSetWithPrimary", "Sharded", "LoadBalanced"}


class Database:
    """Thin wrapper around a pooled ``MongoClient`` and one database.

    ``MongoClient`` is thread-safe; a single instance is shared by every
    request handler and by the seed loader.  Handlers must not assume their
    reads are serialised against anything else.
    """

    def __init__(self, client: MongoClient, name: str) -> None:
        self.client = client
        self.db = client[name]
        self.name = name

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @property
    def users(self):
        return self.db[User.collection]

    @property
    def products(self):
        return self.db[Product.collection]

    @property
    def product_stats(self):
        return self.db[ProductStat.collection]

    @property
    def transactions(self):
        return self.db[Transaction.collection]

    @property
    def overall_stats(self):
        return self.db[OverallStat.collection]

    @property
    def affiliate_stats(self):
        return self.db[AffiliateStat.collection]

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    def ping(self) -> None:
        self.db.command("ping")

    def supports_transactions(self) -> bool:
        """True when the connected topology accepts multi-document transactions."""
        topology = self.client.topology_description.topology_type_name
        return topology in _TRANSACTION_TOPOLOGIES

    def close(self) -> None:
        self.client.close()


_DB: Optional[Database] = None


# ---------------------------------------------------------------------------
# Connection lifecycle
# ---------------------------------------------------------------------------

def _resolve_database_name(client: MongoClient, name: Optional[str]) -> str:
    if name:
        return name
    try:
        return client.get_default_database().name
    except ConfigurationError:
        return config.DEFAULT_DATABASE_NAME


def init_db(
    url: Optional[str] = None,
    name: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> Database:
    """Create the shared client.  Does not contact the server; call ``ping``."""
    global _DB
    url = url if url is not None else config.MONGO_URL
    if not url:
        raise StoreConnectionError("MONGO_URL is not set")

    client = MongoClient(
        url,
        serverSelectionTimeoutMS=timeout_ms or config.MONGO_TIMEOUT_MS,
        tz_aware=True,
    )
    _DB = Database(client, _resolve_database_name(client, name or config.DATABASE_NAME))
    logger.info("MongoDB client created for database %s", _DB.name)
    return _DB


def set_db(db: Optional[Database]) -> None:
    """Install an already-built wrapper (used by the seed CLI and tests)."""
    global _DB
    _DB = db


def get_db() -> Database:
    """Return the shared database wrapper."""
    if _DB is None:
        raise StoreConnectionError("Database has not been initialised")
    return _DB


def close_db() -> None:
    global _DB
    if _DB is not None:
        _DB.close()
        _DB = None
        logger.info("MongoDB client closed")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_object_id(value: str) -> ObjectId:
    # ObjectId(None) would mint a fresh id, so check explicitly
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidRequestError(f"Invalid id: {value!r}")
    return ObjectId(value)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

def find_users_by_role(db: Database, role: Role) -> List[Dict[str, Any]]:
    """All users with ``role``, password excluded."""
    return list(db.users.find({"role": role.value}, _public_user_projection()))


def get_user(db: Database, user_id: str) -> Dict[str, Any]:
    oid = parse_object_id(user_id)
    user = db.users.find_one({"_id": oid}, _public_user_projection())
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def count_users_by_country(db: Database) -> List[Dict[str, Any]]:
    """``[{id: country, value: n}]`` for every country with at least one user."""
    pipeline = [
        {"$match": {"country": {"$nin": [None, ""]}}},
        {"$group": {"_id": "$country", "count": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]
    return [
        {"id": row["_id"], "value": row["count"]}
        for row in db.users.aggregate(pipeline)
    ]


def get_user_performance(db: Database, user_id: str) -> Dict[str, Any]:
    """User joined with its affiliate stats, plus the credited transactions."""
    oid = parse_object_id(user_id)
    pipeline = [
        {"$match": {"_id": oid}},
        {"$lookup": {
            "from": AffiliateStat.collection,
            "localField": "_id",
            "foreignField": "userId",
            "as": "affiliateStats",
        }},
        {"$unwind": "$affiliateStats"},
        {"$project": _public_user_projection()},
    ]
    rows = list(db.users.aggregate(pipeline))
    if not rows:
        raise NotFoundError(f"No affiliate stats for user {user_id}")
    user = rows[0]

    sale_ids = user["affiliateStats"].get("affiliateSales", [])
    sales = list(db.transactions.find({"_id": {"$in": sale_ids}})) if sale_ids else []
    return {"user": user, "sales": sales}


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def find_products_with_stats(db: Database) -> List[Dict[str, Any]]:
    """Every product with its ProductStat documents attached as ``stat``."""
    products = list(db.products.find())
    if not products:
        return []

    ids = [str(p["_id"]) for p in products]
    by_product: Dict[str, List[Dict[str, Any]]] = {pid: [] for pid in ids}
    for stat in db.product_stats.find({"productId": {"$in": ids}}):
        by_product[stat["productId"]].append(stat)

    for product in products:
        product["stat"] = by_product[str(product["_id"])]
    return products


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

def find_transactions_page(
    db: Database,
    page: int,
    page_size: int,
    sort: Optional[Tuple[str, int]] = None,
    search: str = "",
) -> Tuple[List[Dict[str, Any]], int]:
    """One page of transactions plus the total matching ``search``."""
    query: Dict[str, Any] = {}
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query = {"$or": [{"cost": pattern}, {"userId": pattern}]}

    cursor = db.transactions.find(query)
    if sort:
        cursor = cursor.sort([sort])
    items = list(cursor.skip(page * page_size).limit(page_size))
    total = db.transactions.count_documents(query)
    return items, total


def find_recent_transactions(db: Database, limit: int) -> List[Dict[str, Any]]:
    return list(db.transactions.find().sort("createdAt", DESCENDING).limit(limit))


# ---------------------------------------------------------------------------
# Overall stats
# ---------------------------------------------------------------------------

def get_overall_stat(db: Database, year: Optional[int] = None) -> Dict[str, Any]:
    """OverallStat for ``year``, or the latest year when ``year`` is None."""
    if year is None:
        rows = list(db.overall_stats.find().sort("year", DESCENDING).limit(1))
        stat = rows[0] if rows else None
    else:
        stat = db.overall_stats.find_one({"year": year})
    if stat is None:
        raise NotFoundError(
            f"No overall stats for {year}" if year is not None else "No overall stats available"
        )
    return stat


def get_first_overall_stat(db: Database) -> Dict[str, Any]:
    stat = db.overall_stats.find_one()
    if stat is None:
        raise NotFoundError("No sales statistics available")
    return stat
