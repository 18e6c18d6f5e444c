"""
Admin Dashboard API — record models for the six MongoDB collections.

Attributes are snake_case in Python; stored documents use the camelCase
field names of the original collections (``phoneNumber``, ``productId`` …),
so every model serialises ``by_alias``.  ``_id`` is a BSON ObjectId.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dashboard.domain.enums import Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoRecord(BaseModel):
    """Base for every stored document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_default=True,
    )

    # Set by each subclass to the collection it lives in.
    collection: ClassVar[str] = ""

    id: ObjectId = Field(default_factory=ObjectId, alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def to_document(self) -> Dict[str, Any]:
        """Return the document exactly as it is written to MongoDB."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Time-bucketed stats shared by ProductStat and OverallStat
# ---------------------------------------------------------------------------

class MonthlyData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    month: str
    total_sales: float = 0
    total_units: int = 0


class DailyData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str               # YYYY-MM-DD
    total_sales: float = 0
    total_units: int = 0


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

class User(MongoRecord):
    """A dashboard user.  ``password`` must never leave the data layer."""
    collection: ClassVar[str] = "users"

    name: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=50)
    password: str = Field(min_length=5)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    occupation: Optional[str] = None
    phone_number: Optional[str] = None
    transactions: List[str] = Field(default_factory=list)
    role: Role = Role.ADMIN


class Product(MongoRecord):
    collection: ClassVar[str] = "products"

    name: str
    price: float
    description: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[float] = None
    supply: Optional[int] = None


class ProductStat(MongoRecord):
    """Yearly sales figures for one product (``productId`` is the hex id)."""
    collection: ClassVar[str] = "productstats"

    product_id: str
    yearly_sales_total: float = 0
    yearly_total_sold_units: int = 0
    year: int
    monthly_data: List[MonthlyData] = Field(default_factory=list)
    daily_data: List[DailyData] = Field(default_factory=list)


class Transaction(MongoRecord):
    collection: ClassVar[str] = "transactions"

    user_id: str
    cost: str
    products: List[str] = Field(default_factory=list)


class OverallStat(MongoRecord):
    """System-wide sales aggregate for one year."""
    collection: ClassVar[str] = "overallstats"

    total_customers: int = 0
    yearly_sales_total: float = 0
    yearly_total_sold_units: int = 0
    year: int
    monthly_data: List[MonthlyData] = Field(default_factory=list)
    daily_data: List[DailyData] = Field(default_factory=list)
    sales_by_category: Dict[str, float] = Field(default_factory=dict)


class AffiliateStat(MongoRecord):
    """Transactions credited to one affiliate user."""
    collection: ClassVar[str] = "affiliatestats"

    user_id: ObjectId
    affiliate_sales: List[ObjectId] = Field(default_factory=list)


# Fixed seeding order; also the canonical list of collections.
RECORD_TYPES = (User, Product, ProductStat, Transaction, OverallStat, AffiliateStat)
