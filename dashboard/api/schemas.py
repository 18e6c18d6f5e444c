"""
Admin Dashboard API — response schemas (Pydantic) for the system endpoints.

Collection reads return the stored documents as-is (minus ``password``);
only the structured envelopes below are modelled.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str                       # ok | degraded
    db: str                           # "ok" or "error: ..."
    seed: str = "skipped"             # skipped | ok | failed
    seed_counts: Dict[str, int] = Field(default_factory=dict)
    uptime_seconds: float = 0.0
    requests_total: int = 0
    errors_last_hour: int = 0


class TransactionsPage(BaseModel):
    transactions: List[Dict[str, Any]]
    total: int


class PerformanceResponse(BaseModel):
    user: Dict[str, Any]
    sales: List[Dict[str, Any]]


class DashboardStats(BaseModel):
    """Payload of ``GET /general/dashboard`` (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    total_customers: int = Field(alias="totalCustomers")
    yearly_total_sold_units: int = Field(alias="yearlyTotalSoldUnits")
    yearly_sales_total: float = Field(alias="yearlySalesTotal")
    monthly_data: List[Dict[str, Any]] = Field(alias="monthlyData")
    sales_by_category: Dict[str, float] = Field(alias="salesByCategory")
    this_month_stats: Optional[Dict[str, Any]] = Field(alias="thisMonthStats")
    today_stats: Optional[Dict[str, Any]] = Field(alias="todayStats")
    transactions: List[Dict[str, Any]]
