"""Enumerations shared across the dashboard."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role stored on ``users.role``."""
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def pymongo(self) -> int:
        return 1 if self is SortDirection.ASC else -1


class SeedStrategy(str, Enum):
    """How ``dashboard.seed`` replaces the six collections."""
    AUTO = "auto"
    TRANSACTION = "transaction"
    SWAP = "swap"
