"""
Admin Dashboard API — shared helpers for shaping stored documents into JSON.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder


def to_json(value: Any) -> Any:
    """JSON-safe copy of a document (or list of documents).

    ObjectIds become hex strings, datetimes ISO 8601.
    """
    return jsonable_encoder(value, custom_encoder={ObjectId: str})
