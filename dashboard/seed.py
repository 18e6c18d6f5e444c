"""
Admin Dashboard API — fixture seeding.

Replaces all six collections with the static fixture set, in the fixed order
User, Product, ProductStat, Transaction, OverallStat, AffiliateStat.

Two ways to do that without leaving the collections half-replaced:

  transaction — delete + insert every kind inside one multi-document
                transaction (replica sets / sharded clusters only).
  swap        — stage every kind into ``<name>_seed_staging`` first, then
                rename each staging collection over its live one.  Nothing
                live is touched until all six are staged.

``auto`` picks ``transaction`` when the topology supports it.

Run once against a deployment with::

    python -m dashboard.seed [--fixtures PATH] [--strategy auto|transaction|swap]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from bson import json_util
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from dashboard import config
from dashboard.core.errors import DashboardError, SeedError
from dashboard.database import Database, init_db, close_db
from dashboard.database_indexes import ensure_all_indexes
from dashboard.domain.enums import SeedStrategy
from dashboard.domain.models import RECORD_TYPES

logger = logging.getLogger(__name__)

DEFAULT_FIXTURES_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "fixtures.json")
STAGING_SUFFIX = "_seed_staging"

Fixtures = Dict[str, List[Dict[str, Any]]]


@dataclass
class SeedReport:
    strategy: str
    counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def load_fixtures(path: Optional[str] = None) -> Fixtures:
    """Read the Extended-JSON fixture file keyed by collection name."""
    path = path or config.SEED_FIXTURES_PATH or DEFAULT_FIXTURES_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json_util.loads(f.read())
    except (OSError, ValueError) as exc:
        raise SeedError(f"Could not read fixtures from {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SeedError(f"Fixture file {path} must contain an object keyed by collection")
    missing = [m.collection for m in RECORD_TYPES if m.collection not in raw]
    if missing:
        raise SeedError(f"Fixture file {path} is missing: {', '.join(missing)}")
    not_lists = [m.collection for m in RECORD_TYPES if not isinstance(raw[m.collection], list)]
    if not_lists:
        raise SeedError(f"Fixture file {path} must hold a list for: {', '.join(not_lists)}")
    return raw


def validate_fixtures(raw: Fixtures) -> Fixtures:
    """Validate each record against its model and return storable documents."""
    out: Fixtures = {}
    for model in RECORD_TYPES:
        records = raw.get(model.collection, [])
        if not isinstance(records, list):
            raise SeedError(f"{model.collection} fixtures must be a list")
        docs = []
        for i, record in enumerate(records):
            try:
                docs.append(model.model_validate(record).to_document())
            except ValidationError as exc:
                raise SeedError(
                    f"Invalid {model.__name__} fixture at index {i}: {exc}"
                ) from exc
        out[model.collection] = docs
    return out


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _resolve_strategy(db: Database, strategy: Optional[str]) -> SeedStrategy:
    try:
        chosen = SeedStrategy(strategy or config.SEED_STRATEGY)
    except ValueError:
        raise SeedError(f"Unknown seed strategy: {strategy or config.SEED_STRATEGY!r}")
    if chosen is SeedStrategy.AUTO:
        chosen = SeedStrategy.TRANSACTION if db.supports_transactions() else SeedStrategy.SWAP
    return chosen


def _seed_in_transaction(db: Database, docs: Fixtures) -> Dict[str, int]:
    counts: Dict[str, int] = {}

    # Committed when the block exits, aborted if it raises. Not retried.
    with db.client.start_session() as session:
        with session.start_transaction():
            for model in RECORD_TYPES:
                col = db.db[model.collection]
                col.delete_many({}, session=session)
                if docs[model.collection]:
                    col.insert_many(docs[model.collection], session=session)
                counts[model.collection] = len(docs[model.collection])
    return counts


def _drop_staging(db: Database) -> None:
    for model in RECORD_TYPES:
        db.db[model.collection + STAGING_SUFFIX].drop()


def _seed_by_swap(db: Database, docs: Fixtures) -> Dict[str, int]:
    counts: Dict[str, int] = {}

    # Stage everything; live collections are untouched if this fails.
    try:
        for model in RECORD_TYPES:
            staging = db.db[model.collection + STAGING_SUFFIX]
            staging.drop()
            batch = docs[model.collection]
            if batch:
                staging.insert_many(batch)
            staged = staging.count_documents({})
            if staged != len(batch):
                raise SeedError(
                    f"Staged {staged} {model.collection} documents, expected {len(batch)}"
                )
            counts[model.collection] = staged
    except (PyMongoError, SeedError):
        _drop_staging(db)
        raise

    for model in RECORD_TYPES:
        if docs[model.collection]:
            db.db[model.collection + STAGING_SUFFIX].rename(model.collection, dropTarget=True)
        else:
            db.db[model.collection].delete_many({})
            db.db[model.collection + STAGING_SUFFIX].drop()
        logger.info("Seeded %s: %d documents", model.collection, counts[model.collection])
    return counts


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def seed_database(
    db: Database,
    fixtures: Optional[Fixtures] = None,
    strategy: Optional[str] = None,
) -> SeedReport:
    """Destructively replace all six collections with ``fixtures``.

    Parameters
    ----------
    db:
        Connected ``Database`` wrapper.
    fixtures:
        Raw fixture records keyed by collection name.  Loaded from the
        configured fixture file when omitted.
    strategy:
        ``auto`` / ``transaction`` / ``swap``; defaults to ``SEED_STRATEGY``.

    Raises
    ------
    SeedError
        On unreadable or invalid fixtures, or any store failure.  Never retried.
    """
    docs = validate_fixtures(fixtures if fixtures is not None else load_fixtures())
    chosen = _resolve_strategy(db, strategy)
    logger.info("Seeding data (strategy=%s)...", chosen.value)

    try:
        if chosen is SeedStrategy.TRANSACTION:
            counts = _seed_in_transaction(db, docs)
        else:
            counts = _seed_by_swap(db, docs)
    except PyMongoError as exc:
        raise SeedError(f"Seeding failed: {exc}") from exc

    ensure_all_indexes(db)
    logger.info("Data seeded successfully: %s", counts)
    return SeedReport(strategy=chosen.value, counts=counts)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    from dashboard.core.logging import configure_logging

    configure_logging()
    parser = argparse.ArgumentParser(description="Reseed the dashboard collections.")
    parser.add_argument("--fixtures", help="Extended-JSON fixture file")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in SeedStrategy],
        default=None,
        help="Replacement strategy (default: SEED_STRATEGY)",
    )
    args = parser.parse_args(argv)

    try:
        db = init_db()
        db.ping()
        report = seed_database(db, load_fixtures(args.fixtures), args.strategy)
    except (DashboardError, PyMongoError):
        logger.exception("Seeding aborted")
        return 1
    finally:
        close_db()

    logger.info("Seed complete: %s", report.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
