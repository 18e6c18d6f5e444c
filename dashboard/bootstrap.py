"""
Process startup sequence.

    disconnected ──start()──▶ connecting ──ping ok──▶ (indexes, optional seed)
                                  │                         │
                                  ▼                         ▼
                           connect_failed          mark_listening() ─▶ listening

Seeding happens before the app accepts traffic, so a reseed never races
with request handlers.  A failed connect is fatal (no retry); a failed seed
is logged and reported on ``/health`` but does not stop the server.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pymongo.errors import PyMongoError

from dashboard import config
from dashboard.core.errors import SeedError, StoreConnectionError
from dashboard.database import Database, close_db, init_db
from dashboard.database_indexes import ensure_all_indexes
from dashboard.seed import SeedReport, load_fixtures, seed_database

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    LISTENING = "listening"
    CONNECT_FAILED = "connect_failed"


class SeedStatus(str, Enum):
    SKIPPED = "skipped"
    OK = "ok"
    FAILED = "failed"


@dataclass
class Bootstrap:
    mongo_url: str
    database_name: str = ""
    timeout_ms: int = 5000
    seed_on_start: bool = False
    seed_strategy: Optional[str] = None
    seed_fixtures_path: Optional[str] = None

    state: BootstrapState = BootstrapState.DISCONNECTED
    seed_status: SeedStatus = SeedStatus.SKIPPED
    seed_report: Optional[SeedReport] = None
    db: Optional[Database] = field(default=None, repr=False)

    @classmethod
    def from_config(cls) -> "Bootstrap":
        return cls(
            mongo_url=config.MONGO_URL,
            database_name=config.DATABASE_NAME,
            timeout_ms=config.MONGO_TIMEOUT_MS,
            seed_on_start=config.SEED_ON_START,
            seed_strategy=config.SEED_STRATEGY,
            seed_fixtures_path=config.SEED_FIXTURES_PATH or None,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> Database:
        """Connect, prepare indexes and optionally reseed.  Blocking.

        Raises ``StoreConnectionError`` (after moving to ``connect_failed``)
        when the URL is missing or the server cannot be reached.
        """
        if self.state is not BootstrapState.DISCONNECTED:
            raise RuntimeError(f"Bootstrap already ran (state={self.state.value})")
        self.state = BootstrapState.CONNECTING

        if not self.mongo_url:
            self._fail("MONGO_URL is not set")

        try:
            self.db = init_db(self.mongo_url, self.database_name or None, self.timeout_ms)
            self.db.ping()
        except PyMongoError as exc:
            close_db()
            self._fail(f"{exc} did not connect")
        logger.info("Connected to MongoDB database %s", self.db.name)

        ensure_all_indexes(self.db)
        if self.seed_on_start:
            self._seed()
        return self.db

    def mark_listening(self) -> None:
        if self.state is not BootstrapState.CONNECTING:
            raise RuntimeError(f"Cannot start listening from state {self.state.value}")
        self.state = BootstrapState.LISTENING

    def shutdown(self) -> None:
        close_db()
        self.db = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fail(self, message: str) -> None:
        self.state = BootstrapState.CONNECT_FAILED
        logger.error("Startup aborted: %s", message)
        raise StoreConnectionError(message)

    def _seed(self) -> None:
        try:
            fixtures = load_fixtures(self.seed_fixtures_path)
            self.seed_report = seed_database(self.db, fixtures, self.seed_strategy)
            self.seed_status = SeedStatus.OK
        except SeedError:
            self.seed_status = SeedStatus.FAILED
            logger.exception("Error during data seeding; continuing without reseed")
