from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rally.contracts import PlayerRepository, SessionRepository, StorageBackend

from .duckdb_store import AnalyticsStore
from .memory_store import InMemoryPlayerRepository, InMemorySessionRepository
from .migrations import MigrationRunner
from .sqlite_store import AuthoritativeStore, SqlitePlayerRepository, SqliteSessionRepository


@dataclass(slots=True)
class Repositories:
    players: PlayerRepository
    sessions: SessionRepository
    store: AuthoritativeStore | None = None


def open_repositories(storage: StorageBackend, sqlite_path: Path) -> Repositories:
    if storage == StorageBackend.MEMORY:
        return Repositories(players=InMemoryPlayerRepository(), sessions=InMemorySessionRepository())
    store = AuthoritativeStore(sqlite_path)
    store.initialize_schema()
    return Repositories(players=SqlitePlayerRepository(store), sessions=SqliteSessionRepository(store), store=store)


__all__ = [
    "AnalyticsStore",
    "AuthoritativeStore",
    "InMemoryPlayerRepository",
    "InMemorySessionRepository",
    "MigrationRunner",
    "Repositories",
    "SqlitePlayerRepository",
    "SqliteSessionRepository",
    "open_repositories",
]
