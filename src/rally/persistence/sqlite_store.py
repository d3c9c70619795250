from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing, contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Sequence

from rally.contracts import GameFormat, GameSession, Player, Position, Team
from rally.core import now_utc
from rally.draw.codec import team_from_payload, team_to_payload
from rally.persistence.migrations import MigrationRunner

logger = logging.getLogger(__name__)


class AuthoritativeStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        with closing(self.connect()) as conn, conn:
            yield conn

    def initialize_schema(self) -> None:
        with closing(self.connect()) as conn:
            applied = MigrationRunner(conn).apply()
        if applied:
            logger.info("applied sqlite migrations %s to %s", applied, self.db_path)


class SqlitePlayerRepository:
    def __init__(self, store: AuthoritativeStore) -> None:
        self.store = store

    def list_all(self) -> list[Player]:
        with self.store.transaction() as conn:
            rows = conn.execute("SELECT player_id, name, position FROM players ORDER BY player_id").fetchall()
        return [Player(player_id=r[0], name=r[1], position=Position(r[2])) for r in rows]

    def create(self, name: str, position: Position) -> Player:
        with self.store.transaction() as conn:
            cursor = conn.execute("INSERT INTO players(name, position) VALUES (?, ?)", (name, position.value))
            player_id = int(cursor.lastrowid)
        return Player(player_id=player_id, name=name, position=position)

    def delete_by_id(self, player_id: int) -> None:
        with self.store.transaction() as conn:
            conn.execute("DELETE FROM players WHERE player_id = ?", (player_id,))


class SqliteSessionRepository:
    def __init__(self, store: AuthoritativeStore) -> None:
        self.store = store

    def list_all(self) -> list[GameSession]:
        with self.store.transaction() as conn:
            rows = conn.execute(
                """
                SELECT session_id, game_format, team_count, teams_json, created_at
                FROM game_sessions
                ORDER BY created_at DESC, session_id DESC
                """
            ).fetchall()
        return [
            GameSession(
                session_id=r[0],
                game_format=GameFormat(r[1]),
                team_count=r[2],
                teams=[team_from_payload(t) for t in json.loads(r[3])],
                created_at=datetime.fromisoformat(r[4]),
            )
            for r in rows
        ]

    def create(self, game_format: GameFormat, team_count: int, teams: Sequence[Team]) -> GameSession:
        created_at = now_utc()
        with self.store.transaction() as conn:
            cursor = conn.execute(
                """
                INSERT INTO game_sessions(game_format, team_count, teams_json, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    game_format.value,
                    team_count,
                    json.dumps([team_to_payload(t) for t in teams]),
                    created_at.isoformat(),
                ),
            )
            session_id = int(cursor.lastrowid)
        return GameSession(
            session_id=session_id,
            game_format=game_format,
            team_count=team_count,
            teams=list(teams),
            created_at=created_at,
        )

    def delete_by_id(self, session_id: int) -> None:
        with self.store.transaction() as conn:
            conn.execute("DELETE FROM game_sessions WHERE session_id = ?", (session_id,))
