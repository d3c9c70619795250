from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import duckdb

from rally.contracts import GameSession

logger = logging.getLogger(__name__)


class AnalyticsStore:
    """Flattened copy of the draw history for reporting and exports."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> Any:
        return duckdb.connect(str(self.db_path))

    def initialize_schema(self) -> None:
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS mart_sessions (
                    session_id INTEGER PRIMARY KEY,
                    game_format VARCHAR,
                    team_count INTEGER,
                    player_count INTEGER,
                    created_at VARCHAR
                );

                CREATE TABLE IF NOT EXISTS mart_assignments (
                    session_id INTEGER,
                    team_label VARCHAR,
                    team_name VARCHAR,
                    slot VARCHAR,
                    slot_index INTEGER,
                    player_id INTEGER,
                    player_name VARCHAR,
                    player_position VARCHAR,
                    PRIMARY KEY(session_id, team_label, slot, slot_index)
                );
                """
            )

    def refresh_from_sessions(self, sessions: Iterable[GameSession]) -> int:
        self.initialize_schema()
        session_rows: list[tuple] = []
        assignment_rows: list[tuple] = []
        for s in sessions:
            session_rows.append((s.session_id, s.game_format.value, s.team_count, s.player_count, s.created_at.isoformat()))
            for team in s.teams:
                assignment_rows.append(self._slot_row(s.session_id, team.label, team.display_name, "setter", 0, team.setter))
                assignment_rows.append(self._slot_row(s.session_id, team.label, team.display_name, "libero", 0, team.libero))
                for idx, player in enumerate(team.generics):
                    assignment_rows.append(self._slot_row(s.session_id, team.label, team.display_name, "generic", idx, player))

        with self.connect() as conn:
            conn.begin()
            try:
                conn.execute("DELETE FROM mart_assignments")
                conn.execute("DELETE FROM mart_sessions")
                if session_rows:
                    conn.executemany("INSERT INTO mart_sessions VALUES (?, ?, ?, ?, ?)", session_rows)
                if assignment_rows:
                    conn.executemany("INSERT INTO mart_assignments VALUES (?, ?, ?, ?, ?, ?, ?, ?)", assignment_rows)
            except Exception:
                conn.rollback()
                raise
            conn.commit()
        logger.info("analytics refreshed: %d sessions, %d assignments", len(session_rows), len(assignment_rows))
        return len(session_rows)

    def appearance_counts(self) -> list[tuple[int, str, int]]:
        with self.connect() as conn:
            return conn.execute(
                """
                SELECT player_id, player_name, COUNT(*) AS appearances
                FROM mart_assignments
                GROUP BY player_id, player_name
                ORDER BY appearances DESC, player_id
                """
            ).fetchall()

    @staticmethod
    def _slot_row(session_id: int, label: str, team_name: str, slot: str, slot_index: int, player) -> tuple:
        return (session_id, label, team_name, slot, slot_index, player.player_id, player.name, player.position.value)
