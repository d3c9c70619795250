from __future__ import annotations

import threading
from typing import Sequence

from rally.contracts import GameFormat, GameSession, Player, Position, Team
from rally.core import now_utc


class InMemoryPlayerRepository:
    """Process-local roster; ids start at 1 and are never reused."""

    def __init__(self) -> None:
        self._players: dict[int, Player] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def list_all(self) -> list[Player]:
        with self._lock:
            return list(self._players.values())

    def create(self, name: str, position: Position) -> Player:
        with self._lock:
            player = Player(player_id=self._next_id, name=name, position=position)
            self._players[player.player_id] = player
            self._next_id += 1
        return player

    def delete_by_id(self, player_id: int) -> None:
        with self._lock:
            self._players.pop(player_id, None)


class InMemorySessionRepository:
    def __init__(self) -> None:
        self._sessions: dict[int, GameSession] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def list_all(self) -> list[GameSession]:
        with self._lock:
            sessions = list(self._sessions.values())
        return sorted(sessions, key=lambda s: (s.created_at, s.session_id), reverse=True)

    def create(self, game_format: GameFormat, team_count: int, teams: Sequence[Team]) -> GameSession:
        with self._lock:
            session = GameSession(
                session_id=self._next_id,
                game_format=game_format,
                team_count=team_count,
                teams=list(teams),
                created_at=now_utc(),
            )
            self._sessions[session.session_id] = session
            self._next_id += 1
        return session

    def delete_by_id(self, session_id: int) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)
