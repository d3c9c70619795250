from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence


class Position(str, Enum):
    SETTER = "setter"
    LIBERO = "libero"
    GENERIC = "generic"


class GameFormat(str, Enum):
    SMALL = "small"
    LARGE = "large"

    @property
    def players_per_team(self) -> int:
        return 4 if self is GameFormat.SMALL else 6


class ShortageKind(str, Enum):
    SETTERS = "setters"
    LIBEROS = "liberos"
    TOTAL = "total"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    SQLITE = "sqlite"


class ActionType(str, Enum):
    LIST_PLAYERS = "list_players"
    CREATE_PLAYER = "create_player"
    DELETE_PLAYER = "delete_player"
    GET_ROSTER_SUMMARY = "get_roster_summary"
    DRAW_TEAMS = "draw_teams"
    LIST_SESSIONS = "list_sessions"
    SAVE_SESSION = "save_session"
    DELETE_SESSION = "delete_session"
    EXPORT_HISTORY = "export_history"
    HISTORY_STATS = "history_stats"


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...

    def shuffle(self, items: list[Any]) -> None: ...

    def spawn(self, substream_id: str) -> RandomSource: ...


@dataclass(slots=True, frozen=True)
class Player:
    player_id: int
    name: str
    position: Position


@dataclass(slots=True, frozen=True)
class TeamColorScheme:
    """Display token handed to presentation layers as-is."""

    name: str
    background: str
    border: str
    text: str
    badge: str


@dataclass(slots=True, frozen=True)
class Team:
    label: str
    display_name: str
    color_scheme: TeamColorScheme
    setter: Player
    libero: Player
    generics: tuple[Player, ...]

    @property
    def members(self) -> tuple[Player, ...]:
        return (self.setter, self.libero, *self.generics)


@dataclass(slots=True)
class GameSession:
    session_id: int
    game_format: GameFormat
    team_count: int
    teams: list[Team]
    created_at: datetime

    @property
    def player_count(self) -> int:
        return sum(len(t.members) for t in self.teams)


@dataclass(slots=True)
class RosterSummary:
    total: int
    setters: int
    liberos: int
    generics: int
    max_teams: dict[str, int] = field(default_factory=dict)


class PlayerRepository(Protocol):
    def list_all(self) -> list[Player]: ...

    def create(self, name: str, position: Position) -> Player: ...

    def delete_by_id(self, player_id: int) -> None: ...


class SessionRepository(Protocol):
    def list_all(self) -> list[GameSession]: ...

    def create(self, game_format: GameFormat, team_count: int, teams: Sequence[Team]) -> GameSession: ...

    def delete_by_id(self, session_id: int) -> None: ...


@dataclass(slots=True)
class ActivityEvent:
    event_id: str
    time: datetime
    scope: str
    event_type: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ActionRequest:
    request_id: str
    action_type: ActionType | str
    payload: dict[str, Any]


@dataclass(slots=True)
class ActionResult:
    request_id: str
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ValidationIssue:
    code: str
    severity: str
    field_path: str
    entity_id: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]


class ValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        message = "; ".join(f"{i.code}:{i.entity_id}:{i.message}" for i in issues)
        super().__init__(message)
        self.issues = issues


@dataclass(slots=True)
class ForensicArtifact:
    artifact_id: str
    timestamp: datetime
    engine_scope: str
    error_code: str
    message: str
    state_snapshot: Mapping[str, Any]
    context: Mapping[str, Any]
    identifiers: Mapping[str, str]
    causal_fragment: Sequence[str]
