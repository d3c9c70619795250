from .types import (
    ActionRequest,
    ActionResult,
    ActionType,
    ActivityEvent,
    ForensicArtifact,
    GameFormat,
    GameSession,
    Player,
    PlayerRepository,
    Position,
    RandomSource,
    RosterSummary,
    SessionRepository,
    ShortageKind,
    StorageBackend,
    Team,
    TeamColorScheme,
    ValidationError,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "ActionRequest",
    "ActionResult",
    "ActionType",
    "ActivityEvent",
    "ForensicArtifact",
    "GameFormat",
    "GameSession",
    "Player",
    "PlayerRepository",
    "Position",
    "RandomSource",
    "RosterSummary",
    "SessionRepository",
    "ShortageKind",
    "StorageBackend",
    "Team",
    "TeamColorScheme",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
]
