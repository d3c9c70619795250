from .codec import (
    parse_game_format,
    parse_position,
    player_to_payload,
    session_to_payload,
    team_from_payload,
    team_to_payload,
)
from .engine import assign_teams, check_feasibility
from .palette import MAX_TEAMS, SUPPORTED_TEAM_COUNTS, TEAM_COLORS, TEAM_LABELS
from .summary import max_complete_teams, summarize_roster
from .validation import DrawRequest, NewPlayerRequest, RequestValidator, SaveSessionRequest

__all__ = [
    "DrawRequest",
    "MAX_TEAMS",
    "NewPlayerRequest",
    "RequestValidator",
    "SUPPORTED_TEAM_COUNTS",
    "SaveSessionRequest",
    "TEAM_COLORS",
    "TEAM_LABELS",
    "assign_teams",
    "check_feasibility",
    "max_complete_teams",
    "parse_game_format",
    "parse_position",
    "player_to_payload",
    "session_to_payload",
    "summarize_roster",
    "team_from_payload",
    "team_to_payload",
]
