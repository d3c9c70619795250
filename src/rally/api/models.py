from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlayerIn(BaseModel):
    name: str = ""
    position: str = ""


class PlayerModel(BaseModel):
    id: int
    name: str
    position: str


class RosterSummaryModel(BaseModel):
    total: int
    setters: int
    liberos: int
    generics: int
    max_teams: Dict[str, int]


class DrawIn(BaseModel):
    """Accepts both snake_case and the older camelCase field names."""

    model_config = ConfigDict(populate_by_name=True)

    game_format: str = Field(alias="gameType")
    team_count: int = Field(alias="numberOfTeams")


class SessionIn(DrawIn):
    teams: List[Dict[str, Any]]


class ErrorModel(BaseModel):
    error: str
    details: Optional[Dict[str, Any]] = None
