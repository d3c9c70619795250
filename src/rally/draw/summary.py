from __future__ import annotations

from typing import Iterable

from rally.contracts import GameFormat, Player, Position, RosterSummary
from rally.draw.palette import MAX_TEAMS


def max_complete_teams(setters: int, liberos: int, total: int, game_format: GameFormat) -> int:
    """Largest team count a draw in ``game_format`` would accept, capped by the palette."""
    return min(setters, liberos, total // game_format.players_per_team, MAX_TEAMS)


def summarize_roster(players: Iterable[Player]) -> RosterSummary:
    roster = list(players)
    setters = sum(1 for p in roster if p.position == Position.SETTER)
    liberos = sum(1 for p in roster if p.position == Position.LIBERO)
    generics = sum(1 for p in roster if p.position == Position.GENERIC)
    return RosterSummary(
        total=len(roster),
        setters=setters,
        liberos=liberos,
        generics=generics,
        max_teams={f.value: max_complete_teams(setters, liberos, len(roster), f) for f in GameFormat},
    )
