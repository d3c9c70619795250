from __future__ import annotations

import logging
from typing import Iterable

from rally.contracts import GameFormat, Player, Position, RandomSource, ShortageKind, Team
from rally.core.errors import InsufficientPlayersError
from rally.draw.palette import TEAM_COLORS, TEAM_LABELS, display_name

logger = logging.getLogger(__name__)


def _shuffled(players: Iterable[Player], random_source: RandomSource) -> list[Player]:
    items = list(players)
    random_source.shuffle(items)
    return items


def check_feasibility(roster: list[Player], game_format: GameFormat, team_count: int) -> None:
    """Raise InsufficientPlayersError for the first unmet requirement."""
    setters = sum(1 for p in roster if p.position == Position.SETTER)
    if setters < team_count:
        raise InsufficientPlayersError(ShortageKind.SETTERS, team_count, setters)

    liberos = sum(1 for p in roster if p.position == Position.LIBERO)
    if liberos < team_count:
        raise InsufficientPlayersError(ShortageKind.LIBEROS, team_count, liberos)

    needed = team_count * game_format.players_per_team
    if len(roster) < needed:
        raise InsufficientPlayersError(ShortageKind.TOTAL, needed, len(roster))


def assign_teams(
    roster: Iterable[Player],
    game_format: GameFormat,
    team_count: int,
    random_source: RandomSource,
) -> list[Team]:
    """Randomly split the roster into ``team_count`` teams.

    Every team gets exactly one setter, one libero and
    ``players_per_team - 2`` further players drawn from the generics plus any
    setters and liberos not needed as a team's own. The caller's roster is
    never modified; team count bounds are enforced by the calling layer.
    """
    snapshot = list(roster)
    check_feasibility(snapshot, game_format, team_count)

    setters = _shuffled((p for p in snapshot if p.position == Position.SETTER), random_source)
    liberos = _shuffled((p for p in snapshot if p.position == Position.LIBERO), random_source)
    generics = _shuffled((p for p in snapshot if p.position == Position.GENERIC), random_source)

    remainder = _shuffled([*generics, *setters[team_count:], *liberos[team_count:]], random_source)
    slots = game_format.players_per_team - 2

    teams: list[Team] = []
    for k in range(team_count):
        label = TEAM_LABELS[k]
        teams.append(
            Team(
                label=label,
                display_name=display_name(label),
                color_scheme=TEAM_COLORS[k],
                setter=setters[k],
                libero=liberos[k],
                generics=tuple(remainder[k * slots:(k + 1) * slots]),
            )
        )

    # Players past the last full chunk stay out of this draw.
    dropped = len(remainder) - team_count * slots
    if dropped > 0:
        logger.debug("draw left %d remainder player(s) unassigned", dropped)
    return teams
