from __future__ import annotations

from typing import Any, Mapping

from rally.contracts import GameFormat, GameSession, Player, Position, Team, TeamColorScheme

POSITION_ALIASES: dict[str, Position] = {
    "levantador": Position.SETTER,
    "jogador": Position.GENERIC,
}

GAME_FORMAT_ALIASES: dict[str, GameFormat] = {
    "quarteto": GameFormat.SMALL,
    "sexteto": GameFormat.LARGE,
}


def parse_position(raw: object) -> Position:
    text = str(raw).strip().lower()
    if text in POSITION_ALIASES:
        return POSITION_ALIASES[text]
    return Position(text)


def parse_game_format(raw: object) -> GameFormat:
    text = str(raw).strip().lower()
    if text in GAME_FORMAT_ALIASES:
        return GAME_FORMAT_ALIASES[text]
    return GameFormat(text)


def player_to_payload(player: Player) -> dict[str, Any]:
    return {"id": player.player_id, "name": player.name, "position": player.position.value}


def player_from_payload(raw: Mapping[str, Any]) -> Player:
    return Player(player_id=int(raw["id"]), name=str(raw["name"]), position=parse_position(raw["position"]))


def team_to_payload(team: Team) -> dict[str, Any]:
    scheme = team.color_scheme
    return {
        "label": team.label,
        "name": team.display_name,
        "colors": {
            "name": scheme.name,
            "bg": scheme.background,
            "border": scheme.border,
            "text": scheme.text,
            "badge": scheme.badge,
        },
        "setter": player_to_payload(team.setter),
        "libero": player_to_payload(team.libero),
        "generics": [player_to_payload(p) for p in team.generics],
    }


def team_from_payload(raw: Mapping[str, Any]) -> Team:
    colors = raw["colors"]
    return Team(
        label=str(raw["label"]),
        display_name=str(raw["name"]),
        color_scheme=TeamColorScheme(
            name=str(colors["name"]),
            background=str(colors["bg"]),
            border=str(colors["border"]),
            text=str(colors["text"]),
            badge=str(colors["badge"]),
        ),
        setter=player_from_payload(raw["setter"]),
        libero=player_from_payload(raw["libero"]),
        generics=tuple(player_from_payload(p) for p in raw["generics"]),
    )


def session_to_payload(session: GameSession) -> dict[str, Any]:
    return {
        "id": session.session_id,
        "game_format": session.game_format.value,
        "team_count": session.team_count,
        "teams": [team_to_payload(t) for t in session.teams],
        "player_count": session.player_count,
        "created_at": session.created_at.isoformat(),
    }
