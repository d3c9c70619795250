from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, cast

from rally.contracts import GameFormat, Position, Team, ValidationError, ValidationIssue, ValidationResult
from rally.draw.codec import parse_game_format, parse_position, team_from_payload
from rally.draw.palette import SUPPORTED_TEAM_COUNTS, TEAM_COLORS, TEAM_LABELS


@dataclass(slots=True)
class NewPlayerRequest:
    name: str
    position: Position


@dataclass(slots=True)
class DrawRequest:
    game_format: GameFormat
    team_count: int


@dataclass(slots=True)
class SaveSessionRequest:
    game_format: GameFormat
    team_count: int
    teams: list[Team]


def _blocking(code: str, field_path: str, message: str, entity_id: str = "request") -> ValidationIssue:
    return ValidationIssue(code=code, severity="blocking", field_path=field_path, entity_id=entity_id, message=message)


class RequestValidator:
    """Rejects malformed requests before they reach the draw engine or a repository."""

    def validate_player(self, payload: Mapping[str, Any]) -> NewPlayerRequest:
        issues: list[ValidationIssue] = []
        name = str(payload.get("name") or "").strip()
        if not name:
            issues.append(_blocking("EMPTY_PLAYER_NAME", "name", "player name must not be empty"))
        position = self._position(payload.get("position"), issues)
        self._finalize(issues)
        return NewPlayerRequest(name=name, position=cast(Position, position))

    def validate_draw(self, payload: Mapping[str, Any]) -> DrawRequest:
        issues: list[ValidationIssue] = []
        game_format = self._game_format(payload.get("game_format"), issues)
        team_count = self._team_count(payload.get("team_count"), issues)
        self._finalize(issues)
        return DrawRequest(game_format=cast(GameFormat, game_format), team_count=cast(int, team_count))

    def validate_session(self, payload: Mapping[str, Any]) -> SaveSessionRequest:
        issues: list[ValidationIssue] = []
        game_format = self._game_format(payload.get("game_format"), issues)
        team_count = self._team_count(payload.get("team_count"), issues)
        raw_teams = payload.get("teams")
        teams: list[Team] = []
        if not isinstance(raw_teams, list) or not raw_teams:
            issues.append(_blocking("MISSING_TEAMS", "teams", "teams must be a non-empty list"))
        else:
            for idx, raw in enumerate(raw_teams):
                try:
                    teams.append(team_from_payload(raw))
                except (KeyError, TypeError, ValueError) as exc:
                    issues.append(_blocking("MALFORMED_TEAM", f"teams[{idx}]", f"team could not be read: {exc}"))
            if team_count is not None and len(raw_teams) != team_count:
                issues.append(
                    _blocking("TEAM_COUNT_MISMATCH", "teams", f"expected {team_count} teams, got {len(raw_teams)}")
                )
        if game_format is not None:
            issues.extend(self._team_shape_issues(teams, game_format))
        self._finalize(issues)
        return SaveSessionRequest(game_format=cast(GameFormat, game_format), team_count=cast(int, team_count), teams=teams)

    def _position(self, raw: object, issues: list[ValidationIssue]) -> Position | None:
        try:
            return parse_position(raw)
        except ValueError:
            allowed = ", ".join(p.value for p in Position)
            issues.append(_blocking("INVALID_POSITION", "position", f"position '{raw}' is not one of: {allowed}"))
            return None

    def _game_format(self, raw: object, issues: list[ValidationIssue]) -> GameFormat | None:
        try:
            return parse_game_format(raw)
        except ValueError:
            allowed = ", ".join(f.value for f in GameFormat)
            issues.append(_blocking("INVALID_GAME_FORMAT", "game_format", f"game format '{raw}' is not one of: {allowed}"))
            return None

    def _team_count(self, raw: object, issues: list[ValidationIssue]) -> int | None:
        if isinstance(raw, bool) or not isinstance(raw, int) or raw not in SUPPORTED_TEAM_COUNTS:
            allowed = ", ".join(str(n) for n in SUPPORTED_TEAM_COUNTS)
            issues.append(_blocking("INVALID_TEAM_COUNT", "team_count", f"team count '{raw}' is not one of: {allowed}"))
            return None
        return raw

    def _team_shape_issues(self, teams: list[Team], game_format: GameFormat) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        slots = game_format.players_per_team - 2
        seen: set[int] = set()
        for k, team in enumerate(teams):
            if k >= len(TEAM_LABELS) or team.label != TEAM_LABELS[k] or team.color_scheme != TEAM_COLORS[k]:
                issues.append(
                    _blocking("TEAM_LABEL_MISMATCH", "label", f"team {k + 1} does not carry its palette label and colors", team.label)
                )
            if team.setter.position != Position.SETTER:
                issues.append(_blocking("SETTER_SLOT_MISMATCH", "setter", "setter slot holds a non-setter", team.label))
            if team.libero.position != Position.LIBERO:
                issues.append(_blocking("LIBERO_SLOT_MISMATCH", "libero", "libero slot holds a non-libero", team.label))
            if len(team.generics) != slots:
                issues.append(
                    _blocking(
                        "GENERICS_SIZE_MISMATCH",
                        "generics",
                        f"expected {slots} players, got {len(team.generics)}",
                        team.label,
                    )
                )
            for member in team.members:
                if member.player_id in seen:
                    issues.append(
                        _blocking("DUPLICATE_PLAYER", "members", f"player {member.player_id} appears twice", team.label)
                    )
                seen.add(member.player_id)
        return issues

    def _finalize(self, issues: list[ValidationIssue]) -> ValidationResult:
        ordered = sorted(issues, key=lambda x: (x.severity, x.code, x.entity_id, x.field_path))
        blocking = [i for i in ordered if i.severity == "blocking"]
        if blocking:
            raise ValidationError(blocking)
        return ValidationResult(ok=True, issues=ordered)
