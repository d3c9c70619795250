from __future__ import annotations

import pytest

from rally.contracts import GameFormat, Position, ValidationError
from rally.core import seeded_random
from rally.draw import RequestValidator, assign_teams, team_to_payload
from tests.helpers import make_roster


def _codes(excinfo) -> set[str]:
    return {i.code for i in excinfo.value.issues}


def test_player_name_is_trimmed_and_legacy_position_accepted():
    request = RequestValidator().validate_player({"name": "  Ana  ", "position": "levantador"})
    assert request.name == "Ana"
    assert request.position == Position.SETTER


def test_player_requires_name_and_known_position():
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_player({"name": "   ", "position": "striker"})
    assert _codes(excinfo) == {"EMPTY_PLAYER_NAME", "INVALID_POSITION"}


@pytest.mark.parametrize("raw, expected", [("small", GameFormat.SMALL), ("quarteto", GameFormat.SMALL), ("Sexteto", GameFormat.LARGE)])
def test_draw_accepts_format_labels(raw, expected):
    request = RequestValidator().validate_draw({"game_format": raw, "team_count": 3})
    assert request.game_format == expected
    assert request.team_count == 3


@pytest.mark.parametrize("team_count", [1, 5, 0, "2", True, None])
def test_draw_rejects_unsupported_team_counts(team_count):
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_draw({"game_format": "large", "team_count": team_count})
    assert _codes(excinfo) == {"INVALID_TEAM_COUNT"}


def test_draw_rejects_unknown_format():
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_draw({"game_format": "beach", "team_count": 2})
    assert _codes(excinfo) == {"INVALID_GAME_FORMAT"}


def _drawn_payload(game_format=GameFormat.SMALL, team_count=2):
    roster = make_roster(setters=team_count, liberos=team_count, generics=team_count * 4)
    teams = assign_teams(roster, game_format, team_count, seeded_random(8))
    return {"game_format": game_format.value, "team_count": team_count, "teams": [team_to_payload(t) for t in teams]}


def test_session_round_trips_a_fresh_draw():
    payload = _drawn_payload()
    request = RequestValidator().validate_session(payload)
    assert request.team_count == 2
    assert [t.label for t in request.teams] == ["A", "B"]


def test_session_rejects_count_mismatch_and_malformed_team():
    payload = _drawn_payload()
    payload["team_count"] = 3
    payload["teams"].append({"label": "C"})
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert {"MALFORMED_TEAM"} <= _codes(excinfo)


def test_session_rejects_wrong_generics_size_for_format():
    payload = _drawn_payload(GameFormat.SMALL)
    payload["game_format"] = GameFormat.LARGE.value
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert _codes(excinfo) == {"GENERICS_SIZE_MISMATCH"}


def test_session_rejects_player_in_two_teams():
    payload = _drawn_payload()
    payload["teams"][1]["generics"][0] = payload["teams"][0]["generics"][0]
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert _codes(excinfo) == {"DUPLICATE_PLAYER"}


def test_session_rejects_swapped_setter_slot():
    payload = _drawn_payload()
    team = payload["teams"][0]
    team["setter"], team["libero"] = team["libero"], team["setter"]
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert _codes(excinfo) == {"SETTER_SLOT_MISMATCH", "LIBERO_SLOT_MISMATCH"}


def test_session_requires_teams():
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session({"game_format": "small", "team_count": 2, "teams": []})
    assert _codes(excinfo) == {"MISSING_TEAMS"}


def test_session_rejects_duplicate_team_labels():
    payload = _drawn_payload()
    payload["teams"][1]["label"] = "A"
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert _codes(excinfo) == {"TEAM_LABEL_MISMATCH"}


def test_session_rejects_colors_outside_the_palette():
    payload = _drawn_payload(team_count=3)
    payload["teams"][2]["colors"]["name"] = "chartreuse"
    with pytest.raises(ValidationError) as excinfo:
        RequestValidator().validate_session(payload)
    assert _codes(excinfo) == {"TEAM_LABEL_MISMATCH"}
    assert excinfo.value.issues[0].entity_id == "C"
