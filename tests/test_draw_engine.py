from __future__ import annotations

import pytest

from rally.contracts import GameFormat, Position, ShortageKind
from rally.core import InsufficientPlayersError, seeded_random
from rally.draw import TEAM_COLORS, assign_teams, check_feasibility
from tests.helpers import make_roster


def _all_members(teams):
    return [p for t in teams for p in t.members]


def test_small_format_two_teams_uses_every_generic():
    roster = make_roster(setters=2, liberos=2, generics=4)
    teams = assign_teams(roster, GameFormat.SMALL, 2, seeded_random(1))

    assert len(teams) == 2
    for team in teams:
        assert team.setter.position == Position.SETTER
        assert team.libero.position == Position.LIBERO
        assert len(team.generics) == 2
    generic_ids = {p.player_id for t in teams for p in t.generics}
    assert generic_ids == {p.player_id for p in roster if p.position == Position.GENERIC}


def test_large_format_with_same_roster_fails_on_total():
    roster = make_roster(setters=2, liberos=2, generics=4)
    with pytest.raises(InsufficientPlayersError) as excinfo:
        assign_teams(roster, GameFormat.LARGE, 2, seeded_random(1))

    err = excinfo.value
    assert err.kind == ShortageKind.TOTAL
    assert (err.required, err.available) == (12, 8)
    assert str(err) == "not enough players: required 12, available 8"


def test_missing_setter_reported_before_other_shortages():
    roster = make_roster(setters=1, liberos=0, generics=0)
    with pytest.raises(InsufficientPlayersError) as excinfo:
        check_feasibility(roster, GameFormat.SMALL, 2)
    assert excinfo.value.kind == ShortageKind.SETTERS
    assert (excinfo.value.required, excinfo.value.available) == (2, 1)
    assert str(excinfo.value) == "not enough setters: required 2, available 1"


def test_missing_libero_reported_before_total():
    roster = make_roster(setters=3, liberos=1, generics=0)
    with pytest.raises(InsufficientPlayersError) as excinfo:
        assign_teams(roster, GameFormat.LARGE, 3, seeded_random(2))
    assert excinfo.value.as_dict() == {"kind": "liberos", "required": 3, "available": 1}


@pytest.mark.parametrize("game_format", list(GameFormat))
@pytest.mark.parametrize("team_count", [2, 3, 4])
def test_shape_is_fixed_by_format_and_team_count(game_format, team_count):
    roster = make_roster(setters=team_count + 1, liberos=team_count + 2, generics=team_count * 5)
    for seed in range(25):
        teams = assign_teams(roster, game_format, team_count, seeded_random(seed))
        assert len(teams) == team_count
        assert [t.label for t in teams] == ["A", "B", "C", "D"][:team_count]
        assert [t.color_scheme for t in teams] == list(TEAM_COLORS[:team_count])
        for team in teams:
            assert len(team.generics) == game_format.players_per_team - 2

        members = _all_members(teams)
        ids = [p.player_id for p in members]
        assert len(ids) == len(set(ids))
        assert set(members) <= set(roster)


def test_leftover_remainder_players_are_left_out():
    # 2 setters, 2 liberos, 5 generics -> remainder of 5 for 4 slots.
    roster = make_roster(setters=2, liberos=2, generics=5)
    teams = assign_teams(roster, GameFormat.SMALL, 2, seeded_random(3))

    assigned = {p.player_id for p in _all_members(teams)}
    assert len(assigned) == 8
    assert len(set(p.player_id for p in roster) - assigned) == 1


def test_spare_setters_and_liberos_fill_generic_slots():
    roster = make_roster(setters=4, liberos=4, generics=0)
    teams = assign_teams(roster, GameFormat.SMALL, 2, seeded_random(4))

    spare_positions = sorted(p.position.value for t in teams for p in t.generics)
    assert spare_positions == ["libero", "libero", "setter", "setter"]
    assert len({p.player_id for p in _all_members(teams)}) == 8


def test_roster_is_not_mutated():
    roster = make_roster(setters=3, liberos=3, generics=10)
    before = list(roster)
    assign_teams(roster, GameFormat.LARGE, 2, seeded_random(5))
    assert roster == before


def test_same_seed_gives_same_draw_and_different_seeds_vary():
    roster = make_roster(setters=4, liberos=4, generics=16)
    first = assign_teams(roster, GameFormat.LARGE, 4, seeded_random(11))
    again = assign_teams(roster, GameFormat.LARGE, 4, seeded_random(11))
    assert first == again

    outcomes = {
        tuple(p.player_id for p in _all_members(assign_teams(roster, GameFormat.LARGE, 4, seeded_random(seed))))
        for seed in range(20)
    }
    assert len(outcomes) > 1


def test_every_setter_eventually_leads_a_team():
    roster = make_roster(setters=3, liberos=2, generics=6)
    leaders = set()
    for seed in range(60):
        teams = assign_teams(roster, GameFormat.SMALL, 2, seeded_random(seed))
        leaders.update(t.setter.player_id for t in teams)
    assert leaders == {p.player_id for p in roster if p.position == Position.SETTER}
