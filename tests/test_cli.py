from __future__ import annotations

from pathlib import Path

from rally.cli import main


def _cli(tmp_path: Path, *args: str) -> int:
    return main(["--root", str(tmp_path), "--storage", "sqlite", "--seed", "3", *args])


def _add_roster(tmp_path: Path, setters: int, liberos: int, generics: int) -> None:
    for position, count in (("setter", setters), ("libero", liberos), ("generic", generics)):
        for i in range(count):
            assert _cli(tmp_path, "players", "add", f"{position}_{i + 1}", "--position", position) == 0


def test_players_add_and_list(tmp_path: Path, capsys):
    assert _cli(tmp_path, "players", "add", "Ana", "--position", "setter") == 0
    assert _cli(tmp_path, "players", "add", "Bia") == 0
    capsys.readouterr()

    assert _cli(tmp_path, "players", "list") == 0
    out = capsys.readouterr().out
    assert "- 1: Ana (setter)" in out
    assert "- 2: Bia (generic)" in out


def test_draw_with_save_lands_in_history(tmp_path: Path, capsys):
    _add_roster(tmp_path, 2, 2, 4)
    capsys.readouterr()

    assert _cli(tmp_path, "draw", "--format", "small", "--teams", "2", "--save") == 0
    out = capsys.readouterr().out
    assert "Team A (blue)" in out
    assert "Team B (red)" in out
    assert "saved draw 1" in out

    assert _cli(tmp_path, "history", "list") == 0
    assert "- 1: " in capsys.readouterr().out

    assert _cli(tmp_path, "history", "remove", "1") == 0
    capsys.readouterr()
    assert _cli(tmp_path, "history", "list") == 0
    assert "- 1: " not in capsys.readouterr().out


def test_draw_shortage_exits_nonzero(tmp_path: Path, capsys):
    _add_roster(tmp_path, 1, 2, 10)
    capsys.readouterr()

    assert _cli(tmp_path, "draw", "--format", "large", "--teams", "2") == 1
    assert "not enough setters: required 2, available 1" in capsys.readouterr().out


def test_invalid_player_prints_issues(tmp_path: Path, capsys):
    assert _cli(tmp_path, "players", "add", "   ") == 1
    out = capsys.readouterr().out
    assert "name: player name must not be empty" in out


def test_summary_reports_feasible_teams(tmp_path: Path, capsys):
    _add_roster(tmp_path, 2, 2, 8)
    capsys.readouterr()
    assert _cli(tmp_path, "players", "summary") == 0
    assert "setters=2 liberos=2 others=8 max_teams={'small': 2, 'large': 2}" in capsys.readouterr().out


def test_history_stats_counts_appearances(tmp_path: Path, capsys):
    _add_roster(tmp_path, 2, 2, 4)
    assert _cli(tmp_path, "draw", "--format", "small", "--teams", "2", "--save") == 0
    assert _cli(tmp_path, "draw", "--format", "small", "--teams", "2", "--save") == 0
    capsys.readouterr()

    assert _cli(tmp_path, "history", "stats") == 0
    out = capsys.readouterr().out
    assert "- 1: setter_1 x2" in out
    assert "8 players in saved draws" in out
