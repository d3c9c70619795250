from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from rally.contracts import ActionRequest, ActionResult, ActionType, GameFormat, Position, StorageBackend
from rally.core import configure_logging, load_runtime_config, make_id
from rally.draw import SUPPORTED_TEAM_COUNTS
from rally.service import DrawRuntime


def _print_teams(teams: list[dict[str, Any]]) -> None:
    for team in teams:
        print(f"{team['name']} ({team['colors']['name']})")
        print(f"  setter: {team['setter']['name']}")
        print(f"  libero: {team['libero']['name']}")
        for player in team["generics"]:
            print(f"  player: {player['name']} ({player['position']})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rally", description="Rally Draw: random volleyball teams")
    parser.add_argument("--root", type=Path, default=None, help="runtime root directory (default: $RALLY_ROOT or cwd)")
    parser.add_argument("--storage", choices=[b.value for b in StorageBackend], default=None, help="repository backend")
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic dev/testing draws")
    parser.add_argument("--log-level", default=None, help="logging level (default: $RALLY_LOG_LEVEL or INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    players = commands.add_parser("players", help="manage the roster")
    player_commands = players.add_subparsers(dest="players_command", required=True)
    player_commands.add_parser("list", help="list registered players")
    add = player_commands.add_parser("add", help="register a player")
    add.add_argument("name")
    add.add_argument("--position", choices=[p.value for p in Position], default=Position.GENERIC.value)
    remove = player_commands.add_parser("remove", help="remove a player by id")
    remove.add_argument("player_id", type=int)
    player_commands.add_parser("summary", help="counts per position")

    draw = commands.add_parser("draw", help="draw teams from the current roster")
    draw.add_argument("--format", dest="game_format", choices=[f.value for f in GameFormat], default=GameFormat.LARGE.value)
    draw.add_argument("--teams", dest="team_count", type=int, choices=list(SUPPORTED_TEAM_COUNTS), default=2)
    draw.add_argument("--save", action="store_true", help="store the draw in the history")

    history = commands.add_parser("history", help="saved draws")
    history_commands = history.add_subparsers(dest="history_command", required=True)
    history_commands.add_parser("list", help="list saved draws, newest first")
    forget = history_commands.add_parser("remove", help="remove a saved draw by id")
    forget.add_argument("session_id", type=int)
    history_commands.add_parser("stats", help="how often each player appears in saved draws")

    commands.add_parser("export", help="export the draw history to CSV and Parquet")

    serve = commands.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    commands.add_parser("ui", help="launch the Qt desktop UI")
    return parser


def _run(runtime: DrawRuntime, args: argparse.Namespace) -> ActionResult:
    def dispatch(action: ActionType, payload: dict[str, Any]) -> ActionResult:
        return runtime.handle_action(ActionRequest(make_id("req"), action, payload))

    if args.command == "players":
        if args.players_command == "add":
            return dispatch(ActionType.CREATE_PLAYER, {"name": args.name, "position": args.position})
        if args.players_command == "remove":
            return dispatch(ActionType.DELETE_PLAYER, {"player_id": args.player_id})
        if args.players_command == "summary":
            result = dispatch(ActionType.GET_ROSTER_SUMMARY, {})
            if result.success:
                s = result.data["summary"]
                print(f"setters={s['setters']} liberos={s['liberos']} others={s['generics']} max_teams={s['max_teams']}")
            return result
        result = dispatch(ActionType.LIST_PLAYERS, {})
        for p in result.data.get("players", []):
            print(f"- {p['id']}: {p['name']} ({p['position']})")
        return result

    if args.command == "draw":
        result = dispatch(ActionType.DRAW_TEAMS, {"game_format": args.game_format, "team_count": args.team_count})
        if not result.success:
            return result
        _print_teams(result.data["teams"])
        if args.save:
            return dispatch(ActionType.SAVE_SESSION, result.data)
        return result

    if args.command == "history":
        if args.history_command == "remove":
            return dispatch(ActionType.DELETE_SESSION, {"session_id": args.session_id})
        if args.history_command == "stats":
            result = dispatch(ActionType.HISTORY_STATS, {})
            for row in result.data.get("appearances", []):
                print(f"- {row['id']}: {row['name']} x{row['appearances']}")
            return result
        result = dispatch(ActionType.LIST_SESSIONS, {})
        for s in result.data.get("sessions", []):
            print(f"- {s['id']}: {s['created_at']} {s['game_format']} {s['team_count']} teams, {s['player_count']} players")
        return result

    result = dispatch(ActionType.EXPORT_HISTORY, {})
    for path in result.data.get("paths", []):
        print(f"- {path}")
    return result


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_runtime_config(root=args.root, storage=args.storage, seed=args.seed, log_level=args.log_level)
    configure_logging(config.log_level)
    runtime = DrawRuntime(config)

    if args.command == "ui":
        from rally.ui import launch_ui

        launch_ui(runtime.handle_action)
        return 0

    if args.command == "serve":
        import uvicorn

        from rally.api import create_app

        uvicorn.run(create_app(runtime=runtime), host=args.host, port=args.port)
        return 0

    result = _run(runtime, args)
    print(result.message)
    if not result.success:
        for issue in result.data.get("issues", []):
            print(f"  {issue['field_path']}: {issue['message']}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
