from __future__ import annotations

from pathlib import Path
from typing import Any

from rally.contracts import ActionRequest, ActionResult, ActionType, Player, Position, StorageBackend
from rally.core import RuntimeConfig, make_id
from rally.service import DrawRuntime


def make_roster(setters: int, liberos: int, generics: int) -> list[Player]:
    roster: list[Player] = []
    next_id = 1
    for position, count in ((Position.SETTER, setters), (Position.LIBERO, liberos), (Position.GENERIC, generics)):
        for i in range(count):
            roster.append(Player(player_id=next_id, name=f"{position.value}_{i + 1}", position=position))
            next_id += 1
    return roster


def build_runtime(
    root: Path,
    storage: StorageBackend = StorageBackend.MEMORY,
    seed: int | None = 7,
) -> DrawRuntime:
    return DrawRuntime(RuntimeConfig(root=root, storage=storage, seed=seed))


def act(runtime: DrawRuntime, action: ActionType | str, payload: dict[str, Any] | None = None) -> ActionResult:
    return runtime.handle_action(ActionRequest(make_id("req"), action, payload or {}))


def register_roster(runtime: DrawRuntime, setters: int, liberos: int, generics: int) -> None:
    for player in make_roster(setters, liberos, generics):
        result = act(runtime, ActionType.CREATE_PLAYER, {"name": player.name, "position": player.position.value})
        if not result.success:
            raise RuntimeError(f"register_roster failed: {result.message} data={result.data}")
