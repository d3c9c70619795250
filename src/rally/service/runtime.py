from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from rally.contracts import (
    ActionRequest,
    ActionResult,
    ActionType,
    ActivityEvent,
    ValidationError,
    ValidationIssue,
)
from rally.core import (
    EventBus,
    InsufficientPlayersError,
    RuntimeConfig,
    build_forensic_artifact,
    draw_random,
    make_id,
    now_utc,
    persist_forensic_artifact,
    seeded_random,
)
from rally.draw import (
    RequestValidator,
    assign_teams,
    player_to_payload,
    session_to_payload,
    summarize_roster,
    team_to_payload,
)
from rally.export import ExportService
from rally.persistence import AnalyticsStore, open_repositories

logger = logging.getLogger(__name__)


class RuntimePaths:
    def __init__(self, root: Path) -> None:
        self.root = root

    @property
    def sqlite_path(self) -> Path:
        return self.root / "data" / "rally.sqlite3"

    @property
    def duckdb_path(self) -> Path:
        return self.root / "data" / "analytics.duckdb"

    @property
    def export_dir(self) -> Path:
        return self.root / "exports"

    @property
    def forensic_dir(self) -> Path:
        return self.root / "forensics"


class DrawRuntime:
    """Single entry point for roster, draw and history actions."""

    def __init__(self, config: RuntimeConfig) -> None:
        self.config = config
        self.paths = RuntimePaths(config.root)
        self.rand = seeded_random(config.seed) if config.seed is not None else draw_random()
        self.draw_rand = self.rand.spawn("draw")
        self.event_bus = EventBus()
        self.validator = RequestValidator()
        repos = open_repositories(config.storage, self.paths.sqlite_path)
        self.players = repos.players
        self.sessions = repos.sessions
        self.last_forensic_path: str | None = None
        logger.info("runtime ready (storage=%s, root=%s)", config.storage.value, config.root)

    def handle_action(self, request: ActionRequest) -> ActionResult:
        try:
            return self._handle_action_core(request)
        except ValidationError as exc:
            return ActionResult(
                request.request_id,
                False,
                "; ".join(i.message for i in exc.issues),
                {"issues": [asdict(i) for i in exc.issues]},
            )
        except InsufficientPlayersError as exc:
            return ActionResult(request.request_id, False, str(exc), exc.as_dict())
        except Exception as exc:
            logger.exception("action %s failed", request.action_type)
            artifact = build_forensic_artifact(
                engine_scope="runtime",
                error_code="UNHANDLED_RUNTIME_EXCEPTION",
                message=str(exc),
                state_snapshot={"storage": self.config.storage.value},
                context={"action_type": str(request.action_type), "payload": request.payload},
                identifiers={"request_id": request.request_id},
                causal_fragment=["runtime_dispatch"],
            )
            self.last_forensic_path = str(persist_forensic_artifact(artifact, self.paths.forensic_dir))
            return ActionResult(
                request.request_id,
                False,
                f"unexpected failure: {exc}",
                {"forensic_path": self.last_forensic_path},
            )

    def _handle_action_core(self, request: ActionRequest) -> ActionResult:
        action = self._normalize_action(request.action_type)
        payload = request.payload

        if action == ActionType.LIST_PLAYERS:
            players = [player_to_payload(p) for p in self.players.list_all()]
            return ActionResult(request.request_id, True, f"{len(players)} players", {"players": players})

        if action == ActionType.CREATE_PLAYER:
            new_player = self.validator.validate_player(payload)
            player = self.players.create(new_player.name, new_player.position)
            self._emit("roster", "player_created", player_to_payload(player))
            return ActionResult(request.request_id, True, f"added {player.name}", {"player": player_to_payload(player)})

        if action == ActionType.DELETE_PLAYER:
            player_id = self._require_id(payload, "player_id")
            self.players.delete_by_id(player_id)
            self._emit("roster", "player_deleted", {"id": player_id})
            return ActionResult(request.request_id, True, f"removed player {player_id}", {"success": True})

        if action == ActionType.GET_ROSTER_SUMMARY:
            summary = summarize_roster(self.players.list_all())
            return ActionResult(request.request_id, True, f"{summary.total} players registered", {"summary": asdict(summary)})

        if action == ActionType.DRAW_TEAMS:
            draw = self.validator.validate_draw(payload)
            teams = assign_teams(self.players.list_all(), draw.game_format, draw.team_count, self.draw_rand)
            self._emit("draw", "teams_drawn", {"game_format": draw.game_format.value, "team_count": draw.team_count})
            return ActionResult(
                request.request_id,
                True,
                f"drew {len(teams)} teams",
                {
                    "game_format": draw.game_format.value,
                    "team_count": draw.team_count,
                    "teams": [team_to_payload(t) for t in teams],
                },
            )

        if action == ActionType.LIST_SESSIONS:
            sessions = [session_to_payload(s) for s in self.sessions.list_all()]
            return ActionResult(request.request_id, True, f"{len(sessions)} saved draws", {"sessions": sessions})

        if action == ActionType.SAVE_SESSION:
            to_save = self.validator.validate_session(payload)
            session = self.sessions.create(to_save.game_format, to_save.team_count, to_save.teams)
            self._emit("history", "session_saved", {"id": session.session_id})
            return ActionResult(
                request.request_id,
                True,
                f"saved draw {session.session_id}",
                {"session": session_to_payload(session)},
            )

        if action == ActionType.DELETE_SESSION:
            session_id = self._require_id(payload, "session_id")
            self.sessions.delete_by_id(session_id)
            self._emit("history", "session_deleted", {"id": session_id})
            return ActionResult(request.request_id, True, f"removed draw {session_id}", {"success": True})

        if action == ActionType.EXPORT_HISTORY:
            outputs = self.export()
            return ActionResult(request.request_id, True, f"exported {len(outputs)} files", {"paths": [str(p) for p in outputs]})

        if action == ActionType.HISTORY_STATS:
            counts = self._refresh_analytics().appearance_counts()
            appearances = [{"id": pid, "name": name, "appearances": n} for pid, name, n in counts]
            return ActionResult(
                request.request_id, True, f"{len(appearances)} players in saved draws", {"appearances": appearances}
            )

        return ActionResult(request.request_id, False, f"unsupported action {action.value}")

    def export(self) -> list[Path]:
        self._refresh_analytics()
        return ExportService(self.paths.duckdb_path).export_history(self.paths.export_dir)

    def _refresh_analytics(self) -> AnalyticsStore:
        analytics = AnalyticsStore(self.paths.duckdb_path)
        analytics.refresh_from_sessions(self.sessions.list_all())
        return analytics

    def _emit(self, scope: str, event_type: str, details: dict[str, Any]) -> None:
        self.event_bus.publish(
            ActivityEvent(event_id=make_id("evt"), time=now_utc(), scope=scope, event_type=event_type, details=details)
        )

    @staticmethod
    def _require_id(payload: dict[str, Any], key: str) -> int:
        raw = payload.get(key)
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().isdigit():
            return int(raw)
        raise ValidationError(
            [ValidationIssue(code="INVALID_ID", severity="blocking", field_path=key, entity_id="request", message=f"{key} must be an integer")]
        )

    @staticmethod
    def _normalize_action(action_type: ActionType | str) -> ActionType:
        if isinstance(action_type, ActionType):
            return action_type
        try:
            return ActionType(str(action_type))
        except ValueError:
            raise ValidationError(
                [
                    ValidationIssue(
                        code="UNKNOWN_ACTION",
                        severity="blocking",
                        field_path="action_type",
                        entity_id="request",
                        message=f"unsupported action '{action_type}'",
                    )
                ]
            ) from None
