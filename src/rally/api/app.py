from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from rally import __version__
from rally.contracts import ActionRequest, ActionResult, ActionType
from rally.core import RuntimeConfig, load_runtime_config, make_id
from rally.service import DrawRuntime

from .models import DrawIn, ErrorModel, PlayerIn, PlayerModel, RosterSummaryModel, SessionIn

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {400: {"model": ErrorModel}}


def _failure(result: ActionResult) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": result.message, "details": result.data or None})


def build_router(runtime: DrawRuntime) -> APIRouter:
    router = APIRouter()

    def dispatch(action: ActionType, payload: dict[str, Any]) -> ActionResult:
        return runtime.handle_action(ActionRequest(make_id("req"), action, payload))

    @router.get("/players", response_model=List[PlayerModel])
    def list_players():
        return dispatch(ActionType.LIST_PLAYERS, {}).data["players"]

    @router.post("/players", response_model=PlayerModel, responses=ERROR_RESPONSES)
    def create_player(body: PlayerIn):
        result = dispatch(ActionType.CREATE_PLAYER, body.model_dump())
        if not result.success:
            return _failure(result)
        return result.data["player"]

    @router.get("/players/summary", response_model=RosterSummaryModel)
    def roster_summary():
        return dispatch(ActionType.GET_ROSTER_SUMMARY, {}).data["summary"]

    @router.delete("/players/{player_id}", responses=ERROR_RESPONSES)
    def delete_player(player_id: int):
        result = dispatch(ActionType.DELETE_PLAYER, {"player_id": player_id})
        if not result.success:
            return _failure(result)
        return {"success": True}

    @router.post("/sort-teams", responses=ERROR_RESPONSES)
    def sort_teams(body: DrawIn):
        result = dispatch(ActionType.DRAW_TEAMS, body.model_dump())
        if not result.success:
            return _failure(result)
        return {"teams": result.data["teams"]}

    @router.get("/game-sessions")
    def list_sessions():
        return dispatch(ActionType.LIST_SESSIONS, {}).data["sessions"]

    @router.post("/game-sessions", responses=ERROR_RESPONSES)
    def save_session(body: SessionIn):
        result = dispatch(ActionType.SAVE_SESSION, body.model_dump())
        if not result.success:
            return _failure(result)
        return result.data["session"]

    @router.delete("/game-sessions/{session_id}", responses=ERROR_RESPONSES)
    def delete_session(session_id: int):
        result = dispatch(ActionType.DELETE_SESSION, {"session_id": session_id})
        if not result.success:
            return _failure(result)
        return {"success": True}

    return router


def create_app(*, runtime: DrawRuntime | None = None, config: RuntimeConfig | None = None) -> FastAPI:
    """Construct the FastAPI app around one runtime shared by every request."""
    runtime = runtime or DrawRuntime(config or load_runtime_config())
    app = FastAPI(title="Rally Draw API", version=__version__)
    app.state.runtime = runtime
    app.include_router(build_router(runtime), prefix="/api")
    return app
