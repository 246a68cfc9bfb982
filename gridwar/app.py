from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import TypeAdapter, ValidationError

from . import storage
from .engine.core import TBSEngine
from .logging_listeners import configure_logging, register_listeners
from .missions.demo import default_scenario
from .missions.loader import ScenarioError
from .models.api import (
    ActionLogEntry,
    ActionLogResponse,
    ApplyActionRequest,
    ApplyActionResponse,
    AttackAction,
    CaptureAction,
    ClickRequest,
    ClickResponse,
    CreateSessionRequest,
    EndTurnAction,
    EvaluateRequest,
    EvaluateResponse,
    HealAction,
    LegalActionsResponse,
    MoveAction,
    OverlayResponse,
    RecruitAction,
    SessionView,
    WaitAction,
)
from .models.enums import UnitType
from .models.scenario import Scenario
from .models.session import GameSession
from .models.units import UNIT_CATALOG, Unit

configure_logging()

app = FastAPI(title="Gridwar - Turn-Based Tactics")
engine = TBSEngine()
register_listeners()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _load(sid: str) -> GameSession:
    sess = storage.get(sid)
    if not sess:
        raise HTTPException(404, "session not found")
    return sess


def _view(sess: GameSession) -> SessionView:
    return SessionView(id=sess.id, game=sess.game)


@app.get("/health")
def health() -> dict[str, Any]:
    connected = storage.sessions.ping()
    return {"ok": connected, "storage": storage.sessions.name, "connected": connected}


@app.get("/info")
def defaults_info():
    """Schemas and examples for scenarios, units and every action kind."""
    demo = default_scenario()
    return {
        "models": {
            "unit": {
                "schema": Unit.model_json_schema(),
                "example": Unit().model_dump(mode="json"),
                "catalog": {k.value: v.model_dump(mode="json") for k, v in UNIT_CATALOG.items()},
            },
            "scenario": {
                "schema": Scenario.model_json_schema(),
                "example": demo.model_dump(mode="json"),
            },
        },
        "actions": {
            "move": MoveAction(unit_id="", to=(0, 0)).model_dump(mode="json"),
            "attack": AttackAction(attacker_id="", target_id="").model_dump(mode="json"),
            "capture": CaptureAction(unit_id="", building_id="").model_dump(mode="json"),
            "heal": HealAction(unit_id="", target_id="").model_dump(mode="json"),
            "wait": WaitAction(unit_id="").model_dump(mode="json"),
            "recruit": RecruitAction(building_id="", unit_type=UnitType.SOLDIER).model_dump(
                mode="json"
            ),
            "end_turn": EndTurnAction().model_dump(mode="json"),
        },
        "requests": {
            "create_session": {
                "schema": CreateSessionRequest.model_json_schema(),
                "example": {"scenario": demo.model_dump(mode="json")},
            }
        },
    }


@app.get("/sessions", response_model=list[SessionView])
def list_sessions():
    return [_view(s) for s in storage.list_all()]


@app.post("/sessions", response_model=SessionView)
def create_session(req: CreateSessionRequest):
    scenario = req.scenario or default_scenario()
    try:
        sess = engine.new_session(scenario)
    except (ScenarioError, ValidationError) as e:
        raise HTTPException(422, str(e)) from e
    storage.save(sess)
    return _view(sess)


@app.get("/sessions/{sid}", response_model=SessionView)
def get_session(sid: str):
    return _view(_load(sid))


@app.post("/sessions/{sid}/restart", response_model=SessionView)
def restart_session(sid: str):
    sess = engine.restart(_load(sid))
    storage.save(sess)
    return _view(sess)


@app.get("/sessions/{sid}/legal_actions", response_model=LegalActionsResponse)
def list_legal_actions(sid: str):
    return engine.list_legal_actions(_load(sid))


@app.post("/sessions/{sid}/evaluate", response_model=EvaluateResponse)
def evaluate_action(sid: str, req: EvaluateRequest):
    return engine.evaluate(_load(sid), req.action)


@app.post("/sessions/{sid}/action", response_model=ApplyActionResponse)
def apply_action(sid: str, req: ApplyActionRequest):
    sess = _load(sid)
    result, new_sess = engine.process_action(sess, req.action)
    if not result.legal or new_sess is None:
        raise HTTPException(400, result.explanation)
    storage.save(new_sess)
    return ApplyActionResponse(
        applied=True, explanation=result.explanation, session=_view(new_sess)
    )


@app.post("/sessions/{sid}/click", response_model=ClickResponse)
def click(sid: str, req: ClickRequest):
    result, new_sess = engine.click(_load(sid), req.x, req.y)
    # accepted clicks may only have changed the selection
    if result.accepted:
        storage.save(new_sess)
    return ClickResponse(
        accepted=result.accepted,
        explanation=result.explanation,
        action=result.action,
        session=_view(new_sess),
    )


@app.get("/sessions/{sid}/overlays/{unit_id}", response_model=OverlayResponse)
def overlays(sid: str, unit_id: str):
    ov = engine.overlays(_load(sid), unit_id)
    if ov is None:
        raise HTTPException(404, "unit not found")
    return ov


_entry_ta = TypeAdapter(ActionLogEntry)


@app.get("/sessions/{sid}/log", response_model=ActionLogResponse)
def get_action_log(sid: str, limit: int = Query(50, ge=1, le=1000)):
    _load(sid)
    return ActionLogResponse(
        entries=[_entry_ta.validate_json(s) for s in storage.logs.list(sid, limit)]
    )
