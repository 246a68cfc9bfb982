from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from .enums import ActionLogResult, Coord, UnitType
from .game import GameState
from .scenario import Scenario

# ----- Actions (discriminated union on `kind`) -----


class MoveAction(BaseModel):
    kind: Literal["MOVE"] = "MOVE"
    unit_id: str
    to: tuple[int, int]


class AttackAction(BaseModel):
    kind: Literal["ATTACK"] = "ATTACK"
    attacker_id: str
    target_id: str


class CaptureAction(BaseModel):
    kind: Literal["CAPTURE"] = "CAPTURE"
    unit_id: str
    building_id: str


class HealAction(BaseModel):
    kind: Literal["HEAL"] = "HEAL"
    unit_id: str
    target_id: str


class WaitAction(BaseModel):
    kind: Literal["WAIT"] = "WAIT"
    unit_id: str


class RecruitAction(BaseModel):
    kind: Literal["RECRUIT"] = "RECRUIT"
    building_id: str
    unit_type: UnitType


class EndTurnAction(BaseModel):
    kind: Literal["END_TURN"] = "END_TURN"


Action = Annotated[
    MoveAction
    | AttackAction
    | CaptureAction
    | HealAction
    | WaitAction
    | RecruitAction
    | EndTurnAction,
    Field(discriminator="kind"),
]


# ----- API IO -----
class CreateSessionRequest(BaseModel):
    scenario: Scenario | None = None


class SessionView(BaseModel):
    id: str
    game: GameState


class EvaluateRequest(BaseModel):
    action: Action


class EvaluateResponse(BaseModel):
    legal: bool
    explanation: str


class ApplyActionRequest(BaseModel):
    action: Action


class ApplyActionResponse(BaseModel):
    applied: bool
    explanation: str
    session: SessionView


class ClickRequest(BaseModel):
    x: int
    y: int


class ClickResult(BaseModel):
    accepted: bool
    explanation: str
    action: Action | None = None


class ClickResponse(BaseModel):
    accepted: bool
    explanation: str
    action: Action | None = None
    session: SessionView


# ----- Bulk legal listing / overlays -----


class LegalAction(BaseModel):
    action: Action
    explanation: str  # already evaluated and legal


class LegalActionsResponse(BaseModel):
    actions: list[LegalAction]


class OverlayResponse(BaseModel):
    unit_id: str
    reachable: list[Coord] = Field(default_factory=list)
    attackable: list[Coord] = Field(default_factory=list)
    capturable: list[str] = Field(default_factory=list)  # building ids
    healable: list[str] = Field(default_factory=list)  # unit ids


# ----- Action Log -----


class ActionLogEntry(BaseModel):
    ts: datetime = Field(default_factory=datetime.now)
    session_id: str
    turn: int
    actor_unit_id: str | None = None
    action: Action
    result: ActionLogResult = ActionLogResult.APPLIED
    message: str | None = None
    outcome: dict[str, Any] | None = None


class ActionLogResponse(BaseModel):
    entries: list[ActionLogEntry]
