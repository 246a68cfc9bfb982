from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from ..models.scenario import Scenario
    from .actions.base import Registry

from ..missions.loader import build_game
from ..models.api import (
    Action,
    AttackAction,
    CaptureAction,
    ClickResult,
    EndTurnAction,
    EvaluateResponse,
    HealAction,
    LegalAction,
    LegalActionsResponse,
    MoveAction,
    OverlayResponse,
    RecruitAction,
    WaitAction,
)
from ..models.buildings import RECRUIT_SITES
from ..models.enums import GameStatus
from ..models.session import GameSession
from ..models.units import UNIT_CATALOG
from .actions.attack import AttackHandler
from .actions.capture import CaptureHandler
from .actions.end_turn import EndTurnHandler
from .actions.heal import HealHandler, healable_allies
from .actions.move import MoveHandler
from .actions.recruit import RecruitHandler
from .actions.wait import WaitHandler
from .auto_enemy import enemy_autoplay
from .input import interpret_click
from .logging.logger import log_error, log_illegal
from .systems import capture, pathfinding, turn, victory

default_handlers: Registry = {
    MoveHandler.action_type: MoveHandler(),
    AttackHandler.action_type: AttackHandler(),
    CaptureHandler.action_type: CaptureHandler(),
    HealHandler.action_type: HealHandler(),
    WaitHandler.action_type: WaitHandler(),
    RecruitHandler.action_type: RecruitHandler(),
    EndTurnHandler.action_type: EndTurnHandler(),
}


class TBSEngine:
    def __init__(self, handlers: Registry | None = None):
        self.handlers: Registry = handlers or default_handlers

    # ---------- Session lifecycle ----------

    def new_session(self, scenario: Scenario, sid: str | None = None) -> GameSession:
        sid = sid or str(uuid4())
        game = build_game(scenario, game_id=sid)
        turn.initialize_game(game)
        victory.settle(game)
        sess = GameSession(id=sid, game=game, scenario=scenario)
        return enemy_autoplay(self, sess)

    def restart(self, sess: GameSession) -> GameSession:
        return self.new_session(sess.scenario, sid=sess.id)

    # ---------- Actions ----------

    def evaluate(self, sess: GameSession, action: Action) -> EvaluateResponse:
        if sess.game.status != GameStatus.IN_PROGRESS:
            return EvaluateResponse(legal=False, explanation="game is over")
        h = self.handlers.get(type(action))
        if not h:
            return EvaluateResponse(legal=False, explanation="unknown action")
        ok, why = h.evaluate(sess.game, action)
        return EvaluateResponse(legal=ok, explanation=why)

    def process_action(
        self, sess: GameSession, action: Action, *, autoplay: bool = True
    ):
        """Validate and apply one action; illegal actions leave the session untouched.

        After an END_TURN the AI-controlled factions play out their turns before
        control returns, so the caller always gets a session that is either over
        or waiting on a human faction.
        """
        ev = self.evaluate(sess, action)
        if not ev.legal:
            log_illegal(sess, action, ev.explanation)
            return ev, None
        try:
            new_sess = self.handlers[type(action)].apply(sess, action)
        except Exception as e:
            log_error(sess, action, e)
            raise
        victory.settle(new_sess.game)
        if autoplay and isinstance(action, EndTurnAction):
            new_sess = enemy_autoplay(self, new_sess)
        return ev, new_sess

    def apply(self, sess: GameSession, action: Action) -> GameSession:
        ev, new_sess = self.process_action(sess, action)
        return new_sess if new_sess is not None else sess

    def click(self, sess: GameSession, x: int, y: int) -> tuple[ClickResult, GameSession]:
        return interpret_click(self, sess, x, y)

    # ---------- Read-only queries ----------

    def list_legal_actions(self, sess: GameSession) -> LegalActionsResponse:
        g = sess.game
        out: list[LegalAction] = []
        if g.status != GameStatus.IN_PROGRESS:
            return LegalActionsResponse(actions=out)

        def offer(act: Action) -> None:
            ok, why = self.handlers[type(act)].evaluate(g, act)
            if ok:
                out.append(LegalAction(action=act, explanation=why))

        for u in g.roster(g.turn.active_faction):
            for dst in sorted(pathfinding.reachable_tiles(g, u), key=lambda c: (c[1], c[0])):
                if dst != u.pos:
                    offer(MoveAction(unit_id=u.id, to=dst))
            for t in pathfinding.attack_targets(g, u):
                offer(AttackAction(attacker_id=u.id, target_id=t.id))
            for b in capture.capturable_buildings(g, u):
                offer(CaptureAction(unit_id=u.id, building_id=b.id))
            for ally in healable_allies(g, u):
                offer(HealAction(unit_id=u.id, target_id=ally.id))
            if u.can_act:
                offer(WaitAction(unit_id=u.id))

        for b in g.buildings.values():
            if b.owner == g.turn.active_faction and b.kind in RECRUIT_SITES:
                for ut in UNIT_CATALOG:
                    offer(RecruitAction(building_id=b.id, unit_type=ut))

        offer(EndTurnAction())
        return LegalActionsResponse(actions=out)

    def overlays(self, sess: GameSession, unit_id: str) -> OverlayResponse | None:
        g = sess.game
        u = g.units.get(unit_id)
        if u is None:
            return None
        return OverlayResponse(
            unit_id=u.id,
            reachable=sorted(pathfinding.reachable_tiles(g, u), key=lambda c: (c[1], c[0])),
            attackable=sorted(pathfinding.attackable_tiles(g, u), key=lambda c: (c[1], c[0])),
            capturable=[b.id for b in capture.capturable_buildings(g, u)],
            healable=[a.id for a in healable_allies(g, u)],
        )

    def check_victory_conditions(self, sess: GameSession) -> GameStatus:
        return victory.check(sess.game)

