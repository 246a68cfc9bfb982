from __future__ import annotations

from ...models.api import WaitAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event
from .base import ActionHandler, active_unit


class WaitHandler(ActionHandler):
    action_type = WaitAction

    def evaluate(self, game, action: WaitAction):
        u, why = active_unit(game, action.unit_id)
        if not u:
            return False, why
        if not u.can_act:
            return False, "unit already acted"
        return True, "ok"

    def apply(self, sess: GameSession, action: WaitAction):
        g = sess.game
        g.units[action.unit_id].exhaust()
        log_event(sess, action, ActionLogResult.APPLIED)
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)
