from __future__ import annotations

from ...models.api import EndTurnAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event
from ..systems.turn import end_turn
from .base import ActionHandler


class EndTurnHandler(ActionHandler):
    action_type = EndTurnAction

    def evaluate(self, game, action: EndTurnAction):
        return True, "ok"

    def apply(self, sess: GameSession, action: EndTurnAction):
        log_event(sess, action, ActionLogResult.APPLIED)
        end_turn(sess.game)
        return GameSession(id=sess.id, game=sess.game, scenario=sess.scenario)
