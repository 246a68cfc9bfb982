from __future__ import annotations

from ...models.api import CaptureAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event
from ..systems import capture
from .base import ActionHandler, active_unit


class CaptureHandler(ActionHandler):
    action_type = CaptureAction

    def evaluate(self, game, action: CaptureAction):
        u, why = active_unit(game, action.unit_id)
        if not u:
            return False, why
        b = game.buildings.get(action.building_id)
        if not b:
            return False, "unknown building"
        ok, why = capture.can_capture(game, u, b)
        if not ok:
            return False, why
        left = max(0, b.capture_hp - game.ruleset.capture_increment)
        if b.capturing_faction not in (None, u.faction):
            left = max(0, b.max_capture_hp - game.ruleset.capture_increment)
        return True, f"ok (capture_hp_after={left}, would_capture={'yes' if left == 0 else 'no'})"

    def apply(self, sess: GameSession, action: CaptureAction):
        g = sess.game
        u = g.units[action.unit_id]
        b = g.buildings[action.building_id]
        outcome = capture.attempt_capture(g, u, b)
        log_event(
            sess,
            action,
            ActionLogResult.APPLIED,
            outcome=outcome.model_dump(mode="json"),
        )
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)
