from __future__ import annotations

from ...models.api import AttackAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event
from ..systems import combat, pathfinding
from .base import ActionHandler, active_unit


class AttackHandler(ActionHandler):
    action_type = AttackAction

    def evaluate(self, game, action: AttackAction):
        a, why = active_unit(game, action.attacker_id)
        if not a:
            return False, why
        t = game.units.get(action.target_id)
        if not t:
            return False, "unknown target"
        if a.attacked:
            return False, "attacker already acted"
        if t.faction == a.faction:
            return False, "cannot attack a friendly unit"
        if not pathfinding.in_attack_range(a, t.pos):
            return False, "out of range"
        dmg, hp_before, hp_after, kills = combat.preview_attack(game, a, t)
        return True, (
            f"ok (predicted_damage={dmg}, target_hp_before={hp_before}, "
            f"target_hp_after={hp_after}, would_defeat={'yes' if kills else 'no'})"
        )

    def apply(self, sess: GameSession, action: AttackAction):
        g = sess.game
        a = g.units[action.attacker_id]
        t = g.units[action.target_id]
        outcome = combat.resolve_attack(g, a, t)
        log_event(
            sess,
            action,
            ActionLogResult.APPLIED,
            outcome=outcome.model_dump(mode="json"),
        )
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)
