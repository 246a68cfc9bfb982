from __future__ import annotations

from ...models.api import HealAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event, narrate
from ..systems.pathfinding import manhattan
from .base import ActionHandler, active_unit

HEAL_REACH = 1


class HealHandler(ActionHandler):
    action_type = HealAction

    def evaluate(self, game, action: HealAction):
        u, why = active_unit(game, action.unit_id)
        if not u:
            return False, why
        t = game.units.get(action.target_id)
        if not t:
            return False, "unknown target"
        if u.heal_power <= 0:
            return False, "unit cannot heal"
        if u.attacked:
            return False, "unit already acted"
        if t.id == u.id or t.faction != u.faction:
            return False, "target not an ally"
        if manhattan(u.pos, t.pos) > HEAL_REACH:
            return False, "target out of reach"
        if t.hp >= t.max_hp:
            return False, "target not wounded"
        return True, f"ok (target_hp_after={min(t.max_hp, t.hp + u.heal_power)})"

    def apply(self, sess: GameSession, action: HealAction):
        g = sess.game
        u = g.units[action.unit_id]
        t = g.units[action.target_id]
        restored = t.restore(u.heal_power)
        u.exhaust()
        narrate(g, f"{u.name} healed {t.name} for {restored}")
        log_event(
            sess,
            action,
            ActionLogResult.APPLIED,
            outcome={"restored": restored, "target_hp": t.hp},
        )
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)


def healable_allies(game, u) -> list:
    if u.heal_power <= 0 or u.attacked:
        return []
    return [
        a
        for a in game.roster(u.faction)
        if a.id != u.id and a.hp < a.max_hp and manhattan(a.pos, u.pos) <= HEAL_REACH
    ]
