from __future__ import annotations

from ...models.api import RecruitAction
from ...models.buildings import RECRUIT_SITES
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ...models.units import UNIT_CATALOG, make_unit
from ..logging.logger import log_event, narrate
from .base import ActionHandler


class RecruitHandler(ActionHandler):
    action_type = RecruitAction

    def evaluate(self, game, action: RecruitAction):
        b = game.buildings.get(action.building_id)
        if not b:
            return False, "unknown building"
        faction = game.turn.active_faction
        if b.owner != faction:
            return False, "building not owned"
        if b.kind not in RECRUIT_SITES:
            return False, "building cannot recruit"
        if game.board.tile(b.pos).occupant_id is not None:
            return False, "building occupied"
        cost = UNIT_CATALOG[action.unit_type].cost
        gold = game.gold.get(faction, 0)
        if gold < cost:
            return False, f"not enough gold ({gold}/{cost})"
        return True, f"ok (cost={cost}, gold_after={gold - cost})"

    def apply(self, sess: GameSession, action: RecruitAction):
        g = sess.game
        b = g.buildings[action.building_id]
        faction = g.turn.active_faction
        u = make_unit(action.unit_type, faction, b.pos, g.next_unit_id(faction, action.unit_type))
        g.gold[faction] = g.gold.get(faction, 0) - u.cost
        g.units[u.id] = u
        g.board.place(u, b.pos)
        # Fresh recruits wait for the next turn start
        u.exhaust()
        narrate(g, f"{faction.value.title()} recruited a {u.name} at {b.pos}")
        log_event(sess, action, ActionLogResult.APPLIED, outcome={"unit_id": u.id})
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)
