from __future__ import annotations

from ...models.api import MoveAction
from ...models.enums import ActionLogResult
from ...models.session import GameSession
from ..logging.logger import log_event, narrate
from ..systems import pathfinding
from .base import ActionHandler, active_unit


class MoveHandler(ActionHandler):
    action_type = MoveAction

    def evaluate(self, game, action: MoveAction):
        u, why = active_unit(game, action.unit_id)
        if not u:
            return False, why
        if u.moved:
            return False, "unit already moved"
        if action.to == u.pos:
            return False, "already at destination"
        if not game.board.in_bounds(action.to):
            return False, "destination out of bounds"
        tile = game.board.tile(action.to)
        if not tile.passable:
            return False, "destination not passable"
        if tile.occupant_id is not None:
            return False, "destination occupied"
        return (
            (True, "ok")
            if pathfinding.can_reach(game, u, action.to)
            else (False, "cannot reach")
        )

    def apply(self, sess: GameSession, action: MoveAction):
        g = sess.game
        u = g.units[action.unit_id]
        src = u.pos
        g.board.relocate(u, action.to)
        u.moved = True
        narrate(g, f"{u.name} moved from {src} to {u.pos}")
        log_event(sess, action, ActionLogResult.APPLIED)
        return GameSession(id=sess.id, game=g, scenario=sess.scenario)
