from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.api import (
    Action,
    AttackAction,
    CaptureAction,
    ClickResult,
    HealAction,
    MoveAction,
    WaitAction,
)
from ..models.enums import GameStatus, Phase
from .actions.heal import healable_allies
from .systems import capture, pathfinding

if TYPE_CHECKING:
    from ..models.game import GameState
    from ..models.session import GameSession
    from ..models.units import Unit


def _reject(sess: GameSession, why: str) -> tuple[ClickResult, GameSession]:
    return ClickResult(accepted=False, explanation=why), sess


def _select(g: GameState, u: Unit) -> None:
    g.turn.selected_unit_id = u.id
    g.turn.phase = Phase.AWAIT_TARGET if u.moved else Phase.SELECT_ACTION


def _has_follow_up(g: GameState, u: Unit) -> bool:
    return bool(
        pathfinding.attack_targets(g, u)
        or capture.capturable_buildings(g, u)
        or healable_allies(g, u)
    )


def _action_for_tile(g: GameState, u: Unit, c: tuple[int, int]) -> Action | None:
    """Map a clicked tile to what the selected unit would do there."""
    other = g.unit_at(c)
    if other is not None and other.id != u.id:
        if other.faction != u.faction:
            if not u.attacked and pathfinding.in_attack_range(u, other.pos):
                return AttackAction(attacker_id=u.id, target_id=other.id)
            return None
        if any(a.id == other.id for a in healable_allies(g, u)):
            return HealAction(unit_id=u.id, target_id=other.id)
        return None

    b = g.building_at(c)
    if b is not None and capture.can_capture(g, u, b)[0]:
        return CaptureAction(unit_id=u.id, building_id=b.id)

    if other is None and g.turn.phase == Phase.SELECT_ACTION:
        if c in pathfinding.reachable_tiles(g, u):
            return MoveAction(unit_id=u.id, to=c)
    return None


def interpret_click(engine, sess: GameSession, x: int, y: int) -> tuple[ClickResult, GameSession]:
    """Interpret a tile click against the current input phase.

    Rejected clicks never mutate the session. Accepted clicks either change the
    selection or run exactly one action through engine.process_action.
    """
    g = sess.game
    if g.status != GameStatus.IN_PROGRESS:
        return _reject(sess, "game is over")
    if g.turn.active_faction in g.ruleset.ai_factions:
        return _reject(sess, "not your turn")
    c = (x, y)
    if not g.board.in_bounds(c):
        return _reject(sess, "out of bounds")

    clicked = g.unit_at(c)
    faction = g.turn.active_faction

    if g.turn.phase == Phase.SELECT_SOURCE or g.turn.selected_unit_id not in g.units:
        if clicked is None or clicked.faction != faction:
            return _reject(sess, "no unit of yours there")
        if not clicked.can_act:
            return _reject(sess, "unit already acted")
        _select(g, clicked)
        return ClickResult(accepted=True, explanation=f"selected {clicked.id}"), sess

    sel = g.units[g.turn.selected_unit_id]

    if clicked is not None and clicked.id == sel.id:
        act = _action_for_tile(g, sel, c)
        if act is None:
            if g.turn.phase == Phase.AWAIT_TARGET:
                act = WaitAction(unit_id=sel.id)
            else:
                g.turn.clear_selection()
                return ClickResult(accepted=True, explanation="deselected"), sess
    else:
        act = _action_for_tile(g, sel, c)
        if act is None:
            if (
                clicked is not None
                and clicked.faction == faction
                and clicked.can_act
                and g.turn.phase == Phase.SELECT_ACTION
            ):
                _select(g, clicked)
                return ClickResult(accepted=True, explanation=f"selected {clicked.id}"), sess
            return _reject(sess, "invalid target")

    ev, new_sess = engine.process_action(sess, act)
    if not ev.legal:
        return _reject(sess, ev.explanation)

    g = new_sess.game
    u = g.units.get(sel.id)
    if (
        isinstance(act, MoveAction)
        and u is not None
        and g.status == GameStatus.IN_PROGRESS
        and _has_follow_up(g, u)
    ):
        g.turn.selected_unit_id = u.id
        g.turn.phase = Phase.AWAIT_TARGET
    else:
        g.turn.clear_selection()
    return ClickResult(accepted=True, explanation=ev.explanation, action=act), new_sess
