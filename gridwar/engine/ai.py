from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..models.api import (
    Action,
    AttackAction,
    CaptureAction,
    HealAction,
    MoveAction,
)
from ..models.enums import GameStatus
from .actions.heal import HEAL_REACH, healable_allies
from .systems import capture, pathfinding
from .systems.pathfinding import manhattan

if TYPE_CHECKING:
    from ..models.enums import Coord, Faction
    from ..models.game import GameState
    from ..models.session import GameSession
    from ..models.units import Unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """What a unit is heading for this turn: an enemy, a building, or (healers) a wounded ally."""

    pos: Coord
    unit_id: str | None = None
    building_id: str | None = None
    ally_id: str | None = None


def choose_target(game: GameState, u: Unit) -> Target | None:
    """Nearest objective by Manhattan distance; ties go to the first one found.

    Search order: wounded allies (healers only), enemy units in roster order,
    then buildings not owned by the unit's faction (capturing units only).
    """
    candidates: list[Target] = []
    if u.heal_power > 0:
        candidates.extend(
            Target(pos=a.pos, ally_id=a.id)
            for a in game.roster(u.faction)
            if a.id != u.id and a.hp < a.max_hp
        )
    candidates.extend(
        Target(pos=e.pos, unit_id=e.id) for e in game.enemies_of(u.faction)
    )
    if u.can_capture:
        candidates.extend(
            Target(pos=b.pos, building_id=b.id)
            for b in game.buildings.values()
            if b.owner != u.faction
        )

    best: Target | None = None
    best_d = 0
    for t in candidates:
        d = manhattan(u.pos, t.pos)
        if best is None or d < best_d:
            best, best_d = t, d
    return best


def _strikes_from(game: GameState, u: Unit, t: Target, c: Coord) -> bool:
    d = manhattan(c, t.pos)
    if t.unit_id:
        return d in u.attack_ranges
    if t.building_id:
        return d <= game.ruleset.capture_reach
    return d <= HEAL_REACH


def strike_action(game: GameState, u: Unit, t: Target) -> Action | None:
    """The action that resolves `t` from where `u` stands, if any."""
    if u.attacked:
        return None
    if t.unit_id and t.unit_id in game.units:
        if pathfinding.in_attack_range(u, game.units[t.unit_id].pos):
            return AttackAction(attacker_id=u.id, target_id=t.unit_id)
    if t.building_id:
        b = game.buildings[t.building_id]
        if capture.can_capture(game, u, b)[0]:
            return CaptureAction(unit_id=u.id, building_id=b.id)
    if t.ally_id and any(a.id == t.ally_id for a in healable_allies(game, u)):
        return HealAction(unit_id=u.id, target_id=t.ally_id)
    return None


def choose_destination(game: GameState, u: Unit, t: Target) -> Coord | None:
    """Reachable tile to stop on: striking positions first, then closest, then row-major."""
    tiles = pathfinding.reachable_tiles(game, u)
    if not tiles:
        return None
    return min(
        tiles,
        key=lambda c: (
            0 if _strikes_from(game, u, t, c) else 1,
            manhattan(c, t.pos),
            c[1],
            c[0],
        ),
    )


def most_wounded(allies: list[Unit]) -> Unit | None:
    best: Unit | None = None
    for a in allies:
        if best is None or a.max_hp - a.hp > best.max_hp - best.hp:
            best = a
    return best


def opportunistic_action(game: GameState, u: Unit) -> Action | None:
    # After moving, hit whatever is in range when the chosen target is not
    ally = most_wounded(healable_allies(game, u))
    if ally is not None:
        return HealAction(unit_id=u.id, target_id=ally.id)
    foes = pathfinding.attack_targets(game, u)
    if foes:
        return AttackAction(attacker_id=u.id, target_id=foes[0].id)
    return None


def _run(engine, sess: GameSession, action: Action) -> tuple[bool, GameSession]:
    ev, new_sess = engine.process_action(sess, action, autoplay=False)
    if not ev.legal:
        logger.warning("AI proposed an illegal action %s: %s", action, ev.explanation)
        return False, sess
    return True, new_sess


def act_with_unit(engine, sess: GameSession, unit_id: str) -> GameSession:
    g = sess.game
    u = g.units.get(unit_id)
    if u is None or not u.can_act:
        return sess

    ally = most_wounded(healable_allies(g, u))
    if ally is not None:
        return _run(engine, sess, HealAction(unit_id=u.id, target_id=ally.id))[1]

    target = choose_target(g, u)
    if target is None:
        return sess

    act = strike_action(g, u, target)
    if act is not None:
        return _run(engine, sess, act)[1]

    dst = choose_destination(g, u, target)
    if dst is not None and dst != u.pos:
        ok, sess = _run(engine, sess, MoveAction(unit_id=u.id, to=dst))
        if not ok:
            return sess
    g = sess.game
    u = g.units[unit_id]
    act = strike_action(g, u, target) or opportunistic_action(g, u)
    if act is not None:
        sess = _run(engine, sess, act)[1]
    return sess


def plan_and_execute_turn(engine, sess: GameSession, faction: Faction) -> GameSession:
    """Greedy turn: every unit of `faction`, in roster order, heals > attacks > captures > advances."""
    cur = sess
    for uid in [u.id for u in cur.game.roster(faction)]:
        if cur.game.status != GameStatus.IN_PROGRESS:
            break
        cur = act_with_unit(engine, cur, uid)
    return cur
