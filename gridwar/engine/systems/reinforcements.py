from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.buildings import Building
    from ...models.enums import Faction
    from ...models.game import GameState
    from ...models.units import Unit

from ...models.buildings import RECRUIT_SITES
from ...models.units import make_unit
from ..logging.logger import narrate
from .pathfinding import nearest_free_tile


def home_structure(game: GameState, faction: Faction) -> Building | None:
    hq = game.buildings.get(game.home_castles.get(faction, ""))
    if hq is not None and hq.owner == faction:
        return hq
    for b in game.buildings.values():
        if b.owner == faction and b.kind in RECRUIT_SITES:
            return b
    return None


def spawn_due(game: GameState, faction: Faction) -> list[Unit]:
    spawned: list[Unit] = []
    turn = game.turn.turn_number
    for r in game.ruleset.reinforcements:
        if r.faction != faction or turn % r.every_turns != 0:
            continue
        home = home_structure(game, faction)
        if home is None:
            continue
        pos = nearest_free_tile(game, home.pos)
        if pos is None:
            continue
        u = make_unit(r.unit_type, faction, pos, game.next_unit_id(faction, r.unit_type))
        game.units[u.id] = u
        game.board.place(u, pos)
        narrate(game, f"{faction.value.title()} reinforcements: {u.name} arrived at {pos}")
        spawned.append(u)
    return spawned
