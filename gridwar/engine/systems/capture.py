from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from ...models.buildings import Building
    from ...models.game import GameState
    from ...models.units import Unit

from ...models.enums import BuildingKind, Faction
from ..logging.logger import narrate
from .pathfinding import manhattan


class CaptureOutcome(BaseModel):
    progressed: bool
    captured: bool
    capture_hp: int


def can_capture(game: GameState, u: Unit, b: Building) -> tuple[bool, str]:
    if not u.can_capture:
        return False, "unit cannot capture"
    if u.attacked:
        return False, "unit already acted"
    if b.owner == u.faction:
        return False, "building already owned"
    if manhattan(u.pos, b.pos) > game.ruleset.capture_reach:
        return False, "building out of reach"
    return True, "ok"


def capturable_buildings(game: GameState, u: Unit) -> list[Building]:
    return [b for b in game.buildings.values() if can_capture(game, u, b)[0]]


def attempt_capture(game: GameState, u: Unit, b: Building) -> CaptureOutcome:
    if b.capturing_faction is not None and b.capturing_faction != u.faction:
        b.capture_hp = b.max_capture_hp
    b.capturing_faction = u.faction
    b.capture_hp = max(0, b.capture_hp - game.ruleset.capture_increment)
    u.exhaust()

    if b.capture_hp > 0:
        narrate(
            game,
            f"{u.name} is capturing the {b.kind.value.lower()} "
            f"({b.capture_hp}/{b.max_capture_hp})",
        )
        return CaptureOutcome(progressed=True, captured=False, capture_hp=b.capture_hp)

    transfer(game, b, u.faction)
    return CaptureOutcome(progressed=True, captured=True, capture_hp=b.capture_hp)


def transfer(game: GameState, b: Building, faction: Faction) -> None:
    """Hand the building to `faction`, resetting progress and paying the village bonus."""
    b.owner = faction
    b.capture_hp = b.max_capture_hp
    b.capturing_faction = None
    narrate(game, f"{faction.value.title()} captured the {b.kind.value.lower()} at {b.pos}")
    if b.kind == BuildingKind.VILLAGE and game.ruleset.village_capture_bonus:
        bonus = game.ruleset.village_capture_bonus
        game.gold[faction] = game.gold.get(faction, 0) + bonus
        narrate(game, f"{faction.value.title()} looted {bonus} gold")


def income_for(game: GameState, faction: Faction) -> int:
    return sum(b.income for b in game.buildings.values() if b.owner == faction)
