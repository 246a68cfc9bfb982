from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from ...models.game import GameState
    from ...models.units import Unit

from ..logging.logger import narrate
from . import capture


class AttackOutcome(BaseModel):
    damage: int
    defender_hp: int
    defender_died: bool
    captured_building_id: str | None = None


def terrain_defense(game: GameState, u: Unit) -> int:
    return game.board.tile(u.pos).defense_bonus


def compute_damage(game: GameState, atk: Unit, tgt: Unit) -> int:
    return max(1, atk.attack - (tgt.defense + terrain_defense(game, tgt)))


def preview_attack(game: GameState, atk: Unit, tgt: Unit):
    predicted = compute_damage(game, atk, tgt)
    hp_before = tgt.hp
    hp_after = max(0, hp_before - predicted)
    return predicted, hp_before, hp_after, hp_after == 0


def resolve_attack(game: GameState, atk: Unit, tgt: Unit) -> AttackOutcome:
    dmg = compute_damage(game, atk, tgt)
    tgt.apply_damage(dmg)
    atk.attacked = True
    narrate(game, f"{atk.name} attacked {tgt.name} for {dmg} damage")

    captured: str | None = None
    died = not tgt.alive
    if died:
        building = game.building_at(tgt.pos)
        remove_unit(game, tgt)
        narrate(game, f"{tgt.name} was defeated")
        if (
            game.ruleset.capture_on_kill
            and building is not None
            and building.owner == tgt.faction
        ):
            capture.transfer(game, building, atk.faction)
            captured = building.id
    return AttackOutcome(
        damage=dmg,
        defender_hp=tgt.hp,
        defender_died=died,
        captured_building_id=captured,
    )


def remove_unit(game: GameState, u: Unit) -> None:
    game.board.remove(u)
    game.units.pop(u.id, None)
    if game.turn.selected_unit_id == u.id:
        game.turn.clear_selection()
