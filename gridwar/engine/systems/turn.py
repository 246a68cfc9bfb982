from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.enums import Faction
    from ...models.game import GameState

from ...events import TurnStarted, event_bus
from ..logging.logger import narrate
from . import capture, reinforcements


def begin_turn(game: GameState, faction: Faction) -> None:
    game.turn.active_faction = faction
    game.turn.clear_selection()
    narrate(game, f"Turn {game.turn.turn_number}: {faction.value.title()} phase")
    for u in game.roster(faction):
        u.reset_flags()
    income = capture.income_for(game, faction)
    if income:
        game.gold[faction] = game.gold.get(faction, 0) + income
        narrate(game, f"{faction.value.title()} collected {income} gold")
    spawned = reinforcements.spawn_due(game, faction)
    event_bus.emit(
        TurnStarted(
            session_id=game.id,
            turn=game.turn.turn_number,
            faction=faction,
            income=income,
            spawned=[u.id for u in spawned],
        )
    )


def end_turn(game: GameState) -> None:
    order = game.ruleset.factions
    idx = order.index(game.turn.active_faction)
    nxt = (idx + 1) % len(order)
    if nxt == 0:
        game.turn.turn_number += 1
    begin_turn(game, order[nxt])


def initialize_game(game: GameState) -> None:
    game.turn.turn_number = 1
    begin_turn(game, game.ruleset.factions[0])
