from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.game import GameState

from ...events import GameOver, event_bus
from ...models.enums import Faction, GameStatus
from ..logging.logger import narrate


def defeated_factions(game: GameState) -> set[Faction]:
    lost: set[Faction] = set()
    for f in game.ruleset.factions:
        if not game.roster(f):
            lost.add(f)
            continue
        if game.ruleset.hq_capture_ends_game:
            hq = game.buildings.get(game.home_castles.get(f, ""))
            if hq is not None and hq.owner != f:
                lost.add(f)
    return lost


def check(game: GameState) -> GameStatus:
    if game.status != GameStatus.IN_PROGRESS:
        return game.status

    lost = defeated_factions(game)
    if Faction.PLAYER in lost:
        return GameStatus.DEFEAT
    opponents = [f for f in game.ruleset.factions if f != Faction.PLAYER]
    if opponents and all(f in lost for f in opponents):
        return GameStatus.VICTORY

    survive = game.ruleset.survive_turns
    if survive is not None and game.turn.turn_number > survive:
        return GameStatus.VICTORY

    return GameStatus.IN_PROGRESS


def settle(game: GameState) -> GameStatus:
    """Run the end-condition check and enter a terminal state if one is met."""
    status = check(game)
    if status != game.status:
        game.status = status
        game.turn.clear_selection()
        narrate(game, f"Game over: {status.value.lower()}")
        event_bus.emit(GameOver(session_id=game.id, turn=game.turn.turn_number, status=status))
    return status
