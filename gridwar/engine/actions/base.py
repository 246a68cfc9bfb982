from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ...models.api import Action
    from ...models.game import GameState
    from ...models.session import GameSession
    from ...models.units import Unit


class ActionHandler(Protocol):
    action_type: type

    def evaluate(self, game: GameState, action: Action) -> tuple[bool, str]: ...

    def apply(self, sess: GameSession, action: Action) -> GameSession: ...


Registry = dict[type, ActionHandler]


def active_unit(game: GameState, unit_id: str) -> tuple[Unit | None, str]:
    """Look up a unit that belongs to the side to move; reason is set when it cannot."""
    u = game.units.get(unit_id)
    if u is None:
        return None, "unknown unit"
    if u.faction != game.turn.active_faction:
        return None, "not this unit's turn"
    return u, "ok"
