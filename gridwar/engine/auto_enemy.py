from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.api import EndTurnAction
from ..models.enums import GameStatus
from .ai import plan_and_execute_turn

if TYPE_CHECKING:  # typing-only imports
    from ..models.session import GameSession


def enemy_autoplay(engine, sess: GameSession, max_turns: int = 200) -> GameSession:
    """Play whole turns for AI-controlled factions until a human faction is up.

    Contract:
    - Inputs: engine (has process_action(sess, action, autoplay=...)); session; max_turns
    - Behavior: each AI faction plans and executes its turn through the same
      validated actions a player uses, then ends it; stops when the game is over,
      a human faction is active, or max_turns AI turns have been played.
    - Output: the updated session.
    """
    cur = sess
    played = 0
    while played < max_turns:
        g = cur.game
        if g.status != GameStatus.IN_PROGRESS:
            break
        if g.turn.active_faction not in g.ruleset.ai_factions:
            break
        cur = plan_and_execute_turn(engine, cur, g.turn.active_faction)
        if cur.game.status != GameStatus.IN_PROGRESS:
            break
        _, nxt = engine.process_action(cur, EndTurnAction(), autoplay=False)
        cur = nxt if nxt is not None else cur
        played += 1
    return cur
