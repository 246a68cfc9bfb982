from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.game import GameState
    from ...models.session import GameSession

from ...events import ActionEvent, event_bus
from ...models.api import (
    Action,
    AttackAction,
    CaptureAction,
    HealAction,
    MoveAction,
    WaitAction,
)
from ...models.enums import ActionLogResult

logger = logging.getLogger("gridwar.engine")


def actor_id(action: Action) -> str | None:
    if isinstance(action, AttackAction):
        return action.attacker_id
    if isinstance(action, (MoveAction, CaptureAction, HealAction, WaitAction)):
        return action.unit_id
    return None


def narrate(game: GameState, text: str) -> None:
    """Append a human-readable line to the game's rolling event log."""
    game.log.append(text)
    overflow = len(game.log) - game.ruleset.log_limit
    if overflow > 0:
        del game.log[:overflow]
    logger.debug("[%s] %s", game.id, text)


def log_event(
    sess: GameSession,
    action: Action,
    result: ActionLogResult,
    message: str | None = None,
    outcome: dict | None = None,
) -> None:
    event_bus.emit(
        ActionEvent(
            session_id=sess.id,
            turn=sess.game.turn.turn_number,
            actor_unit_id=actor_id(action),
            action=action,
            result=result,
            message=message,
            outcome=outcome,
        )
    )


def log_illegal(sess: GameSession, action: Action, explanation: str) -> None:
    log_event(sess, action, ActionLogResult.ILLEGAL, explanation)


def log_error(sess: GameSession, action: Action, error: Exception) -> None:
    log_event(sess, action, ActionLogResult.ERROR, str(error))
