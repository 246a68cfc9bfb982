from __future__ import annotations

import logging
import os

from . import storage
from .events import ActionEvent, GameOver, TurnStarted, event_bus
from .models.api import ActionLogEntry
from .models.enums import ActionLogResult

logger = logging.getLogger("gridwar.actions")
game_logger = logging.getLogger("gridwar.games")

_registered = False


def _on_action_event(ev: ActionEvent) -> None:
    entry = ActionLogEntry(
        session_id=ev.session_id,
        turn=ev.turn,
        actor_unit_id=ev.actor_unit_id,
        action=ev.action,
        result=ev.result,
        message=ev.message,
        outcome=ev.outcome,
    )
    storage.logs.append(ev.session_id, entry.model_dump_json())


def _on_action_logline(ev: ActionEvent) -> None:
    level = logging.INFO
    if ev.result == ActionLogResult.ILLEGAL:
        level = logging.DEBUG
    elif ev.result == ActionLogResult.ERROR:
        level = logging.ERROR
    logger.log(
        level,
        "[%s] turn=%s %s %s by=%s %s",
        ev.session_id,
        ev.turn,
        ev.result.value,
        ev.action.kind,
        ev.actor_unit_id or "-",
        ev.message or "",
    )


def _on_turn_started(ev: TurnStarted) -> None:
    game_logger.info(
        "[%s] turn=%s %s to move income=%s spawned=%s",
        ev.session_id,
        ev.turn,
        ev.faction.value,
        ev.income,
        ",".join(ev.spawned) or "-",
    )


def _on_game_over(ev: GameOver) -> None:
    game_logger.info("[%s] turn=%s game over: %s", ev.session_id, ev.turn, ev.status.value)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def register_listeners() -> None:
    global _registered
    if _registered:
        return
    event_bus.subscribe(ActionEvent, _on_action_event)
    event_bus.subscribe(ActionEvent, _on_action_logline)
    event_bus.subscribe(TurnStarted, _on_turn_started)
    event_bus.subscribe(GameOver, _on_game_over)
    _registered = True
