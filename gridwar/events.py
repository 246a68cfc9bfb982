from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from gridwar.models.api import Action
    from gridwar.models.enums import ActionLogResult, Faction, GameStatus


@dataclass
class GameEvent:
    session_id: str
    turn: int


@dataclass
class ActionEvent(GameEvent):
    """One evaluated action, legal or not, as it should appear in the action log."""

    actor_unit_id: str | None
    action: Action
    result: ActionLogResult
    message: str | None = None
    outcome: dict | None = None


@dataclass
class TurnStarted(GameEvent):
    faction: Faction
    income: int = 0
    spawned: list[str] = field(default_factory=list)


@dataclass
class GameOver(GameEvent):
    status: GameStatus


T = TypeVar("T", bound=GameEvent)
Handler = Callable[[Any], None]


class EventBus:
    """Synchronous publish/subscribe keyed by event class.

    Handlers subscribed to a base class also receive its subclasses, so a
    GameEvent subscriber sees everything. Exceptions raised by a handler reach
    the emitter.
    """

    def __init__(self) -> None:
        self._subs: defaultdict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        self._subs[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        handlers = self._subs.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        for et in type(event).__mro__:
            for h in list(self._subs.get(et, ())):
                h(event)


event_bus = EventBus()
