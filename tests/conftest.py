# Shared fixtures for engine-level tests. Integration tests that need a live
# server have their own conftest under tests/integration.

import pytest

from gridwar.engine.core import TBSEngine
from gridwar.events import ActionEvent, event_bus
from gridwar.models.session import GameSession
from tests.utils.builders import scenario


@pytest.fixture()
def engine() -> TBSEngine:
    return TBSEngine()


@pytest.fixture()
def make_session(engine: TBSEngine):
    def _make(terrain, units, buildings=(), *, gold=None, **rules) -> GameSession:
        sc = scenario(terrain, units, buildings, gold=gold, **rules)
        return engine.new_session(sc, sid="test")

    return _make


@pytest.fixture()
def events():
    """Collect every ActionEvent emitted while the test runs."""
    seen: list[ActionEvent] = []
    event_bus.subscribe(ActionEvent, seen.append)
    try:
        yield seen
    finally:
        event_bus.unsubscribe(ActionEvent, seen.append)
