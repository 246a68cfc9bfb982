from pydantic import BaseModel

from .game import GameState
from .scenario import Scenario


class GameSession(BaseModel):
    id: str
    game: GameState
    # Kept so a finished game can be restarted from scratch
    scenario: Scenario
