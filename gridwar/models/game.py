from pydantic import BaseModel, Field

from .buildings import Building
from .enums import Coord, Faction, GameStatus, Phase, UnitType
from .map import Board
from .units import Unit


class Reinforcement(BaseModel):
    faction: Faction = Faction.ENEMY
    unit_type: UnitType = UnitType.SOLDIER
    every_turns: int = Field(3, ge=1)


class Ruleset(BaseModel):
    factions: list[Faction] = Field(
        default_factory=lambda: [Faction.PLAYER, Faction.ENEMY]
    )
    ai_factions: list[Faction] = Field(default_factory=lambda: [Faction.ENEMY])
    capture_increment: int = Field(2, ge=1)
    # Manhattan distance from which a building can be captured (0 = standing on it)
    capture_reach: int = Field(1, ge=0, le=1)
    capture_on_kill: bool = False
    village_capture_bonus: int = Field(100, ge=0)
    hq_capture_ends_game: bool = True
    survive_turns: int | None = Field(None, ge=1)
    reinforcements: list[Reinforcement] = Field(default_factory=list)
    log_limit: int = Field(50, ge=1)


class TurnState(BaseModel):
    active_faction: Faction = Faction.PLAYER
    turn_number: int = 1
    phase: Phase = Phase.SELECT_SOURCE
    selected_unit_id: str | None = None

    def clear_selection(self) -> None:
        self.phase = Phase.SELECT_SOURCE
        self.selected_unit_id = None


class GameState(BaseModel):
    id: str
    name: str
    board: Board
    units: dict[str, Unit]  # roster order = insertion order
    buildings: dict[str, Building] = Field(default_factory=dict)
    turn: TurnState = Field(default_factory=TurnState)
    gold: dict[Faction, int] = Field(default_factory=dict)
    status: GameStatus = GameStatus.IN_PROGRESS
    ruleset: Ruleset = Field(default_factory=Ruleset)
    home_castles: dict[Faction, str] = Field(default_factory=dict)
    log: list[str] = Field(default_factory=list)
    unit_seq: int = 0

    def unit_at(self, c: Coord) -> Unit | None:
        uid = self.board.occupant_id(c)
        return self.units.get(uid) if uid else None

    def building_at(self, c: Coord) -> Building | None:
        for b in self.buildings.values():
            if b.pos == c:
                return b
        return None

    def roster(self, faction: Faction) -> list[Unit]:
        return [u for u in self.units.values() if u.faction == faction]

    def enemies_of(self, faction: Faction) -> list[Unit]:
        return [u for u in self.units.values() if u.faction != faction]

    def next_unit_id(self, faction: Faction, unit_type: UnitType) -> str:
        while True:
            self.unit_seq += 1
            uid = f"{faction.value.lower()}.{unit_type.value.lower()}.{self.unit_seq}"
            if uid not in self.units:
                return uid
