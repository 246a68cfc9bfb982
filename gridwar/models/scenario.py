from pydantic import BaseModel, Field

from .enums import Faction, UnitType
from .game import Ruleset


class UnitPlacement(BaseModel):
    unit_type: UnitType
    faction: Faction
    x: int
    y: int
    id: str | None = None
    # Optional overrides of the catalogue stat block
    hp: int | None = None
    movement: int | None = None


class BuildingPlacement(BaseModel):
    x: int
    y: int
    owner: Faction = Faction.NEUTRAL
    id: str | None = None
    max_capture_hp: int | None = None
    income: int | None = None


class Scenario(BaseModel):
    """Map/unit definitions a game is built from.

    `terrain` holds one string per row using the legend in models.terrain.LEGEND.
    Building tiles without an explicit placement become neutral buildings.
    """

    name: str = "Skirmish"
    terrain: list[str]
    units: list[UnitPlacement]
    buildings: list[BuildingPlacement] = Field(default_factory=list)
    starting_gold: dict[Faction, int] = Field(default_factory=dict)
    ruleset: Ruleset = Field(default_factory=Ruleset)
