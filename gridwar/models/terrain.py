from pydantic import BaseModel

from .enums import BuildingKind, TerrainKind


class TerrainStats(BaseModel):
    move_cost: int | None  # None = impassable
    defense_bonus: int = 0

    @property
    def passable(self) -> bool:
        return self.move_cost is not None


TERRAIN: dict[TerrainKind, TerrainStats] = {
    TerrainKind.PLAIN: TerrainStats(move_cost=1, defense_bonus=0),
    TerrainKind.FOREST: TerrainStats(move_cost=2, defense_bonus=1),
    TerrainKind.MOUNTAIN: TerrainStats(move_cost=3, defense_bonus=2),
    TerrainKind.WATER: TerrainStats(move_cost=None),
    TerrainKind.WALL: TerrainStats(move_cost=None),
    TerrainKind.BASE: TerrainStats(move_cost=1, defense_bonus=2),
    TerrainKind.CASTLE: TerrainStats(move_cost=1, defense_bonus=3),
    TerrainKind.VILLAGE: TerrainStats(move_cost=1, defense_bonus=1),
}

# Map legend used by scenario files
LEGEND: dict[str, TerrainKind] = {
    ".": TerrainKind.PLAIN,
    "f": TerrainKind.FOREST,
    "m": TerrainKind.MOUNTAIN,
    "~": TerrainKind.WATER,
    "#": TerrainKind.WALL,
    "B": TerrainKind.BASE,
    "C": TerrainKind.CASTLE,
    "V": TerrainKind.VILLAGE,
}

BUILDING_TERRAIN: dict[TerrainKind, BuildingKind] = {
    TerrainKind.BASE: BuildingKind.BASE,
    TerrainKind.CASTLE: BuildingKind.CASTLE,
    TerrainKind.VILLAGE: BuildingKind.VILLAGE,
}
