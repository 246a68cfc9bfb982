from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .enums import Coord, TerrainKind
from .terrain import TERRAIN

if TYPE_CHECKING:
    from .units import Unit


class BoardError(RuntimeError):
    """Raised when a board mutation would break occupancy consistency."""


class Tile(BaseModel):
    terrain: TerrainKind = TerrainKind.PLAIN
    occupant_id: str | None = None

    @property
    def passable(self) -> bool:
        return TERRAIN[self.terrain].passable

    @property
    def move_cost(self) -> int | None:
        return TERRAIN[self.terrain].move_cost

    @property
    def defense_bonus(self) -> int:
        return TERRAIN[self.terrain].defense_bonus


class Board(BaseModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    tiles: list[list[Tile]]  # tiles[y][x]

    @classmethod
    def from_terrain(cls, rows: list[list[TerrainKind]]) -> Board:
        return cls(
            width=len(rows[0]),
            height=len(rows),
            tiles=[[Tile(terrain=t) for t in row] for row in rows],
        )

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, c: Coord) -> Tile:
        x, y = c
        return self.tiles[y][x]

    def neighbors(self, c: Coord) -> list[Coord]:
        x, y = c
        cand = [(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)]
        return [nb for nb in cand if self.in_bounds(nb)]

    def occupant_id(self, c: Coord) -> str | None:
        if not self.in_bounds(c):
            return None
        return self.tile(c).occupant_id

    def coords(self) -> list[Coord]:
        return [(x, y) for y in range(self.height) for x in range(self.width)]

    # ---------- Occupancy mutation (the only writers of occupant_id / unit.pos) ----------

    def place(self, unit: Unit, pos: Coord) -> None:
        if not self.in_bounds(pos):
            raise BoardError(f"{unit.id}: {pos} is off the board")
        tile = self.tile(pos)
        if not tile.passable:
            raise BoardError(f"{unit.id}: {pos} is impassable ({tile.terrain.value})")
        if tile.occupant_id is not None and tile.occupant_id != unit.id:
            raise BoardError(f"{unit.id}: {pos} already holds {tile.occupant_id}")
        tile.occupant_id = unit.id
        unit.pos = pos

    def relocate(self, unit: Unit, to: Coord) -> None:
        src = unit.pos
        if self.tile(src).occupant_id != unit.id:
            raise BoardError(f"{unit.id} is not on {src}")
        if to == src:
            return
        self.place(unit, to)
        self.tile(src).occupant_id = None

    def remove(self, unit: Unit) -> None:
        tile = self.tile(unit.pos)
        if tile.occupant_id != unit.id:
            raise BoardError(f"{unit.id} is not on {unit.pos}")
        tile.occupant_id = None
