from pydantic import BaseModel, Field

from .enums import BuildingKind, Coord, Faction


class BuildingDefaults(BaseModel):
    max_capture_hp: int
    income: int


BUILDING_DEFAULTS: dict[BuildingKind, BuildingDefaults] = {
    BuildingKind.BASE: BuildingDefaults(max_capture_hp=10, income=100),
    BuildingKind.CASTLE: BuildingDefaults(max_capture_hp=20, income=200),
    BuildingKind.VILLAGE: BuildingDefaults(max_capture_hp=10, income=50),
}

# Buildings that can produce units
RECRUIT_SITES = (BuildingKind.BASE, BuildingKind.CASTLE)


class Building(BaseModel):
    id: str
    kind: BuildingKind
    pos: Coord
    owner: Faction = Faction.NEUTRAL
    capture_hp: int = Field(10, ge=0)
    max_capture_hp: int = Field(10, ge=1)
    income: int = Field(0, ge=0)
    # Faction whose capture is in progress; another faction starting over resets progress
    capturing_faction: Faction | None = None

    @property
    def contested(self) -> bool:
        return self.capture_hp < self.max_capture_hp


def make_building(
    kind: BuildingKind,
    pos: Coord,
    building_id: str,
    owner: Faction = Faction.NEUTRAL,
    *,
    max_capture_hp: int | None = None,
    income: int | None = None,
) -> Building:
    d = BUILDING_DEFAULTS[kind]
    cap = max_capture_hp if max_capture_hp is not None else d.max_capture_hp
    return Building(
        id=building_id,
        kind=kind,
        pos=pos,
        owner=owner,
        capture_hp=cap,
        max_capture_hp=cap,
        income=income if income is not None else d.income,
    )
