from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Coord, Faction, UnitType


class UnitTemplate(BaseModel):
    name: str
    max_hp: int = Field(ge=1)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    movement: int = Field(ge=0)
    attack_ranges: list[int]
    heal_power: int = 0
    can_capture: bool = True
    cost: int = 100


UNIT_CATALOG: dict[UnitType, UnitTemplate] = {
    UnitType.SOLDIER: UnitTemplate(
        name="Soldier", max_hp=10, attack=5, defense=2, movement=3, attack_ranges=[1]
    ),
    UnitType.ARCHER: UnitTemplate(
        name="Archer",
        max_hp=8,
        attack=4,
        defense=1,
        movement=3,
        attack_ranges=[2, 3],
        cost=150,
    ),
    UnitType.KNIGHT: UnitTemplate(
        name="Knight",
        max_hp=12,
        attack=6,
        defense=3,
        movement=4,
        attack_ranges=[1],
        cost=250,
    ),
    # Strikes adjacent or with a throw at distance 3, never at 2
    UnitType.NINJA: UnitTemplate(
        name="Ninja",
        max_hp=8,
        attack=5,
        defense=1,
        movement=4,
        attack_ranges=[1, 3],
        cost=200,
    ),
    UnitType.MEDIC: UnitTemplate(
        name="Medic",
        max_hp=8,
        attack=1,
        defense=1,
        movement=3,
        attack_ranges=[1],
        heal_power=4,
        can_capture=False,
        cost=150,
    ),
}


class Unit(BaseModel):
    id: str = "unit.example"
    unit_type: UnitType = UnitType.SOLDIER
    name: str = "Soldier"
    faction: Faction = Faction.PLAYER
    pos: Coord = (0, 0)
    max_hp: int = Field(10, ge=1)
    hp: int = 10
    attack: int = Field(5, ge=0)
    defense: int = Field(2, ge=0)
    movement: int = Field(3, ge=0)
    attack_ranges: list[int] = Field(default_factory=lambda: [1])
    heal_power: int = Field(0, ge=0)
    can_capture: bool = True
    cost: int = 100
    moved: bool = False
    attacked: bool = False  # any action (attack, capture, heal, wait) sets this

    @field_validator("attack_ranges")
    @classmethod
    def _distinct_positive(cls, v: list[int]) -> list[int]:
        if not v or any(d < 1 for d in v):
            raise ValueError("attack_ranges must be non-empty positive distances")
        return sorted(set(v))

    @model_validator(mode="after")
    def _clamp_hp(self):
        self.hp = max(0, min(self.hp, self.max_hp))
        return self

    @property
    def can_act(self) -> bool:
        return not (self.moved and self.attacked)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def apply_damage(self, amount: int) -> int:
        self.hp = max(0, self.hp - amount)
        return self.hp

    def restore(self, amount: int) -> int:
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before

    def reset_flags(self) -> None:
        self.moved = False
        self.attacked = False

    def exhaust(self) -> None:
        self.moved = True
        self.attacked = True


def make_unit(
    unit_type: UnitType, faction: Faction, pos: Coord, unit_id: str
) -> Unit:
    tpl = UNIT_CATALOG[unit_type]
    return Unit(
        id=unit_id,
        unit_type=unit_type,
        name=tpl.name,
        faction=faction,
        pos=pos,
        max_hp=tpl.max_hp,
        hp=tpl.max_hp,
        attack=tpl.attack,
        defense=tpl.defense,
        movement=tpl.movement,
        attack_ranges=list(tpl.attack_ranges),
        heal_power=tpl.heal_power,
        can_capture=tpl.can_capture,
        cost=tpl.cost,
    )
