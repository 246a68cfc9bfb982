from ..models.enums import Faction, UnitType
from ..models.game import Reinforcement, Ruleset
from ..models.scenario import BuildingPlacement, Scenario, UnitPlacement


def default_scenario() -> Scenario:
    # Player holds the south-west castle, the enemy the north-east one.
    # A broken river runs through the middle with two villages up for grabs.
    terrain = [
        "....f..m.C",
        ".f....ff..",
        "..V.~~...B",
        "...~~..f..",
        "..f..~~...",
        "B...~~.V..",
        "..ff....f.",
        "C..m......",
    ]
    P, E = Faction.PLAYER, Faction.ENEMY
    units = [
        UnitPlacement(unit_type=UnitType.KNIGHT, faction=P, x=1, y=7, id="p.knight"),
        UnitPlacement(unit_type=UnitType.SOLDIER, faction=P, x=1, y=6, id="p.soldier"),
        UnitPlacement(unit_type=UnitType.ARCHER, faction=P, x=2, y=7, id="p.archer"),
        UnitPlacement(unit_type=UnitType.MEDIC, faction=P, x=0, y=6, id="p.medic"),
        UnitPlacement(unit_type=UnitType.NINJA, faction=P, x=1, y=5, id="p.ninja"),
        UnitPlacement(unit_type=UnitType.SOLDIER, faction=E, x=8, y=0, id="e.soldier.1"),
        UnitPlacement(unit_type=UnitType.SOLDIER, faction=E, x=8, y=1, id="e.soldier.2"),
        UnitPlacement(unit_type=UnitType.ARCHER, faction=E, x=9, y=1, id="e.archer"),
        UnitPlacement(unit_type=UnitType.KNIGHT, faction=E, x=8, y=2, id="e.knight"),
        UnitPlacement(unit_type=UnitType.NINJA, faction=E, x=7, y=0, id="e.ninja"),
    ]
    buildings = [
        BuildingPlacement(x=0, y=7, owner=P, id="castle.player"),
        BuildingPlacement(x=0, y=5, owner=P, id="base.player"),
        BuildingPlacement(x=9, y=0, owner=E, id="castle.enemy"),
        BuildingPlacement(x=9, y=2, owner=E, id="base.enemy"),
        BuildingPlacement(x=2, y=2, id="village.west"),
        BuildingPlacement(x=7, y=5, id="village.east"),
    ]
    return Scenario(
        name="River Crossing",
        terrain=terrain,
        units=units,
        buildings=buildings,
        starting_gold={P: 100, E: 100},
        ruleset=Ruleset(
            reinforcements=[
                Reinforcement(faction=E, unit_type=UnitType.SOLDIER, every_turns=4)
            ]
        ),
    )
