import pytest

from gridwar.missions.demo import default_scenario
from gridwar.missions.loader import ScenarioError, build_game, load_scenario, parse_terrain
from gridwar.models.enums import BuildingKind, Faction, TerrainKind, UnitType
from gridwar.models.game import Ruleset
from tests.utils.builders import E, P, building, scenario, unit


def _units():
    return [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 2, 0, "e")]


def test_legend_is_parsed_row_major():
    board = parse_terrain([".fm~", "#BCV"])
    assert (board.width, board.height) == (4, 2)
    assert board.tile((1, 0)).terrain == TerrainKind.FOREST
    assert board.tile((3, 0)).terrain == TerrainKind.WATER
    assert board.tile((0, 1)).terrain == TerrainKind.WALL
    assert board.tile((3, 1)).terrain == TerrainKind.VILLAGE
    assert not board.tile((3, 0)).passable


def test_building_tiles_become_buildings():
    game = build_game(
        scenario(["B.C", "..V"], _units(), [building(2, 0, E, "hq")]),
        "g",
    )
    kinds = {b.id: (b.kind, b.owner) for b in game.buildings.values()}
    assert kinds == {
        "base.0.0": (BuildingKind.BASE, Faction.NEUTRAL),
        "hq": (BuildingKind.CASTLE, Faction.ENEMY),
        "village.2.1": (BuildingKind.VILLAGE, Faction.NEUTRAL),
    }
    assert game.home_castles == {Faction.ENEMY: "hq"}
    assert game.buildings["hq"].max_capture_hp == 20


@pytest.mark.parametrize(
    "terrain,units,buildings,rules,msg",
    [
        (["...", ".."], None, (), {}, "row 1 has 2 tiles"),
        (["..x"], None, (), {}, "unknown terrain symbol 'x'"),
        (["..."], [unit(UnitType.SOLDIER, P, 5, 0), unit(UnitType.SOLDIER, E, 2, 0)], (), {}, "off the board"),
        (["~.."], None, (), {}, "impassable"),
        (["..."], [unit(UnitType.SOLDIER, P, 1, 0, "a"), unit(UnitType.SOLDIER, E, 1, 0, "b")], (), {}, "already holds a"),
        (["..."], [unit(UnitType.SOLDIER, P, 0, 0, movement=-1), unit(UnitType.SOLDIER, E, 2, 0)], (), {}, "negative movement"),
        (["..."], [unit(UnitType.SOLDIER, P, 0, 0), unit(UnitType.SOLDIER, P, 2, 0)], (), {}, "faction ENEMY has no units"),
        (["..."], None, [building(1, 0)], {}, "not on building terrain"),
        (["..."], None, (), {"factions": [Faction.PLAYER]}, "at least two distinct factions"),
        (["..."], None, (), {"factions": [Faction.PLAYER, Faction.NEUTRAL]}, "NEUTRAL cannot take turns"),
        (["..."], None, (), {"ai_factions": [Faction.NEUTRAL]}, "AI faction NEUTRAL does not take turns"),
        (["..."], None, (), {"factions": [Faction.ENEMY, Faction.PLAYER]}, "PLAYER must take the first turn"),
    ],
)
def test_invalid_scenarios_are_rejected(terrain, units, buildings, rules, msg):
    sc = scenario(terrain, units if units is not None else _units(), buildings, **rules)
    with pytest.raises(ScenarioError) as exc:
        build_game(sc, "g")
    assert msg in str(exc.value)


def test_unit_overrides_apply():
    sc = scenario(
        ["...."],
        [unit(UnitType.ARCHER, P, 0, 0, "a", hp=3, movement=5), unit(UnitType.SOLDIER, E, 3, 0, "e")],
    )
    game = build_game(sc, "g")
    a = game.units["a"]
    assert (a.hp, a.max_hp, a.movement, a.attack_ranges) == (3, 8, 5, [2, 3])
    assert game.board.occupant_id((0, 0)) == "a"


def test_default_ids_and_turn_order():
    sc = scenario(
        ["...."],
        [unit(UnitType.SOLDIER, P, 0, 0), unit(UnitType.SOLDIER, E, 3, 0)],
    )
    game = build_game(sc, "g")
    assert list(game.units) == ["player.soldier.0", "enemy.soldier.1"]
    assert game.turn.active_faction == Faction.PLAYER
    assert game.turn.turn_number == 1


def test_scenario_roundtrips_through_a_file(tmp_path):
    path = tmp_path / "demo.json"
    demo = default_scenario()
    path.write_text(demo.model_dump_json(), encoding="utf-8")
    loaded = load_scenario(path)
    assert loaded == demo
    game = build_game(loaded, "g")
    assert game.name == "River Crossing"
    assert game.gold == {Faction.PLAYER: 100, Faction.ENEMY: 100}


def test_ruleset_bounds_are_validated():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        Ruleset(capture_reach=2)
    with pytest.raises(ValidationError):
        Ruleset(capture_increment=0)
