from __future__ import annotations

from pathlib import Path

from ..models.buildings import Building, make_building
from ..models.enums import BuildingKind, Faction
from ..models.game import GameState
from ..models.map import Board
from ..models.scenario import Scenario
from ..models.terrain import BUILDING_TERRAIN, LEGEND
from ..models.units import Unit, make_unit


class ScenarioError(ValueError):
    """Map/unit definitions that cannot produce a consistent board."""


def load_scenario(path: str | Path) -> Scenario:
    return Scenario.model_validate_json(Path(path).read_text(encoding="utf-8"))


def parse_terrain(rows: list[str]) -> Board:
    if not rows or not rows[0]:
        raise ScenarioError("terrain must have at least one row and one column")
    width = len(rows[0])
    grid = []
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ScenarioError(f"row {y} has {len(row)} tiles, expected {width}")
        try:
            grid.append([LEGEND[ch] for ch in row])
        except KeyError as e:
            raise ScenarioError(f"row {y}: unknown terrain symbol {e.args[0]!r}") from None
    return Board.from_terrain(grid)


def _check_ruleset(scenario: Scenario) -> None:
    rs = scenario.ruleset
    if len(rs.factions) < 2 or len(set(rs.factions)) != len(rs.factions):
        raise ScenarioError("ruleset needs at least two distinct factions")
    if Faction.NEUTRAL in rs.factions:
        raise ScenarioError("NEUTRAL cannot take turns")
    if rs.factions[0] != Faction.PLAYER:
        raise ScenarioError("PLAYER must take the first turn")
    for f in rs.ai_factions:
        if f not in rs.factions:
            raise ScenarioError(f"AI faction {f.value} does not take turns")
    for r in rs.reinforcements:
        if r.faction not in rs.factions:
            raise ScenarioError(f"reinforcements for unknown faction {r.faction.value}")


def _place_buildings(scenario: Scenario, board: Board) -> dict[str, Building]:
    explicit = {(p.x, p.y): p for p in scenario.buildings}
    for (x, y), p in explicit.items():
        if not board.in_bounds((x, y)):
            raise ScenarioError(f"building at {(x, y)} is off the board")
        if board.tile((x, y)).terrain not in BUILDING_TERRAIN:
            raise ScenarioError(f"building at {(x, y)} is not on building terrain")
    if len(explicit) != len(scenario.buildings):
        raise ScenarioError("two buildings share a tile")

    out: dict[str, Building] = {}
    for c in board.coords():
        kind = BUILDING_TERRAIN.get(board.tile(c).terrain)
        if kind is None:
            continue
        p = explicit.get(c)
        bid = (p.id if p and p.id else None) or f"{kind.value.lower()}.{c[0]}.{c[1]}"
        if bid in out:
            raise ScenarioError(f"duplicate building id {bid}")
        if p is not None and p.max_capture_hp is not None and p.max_capture_hp < 1:
            raise ScenarioError(f"building {bid}: capture hp must be positive")
        if p is not None and p.income is not None and p.income < 0:
            raise ScenarioError(f"building {bid}: negative income")
        out[bid] = make_building(
            kind,
            c,
            bid,
            p.owner if p else Faction.NEUTRAL,
            max_capture_hp=p.max_capture_hp if p else None,
            income=p.income if p else None,
        )
    return out


def _place_units(scenario: Scenario, board: Board) -> dict[str, Unit]:
    units: dict[str, Unit] = {}
    factions = scenario.ruleset.factions
    for i, p in enumerate(scenario.units):
        c = (p.x, p.y)
        uid = p.id or f"{p.faction.value.lower()}.{p.unit_type.value.lower()}.{i}"
        if uid in units:
            raise ScenarioError(f"duplicate unit id {uid}")
        if p.faction not in factions:
            raise ScenarioError(f"{uid}: faction {p.faction.value} does not take turns")
        if p.movement is not None and p.movement < 0:
            raise ScenarioError(f"{uid}: negative movement")
        if p.hp is not None and p.hp < 1:
            raise ScenarioError(f"{uid}: hp must be positive")
        if not board.in_bounds(c):
            raise ScenarioError(f"{uid}: {c} is off the board")
        tile = board.tile(c)
        if not tile.passable:
            raise ScenarioError(f"{uid}: {c} is impassable ({tile.terrain.value})")
        if tile.occupant_id is not None:
            raise ScenarioError(f"{uid}: {c} already holds {tile.occupant_id}")

        u = make_unit(p.unit_type, p.faction, c, uid)
        if p.movement is not None:
            u.movement = p.movement
        if p.hp is not None:
            u.max_hp = max(u.max_hp, p.hp)
            u.hp = p.hp
        board.place(u, c)
        units[uid] = u
    for f in factions:
        if not any(u.faction == f for u in units.values()):
            raise ScenarioError(f"faction {f.value} has no units")
    return units


def build_game(scenario: Scenario, game_id: str) -> GameState:
    """Validate a scenario and lay out a fresh board; raises ScenarioError when invalid."""
    _check_ruleset(scenario)
    board = parse_terrain(scenario.terrain)
    buildings = _place_buildings(scenario, board)
    units = _place_units(scenario, board)

    gold = {f: 0 for f in scenario.ruleset.factions}
    for f, amount in scenario.starting_gold.items():
        if amount < 0:
            raise ScenarioError(f"negative starting gold for {f.value}")
        gold[f] = amount

    home: dict[Faction, str] = {}
    for b in buildings.values():
        if b.kind == BuildingKind.CASTLE and b.owner != Faction.NEUTRAL:
            home.setdefault(b.owner, b.id)

    game = GameState(
        id=game_id,
        name=scenario.name,
        board=board,
        units=units,
        buildings=buildings,
        gold=gold,
        ruleset=scenario.ruleset.model_copy(deep=True),
        home_castles=home,
        unit_seq=len(units),
    )
    game.turn.active_faction = scenario.ruleset.factions[0]
    return game
