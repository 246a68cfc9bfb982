from enum import Enum

Coord = tuple[int, int]  # (x, y)


class Faction(str, Enum):
    PLAYER = "PLAYER"
    ENEMY = "ENEMY"
    NEUTRAL = "NEUTRAL"


class TerrainKind(str, Enum):
    PLAIN = "PLAIN"
    FOREST = "FOREST"
    MOUNTAIN = "MOUNTAIN"
    WATER = "WATER"
    WALL = "WALL"
    BASE = "BASE"
    CASTLE = "CASTLE"
    VILLAGE = "VILLAGE"


class BuildingKind(str, Enum):
    BASE = "BASE"
    CASTLE = "CASTLE"
    VILLAGE = "VILLAGE"


class UnitType(str, Enum):
    SOLDIER = "SOLDIER"
    ARCHER = "ARCHER"
    KNIGHT = "KNIGHT"
    NINJA = "NINJA"
    MEDIC = "MEDIC"


class Phase(str, Enum):
    """
    Where the human input cursor is inside a turn:
    - SELECT_SOURCE: nothing selected, a click picks one of the active units
    - SELECT_ACTION: a unit is selected and may still move
    - AWAIT_TARGET: the selected unit has moved and may still attack/capture/heal
    """

    SELECT_SOURCE = "SELECT_SOURCE"
    SELECT_ACTION = "SELECT_ACTION"
    AWAIT_TARGET = "AWAIT_TARGET"


class GameStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    VICTORY = "VICTORY"
    DEFEAT = "DEFEAT"


class ActionLogResult(str, Enum):
    APPLIED = "APPLIED"
    ILLEGAL = "ILLEGAL"
    ERROR = "ERROR"
