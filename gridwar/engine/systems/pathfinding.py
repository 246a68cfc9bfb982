from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ...models.game import GameState
    from ...models.map import Board
    from ...models.units import Unit

Coord = tuple[int, int]


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def ring(center: Coord, r: int) -> Iterator[Coord]:
    """Tiles at exactly Manhattan distance r, row by row."""
    cx, cy = center
    if r == 0:
        yield center
        return
    for dy in range(-r, r + 1):
        span = r - abs(dy)
        y = cy + dy
        if span == 0:
            yield (cx, y)
        else:
            yield (cx - span, y)
            yield (cx + span, y)


def movement_costs(board: Board, origin: Coord, points: int) -> dict[Coord, int]:
    """Cheapest cost to every tile enterable from origin within `points`.

    Dijkstra over the four orthogonal neighbours: a tile is entered only if it
    is passable and unoccupied, and its terrain cost keeps the path within
    budget. Occupied tiles block passing through as well as stopping.
    """
    best: dict[Coord, int] = {origin: 0}
    heap: list[tuple[int, Coord]] = [(0, origin)]
    while heap:
        cost, cur = heapq.heappop(heap)
        if cost > best[cur]:
            continue
        for nb in board.neighbors(cur):
            tile = board.tile(nb)
            if not tile.passable or tile.occupant_id is not None:
                continue
            nc = cost + tile.move_cost
            if nc > points:
                continue
            if nc < best.get(nb, points + 1):
                best[nb] = nc
                heapq.heappush(heap, (nc, nb))
    return best


def reachable_tiles(game: GameState, u: Unit) -> set[Coord]:
    # Movement is spent as a whole; it comes back at the next turn start
    if u.moved:
        return set()
    return set(movement_costs(game.board, u.pos, max(0, u.movement)))


def can_reach(game: GameState, u: Unit, dst: Coord) -> bool:
    return dst in reachable_tiles(game, u)


def tiles_in_range(game: GameState, origin: Coord, ranges: list[int]) -> list[Coord]:
    out: list[Coord] = []
    for r in ranges:
        out.extend(c for c in ring(origin, r) if game.board.in_bounds(c))
    return out


def attackable_tiles(game: GameState, u: Unit) -> set[Coord]:
    if u.attacked:
        return set()
    out: set[Coord] = set()
    for c in tiles_in_range(game, u.pos, u.attack_ranges):
        other = game.unit_at(c)
        if other is not None and other.faction == u.faction:
            continue
        out.add(c)
    return out


def in_attack_range(u: Unit, target_pos: Coord, origin: Coord | None = None) -> bool:
    return manhattan(origin or u.pos, target_pos) in u.attack_ranges


def attack_targets(game: GameState, u: Unit) -> list[Unit]:
    """Enemy units the unit can strike from where it stands, in roster order."""
    if u.attacked:
        return []
    return [
        other
        for other in game.enemies_of(u.faction)
        if in_attack_range(u, other.pos)
    ]


def nearest_free_tile(game: GameState, center: Coord) -> Coord | None:
    """Closest passable, unoccupied tile to `center` (breadth-first, center first)."""
    board = game.board
    seen: set[Coord] = {center}
    frontier: list[Coord] = [center]
    while frontier:
        cur = frontier.pop(0)
        tile = board.tile(cur)
        if tile.passable and tile.occupant_id is None:
            return cur
        for nb in board.neighbors(cur):
            if nb not in seen:
                seen.add(nb)
                frontier.append(nb)
    return None
