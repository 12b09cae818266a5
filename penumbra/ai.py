"""Enemy decision making and breadth-first pathfinding inside a room."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .entity import Enemy, EnemyType, Player

Point = tuple[int, int]

_MAX_PATH_LENGTH = 50
_DELTAS: tuple[Point, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class _Walkable(Protocol):
    def is_walkable(self, x: int, y: int) -> bool: ...


class EnemyActionKind(Enum):
    """The kinds of action an enemy can take."""

    MOVE = "move"
    ATTACK = "attack"
    REGENERATE = "regenerate"
    SPLIT = "split"
    GROW = "grow"
    WAIT = "wait"


@dataclass(frozen=True)
class EnemyAction:
    """An enemy action: a move offset, or an amount to regenerate or grow by."""

    kind: EnemyActionKind
    dx: int = 0
    dy: int = 0
    amount: int = 0


def manhattan_distance(a: Point, b: Point) -> int:
    """Manhattan distance between two points."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def get_adjacent_deltas() -> list[Point]:
    """Offsets of the four cardinal neighbours: up, down, left, right."""
    return list(_DELTAS)


def get_adjacent_positions(pos: Point) -> list[Point]:
    """The four cardinal neighbours of a position."""
    x, y = pos
    return [(x + dx, y + dy) for dx, dy in _DELTAS]


def should_use_special(enemy: Enemy) -> EnemyAction | None:
    """The special ability the enemy would use now, if any."""
    match enemy.enemy_type:
        case EnemyType.REGRESSION:
            if enemy.hp < int(enemy.max_hp / 2):
                return EnemyAction(EnemyActionKind.REGENERATE, amount=2)
        case EnemyType.TECH_DEBT:
            if enemy.turns_alive > 0 and enemy.damage < enemy.enemy_type.base_damage() * 2:
                return EnemyAction(EnemyActionKind.GROW, amount=1)
        case EnemyType.MERGE_CONFLICT:
            if enemy.at_half_health():
                return EnemyAction(EnemyActionKind.SPLIT)
    return None


def _neighbours(point: Point) -> Iterator[Point]:
    x, y = point
    for dx, dy in _DELTAS:
        yield x + dx, y + dy


def find_path(start: Point, goal: Point, room: _Walkable) -> list[Point] | None:
    """Shortest cardinal path from start to goal, both included, or None.

    The goal itself need not be walkable. Paths are limited to 50 steps.
    """
    start, goal = tuple(start), tuple(goal)
    if start == goal:
        return [start]

    visited = {start}
    queue: deque[list[Point]] = deque([[start]])

    while queue:
        path = queue.popleft()
        for nxt in _neighbours(path[-1]):
            if nxt == goal:
                return [*path, nxt]
            if nxt not in visited and room.is_walkable(*nxt):
                visited.add(nxt)
                new_path = [*path, nxt]
                if len(new_path) < _MAX_PATH_LENGTH:
                    queue.append(new_path)
    return None


def decide_action(enemy: Enemy, player: Player, room: _Walkable) -> EnemyAction:
    """Choose what an enemy does this turn."""
    enemy_pos = (enemy.x, enemy.y)
    player_pos = (player.x, player.y)

    special = should_use_special(enemy)
    if special is not None:
        return special

    if manhattan_distance(enemy_pos, player_pos) == 1:
        return EnemyAction(EnemyActionKind.ATTACK)

    path = find_path(enemy_pos, player_pos, room)
    if path is not None and len(path) > 1:
        nx, ny = path[1]
        return EnemyAction(EnemyActionKind.MOVE, dx=nx - enemy.x, dy=ny - enemy.y)

    return EnemyAction(EnemyActionKind.WAIT)