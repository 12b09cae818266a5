"""Field of view by recursive shadowcasting."""

from __future__ import annotations

import math
from collections.abc import Callable

Point = tuple[int, int]
Blocking = Callable[[int, int], bool]


def calculate_fov(origin: Point, radius: int, is_blocking: Blocking) -> set[Point]:
    """Tiles visible from ``origin`` within ``radius``, scanning all 8 octants."""
    ox, oy = origin
    visible = {(ox, oy)}
    for octant in range(8):
        _cast_light(visible, (ox, oy), radius, 1, 1.0, 0.0, octant, is_blocking)
    return visible


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def is_visible(origin: Point, target: Point, is_blocking: Blocking) -> bool:
    """Whether a straight ray from origin to target passes no blocking tile."""
    (ox, oy), (tx, ty) = origin, target
    distance = math.sqrt((tx - ox) ** 2 + (ty - oy) ** 2)
    steps = math.ceil(distance)
    if steps == 0:
        return True

    for step in range(1, steps):
        t = step / steps
        x = ox + (tx - ox) * t
        y = oy + (ty - oy) * t
        if is_blocking(_round_half_away(x), _round_half_away(y)):
            return False
    return True


def _transform_octant(octant: int, x: int, y: int) -> Point:
    match octant:
        case 1:
            return y, x
        case 2:
            return y, -x
        case 3:
            return -x, y
        case 4:
            return -x, -y
        case 5:
            return -y, -x
        case 6:
            return -y, x
        case 7:
            return x, -y
        case _:
            return x, y


def _cast_light(
    visible: set[Point],
    origin: Point,
    radius: int,
    row: int,
    start_slope: float,
    end_slope: float,
    octant: int,
    is_blocking: Blocking,
) -> None:
    if start_slope < end_slope:
        return

    next_start_slope = start_slope
    for current_row in range(row, radius + 1):
        blocked = False
        dy = -current_row

        for dx in range(-current_row, 1):
            left_slope = (dx - 0.5) / (dy + 0.5)
            right_slope = (dx + 0.5) / (dy - 0.5)

            if start_slope < right_slope:
                continue
            if end_slope > left_slope:
                break

            tx, ty = _transform_octant(octant, dx, dy)
            abs_x, abs_y = origin[0] + tx, origin[1] + ty

            if dx * dx + dy * dy <= radius * radius:
                visible.add((abs_x, abs_y))

            if blocked:
                if is_blocking(abs_x, abs_y):
                    next_start_slope = right_slope
                    continue
                blocked = False
                start_slope = next_start_slope
            elif is_blocking(abs_x, abs_y) and current_row < radius:
                blocked = True
                _cast_light(
                    visible,
                    origin,
                    radius,
                    current_row + 1,
                    start_slope,
                    left_slope,
                    octant,
                    is_blocking,
                )
                next_start_slope = right_slope

        if blocked:
            break