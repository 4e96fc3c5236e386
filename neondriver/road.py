"""Road geometry: segment types, directions and point-in-segment tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple

Vec2 = Tuple[float, float]

ROAD_WIDTH = 50.0
# Square segments keep grid arithmetic simple.
ROAD_SEGMENT_LENGTH = ROAD_WIDTH
STARTING_LINE_WIDTH = ROAD_WIDTH
STARTING_LINE_HEIGHT = 2.0

ROAD_EDGE_WIDTH = 3.0
ROAD_EDGE_Z = 1.2

# Colours are linear RGB triples; components above 1.0 produce a bloom glow.
ROAD_SEGMENT_COLOR = (0.3, 0.3, 0.3)
VISITED_EDGE_COLOR = (1.0, 1.0, 2.8)
UNVISITED_EDGE_COLOR = (0.3, 0.3, 0.3)
START_LINE_COLOR = (0.2, 0.8, 0.2)
FINISH_LINE_COLOR = (1.0, 1.0, 1.0)

STARTING_LINE_Z = 1.5
STRAIGHT_ROAD_Z = 1.0
CORNER_ROAD_Z = 0.0


class SegmentType(Enum):
    """Kind of road segment."""

    STRAIGHT = "straight"
    CORNER_LEFT = "corner_left"
    CORNER_RIGHT = "corner_right"


class Direction(Enum):
    """Heading on the track grid."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Track:
    """A track layout with its starting position and prop placements."""

    layout: tuple[SegmentType, ...]
    starting_point: Vec2
    prop_indices: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layout", tuple(self.layout))
        object.__setattr__(self, "starting_point", tuple(self.starting_point))
        object.__setattr__(self, "prop_indices", tuple(self.prop_indices))


_LEFT_TURN = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
}

_RIGHT_TURN = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}

_DIRECTION_VECTORS = {
    Direction.UP: (0.0, 1.0),
    Direction.DOWN: (0.0, -1.0),
    Direction.LEFT: (-1.0, 0.0),
    Direction.RIGHT: (1.0, 0.0),
}

_ROTATIONS = {
    Direction.UP: 0.0,
    Direction.RIGHT: -math.pi / 2,
    Direction.DOWN: math.pi,
    Direction.LEFT: math.pi / 2,
}


def is_point_in_straight(local_pos: Vec2) -> bool:
    """Whether a local-space point lies in a straight segment centred on the origin."""
    x, y = local_pos
    half_w = ROAD_WIDTH / 2.0
    half_h = ROAD_SEGMENT_LENGTH / 2.0
    return -half_w <= x <= half_w and -half_h <= y <= half_h


def is_point_in_corner(local_pos: Vec2, angle_min: float, angle_max: float) -> bool:
    """Whether a local-space point lies in the sector of radius ROAD_WIDTH between two angles."""
    x, y = local_pos
    if math.hypot(x, y) > ROAD_WIDTH:
        return False
    angle = math.atan2(y, x)
    return angle_min <= angle <= angle_max


def is_point_in_corner_right(local_pos: Vec2) -> bool:
    """Whether a local-space point lies in a right-corner sector (45 to 135 degrees)."""
    return is_point_in_corner(local_pos, math.pi / 4, math.pi / 4 + math.pi / 2)


def is_point_in_corner_left(local_pos: Vec2) -> bool:
    """Whether a local-space point lies in a left-corner sector (45 to 135 degrees)."""
    return is_point_in_corner(local_pos, math.pi / 2 - math.pi / 4, math.pi - math.pi / 4)


def get_exit_direction(entry_direction: Direction, segment_type: SegmentType) -> Direction:
    """Heading after passing through a segment entered with the given heading."""
    if segment_type is SegmentType.STRAIGHT:
        return entry_direction
    if segment_type is SegmentType.CORNER_LEFT:
        return _LEFT_TURN[entry_direction]
    return _RIGHT_TURN[entry_direction]


def get_direction_vector(direction: Direction) -> Vec2:
    """Unit vector for a heading."""
    return _DIRECTION_VECTORS[direction]


def get_position_offset(direction: Direction) -> Vec2:
    """Offset from one segment to the next along a heading."""
    dx, dy = _DIRECTION_VECTORS[direction]
    return (dx * ROAD_SEGMENT_LENGTH, dy * ROAD_SEGMENT_LENGTH)


def get_rotation(direction: Direction) -> float:
    """Rotation in radians that turns the +Y axis onto the heading."""
    return _ROTATIONS[direction]


def is_point_in_segment(local_pos: Vec2, segment_type: SegmentType) -> bool:
    """Whether a local-space point lies inside a segment of the given type."""
    if segment_type is SegmentType.STRAIGHT:
        return is_point_in_straight(local_pos)
    if segment_type is SegmentType.CORNER_RIGHT:
        return is_point_in_corner_right(local_pos)
    return is_point_in_corner_left(local_pos)


def compute_track_bounds(
    starting_point: Vec2, layout: Iterable[SegmentType]
) -> tuple[Vec2, Vec2]:
    """Axis-aligned bounds (min, max) of all segment centres of a track."""
    x, y = starting_point
    min_x, min_y = x, y
    max_x, max_y = x, y
    direction = Direction.UP

    for segment in layout:
        dx, dy = get_position_offset(direction)
        x += dx
        y += dy
        min_x, min_y = min(min_x, x), min(min_y, y)
        max_x, max_y = max(max_x, x), max(max_y, y)
        direction = get_exit_direction(direction, segment)

    return (min_x, min_y), (max_x, max_y)