"""Placement of a track's road segments, edges and power-ups in world space."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from neondriver.road import (
    CORNER_ROAD_Z,
    ROAD_EDGE_WIDTH,
    ROAD_EDGE_Z,
    ROAD_SEGMENT_LENGTH,
    ROAD_WIDTH,
    STARTING_LINE_Z,
    STRAIGHT_ROAD_Z,
    Direction,
    SegmentType,
    Track,
    Vec2,
    get_direction_vector,
    get_exit_direction,
    get_position_offset,
    get_rotation,
    is_point_in_segment,
)

PROP_Z = 2.0

NOS_SIZE = 10.0
NOS_HALF_SIZE = NOS_SIZE / 2.0
NOS_THICKNESS = 2.0
NOS_COLOR = (0.0, 2.0, 2.0)
NOS_ROTATION_SPEED = 3.0


class _RandomSource(Protocol):
    def random(self) -> float: ...


def _rotate(vector: Vec2, angle: float) -> Vec2:
    c, s = math.cos(angle), math.sin(angle)
    x, y = vector
    return (c * x - s * y, s * x + c * y)


def _add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def _sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def _scale(v: Vec2, k: float) -> Vec2:
    return (v[0] * k, v[1] * k)


@dataclass(frozen=True)
class PlacedSegment:
    """A road segment positioned in the world.

    For straight segments ``position`` is the segment centre; for corners it is
    the pivot at the inner corner of the quarter-circle sector.
    """

    segment_type: SegmentType
    direction: Direction
    position: Vec2
    rotation: float
    z: float

    def to_local(self, point: Vec2) -> Vec2:
        """Convert a world-space point into this segment's local space."""
        return _rotate(_sub(point, self.position), -self.rotation)

    def contains(self, point: Vec2) -> bool:
        """Whether a world-space point lies on this segment."""
        return is_point_in_segment(self.to_local(point), self.segment_type)


@dataclass(frozen=True)
class EdgePlacement:
    """A glowing border piece belonging to one segment.

    Straight edges are rectangles of ``size``; corner edges are rings
    between the two ``radii`` around the segment pivot.
    """

    segment_index: int
    position: Vec2
    rotation: float
    z: float = ROAD_EDGE_Z
    size: Vec2 | None = None
    radii: tuple[float, float] | None = None

    @property
    def is_arc(self) -> bool:
        return self.radii is not None


@dataclass
class TrackLayout:
    """All placed pieces of a track."""

    segments: tuple[PlacedSegment, ...]
    edges: tuple[EdgePlacement, ...]
    powerups: dict[int, Vec2] = field(default_factory=dict)
    start_point: Vec2 = (0.0, 0.0)
    end_point: Vec2 = (0.0, 0.0)

    def segments_touched(self, points: Iterable[Vec2]) -> list[int]:
        """Indices of the segments that any of the points lies on, in track order."""
        pts = list(points)
        return [
            index
            for index, segment in enumerate(self.segments)
            if any(segment.contains(p) for p in pts)
        ]

    def all_points_on_road(self, points: Iterable[Vec2]) -> bool:
        """Whether every point lies on at least one segment."""
        return all(
            any(segment.contains(p) for segment in self.segments) for p in points
        )


def _straight_edges(index: int, center: Vec2, rotation: float) -> list[EdgePlacement]:
    perpendicular = _rotate((1.0, 0.0), rotation)
    offset = _scale(perpendicular, ROAD_WIDTH / 2.0 + ROAD_EDGE_WIDTH / 2.0)
    size = (ROAD_EDGE_WIDTH, ROAD_SEGMENT_LENGTH)
    return [
        EdgePlacement(index, _sub(center, offset), rotation, size=size),
        EdgePlacement(index, _add(center, offset), rotation, size=size),
    ]


def _place_straight(
    index: int,
    endpoint: Vec2,
    direction: Direction,
    with_prop: bool,
    rng: _RandomSource,
    layout: TrackLayout,
) -> Vec2:
    offset = get_position_offset(direction)
    center = _add(endpoint, _scale(offset, 0.5))

    if with_prop:
        side = 1.0 if rng.random() < 0.5 else -1.0
        dx, dy = get_direction_vector(direction)
        left = (-dy, dx)
        layout.powerups[index] = _add(center, _scale(left, side * ROAD_WIDTH / 4.0))

    rotation = get_rotation(direction)
    layout.segments += (
        PlacedSegment(SegmentType.STRAIGHT, direction, center, rotation, STRAIGHT_ROAD_Z),
    )
    layout.edges += tuple(_straight_edges(index, center, rotation))
    return _add(endpoint, offset)


def _place_corner(
    index: int,
    endpoint: Vec2,
    direction: Direction,
    segment_type: SegmentType,
    with_prop: bool,
    rng: _RandomSource,
    layout: TrackLayout,
) -> tuple[Vec2, Direction]:
    exit_direction = get_exit_direction(direction, segment_type)
    exit_vec = get_direction_vector(exit_direction)
    entry_vec = get_direction_vector(direction)

    pivot = _add(endpoint, _scale(exit_vec, ROAD_WIDTH / 2.0))
    is_right = segment_type is SegmentType.CORNER_RIGHT

    if with_prop:
        radius_offset = ROAD_WIDTH / 4.0 if rng.random() < 0.5 else -ROAD_WIDTH / 4.0
        to_entry = _sub(endpoint, pivot)
        length = math.hypot(*to_entry)
        pivot_dir = _scale(to_entry, 1.0 / length)
        angle = -math.pi / 4 if is_right else math.pi / 4
        rotated = _rotate(pivot_dir, angle)
        layout.powerups[index] = _add(
            pivot, _scale(rotated, ROAD_WIDTH / 2.0 + radius_offset)
        )

    rotation = get_rotation(direction) + (math.pi / 4 if is_right else -math.pi / 4)
    layout.segments += (
        PlacedSegment(segment_type, direction, pivot, rotation, CORNER_ROAD_Z),
    )
    # Corners only get an outer arc; the pivot side has no outside.
    layout.edges += (
        EdgePlacement(
            index,
            pivot,
            rotation,
            radii=(ROAD_WIDTH, ROAD_WIDTH + ROAD_EDGE_WIDTH),
        ),
    )
    return _add(pivot, _scale(entry_vec, ROAD_WIDTH / 2.0)), exit_direction


def build_track_layout(track: Track, rng: _RandomSource | None = None) -> TrackLayout:
    """Place every segment, edge and power-up of a track.

    ``rng`` needs a ``random()`` method; it decides which side of the road each
    power-up lands on.
    """
    if rng is None:
        rng = random.Random()

    sx, sy = track.starting_point
    start = (sx, sy - ROAD_SEGMENT_LENGTH / 2.0)
    layout = TrackLayout(segments=(), edges=(), start_point=start, end_point=start)

    endpoint = start
    direction = Direction.UP
    props = set(track.prop_indices)

    for index, segment_type in enumerate(track.layout):
        with_prop = index in props
        if segment_type is SegmentType.STRAIGHT:
            endpoint = _place_straight(index, endpoint, direction, with_prop, rng, layout)
        else:
            endpoint, direction = _place_corner(
                index, endpoint, direction, segment_type, with_prop, rng, layout
            )

    layout.end_point = endpoint
    return layout


def start_line_position(position: Vec2, offset: float) -> tuple[float, float, float]:
    """World position of the start line, ``offset`` ahead of the starting point."""
    x, y = position
    return (x, y + offset, STARTING_LINE_Z)


def finish_line_position(position: Vec2) -> tuple[float, float, float]:
    """World position of the finish line at the given point."""
    x, y = position
    return (x, y, STARTING_LINE_Z)