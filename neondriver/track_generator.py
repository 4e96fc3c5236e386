"""Random closed-loop track generation by a self-avoiding walk on a grid."""

from __future__ import annotations

import hashlib
import logging
import random
import struct
from dataclasses import dataclass, field

from neondriver.road import (
    ROAD_SEGMENT_LENGTH,
    Direction,
    SegmentType,
    Vec2,
    get_exit_direction,
)

logger = logging.getLogger(__name__)

GridPos = tuple[int, int]

MIN_VALID_SEGMENTS = 4
"""Fewest segments that can form a closed loop (a square)."""

DEFAULT_GRID_HALF_WIDTH = 10
DEFAULT_GRID_HALF_HEIGHT = 5

_ATTEMPTS_PER_BATCH = 1000
_FALLBACK_BATCHES = 5
_FALLBACK_SEED_STEP = 10000
_MAX_BACKTRACKS = 1000
_MAX_PROP_ATTEMPTS = 100
_U64_MASK = (1 << 64) - 1
_ORIGIN: GridPos = (0, 0)
_FIRST_CELL_AFTER_ORIGIN: GridPos = (0, 1)
_ALL_SEGMENTS = (SegmentType.STRAIGHT, SegmentType.CORNER_LEFT, SegmentType.CORNER_RIGHT)

_GRID_STEPS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def max_grid_segments(half_width: int, half_height: int) -> int:
    """Number of cells in a grid spanning -half..+half on both axes."""
    return (2 * half_width + 1) * (2 * half_height + 1)


@dataclass(frozen=True)
class GeneratedTrack:
    """A randomly generated track."""

    layout: tuple[SegmentType, ...]
    starting_point: Vec2
    prop_indices: tuple[int, ...] = field(default_factory=tuple)


@dataclass
class TrackGeneratorConfig:
    """Settings for random track generation.

    ``half_width`` and ``half_height`` give the usable grid, in cells from the
    origin, after keeping clear of the screen edges.
    """

    min_segments: int = 70
    max_segments: int = 150
    target_difficulty: float = 0.5
    seed: int = 42
    half_width: int = DEFAULT_GRID_HALF_WIDTH
    half_height: int = DEFAULT_GRID_HALF_HEIGHT

    def validate(self) -> None:
        """Raise ValueError if the configuration cannot produce a track."""
        max_possible = max_grid_segments(self.half_width, self.half_height)

        if self.min_segments < MIN_VALID_SEGMENTS:
            raise ValueError(
                f"Invalid TrackGeneratorConfig: min_segments ({self.min_segments}) must be "
                f">= {MIN_VALID_SEGMENTS} (minimum for a closed loop)"
            )
        if self.max_segments < MIN_VALID_SEGMENTS:
            raise ValueError(
                f"Invalid TrackGeneratorConfig: max_segments ({self.max_segments}) must be "
                f">= {MIN_VALID_SEGMENTS} (minimum for a closed loop)"
            )
        if self.max_segments > max_possible:
            raise ValueError(
                f"Invalid TrackGeneratorConfig: max_segments ({self.max_segments}) exceeds "
                f"maximum possible segments ({max_possible}) for the grid size "
                "(Hamiltonian cycle upper bound)"
            )
        if self.min_segments > self.max_segments:
            raise ValueError(
                f"Invalid TrackGeneratorConfig: min_segments ({self.min_segments}) cannot be "
                f"greater than max_segments ({self.max_segments})"
            )
        if not 0.0 <= self.target_difficulty <= 1.0:
            raise ValueError(
                f"Invalid TrackGeneratorConfig: target_difficulty ({self.target_difficulty}) "
                "must be between 0.0 and 1.0"
            )


def generate_random_track(config: TrackGeneratorConfig) -> GeneratedTrack | None:
    """Generate a closed-loop track, or None if every attempt fails.

    The same configuration always yields the same track. Raises ValueError for
    an invalid configuration.
    """
    config.validate()

    track = _run_batch(config.seed & _U64_MASK, config)
    if track is not None:
        return track

    for batch in range(1, _FALLBACK_BATCHES + 1):
        fallback_seed = (config.seed + batch * _FALLBACK_SEED_STEP) & _U64_MASK
        track = _run_batch(fallback_seed, config)
        if track is not None:
            logger.warning("Track generation required fallback seed (attempt batch %d)", batch)
            return track

    return None


def _derive_seed(base_seed: int, attempt: int) -> int:
    digest = hashlib.blake2b(
        struct.pack("<QQ", base_seed & _U64_MASK, attempt & _U64_MASK), digest_size=8
    ).digest()
    return int.from_bytes(digest, "little")


def _run_batch(base_seed: int, config: TrackGeneratorConfig) -> GeneratedTrack | None:
    # The first success in attempt order wins, so results are reproducible.
    for attempt in range(_ATTEMPTS_PER_BATCH):
        rng = random.Random(_derive_seed(base_seed, attempt))
        track = _try_generate_track(rng, config)
        if track is not None:
            return track
    return None


def _next_grid_position(pos: GridPos, direction: Direction) -> GridPos:
    dx, dy = _GRID_STEPS[direction]
    return (pos[0] + dx, pos[1] + dy)


def _try_generate_track(
    rng: random.Random, config: TrackGeneratorConfig
) -> GeneratedTrack | None:
    layout: list[SegmentType] = []
    current_pos = _ORIGIN
    current_dir = Direction.UP
    visited: set[GridPos] = {current_pos}
    path: list[tuple[GridPos, Direction]] = [(current_pos, current_dir)]

    # The first two segments are straight so the start and finish lines fit.
    for _ in range(2):
        current_pos = _next_grid_position(current_pos, current_dir)
        layout.append(SegmentType.STRAIGHT)
        visited.add(current_pos)
        path.append((current_pos, current_dir))

    backtracks = 0
    while len(layout) < config.max_segments and backtracks < _MAX_BACKTRACKS:
        if len(layout) >= config.min_segments:
            closing = _closing_segment(current_pos, current_dir, visited)
            if closing is not None:
                layout.append(closing)
                return _finalize_track(layout, rng)

        valid_moves = _valid_moves(
            current_pos, current_dir, visited, config.half_width, config.half_height
        )

        if not valid_moves:
            if len(layout) <= 2:
                return None
            layout.pop()
            path.pop()
            if path:
                visited.discard(current_pos)
                current_pos, current_dir = path[-1]
            backtracks += 1
            continue

        segment = _choose_segment(rng, valid_moves, config.target_difficulty)
        current_pos = _next_grid_position(current_pos, current_dir)
        current_dir = get_exit_direction(current_dir, segment)
        layout.append(segment)
        visited.add(current_pos)
        path.append((current_pos, current_dir))

    return None


def _closing_segment(
    current_pos: GridPos, current_dir: Direction, visited: set[GridPos]
) -> SegmentType | None:
    if _next_grid_position(current_pos, current_dir) != _ORIGIN:
        return None

    for neighbor in ((0, 1), (0, -1), (1, 0), (-1, 0)):
        if neighbor in (current_pos, _FIRST_CELL_AFTER_ORIGIN):
            continue
        if neighbor in visited:
            return None

    # The track leaves the origin heading up, so the closing segment must exit up.
    for segment in _ALL_SEGMENTS:
        if get_exit_direction(current_dir, segment) is Direction.UP:
            return segment
    return None


def _valid_moves(
    current_pos: GridPos,
    current_dir: Direction,
    visited: set[GridPos],
    half_width: int,
    half_height: int,
) -> list[SegmentType]:
    next_pos = _next_grid_position(current_pos, current_dir)
    if abs(next_pos[0]) > half_width or abs(next_pos[1]) > half_height:
        return []
    if next_pos in visited and next_pos != _ORIGIN:
        return []
    if _has_adjacent_visited(next_pos, current_pos, visited):
        return []
    return list(_ALL_SEGMENTS)


def _has_adjacent_visited(pos: GridPos, previous_pos: GridPos, visited: set[GridPos]) -> bool:
    """Whether a cell touches the path anywhere but where it came from or the origin."""
    x, y = pos
    for neighbor in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
        if neighbor == previous_pos or neighbor == _ORIGIN:
            continue
        if neighbor in visited:
            return True
    return False


def _choose_segment(
    rng: random.Random, valid_moves: list[SegmentType], target_difficulty: float
) -> SegmentType:
    # Difficulty 0.0 gives 80% straights, 1.0 gives 20%; corners share the rest.
    straight_chance = 0.8 - 0.6 * target_difficulty
    if rng.random() < straight_chance and SegmentType.STRAIGHT in valid_moves:
        return SegmentType.STRAIGHT

    if rng.random() < 0.5:
        preference = (SegmentType.CORNER_LEFT, SegmentType.CORNER_RIGHT)
    else:
        preference = (SegmentType.CORNER_RIGHT, SegmentType.CORNER_LEFT)
    for segment in preference:
        if segment in valid_moves:
            return segment

    return rng.choice(valid_moves)


def _finalize_track(layout: list[SegmentType], rng: random.Random) -> GeneratedTrack:
    pos = _ORIGIN
    direction = Direction.UP
    min_x = max_x = min_y = max_y = 0
    for segment in layout:
        pos = _next_grid_position(pos, direction)
        min_x, max_x = min(min_x, pos[0]), max(max_x, pos[0])
        min_y, max_y = min(min_y, pos[1]), max(max_y, pos[1])
        direction = get_exit_direction(direction, segment)

    center_x = (min_x + max_x) / 2.0
    center_y = (min_y + max_y) / 2.0
    starting_point = (-center_x * ROAD_SEGMENT_LENGTH, -center_y * ROAD_SEGMENT_LENGTH)

    track_length = len(layout)
    min_separation = track_length // 5
    num_props = rng.randint(1, 3)

    prop_indices: list[int] = []
    for _ in range(_MAX_PROP_ATTEMPTS):
        if len(prop_indices) >= num_props:
            break
        idx = rng.randrange(track_length)
        if all(abs(idx - existing) >= min_separation for existing in prop_indices):
            prop_indices.append(idx)

    return GeneratedTrack(
        layout=tuple(layout),
        starting_point=starting_point,
        prop_indices=tuple(prop_indices),
    )