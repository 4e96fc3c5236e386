import pytest

from neondriver.road import (
    ROAD_SEGMENT_LENGTH,
    Direction,
    SegmentType,
    get_exit_direction,
    get_position_offset,
)
from neondriver.tracks import get_track


def _walk(layout):
    x, y = 0.0, 0.0
    direction = Direction.UP
    cells = []
    for segment in layout:
        dx, dy = get_position_offset(direction)
        x += dx
        y += dy
        cells.append((round(x), round(y)))
        direction = get_exit_direction(direction, segment)
    return cells, direction


@pytest.mark.parametrize("level,length", [(1, 41 - 5), (2, 84 - 50), (3, 147 - 83)])
def test_layout_lengths(level, length):
    assert len(get_track(level).layout) == length


def test_starting_points():
    assert get_track(1).starting_point == (-5.0 * ROAD_SEGMENT_LENGTH, -3.0 * ROAD_SEGMENT_LENGTH)
    assert get_track(2).starting_point == (-1.0 * ROAD_SEGMENT_LENGTH, -2.0 * ROAD_SEGMENT_LENGTH)
    assert get_track(3).starting_point == (-2.0 * ROAD_SEGMENT_LENGTH, 0.0)


def test_prop_indices():
    assert get_track(1).prop_indices == (10, 25)
    assert get_track(2).prop_indices == (20, 50)
    assert get_track(3).prop_indices == (15, 40, 70)


@pytest.mark.parametrize("level", [1, 2, 3])
def test_tracks_are_closed_loops(level):
    cells, direction = _walk(get_track(level).layout)
    assert cells[-1] == (0, 0)
    assert direction is Direction.UP


@pytest.mark.parametrize("level", [1, 2, 3])
def test_tracks_do_not_cross_themselves(level):
    cells, _ = _walk(get_track(level).layout)
    assert len(set(cells)) == len(cells)


@pytest.mark.parametrize("level", [1, 2, 3])
def test_tracks_start_with_straight(level):
    assert get_track(level).layout[0] is SegmentType.STRAIGHT


def test_track_one_turns_only_right():
    layout = get_track(1).layout
    assert SegmentType.CORNER_LEFT not in layout
    assert layout.count(SegmentType.CORNER_RIGHT) == 4


@pytest.mark.parametrize("level", [0, 4, -1])
def test_invalid_level_raises(level):
    with pytest.raises(ValueError, match="Invalid level"):
        get_track(level)