"""The hand-built tracks for the fixed levels."""

from __future__ import annotations

from neondriver.road import ROAD_SEGMENT_LENGTH, SegmentType, Track

_S = SegmentType.STRAIGHT
_L = SegmentType.CORNER_LEFT
_R = SegmentType.CORNER_RIGHT

_TRACK_1_LAYOUT = (
    (_S,) * 6 + (_R,)
    + (_S,) * 10 + (_R,)
    + (_S,) * 6 + (_R,)
    + (_S,) * 10 + (_R,)
)

_TRACK_2_LAYOUT = (
    (_S, _S, _L, _S, _S, _R)
    + (_S,) * 4 + (_R,)
    + (_S,) * 6 + (_R,)
    + (_S,) * 9 + (_R,)
    + (_S,) * 3 + (_R,)
    + (_S, _S)
)

_TRACK_3_LAYOUT = (
    (_S, _L, _S, _R, _S, _S, _S, _L, _S, _L)
    + (_S,) * 7 + (_R,)
    + (_S, _L, _S, _S, _L)
    + (_S,) * 14
    + (_L, _R, _L)
    + (_S,) * 6
    + (_L, _L, _R, _L, _R, _L, _R, _L, _R, _L, _R)
    + (_S, _S, _S)
    + (_R, _L, _R, _S)
)

# Starting points are whole multiples of the segment length so segments stay on the grid.
_TRACKS = {
    1: Track(
        layout=_TRACK_1_LAYOUT,
        starting_point=(-5.0 * ROAD_SEGMENT_LENGTH, -3.0 * ROAD_SEGMENT_LENGTH),
        prop_indices=(10, 25),
    ),
    2: Track(
        layout=_TRACK_2_LAYOUT,
        starting_point=(-1.0 * ROAD_SEGMENT_LENGTH, -2.0 * ROAD_SEGMENT_LENGTH),
        prop_indices=(20, 50),
    ),
    3: Track(
        layout=_TRACK_3_LAYOUT,
        starting_point=(-2.0 * ROAD_SEGMENT_LENGTH, 0.0),
        prop_indices=(15, 40, 70),
    ),
}


def get_track(level: int) -> Track:
    """Return the track for level 1, 2 or 3; any other level raises ValueError."""
    try:
        return _TRACKS[level]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid level: {level}. Only levels 1-3 are available.") from None