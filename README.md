# neondriver

This package holds the game logic for a top-down driving game with glowing neon tracks. It contains no rendering code.

## Modules

- `neondriver.road` defines the basic track types and geometry:
  - the `SegmentType` and `Direction` enums and the `Track` dataclass;
  - point-in-segment tests: `is_point_in_straight`, `is_point_in_corner`, `is_point_in_corner_left`, `is_point_in_corner_right` and `is_point_in_segment`;
  - direction helpers: `get_exit_direction`, `get_position_offset`, `get_rotation` and `get_direction_vector`;
  - `compute_track_bounds`;
  - road constants such as `ROAD_WIDTH`.
- `neondriver.tracks` has `get_track(level)`, which returns the hand-made tracks for levels 1 to 3. Any other level raises `ValueError`.
- `neondriver.layout` has `build_track_layout(track, rng=None)`, which places a track in world space and returns a `TrackLayout`. A `TrackLayout` holds:
  - `segments`: a `PlacedSegment` for each segment, with `to_local` and `contains`;
  - `edges`: an `EdgePlacement` for each edge. Straight segments have two rectangular edges and corners have one outer arc;
  - `powerups`: the NOS power-up positions, keyed by segment index;
  - `start_point` and `end_point`.

  `TrackLayout.segments_touched(points)` and `TrackLayout.all_points_on_road(points)` check points, such as a car's corners, against the road. `start_line_position` and `finish_line_position` give the positions of the start and finish lines.
- `neondriver.track_generator` builds closed-loop tracks on a grid with a self-avoiding walk that backtracks. The main names are:
  - `generate_random_track(config)`;
  - `TrackGeneratorConfig`, whose `validate()` raises `ValueError` for an impossible configuration;
  - `GeneratedTrack`;
  - `max_grid_segments`.

  The same configuration always gives the same track. The function returns `None` if every attempt fails.
- `neondriver.save` handles player progress:
  - `SaveData` tracks the player's progress. Use `create`, `record_level_completion`, `best_time` and `filename`. `to_dict` and `from_dict` convert it to and from JSON-ready data;
  - `SaveStore(directory=None)` keeps JSON save files in one directory. Its methods are `save`, `load`, `delete`, `list_saves` (most recently played first) and `exists`. By default it uses `default_save_dir()`, which is the user data directory;
  - `sanitize_filename` turns a name into a safe file name.
- `neondriver.name_entry` handles the new-player screen:
  - `NameInput` applies the rules for typing a name. Only letters, digits, spaces, `_` and `-` are accepted, up to 20 bytes. Its methods are `type_text`, `backspace`, `space` and `display`;
  - `start_new_game(name, store)` creates and stores a save for a new player.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Use a built-in track and check whether a point lies on it:

```python
import random
from neondriver.tracks import get_track
from neondriver.layout import build_track_layout

track = get_track(1)
layout = build_track_layout(track, random.Random(0))
print(layout.all_points_on_road([track.starting_point]))
```

Generate a random track:

```python
from neondriver.track_generator import TrackGeneratorConfig, generate_random_track

config = TrackGeneratorConfig(min_segments=20, max_segments=60, target_difficulty=0.5, seed=7)
generated = generate_random_track(config)
if generated is not None:
    print(len(generated.layout), generated.starting_point, generated.prop_indices)
```

Create a player and record a lap:

```python
from neondriver.save import SaveStore
from neondriver.name_entry import NameInput, start_new_game

store = SaveStore()
name = NameInput()
name.type_text("Ada")
save = start_new_game(name.text, store)
save.record_level_completion(1, 42.5)
store.save(save)
```

`start_new_game` raises `NameEntryError` in three cases:

- the name is empty after trimming;
- a save with that name already exists;
- the save file cannot be written.

## What this package does not do

It is a library, not a playable game, and it provides:

- no window, rendering, menus or HUD;
- no car, driving physics or keyboard handling;
- no race timer;
- no command to run.

A game built on it must supply these and call the functions above for track placement, road checks and saves.