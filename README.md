# protoact

This package holds the game logic of a small side-scrolling action game, with no
rendering. It reads the CSV map files and drives the player character: movement,
jumping, collision against a map, weapons and damage. It also covers key input,
persistent settings, sound bookkeeping and frame pacing. It has no dependencies
outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `protoact.calculation` provides the angle helpers.
  - `lock_on(cx, cy, dx, dy)` gives the angle towards a point.
  - `homing_spin(angle, spin_speed, target_angle)` and
    `homing_spin_to(angle, spin_speed, x, y, target_x, target_y)` turn an angle towards a
    target by at most `spin_speed`.
  - `spin(angle, spin_speed, spin_max, spin_min)` rotates and then clamps.
- `protoact.keys` provides the `Button` enum, `KeyBinding` and `Key`.
  - `Key.update(key_state, pad_state)` records one frame of keyboard and pad state.
  - `check`, `check_once` and `check_let_go` answer held, just-pressed and
    just-released queries.
  - `get_key_once` and `get_pad_once` return the first newly pressed key or pad bit,
    or `None` if there is none.
  - Bindings are read from and written to a plain text file (`key_config.dat` by
    default) with `load_setting` and `save_setting`. A missing file gives the default
    bindings.
- `protoact.settings` provides `EnvSetting`. It holds `fps_visible`, `bgm_volume` and
  `sound_volume` in a three-line file (`config.dat` by default). If the file is
  missing, the defaults are written to it.
- `protoact.sound` provides `Sound`, `AudioBackend`, `MemoryAudioBackend`, `SoundEntry`
  and `load_sound_catalogue`.
  - `Sound` reads `bgm/bgm_data.csv` and `sound/sound_data.csv` under a data directory.
  - It loads, plays and stops music and effects through an `AudioBackend`, and scales
    volumes from 0–100 to 0–255.
  - `MemoryAudioBackend` only records what it is asked to do.
  - `Sound` can be used as a context manager. Leaving the `with` block calls `close()`.
- `protoact.fps` provides `FpsCounter`.
  - `wait()` sleeps so that frames run at 60 per second.
  - Every 60 frames it averages the rate over the last 120 frames.
  - `text()` returns the rate formatted for display while `visible` is set.
  - The clock and sleep functions can be injected.
- `protoact.map_data` provides the map-file readers and the layout helpers.
  - The readers are `read_grid`, `load_mapchip_data`, `load_stage_list`,
    `load_map_data`, `load_warp_data` and `load_back_data`.
  - The layout helpers turn grids into positions:
    - `link_layout` joins runs of linkable tiles into one `ChipPlacement`.
    - `front_layout` places one chip per tile.
    - `scroll_bounds` gives the scroll limits.
    - `event_positions` gives a list of `EventData`.
    - `warp_doors` gives a list of `WarpDoor`.
- `protoact.player_parts` provides `MoveType`, `Part`, `Skeleton` and
  `choose_move_type`. They pose and place the player's head, body, arms and legs.
- `protoact.attacks` provides `AttackState` and the four weapons: `rapid_shot`,
  `control_shot`, `rocket_hand` and `dash`. Energy recovers with
  `AttackState.recover`.
- `protoact.player` provides `Player` and `HitCircle`.
  - `update` handles input or the damage reaction.
  - `adjust_position` moves the player and resolves map collisions.
  - `attack_check` switches weapons and runs the selected attack.
  - `hit_check_enemy`, `hit_check_bullet` and `hit_check_item` test for contact.

## Connecting the player to the rest of a game

`Player` works with any objects that provide the methods it calls.

- **Map:** `adjust_position(map_manager, event_flag)` needs an object with:
  - the attribute `window_y`;
  - the methods `plus_speed_x`, `plus_speed_y`, `hit_check_left`, `hit_check_right`,
    `hit_check_top`, `hit_check_bottom` and `check_step`.

  Each of these methods takes `(cx, cy, hit_size)`. The hit checks return a chip with
  `x`, `y`, `size_x`, `size_y` and `through`, or `None`.
- **Bullets:** objects passed as `bullets` need `set_bullet(kind, x, y, speed, angle)`
  and `hit_check_chara(...)`. A bullet needs `x`, `y` and an `ended` flag.
- **Effects:** objects passed as `effects` need `set_effect(kind, x, y, scale)`.
- **Enemies:** objects passed as `enemies` need `hit_check_chara(...)`.
- **Sound:** any `sound` with `play_sound_effect(num)` works, including `Sound`.

## Example

```python
from protoact.calculation import homing_spin, lock_on

angle = lock_on(0.0, 0.0, 10.0, 10.0)      # angle towards a target
angle = homing_spin(angle, 0.1, 0.0)       # turn towards 0 rad by at most 0.1 rad
```

```python
from protoact.keys import Button, Key

key = Key("key_config.dat")
key.update(key_state=bytes(256), pad_state=0)
if key.check_once(Button.JUMP):
    ...
```

```python
from protoact.map_data import load_mapchip_data, read_grid, link_layout

chips = load_mapchip_data("data/map/mapchip_data.csv")
placements = link_layout(read_grid("data/map/stage1.csv"), chips)
```

## What the package does not do

- **Map chips:** there are no block objects. Nothing makes blocks break, push, fall,
  open or launch.
- **Map manager:** no object holds a map's chips, resolves chip-to-chip collision,
  or runs warps and events. `map_data` only reads the files and computes placements.
  The map object that `Player.adjust_position` expects must be supplied by the caller.
- **Output:** the package draws nothing and plays no real audio.
- **Command:** it has no command to start a game.