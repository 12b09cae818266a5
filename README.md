# penumbra

Game rules for a roguelike whose dungeons come from your own work: the commits
in a git repository or the events in an ICS calendar. The package is a library.
It has no command-line program and no terminal interface.

## What is in it

- **Commit data** (`penumbra.git_data`)
  - `CommitData` holds one commit's hash, date, message, line counts, author and merge flag. It has `lines_changed()` and `date_naive()`.
  - `CommitStats` and `FileCategories` hold per-commit totals.
  - `GitError` is the error type for commit data.
  - `group_by_date(commits)` returns a dict that maps each UTC day to its commits. The days are in ascending order.
  - `categorize_files(paths)` counts changed paths as test, config, doc or other files. It uses `is_test_file`, `is_config_file` and `is_doc_file`.
- **Calendar events** (`penumbra.calendar_events`)
  - `parse_ics_content(content, days)` and `parse_ics_file(path, days)` read `VEVENT` blocks. They keep events that start within the last `days` days and sort them by start time.
    - They raise `CalendarError` when the file cannot be read or no event is left.
  - `parse_datetime` accepts `20240115T100000Z`, `20240115T100000` and `20240115`, all read as UTC.
  - `unescape_ics` undoes ICS text escapes.
  - `EventCategory.from_event_text(summary, description)` sorts an event into one of `MEETING`, `ONE_ON_ONE`, `ALL_HANDS`, `FOCUS_TIME` or `BREAK`.
  - `EventData.intensity()` is one point per 15 minutes, plus one point per attendee besides yourself.
  - `group_by_date(events)` buckets events by day.
- **Entities** (`penumbra.entity`)
  - `Player.create(PlayerClass...)` gives a player with the starting stats of its class.
    - It has `take_damage`, `heal`, `use_energy`, `regen_energy`, `add_xp` (levels up at `level * 100` XP) and `pickup_item` (at most 10 items).
    - `PlayerClass.detect(commits)` picks a class from commit patterns.
  - `Enemy.create(EnemyType..., x, y, commit_hash)` gives an enemy. Its stats come from `EnemyType.base_hp()`, `base_damage()` and `symbol()`.
- **Combat** (`penumbra.combat`)
  - `PlayerAction` is built with `move`, `attack`, `defend`, `use_item` and `wait`. Its `energy_cost()` gives the cost of the action.
  - `player_attack` and `enemy_attack` roll hits and apply damage. They return a `CombatResult`. The `rng` argument is any object with a `random()` method.
  - `calculate_hit_chance(focus)` and `calculate_damage(base, level, defending)` give the underlying numbers.
- **Enemy AI** (`penumbra.ai`)
  - `decide_action(enemy, player, room)` returns an `EnemyAction`, which is a move, attack, regenerate, split, grow or wait.
  - `find_path` is a breadth-first search capped at 50 steps.
  - The `room` argument can be any object with an `is_walkable(x, y)` method.
  - Also: `should_use_special`, `manhattan_distance`, `get_adjacent_deltas` and `get_adjacent_positions`.
- **Field of view** (`penumbra.fov`)
  - `calculate_fov(origin, radius, is_blocking)` does recursive shadowcasting over eight octants.
  - `is_visible(origin, target, is_blocking)` is a straight-ray test.
- **Settings** (`penumbra.settings`)
  - `Settings` has three sections: `DisplaySettings`, `GameplaySettings` and `Keybinds`.
  - `load_settings(path=None)` and `save_settings(settings, path=None)` read and write TOML. The default file is `~/.penumbra/config.toml`.
  - Loading falls back to `default_settings()` when the file is missing or invalid.
- **Run history** (`penumbra.save`)
  - `RunRecord` describes one finished run.
  - `save_run_history(record)` appends to `~/.penumbra/history.json` and keeps the last 100 runs. `load_run_history()` reads them back.
  - `save_dir`, `save_path`, `history_path`, `save_exists` and `delete_save` give the save locations.
- **Meta-progression** (`penumbra.progression`)
  - `Progression` counts runs, kills, rooms and essence.
    - `complete_run(victory, kills, rooms, turns)` awards 1 essence per kill, 5 per room and 20 per victory.
    - Essence buys upgrades (`upgrade_hp`, `upgrade_energy`, `upgrade_damage`, `upgrade_weapon`, `upgrade_loot_luck`) and classes (`unlock_class`).
  - The file is `~/.penumbra/progression.json`, read with `load_progression()` and written with `save_progression()`.

## What it does not do

- The package does not open git repositories. You build `CommitData` records yourself and pass changed paths to `categorize_files`.
- It has no dungeon generator and no room type. AI functions take any object with `is_walkable`.
- It has no full game state or turn loop. `save_path()`, `save_exists()` and `delete_save()` locate a saved game, but nothing here writes or loads one.
- It has no items or item effects. `Player.inventory` holds whatever objects you give it.
- It has no terminal screen and no command to run.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Parse a calendar and see how hard each day will be:

```python
from penumbra.calendar_events import parse_ics_file, group_by_date

events = parse_ics_file("work.ics", 30)
for day, day_events in group_by_date(events).items():
    print(day, sum(e.intensity() for e in day_events))
```

Fight a bug:

```python
import random
from penumbra.entity import Player, Enemy, EnemyType, PlayerClass
from penumbra.combat import player_attack

player = Player.create(PlayerClass.CODE_WARRIOR)
bug = Enemy.create(EnemyType.BUG, 3, 3, "abc123")
result = player_attack(player, bug, random.Random(7))
print(result.message)
```

Compute what the player can see:

```python
from penumbra.fov import calculate_fov

walls = {(3, 0), (3, 1), (3, 2)}
visible = calculate_fov((0, 0), 5, lambda x, y: (x, y) in walls)
```

Spend essence between runs:

```python
from penumbra.progression import load_progression, save_progression

prog = load_progression()
prog.complete_run(True, kills=12, rooms=4, turns=180)
prog.upgrade_hp()
save_progression(prog)
```