"""Save-file locations and the history of finished runs."""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_HISTORY_LIMIT = 100


def _format_time(moment: dt.datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return moment.astimezone(dt.timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_time(value: Any) -> dt.datetime:
    if not isinstance(value, str):
        raise TypeError(f"invalid timestamp: {value!r}")
    moment = dt.datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return moment.astimezone(dt.timezone.utc)


def _require(data: dict[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise KeyError(f"missing field {name!r}")
    value = data[name]
    if kind is int and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
        raise TypeError(f"invalid value for {name!r}: {value!r}")
    if not isinstance(value, kind):
        raise TypeError(f"invalid value for {name!r}: {value!r}")
    return value


@dataclass
class RunRecord:
    """Summary of one completed run."""

    started_at: dt.datetime
    ended_at: dt.datetime
    victory: bool
    turns: int
    rooms_cleared: int
    enemies_killed: int
    final_level: int
    death_cause: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """The record as a JSON-ready mapping, times in RFC 3339 UTC."""
        return {
            "started_at": _format_time(self.started_at),
            "ended_at": _format_time(self.ended_at),
            "victory": self.victory,
            "turns": self.turns,
            "rooms_cleared": self.rooms_cleared,
            "enemies_killed": self.enemies_killed,
            "final_level": self.final_level,
            "death_cause": self.death_cause,
        }

    @classmethod
    def from_dict(cls, data: Any) -> RunRecord:
        """Build a record from a mapping; raise KeyError, TypeError or ValueError."""
        if not isinstance(data, dict):
            raise TypeError("run record must be an object")
        death_cause = data.get("death_cause")
        if death_cause is not None and not isinstance(death_cause, str):
            raise TypeError(f"invalid death cause: {death_cause!r}")
        return cls(
            started_at=_parse_time(_require(data, "started_at", str)),
            ended_at=_parse_time(_require(data, "ended_at", str)),
            victory=_require(data, "victory", bool),
            turns=_require(data, "turns", int),
            rooms_cleared=_require(data, "rooms_cleared", int),
            enemies_killed=_require(data, "enemies_killed", int),
            final_level=_require(data, "final_level", int),
            death_cause=death_cause,
        )


def save_dir() -> Path:
    """The directory holding saves: ~/.penumbra."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".penumbra"


def save_path() -> Path:
    """Location of the saved game."""
    return save_dir() / "save.json"


def history_path() -> Path:
    """Location of the run history."""
    return save_dir() / "history.json"


def save_exists() -> bool:
    """Whether a saved game exists."""
    return save_path().exists()


def delete_save() -> None:
    """Remove the saved game if there is one."""
    save_path().unlink(missing_ok=True)


def load_run_history() -> list[RunRecord]:
    """All recorded runs, oldest first; empty if there is no history yet."""
    path = history_path()
    if not path.exists():
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise TypeError("history must be a list")
    return [RunRecord.from_dict(entry) for entry in data]


def save_run_history(record: RunRecord) -> None:
    """Append a run to the history, keeping at most the last 100."""
    save_dir().mkdir(parents=True, exist_ok=True)
    try:
        history = load_run_history()
    except (OSError, ValueError, KeyError, TypeError):
        history = []
    history.append(record)
    if len(history) > _HISTORY_LIMIT:
        del history[0]
    text = json.dumps([entry.to_dict() for entry in history], indent=2)
    history_path().write_text(text, encoding="utf-8")