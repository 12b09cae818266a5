"""User settings stored as TOML in the home directory."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w


@dataclass
class DisplaySettings:
    """Display options."""

    color: bool = True
    unicode: bool = True


@dataclass
class GameplaySettings:
    """Gameplay options."""

    default_days: int = 30
    auto_pickup: bool = True
    confirm_attacks: bool = False


@dataclass
class Keybinds:
    """Key bound to each command."""

    move_up: str = "k"
    move_down: str = "j"
    move_left: str = "h"
    move_right: str = "l"
    attack: str = "a"
    inventory: str = "i"
    wait: str = "."
    help: str = "?"
    quit: str = "q"


def _section(cls: type, data: Any) -> Any:
    """Build a settings section, requiring every field with its proper type."""
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} must be a table")
    values = {}
    for f in dataclasses.fields(cls):
        if f.name not in data:
            raise KeyError(f"missing field {f.name!r} in {cls.__name__}")
        value = data[f.name]
        expected = type(f.default)
        if expected is bool:
            valid = isinstance(value, bool)
        elif expected is int:
            valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
        else:
            valid = isinstance(value, expected)
        if not valid:
            raise TypeError(f"invalid value for {f.name!r}: {value!r}")
        values[f.name] = value
    return cls(**values)


@dataclass
class Settings:
    """All application settings."""

    display: DisplaySettings = field(default_factory=DisplaySettings)
    gameplay: GameplaySettings = field(default_factory=GameplaySettings)
    keybinds: Keybinds = field(default_factory=Keybinds)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """The settings as nested plain tables."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Settings:
        """Build settings from nested tables; raise KeyError or TypeError if invalid."""
        if not isinstance(data, dict):
            raise TypeError("settings must be a table")
        for name in ("display", "gameplay", "keybinds"):
            if name not in data:
                raise KeyError(f"missing section {name!r}")
        return cls(
            display=_section(DisplaySettings, data["display"]),
            gameplay=_section(GameplaySettings, data["gameplay"]),
            keybinds=_section(Keybinds, data["keybinds"]),
        )


def config_path() -> Path:
    """Location of the config file: ~/.penumbra/config.toml."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".penumbra" / "config.toml"


def default_settings() -> Settings:
    """Settings with every option at its default."""
    return Settings()


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    """Load settings from the config file, falling back to defaults on any problem."""
    target = Path(path) if path is not None else config_path()
    if not target.exists():
        return default_settings()
    try:
        data = tomllib.loads(target.read_text(encoding="utf-8"))
        return Settings.from_dict(data)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, KeyError, TypeError):
        return default_settings()


def save_settings(settings: Settings, path: str | os.PathLike[str] | None = None) -> None:
    """Write settings to the config file, creating its directory if needed."""
    target = Path(path) if path is not None else config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(tomli_w.dumps(settings.to_dict()), encoding="utf-8")