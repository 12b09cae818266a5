"""Persistent unlocks and upgrades that carry over between runs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from .entity import PlayerClass
from .save import save_dir

_COSTS = (10, 25, 50, 100, 200)
_TOP_COST = 500


def _count(data: dict[str, Any], name: str) -> int:
    if name not in data:
        raise KeyError(f"missing field {name!r}")
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeError(f"invalid value for {name!r}: {value!r}")
    return value


def _names(data: dict[str, Any], name: str) -> set[str]:
    if name not in data:
        raise KeyError(f"missing field {name!r}")
    value = data[name]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"invalid value for {name!r}: {value!r}")
    return set(value)


@dataclass
class Upgrades:
    """Permanent upgrades bought with essence."""

    MAX_HP: ClassVar[int] = 5
    MAX_ENERGY: ClassVar[int] = 5
    MAX_DAMAGE: ClassVar[int] = 3
    MAX_WEAPON: ClassVar[int] = 2
    MAX_LUCK: ClassVar[int] = 3

    hp_bonus: int = 0
    energy_bonus: int = 0
    damage_bonus: int = 0
    starting_weapon: int = 0
    loot_luck: int = 0

    @staticmethod
    def cost(level: int) -> int:
        """Essence needed to buy the next level of an upgrade."""
        return _COSTS[level] if 0 <= level < len(_COSTS) else _TOP_COST

    def bonus_hp(self) -> int:
        """Starting hit points added: 5 per level."""
        return self.hp_bonus * 5

    def bonus_energy(self) -> int:
        """Starting energy added: 2 per level."""
        return self.energy_bonus * 2

    def bonus_damage(self) -> int:
        """Starting damage added: 1 per level."""
        return self.damage_bonus

    def loot_luck_bonus(self) -> int:
        """Better-loot chance in percent: 5 per level."""
        return self.loot_luck * 5


@dataclass
class Progression:
    """Statistics and unlocks kept across all runs."""

    total_runs: int = 0
    victories: int = 0
    total_kills: int = 0
    total_rooms: int = 0
    essence: int = 0
    unlocked_classes: set[str] = field(default_factory=set)
    unlocked_items: set[str] = field(default_factory=set)
    upgrades: Upgrades = field(default_factory=Upgrades)
    best_rooms: int = 0
    fastest_victory: int | None = None

    @classmethod
    def starter(cls) -> Progression:
        """Fresh progression with the starter class unlocked."""
        return cls(unlocked_classes={PlayerClass.CODE_WARRIOR.value})

    def complete_run(self, victory: bool, kills: int, rooms: int, turns: int) -> None:
        """Record a finished run and award essence for it."""
        self.total_runs += 1
        self.total_kills += kills
        self.total_rooms += rooms

        earned = kills + rooms * 5
        if victory:
            self.victories += 1
            earned += 20
            if self.fastest_victory is None or turns < self.fastest_victory:
                self.fastest_victory = turns

        self.essence += earned
        self.best_rooms = max(self.best_rooms, rooms)

    def is_class_unlocked(self, player_class: PlayerClass) -> bool:
        """Whether a class is available."""
        return player_class.value in self.unlocked_classes

    def unlock_class(self, player_class: PlayerClass, cost: int) -> bool:
        """Spend essence to unlock a class; return whether it was unlocked."""
        if self.essence < cost or self.is_class_unlocked(player_class):
            return False
        self.essence -= cost
        self.unlocked_classes.add(player_class.value)
        return True

    def _buy(self, name: str, maximum: int) -> bool:
        level = getattr(self.upgrades, name)
        if level >= maximum:
            return False
        price = Upgrades.cost(level)
        if self.essence < price:
            return False
        self.essence -= price
        setattr(self.upgrades, name, level + 1)
        return True

    def upgrade_hp(self) -> bool:
        """Buy a level of bonus hit points."""
        return self._buy("hp_bonus", Upgrades.MAX_HP)

    def upgrade_energy(self) -> bool:
        """Buy a level of bonus energy."""
        return self._buy("energy_bonus", Upgrades.MAX_ENERGY)

    def upgrade_damage(self) -> bool:
        """Buy a level of bonus damage."""
        return self._buy("damage_bonus", Upgrades.MAX_DAMAGE)

    def upgrade_weapon(self) -> bool:
        """Buy a better starting weapon tier."""
        return self._buy("starting_weapon", Upgrades.MAX_WEAPON)

    def upgrade_loot_luck(self) -> bool:
        """Buy a level of loot luck."""
        return self._buy("loot_luck", Upgrades.MAX_LUCK)

    def to_dict(self) -> dict[str, Any]:
        """The progression as a JSON-ready mapping."""
        return {
            "total_runs": self.total_runs,
            "victories": self.victories,
            "total_kills": self.total_kills,
            "total_rooms": self.total_rooms,
            "essence": self.essence,
            "unlocked_classes": sorted(self.unlocked_classes),
            "unlocked_items": sorted(self.unlocked_items),
            "upgrades": {
                "hp_bonus": self.upgrades.hp_bonus,
                "energy_bonus": self.upgrades.energy_bonus,
                "damage_bonus": self.upgrades.damage_bonus,
                "starting_weapon": self.upgrades.starting_weapon,
                "loot_luck": self.upgrades.loot_luck,
            },
            "best_rooms": self.best_rooms,
            "fastest_victory": self.fastest_victory,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Progression:
        """Build progression from a mapping; raise KeyError or TypeError if invalid."""
        if not isinstance(data, dict):
            raise TypeError("progression must be an object")
        upgrades = data.get("upgrades")
        if "upgrades" not in data:
            raise KeyError("missing field 'upgrades'")
        if not isinstance(upgrades, dict):
            raise TypeError("upgrades must be an object")
        fastest = data.get("fastest_victory")
        if fastest is not None and (
            isinstance(fastest, bool) or not isinstance(fastest, int) or fastest < 0
        ):
            raise TypeError(f"invalid fastest victory: {fastest!r}")
        return cls(
            total_runs=_count(data, "total_runs"),
            victories=_count(data, "victories"),
            total_kills=_count(data, "total_kills"),
            total_rooms=_count(data, "total_rooms"),
            essence=_count(data, "essence"),
            unlocked_classes=_names(data, "unlocked_classes"),
            unlocked_items=_names(data, "unlocked_items"),
            upgrades=Upgrades(
                hp_bonus=_count(upgrades, "hp_bonus"),
                energy_bonus=_count(upgrades, "energy_bonus"),
                damage_bonus=_count(upgrades, "damage_bonus"),
                starting_weapon=_count(upgrades, "starting_weapon"),
                loot_luck=_count(upgrades, "loot_luck"),
            ),
            best_rooms=_count(data, "best_rooms"),
            fastest_victory=fastest,
        )


def progression_path() -> Path:
    """Location of the progression file."""
    return save_dir() / "progression.json"


def save_progression(prog: Progression) -> None:
    """Write progression to its file, creating the save directory if needed."""
    save_dir().mkdir(parents=True, exist_ok=True)
    progression_path().write_text(json.dumps(prog.to_dict(), indent=2), encoding="utf-8")


def load_progression() -> Progression:
    """Read progression from its file, or start fresh if there is none."""
    path = progression_path()
    if not path.exists():
        return Progression.starter()
    return Progression.from_dict(json.loads(path.read_text(encoding="utf-8")))