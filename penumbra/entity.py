"""Player and enemy entities and the kinds they come in."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .git_data import CommitData

_MAX_INVENTORY = 10


def _half(value: int) -> int:
    """Integer halving that truncates toward zero."""
    return int(value / 2)


class PlayerClass(Enum):
    """Player class; determines starting stats."""

    CODE_WARRIOR = "CodeWarrior"
    MEETING_SURVIVOR = "MeetingSurvivor"
    INBOX_KNIGHT = "InboxKnight"
    WANDERER = "Wanderer"

    @classmethod
    def detect(cls, commits: Sequence[CommitData]) -> PlayerClass:
        """Pick a class from commit patterns (commits oldest first)."""
        if not commits:
            return cls.WANDERER

        if len(commits) > 100:
            return cls.CODE_WARRIOR

        test_commits = sum("test" in c.message.lower() for c in commits)
        if test_commits / len(commits) > 0.3:
            return cls.INBOX_KNIGHT

        days_with_commits = len({c.date_naive() for c in commits})
        if len(commits) >= 2:
            span = commits[-1].date_naive() - commits[0].date_naive()
            total_days = abs(span.days) + 1
        else:
            total_days = 1

        if total_days > 5 and days_with_commits / total_days > 0.6:
            return cls.MEETING_SURVIVOR

        return cls.WANDERER


# hp bonus, focus bonus, damage bonus
_CLASS_BONUSES = {
    PlayerClass.CODE_WARRIOR: (0, 0, 10),
    PlayerClass.MEETING_SURVIVOR: (20, 0, 0),
    PlayerClass.INBOX_KNIGHT: (0, 10, 0),
    PlayerClass.WANDERER: (5, 5, 5),
}


class EnemyType(Enum):
    """Enemy kind; determines behaviour and stats."""

    BUG = "Bug"
    REGRESSION = "Regression"
    TECH_DEBT = "TechDebt"
    MERGE_CONFLICT = "MergeConflict"

    def base_hp(self) -> int:
        """Starting hit points of this enemy kind."""
        return _ENEMY_STATS[self][0]

    def base_damage(self) -> int:
        """Starting damage of this enemy kind."""
        return _ENEMY_STATS[self][1]

    def symbol(self) -> str:
        """Map character for this enemy kind."""
        return _ENEMY_STATS[self][2]


_ENEMY_STATS = {
    EnemyType.BUG: (10, 3, "B"),
    EnemyType.REGRESSION: (20, 5, "R"),
    EnemyType.TECH_DEBT: (30, 4, "D"),
    EnemyType.MERGE_CONFLICT: (50, 8, "M"),
}


@dataclass
class Enemy:
    """An enemy in the dungeon."""

    x: int
    y: int
    hp: int
    max_hp: int
    damage: int
    enemy_type: EnemyType
    source_commit: str
    turns_alive: int = 0

    @classmethod
    def create(cls, enemy_type: EnemyType, x: int, y: int, commit_hash: str) -> Enemy:
        """A fresh enemy of the given kind at full health."""
        hp = enemy_type.base_hp()
        return cls(
            x=x,
            y=y,
            hp=hp,
            max_hp=hp,
            damage=enemy_type.base_damage(),
            enemy_type=enemy_type,
            source_commit=commit_hash,
        )

    def take_damage(self, amount: int) -> bool:
        """Lose at least one hit point; return whether still alive."""
        self.hp -= max(amount, 1)
        return self.hp > 0

    def symbol(self) -> str:
        """Map character for this enemy."""
        return self.enemy_type.symbol()

    def at_half_health(self) -> bool:
        """Whether hit points are down to half the maximum or lower."""
        return self.hp <= _half(self.max_hp)


@dataclass
class Player:
    """The player character."""

    player_class: PlayerClass
    hp: int
    max_hp: int
    focus: int
    max_focus: int
    damage: int
    x: int = 1
    y: int = 1
    energy: int = 100
    max_energy: int = 100
    inventory: list[Any] = field(default_factory=list)
    level: int = 1
    xp: int = 0
    defending: bool = False

    @classmethod
    def create(cls, player_class: PlayerClass) -> Player:
        """A new level-one player with the stats of the given class."""
        hp_bonus, focus_bonus, damage_bonus = _CLASS_BONUSES[player_class]
        return cls(
            player_class=player_class,
            hp=50 + hp_bonus,
            max_hp=50 + hp_bonus,
            focus=50 + focus_bonus,
            max_focus=50 + focus_bonus,
            damage=10 + damage_bonus,
        )

    def take_damage(self, amount: int) -> bool:
        """Lose hit points (halved when defending); return whether still alive."""
        actual = _half(amount) if self.defending else amount
        self.hp -= max(actual, 1)
        self.defending = False
        return self.hp > 0

    def heal(self, amount: int) -> None:
        """Restore hit points up to the maximum."""
        self.hp = min(self.hp + amount, self.max_hp)

    def use_energy(self, amount: int) -> bool:
        """Spend energy if there is enough; return whether it was spent."""
        if self.energy >= amount:
            self.energy -= amount
            return True
        return False

    def regen_energy(self, amount: int) -> None:
        """Recover energy up to the maximum."""
        self.energy = min(self.energy + amount, self.max_energy)

    def add_xp(self, amount: int) -> bool:
        """Gain experience; return whether the player levelled up."""
        self.xp += amount
        threshold = self.level * 100
        if self.xp >= threshold:
            self.xp -= threshold
            self.level += 1
            self.max_hp += 10
            self.hp = self.max_hp
            return True
        return False

    def pickup_item(self, item: Any) -> bool:
        """Add an item to the inventory unless it is full."""
        if len(self.inventory) < _MAX_INVENTORY:
            self.inventory.append(item)
            return True
        return False