"""Player actions, their energy costs, and combat resolution."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .entity import Enemy, Player

MOVE_COST = 1
ATTACK_COST = 5
DEFEND_COST = 3
USE_ITEM_COST = 2
WAIT_REGEN = 2

_ENEMY_HIT_CHANCE = 0.80
_CRITICAL_CHANCE = 0.05


class _Random(Protocol):
    def random(self) -> float: ...


class ActionKind(Enum):
    """The kinds of action a player can take."""

    MOVE = "move"
    ATTACK = "attack"
    DEFEND = "defend"
    USE_ITEM = "use_item"
    WAIT = "wait"


_COSTS = {
    ActionKind.MOVE: MOVE_COST,
    ActionKind.ATTACK: ATTACK_COST,
    ActionKind.DEFEND: DEFEND_COST,
    ActionKind.USE_ITEM: USE_ITEM_COST,
    ActionKind.WAIT: 0,
}


@dataclass(frozen=True)
class PlayerAction:
    """An action the player takes, with its parameters."""

    kind: ActionKind
    dx: int = 0
    dy: int = 0
    direction: Any = None
    index: int = 0

    @classmethod
    def move(cls, dx: int, dy: int) -> PlayerAction:
        """Move by the given offset."""
        return cls(ActionKind.MOVE, dx=dx, dy=dy)

    @classmethod
    def attack(cls, direction: Any) -> PlayerAction:
        """Attack in a direction."""
        return cls(ActionKind.ATTACK, direction=direction)

    @classmethod
    def defend(cls) -> PlayerAction:
        """Take a defensive stance."""
        return cls(ActionKind.DEFEND)

    @classmethod
    def use_item(cls, index: int) -> PlayerAction:
        """Use the inventory item at an index."""
        return cls(ActionKind.USE_ITEM, index=index)

    @classmethod
    def wait(cls) -> PlayerAction:
        """Wait and regenerate energy."""
        return cls(ActionKind.WAIT)

    def energy_cost(self) -> int:
        """Energy this action costs; waiting costs nothing."""
        return _COSTS[self.kind]

    def is_movement(self) -> bool:
        """Whether this is a move."""
        return self.kind is ActionKind.MOVE

    def is_attack(self) -> bool:
        """Whether this is an attack."""
        return self.kind is ActionKind.ATTACK


@dataclass
class CombatResult:
    """Outcome of one attack."""

    hit: bool
    damage: int
    killed: bool
    critical: bool
    message: str


def _miss(message: str) -> CombatResult:
    return CombatResult(hit=False, damage=0, killed=False, critical=False, message=message)


def player_attack(player: Player, enemy: Enemy, rng: _Random | None = None) -> CombatResult:
    """Resolve the player's attack on an enemy, damaging the enemy."""
    rng = rng or random.Random()
    if rng.random() > calculate_hit_chance(player.focus):
        return _miss("You missed!")

    critical = rng.random() < _CRITICAL_CHANCE
    base_damage = calculate_damage(player.damage, player.level, False)
    damage = base_damage * 2 if critical else base_damage

    killed = not enemy.take_damage(damage)

    if killed:
        message = f"You dealt {damage} damage and killed the {enemy.enemy_type.symbol()}!"
    elif critical:
        message = f"Critical hit! You dealt {damage} damage!"
    else:
        message = f"You dealt {damage} damage."

    return CombatResult(hit=True, damage=damage, killed=killed, critical=critical, message=message)


def enemy_attack(enemy: Enemy, player: Player, rng: _Random | None = None) -> CombatResult:
    """Resolve an enemy's attack on the player, damaging the player."""
    rng = rng or random.Random()
    symbol = enemy.enemy_type.symbol()
    if rng.random() > _ENEMY_HIT_CHANCE:
        return _miss(f"The {symbol} missed!")

    damage = calculate_damage(enemy.damage, 1, player.defending)
    killed = not player.take_damage(damage)

    if killed:
        message = f"The {symbol} dealt {damage} damage. You died!"
    else:
        message = f"The {symbol} dealt {damage} damage."

    return CombatResult(hit=True, damage=damage, killed=killed, critical=False, message=message)


def calculate_hit_chance(focus: int) -> float:
    """Base 80%, plus 1% per 10 focus, kept between 5% and 95%."""
    chance = 0.80 + focus / 10.0 / 100.0
    return min(max(chance, 0.05), 0.95)


def calculate_damage(base: int, level: int, defending: bool) -> int:
    """Scale damage by +10% per level, halve it when defending; at least 1."""
    scaled = int(base * (1.0 + (level - 1.0) * 0.1))
    final_damage = int(scaled / 2) if defending else scaled
    return max(final_damage, 1)