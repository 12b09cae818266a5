import datetime as dt

import pytest

from penumbra.entity import Enemy, EnemyType, Player, PlayerClass
from penumbra.git_data import CommitData

UTC = dt.timezone.utc


def commit(day_offset, message="work", hour=12):
    when = dt.datetime(2024, 3, 1, hour, tzinfo=UTC) + dt.timedelta(days=day_offset)
    return CommitData(hash=f"h{day_offset}-{hour}", date=when, message=message)


# --- PlayerClass.detect ---

def test_detect_empty_is_wanderer():
    assert PlayerClass.detect([]) is PlayerClass.WANDERER


def test_detect_many_commits_is_code_warrior():
    commits = [commit(0, hour=h % 24) for h in range(101)]
    assert PlayerClass.detect(commits) is PlayerClass.CODE_WARRIOR


def test_detect_exactly_hundred_is_not_code_warrior():
    commits = [commit(0, hour=h % 24) for h in range(100)]
    assert PlayerClass.detect(commits) is not PlayerClass.CODE_WARRIOR
    assert PlayerClass.detect(commits) is PlayerClass.WANDERER


def test_detect_test_heavy_is_inbox_knight():
    commits = [commit(i, "Add TEST for parser") for i in range(5)] + [commit(5, "fix")]
    assert PlayerClass.detect(commits) is PlayerClass.INBOX_KNIGHT


def test_detect_daily_commits_is_meeting_survivor():
    commits = [commit(i) for i in range(10)]
    assert PlayerClass.detect(commits) is PlayerClass.MEETING_SURVIVOR


def test_detect_sparse_commits_is_wanderer():
    commits = [commit(0), commit(9)]
    assert PlayerClass.detect(commits) is PlayerClass.WANDERER


def test_detect_short_span_is_wanderer():
    commits = [commit(i) for i in range(4)]
    assert PlayerClass.detect(commits) is PlayerClass.WANDERER


def test_player_class_values_match_names():
    assert PlayerClass("CodeWarrior") is PlayerClass.CODE_WARRIOR
    assert PlayerClass.MEETING_SURVIVOR.value == "MeetingSurvivor"


# --- EnemyType / Enemy ---

@pytest.mark.parametrize(
    "kind,symbol",
    [
        (EnemyType.BUG, "B"),
        (EnemyType.REGRESSION, "R"),
        (EnemyType.TECH_DEBT, "D"),
        (EnemyType.MERGE_CONFLICT, "M"),
    ],
)
def test_enemy_symbols(kind, symbol):
    assert kind.symbol() == symbol
    assert Enemy.create(kind, 0, 0, "abc").symbol() == symbol


@pytest.mark.parametrize(
    "kind,hp,damage",
    [
        (EnemyType.BUG, 10, 3),
        (EnemyType.REGRESSION, 20, 5),
        (EnemyType.TECH_DEBT, 30, 4),
        (EnemyType.MERGE_CONFLICT, 50, 8),
    ],
)
def test_enemy_base_stats(kind, hp, damage):
    assert kind.base_hp() == hp
    assert kind.base_damage() == damage


def test_merge_conflict_is_toughest():
    assert EnemyType.MERGE_CONFLICT.base_hp() > EnemyType.TECH_DEBT.base_hp()
    assert EnemyType.TECH_DEBT.base_hp() > EnemyType.REGRESSION.base_hp()
    assert EnemyType.REGRESSION.base_hp() > EnemyType.BUG.base_hp()


@pytest.mark.parametrize("kind", list(EnemyType))
def test_enemy_create_uses_base_stats(kind):
    enemy = Enemy.create(kind, 3, 4, "deadbeef")
    assert (enemy.x, enemy.y) == (3, 4)
    assert enemy.hp == enemy.max_hp == kind.base_hp()
    assert enemy.damage == kind.base_damage()
    assert enemy.source_commit == "deadbeef"
    assert enemy.turns_alive == 0


def test_enemy_take_damage_and_death():
    enemy = Enemy.create(EnemyType.BUG, 0, 0, "x")
    assert enemy.take_damage(4) is True
    assert enemy.hp == enemy.max_hp - 4
    assert enemy.take_damage(enemy.hp) is False
    assert enemy.hp <= 0


def test_enemy_take_damage_at_least_one():
    enemy = Enemy.create(EnemyType.BUG, 0, 0, "x")
    enemy.take_damage(0)
    assert enemy.hp == enemy.max_hp - 1


def test_enemy_at_half_health():
    enemy = Enemy.create(EnemyType.MERGE_CONFLICT, 0, 0, "x")
    assert enemy.at_half_health() is False
    enemy.hp = enemy.max_hp // 2
    assert enemy.at_half_health() is True


# --- Player ---

def test_player_create_defaults():
    player = Player.create(PlayerClass.WANDERER)
    assert player.level == 1
    assert player.xp == 0
    assert player.energy == player.max_energy
    assert player.hp == player.max_hp
    assert player.inventory == []
    assert player.defending is False
    assert player.player_class is PlayerClass.WANDERER


def test_player_class_bonuses():
    warrior = Player.create(PlayerClass.CODE_WARRIOR)
    survivor = Player.create(PlayerClass.MEETING_SURVIVOR)
    knight = Player.create(PlayerClass.INBOX_KNIGHT)
    wanderer = Player.create(PlayerClass.WANDERER)
    assert warrior.damage > wanderer.damage > survivor.damage
    assert survivor.max_hp > wanderer.max_hp > warrior.max_hp
    assert knight.max_focus > wanderer.max_focus > warrior.max_focus


def test_player_defending_halves_damage_and_resets():
    normal = Player.create(PlayerClass.WANDERER)
    guarded = Player.create(PlayerClass.WANDERER)
    guarded.defending = True
    normal.take_damage(10)
    guarded.take_damage(10)
    assert (guarded.max_hp - guarded.hp) * 2 == normal.max_hp - normal.hp
    assert guarded.defending is False


def test_player_take_damage_min_one_and_death():
    player = Player.create(PlayerClass.WANDERER)
    player.take_damage(0)
    assert player.hp == player.max_hp - 1
    assert player.take_damage(1000) is False


def test_player_heal_capped():
    player = Player.create(PlayerClass.WANDERER)
    player.take_damage(10)
    player.heal(3)
    assert player.hp == player.max_hp - 7
    player.heal(1000)
    assert player.hp == player.max_hp


def test_player_use_energy():
    player = Player.create(PlayerClass.WANDERER)
    assert player.use_energy(30) is True
    assert player.energy == player.max_energy - 30
    assert player.use_energy(player.energy + 1) is False
    assert player.energy == player.max_energy - 30


def test_player_regen_energy_capped():
    player = Player.create(PlayerClass.WANDERER)
    player.use_energy(5)
    player.regen_energy(2)
    assert player.energy == player.max_energy - 3
    player.regen_energy(50)
    assert player.energy == player.max_energy


def test_player_add_xp_level_up():
    player = Player.create(PlayerClass.WANDERER)
    start_max = player.max_hp
    player.take_damage(10)
    assert player.add_xp(99) is False
    assert player.add_xp(1) is True
    assert player.level == 2
    assert player.xp == 0
    assert player.max_hp == start_max + 10
    assert player.hp == player.max_hp


def test_player_add_xp_carries_remainder():
    player = Player.create(PlayerClass.WANDERER)
    assert player.add_xp(150) is True
    assert player.xp == 50
    assert player.add_xp(149) is False
    assert player.add_xp(1) is True
    assert player.level == 3


def test_player_inventory_limit():
    player = Player.create(PlayerClass.WANDERER)
    results = [player.pickup_item(f"item{i}") for i in range(11)]
    assert results == [True] * 10 + [False]
    assert len(player.inventory) == 10
    assert player.inventory[0] == "item0"