import pytest

from protoact.attacks import MAX_ENERGY
from protoact.keys import Button
from protoact.player import MOVE_SPEED, START_HP, Player

JUMP_SPEED = 16.0
DAMAGE_TIME = 20
INV_TIME = 60


class FakeKey:
    def __init__(self, held=(), once=()):
        self.held = set(held)
        self.once = set(once)

    def check(self, button):
        return button in self.held

    def check_once(self, button):
        return button in self.once


class FakeSound:
    def __init__(self):
        self.played = []

    def play_sound_effect(self, num):
        self.played.append(num)


class FakeEffects:
    def __init__(self):
        self.made = []

    def set_effect(self, kind, x, y, scale):
        self.made.append(kind)


class FakeBullet:
    def __init__(self, kind):
        self.kind = kind
        self.ended = False
        self.x = self.y = 0.0


class FakeBullets:
    def __init__(self, hits=0):
        self.fired = []
        self.hits = hits

    def set_bullet(self, kind, x, y, speed, angle):
        bullet = FakeBullet(kind)
        self.fired.append(bullet)
        return bullet

    def hit_check_chara(self, x, y, size, player_side, absolute):
        return self.hits


class FakeEnemies:
    def __init__(self, touching):
        self.touching = touching
        self.damages = []

    def hit_check_chara(self, x, y, size, effects, sound, damage):
        self.damages.append(damage)
        return self.touching


class FloorChip:
    x = 128.0
    size_x = 4
    size_y = 1
    through = False
    friction = 1.0

    def __init__(self, y):
        self.y = y


class FakeMap:
    def __init__(self, floor_y=None, window_y=480):
        self.floor = None if floor_y is None else FloorChip(floor_y)
        self.window_y = window_y

    def plus_speed_x(self, cx, cy, size):
        return 0.0

    def plus_speed_y(self, cx, cy, size):
        return 0.0

    def hit_check_left(self, cx, cy, size):
        return None

    def hit_check_right(self, cx, cy, size):
        return None

    def hit_check_top(self, cx, cy, size):
        return None

    def hit_check_bottom(self, cx, cy, size):
        if self.floor is not None and abs(cy - self.floor.y) < size:
            return self.floor
        return None

    def check_step(self, cx, cy, size):
        pass


@pytest.fixture
def player():
    return Player(JUMP_SPEED, 10, DAMAGE_TIME, INV_TIME)


def test_initial_state(player):
    assert player.hp == START_HP
    assert player.weapon == 0
    assert (player.x, player.y) == (128.0, 128.0)
    assert player.attack.energy == MAX_ENERGY
    assert not player.hits[0].check_bottom
    assert not player.hits[1].check_top
    assert player.hits[1].y == pytest.approx(player.y + 32.0)


def test_reset_restores_hp_only_when_dead(player):
    player.hp = 3
    player.reset()
    assert player.hp == 3
    player.hp = 0
    player.reset()
    assert player.hp == START_HP


def test_hit_check_item(player):
    assert player.hit_check_item(player.x + 20.0, player.y, 4.0)
    assert not player.hit_check_item(player.x + 500.0, player.y, 4.0)


def test_walk_right_then_left(player):
    player.update(FakeEffects(), FakeKey(held={Button.RIGHT}), FakeSound())
    assert player.sx == 0.5
    assert not player.reverse
    for _ in range(50):
        player.update(FakeEffects(), FakeKey(held={Button.RIGHT}), FakeSound())
    assert player.sx == MOVE_SPEED
    player.sx = 0.0
    player.update(FakeEffects(), FakeKey(held={Button.LEFT}), FakeSound())
    assert player.sx == -0.5
    assert player.reverse


def test_release_stops_slow_walk(player):
    player.sx = 1.0
    player.update(FakeEffects(), FakeKey(), FakeSound())
    assert player.sx == 0.0


def test_jump(player):
    effects, sound = FakeEffects(), FakeSound()
    player.update(effects, FakeKey(held={Button.JUMP}, once={Button.JUMP}), sound)
    assert player.jumping
    assert player.sy == -JUMP_SPEED
    assert effects.made == [10, 10, 10]
    assert sound.played == [5]


def test_damage_action(player):
    player.damaged = True
    player.damage_time = DAMAGE_TIME
    player.sx = 5.0
    player.update(FakeEffects(), FakeKey(held={Button.RIGHT}), FakeSound())
    assert player.sx == 0.0
    assert player.damage_time == DAMAGE_TIME - 1


def test_enemy_contact_hurts_then_invincible(player):
    sound = FakeSound()
    enemies = FakeEnemies(True)
    player.hit_check_enemy(enemies, FakeEffects(), sound)
    assert player.hp == START_HP - 1
    assert player.damaged
    assert player.inv_time == INV_TIME
    assert sound.played == [10]
    player.hit_check_enemy(enemies, FakeEffects(), sound)
    assert player.hp == START_HP - 1


def test_cannon_flight_deals_damage(player):
    player.can_move = False
    enemies = FakeEnemies(True)
    player.hit_check_enemy(enemies, FakeEffects(), FakeSound())
    assert enemies.damages == [65535]
    assert player.hp == START_HP


def test_bullet_hit(player):
    player.hit_check_bullet(FakeBullets(hits=1), FakeSound())
    assert player.hp == START_HP - 1
    assert player.inv_time == INV_TIME


def test_no_bullet_hit(player):
    player.hit_check_bullet(FakeBullets(hits=0), FakeSound())
    assert player.hp == START_HP
    assert not player.damaged


def test_weapon_cycling(player):
    sound = FakeSound()
    player.attack_check(FakeBullets(), FakeEffects(), FakeKey(once={Button.L}), sound)
    assert player.weapon == player.weapon_max - 1
    player.attack_check(FakeBullets(), FakeEffects(), FakeKey(once={Button.R}), sound)
    assert player.weapon == 0
    assert sound.played[:2] == [0, 0]


def test_attack_check_fires_selected_weapon(player):
    bullets = FakeBullets()
    player.attack_check(bullets, FakeEffects(), FakeKey(held={Button.ATTACK}), FakeSound())
    assert [b.kind for b in bullets.fired] == [0]
    assert player.attack.energy == MAX_ENERGY - 1


def test_attack_check_blocked_when_immobile(player):
    bullets = FakeBullets()
    player.can_move = False
    player.attack_check(bullets, FakeEffects(), FakeKey(held={Button.ATTACK}), FakeSound())
    assert bullets.fired == []


def test_lands_on_floor(player):
    world = FakeMap(floor_y=200.0)
    for _ in range(200):
        player.adjust_position(world, False)
        if player.step_mapchip is not None and not player.jumping:
            break
    assert not player.jumping
    assert player.sy == 0.0
    assert player.hits[1].y + player.hits[1].size == pytest.approx(200.0)
    assert player.step_mapchip is world.floor


def test_falling_off_screen_kills(player):
    world = FakeMap(window_y=100)
    for _ in range(200):
        player.adjust_position(world, False)
        if player.hp == 0:
            break
    assert player.hp == 0
    assert player.damaged
    assert player.y > 100 + 128.0