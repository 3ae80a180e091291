"""The player character: control, jumping, collision with the map and damage."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Any

from .attacks import ATTACKS, MAX_ENERGY, RES_TIME, AttackState
from .keys import Button
from .player_parts import MoveType, Skeleton, choose_move_type

__all__ = ["HitCircle", "Player", "MOVE_SPEED", "RECORD_LENGTH", "START_HP"]

MOVE_SPEED = 8.0
RECORD_LENGTH = 10
START_HP = 6
START_X = 128.0
START_Y = 128.0
DEFAULT_WEAPON_MAX = 4
_CANNON_DAMAGE = 65535
_FALL_MARGIN = 128.0
_JUMP_EFFECT = 10
_JUMP_SOUND = 5
_DAMAGE_SOUND = 10
_WEAPON_SOUND = 0


@dataclass
class HitCircle:
    """A circular hit area fixed at an offset from the character's centre."""

    angle: float
    distance: float
    size: float
    x: float = 0.0
    y: float = 0.0
    check_top: bool = True
    check_bottom: bool = True

    @classmethod
    def at(cls, dx: float, dy: float, size: float) -> "HitCircle":
        """A circle of radius ``size`` offset by (dx, dy)."""
        return cls(angle=math.atan2(dy, dx), distance=math.hypot(dx, dy), size=size)

    def follow(self, x: float, y: float) -> None:
        """Place the circle relative to a character at (x, y)."""
        self.x = x + self.distance * math.cos(self.angle)
        self.y = y + self.distance * math.sin(self.angle)


class Player:
    """The character the user controls."""

    def __init__(
        self,
        jump_speed: float,
        jump_time_max: int,
        damage_time_max: int,
        damage_inv_time: int,
    ) -> None:
        self.jump_speed = float(jump_speed)
        self.jump_time_max = jump_time_max
        self.damage_time_max = damage_time_max
        self.damage_inv_time = damage_inv_time

        self.skeleton = Skeleton()
        self.hits = (HitCircle.at(0.0, 0.0, 16.0), HitCircle.at(0.0, 32.0, 16.0))
        self.hits[0].check_bottom = False
        self.hits[1].check_top = False

        self.history: dict[Button, deque[bool]] = {
            b: deque([False] * RECORD_LENGTH, maxlen=RECORD_LENGTH) for b in Button
        }
        self.jump_book: deque[bool] = deque([False] * RECORD_LENGTH, maxlen=RECORD_LENGTH)
        self.jumped = False
        self.reverse = False
        self.jump_time = 0

        self.hp = 0
        self.attack = AttackState()
        self.reset()
        self.hp = START_HP
        self.weapon = 0

    def reset(self) -> None:
        """Put the player back at the start position with fresh state."""
        if self.hp <= 0:
            self.hp = START_HP
        self.x = START_X
        self.y = START_Y
        self.sx = 0.0
        self.sy = 0.0
        self.angle = 0.0
        self.spin_speed = 0.0
        self.move_time = 0
        self.move_type = MoveType.STAND
        self.jumping = False
        self.flying = False
        self.through = False
        self.damaged = False
        self.damage_time = 0
        self.inv_time = 0
        self.visible = True
        self.can_move = True
        self.key_num = 0
        self.weapon_max = DEFAULT_WEAPON_MAX

        sk = self.skeleton
        sk.body.angle = self.angle
        sk.right_leg.angle = self.angle
        sk.left_leg.angle = self.angle
        sk.right_arm.angle = 0.0
        sk.left_arm.angle = self.angle
        self._set_parts()

        self.bullet: Any = None
        self.step_mapchip: Any = None
        self.attack = AttackState(energy=MAX_ENERGY)
        self._hit_update()

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _pressed_earlier(record: deque[bool]) -> bool:
        return any(list(record)[1:])

    def _hit_update(self) -> None:
        for hit in self.hits:
            hit.follow(self.x, self.y)

    def _set_parts(self) -> None:
        self.skeleton.pose(self.move_type, self.move_time)
        self.skeleton.place(self.x, self.y, self.angle, self.reverse)

    def _set_graphic(self) -> None:
        new_type = choose_move_type(self.attack.flag, self.weapon, self.jumping, self.sx)
        if new_type == self.move_type:
            self.move_time += 1
            return
        self.move_type = new_type
        self.move_time = 0
        if new_type != MoveType.STAND:
            self.skeleton.reset_limbs()

    def _crush(self) -> None:
        self.hp = 0
        self.damaged = True
        self.sx = 0.0
        self.sy = 0.0

    def _stop_bounce(self) -> None:
        self.angle = 0.0
        self.spin_speed = 0.0
        self._hit_update()
        if not self.can_move:
            self.flying = False
            self.can_move = True

    def _take_damage(self, sound: Any) -> None:
        self.hp -= 1
        self.damaged = True
        self.damage_time = self.damage_time_max
        self.inv_time = self.damage_inv_time
        sound.play_sound_effect(_DAMAGE_SOUND)

    # -- per-frame behaviour -------------------------------------------------

    def _control(self, effects: Any, key: Any, sound: Any) -> None:
        if not self.can_move:
            self.attack.flag = False
            self.attack.time = 0
            return

        left = key.check(Button.LEFT)
        right = key.check(Button.RIGHT)
        if left and not self.attack.flag:
            self.reverse = True
        if right and not self.attack.flag:
            self.reverse = False

        sign = -1.0 if self.reverse else 1.0
        max_speed = sign * MOVE_SPEED
        start_speed = sign * 0.5
        accel = sign * 0.2
        slip = 0.9
        if self.step_mapchip is not None:
            slip += (1.0 - self.step_mapchip.friction) / 10.0

        if left == right or self.attack.flag:
            if abs(self.sx) <= MOVE_SPEED * 0.5 and not self.jumping:
                self.sx = 0.0
            else:
                self.sx *= slip
                if abs(self.sx) <= 0.1:
                    self.sx = 0.0
        else:
            if abs(self.sx) < abs(start_speed):
                self.sx = start_speed
            else:
                self.sx += abs(self.sx) * accel
            if abs(max_speed) < abs(self.sx):
                self.sx = max_speed

        if (
            key.check(Button.JUMP)
            and not self.jumping
            and not self.jumped
            and not self.attack.flag
            and (not self.history[Button.JUMP][0] or self._pressed_earlier(self.jump_book))
        ):
            self.jumping = True
            self.jump_time = 0
            self.jumped = True
            self.sy = -self.jump_speed
            effects.set_effect(_JUMP_EFFECT, self.x, self.y + 40.0, 0.25)
            effects.set_effect(_JUMP_EFFECT, self.x - 16.0, self.y + 32.0, 0.4)
            effects.set_effect(_JUMP_EFFECT, self.x + 16.0, self.y + 32.0, 0.4)
            sound.play_sound_effect(_JUMP_SOUND)

        if key.check_once(Button.DOWN) and not self.jumping and not self.through:
            self.through = True
            self.jumping = True
            self.jump_time = self.jump_time_max
            self.sy = self.jump_speed / 10.0

    def _damage_action(self) -> None:
        if self.damage_time == self.damage_time_max:
            self.sx = 0.0
            self.sy = 0.0
            self.move_type = MoveType.STAND
        self.damage_time -= 1
        if self.damage_time == 0:
            self.damaged = False

    def _record_keys(self, key: Any) -> None:
        for button in Button:
            self.history[button].appendleft(bool(key.check(button)))
        self.jump_book.appendleft(bool(key.check_once(Button.JUMP)))
        if self.jumped and not key.check(Button.JUMP):
            self.jumped = False

    def update(self, effects: Any, key: Any, sound: Any) -> None:
        """Handle input (or the damage reaction) for one frame."""
        if self.damaged:
            self._damage_action()
        else:
            self._control(effects, key, sound)
        self._record_keys(key)
        if 0 < self.inv_time:
            self.inv_time -= 1

    def adjust_position(self, map_manager: Any, event_flag: bool) -> None:
        """Move by the current speed and resolve collisions with the map."""
        feet = self.hits[1]
        mx = map_manager.plus_speed_x(feet.x, feet.y + 0.1, feet.size)
        my = map_manager.plus_speed_y(feet.x, feet.y + 0.1, feet.size)
        bottom = float(map_manager.window_y)

        self.angle += self.spin_speed

        self.x += self.sx + mx
        self._hit_update()

        left_hit = right_hit = False
        for hit in self.hits:
            chip = map_manager.hit_check_left(hit.x, hit.y, hit.size)
            while chip is not None:
                left_hit = True
                self.x += abs((hit.x - hit.size) - (chip.x + 4.0 * chip.size_x))
                self.sx = 0.0
                self._stop_bounce()
                chip = map_manager.hit_check_left(hit.x, hit.y, hit.size)
            chip = map_manager.hit_check_right(hit.x, hit.y, hit.size)
            while chip is not None:
                right_hit = True
                self.x -= abs((hit.x + hit.size) - (chip.x - 4.0 * chip.size_x))
                self.sx = 0.0
                self._stop_bounce()
                chip = map_manager.hit_check_right(hit.x, hit.y, hit.size)

        if left_hit and right_hit:
            self._crush()
            return

        if self.jumping:
            if self.history[Button.JUMP][0] and not self.damaged:
                self.jump_time += 1
            else:
                self.jump_time = self.jump_time_max

        if self.jumping and self.jump_time >= self.jump_time_max and not self.flying:
            if abs(self.sy) < 0.4:
                self.sy = 0.4
            self.sy += abs(self.sy * 0.3)
            if self.jump_speed < self.sy:
                self.sy = self.jump_speed

        self.y += self.sy + my
        self._hit_update()

        top_hit = bottom_hit = False
        for hit in self.hits:
            if not hit.check_top:
                continue
            chip = map_manager.hit_check_top(hit.x, hit.y, hit.size)
            while chip is not None:
                top_hit = True
                self.y += abs((hit.y - hit.size) - (chip.y + 8.0 * chip.size_y))
                self.sy = 0.0
                self._stop_bounce()
                chip = map_manager.hit_check_top(hit.x, hit.y, hit.size)

        for hit in self.hits:
            if not hit.check_bottom:
                continue
            chip = map_manager.hit_check_bottom(hit.x, hit.y, hit.size)
            if chip is not None:
                bottom_hit = True
            while (
                chip is not None
                and 0.0 < self.sy
                and not (chip.through and self.through)
            ):
                self.y -= abs((hit.y + hit.size) - chip.y)
                self.sy = 0.0
                self.jumping = False
                self._stop_bounce()
                chip = map_manager.hit_check_bottom(hit.x, hit.y, hit.size)

        if top_hit and bottom_hit:
            self._crush()
            return
        if bottom + _FALL_MARGIN < self.y:
            self._crush()
            return

        self._hit_update()
        self.step_mapchip = map_manager.hit_check_bottom(feet.x, feet.y + 1.0, feet.size)
        if self.step_mapchip is None and not self.jumping and not self.flying:
            self.jumping = True
            self.jump_time = self.jump_time_max
        if not bottom_hit:
            self.through = False

        map_manager.check_step(feet.x, feet.y + 1.0, feet.size)
        self._set_graphic()
        self._set_parts()

    def attack_check(self, bullets: Any, effects: Any, key: Any, sound: Any) -> None:
        """Switch weapons, run the selected attack and recover energy."""
        if key.check_once(Button.L) and not self.attack.flag:
            self.weapon -= 1
            sound.play_sound_effect(_WEAPON_SOUND)
        if key.check_once(Button.R) and not self.attack.flag:
            self.weapon += 1
            sound.play_sound_effect(_WEAPON_SOUND)
        if self.weapon < 0:
            self.weapon = self.weapon_max - 1
        if self.weapon_max <= self.weapon:
            self.weapon = 0

        if not self.can_move:
            return

        if 0 <= self.weapon < len(ATTACKS):
            ATTACKS[self.weapon](self, bullets, key, sound)
        self.attack.recover(MAX_ENERGY, RES_TIME)

    def hit_check_enemy(self, enemies: Any, effects: Any, sound: Any) -> None:
        """Take damage from touching an enemy; when fired from a cannon, deal it instead."""
        if 0 < self.inv_time:
            return
        damage = 0 if self.can_move else _CANNON_DAMAGE
        for hit in self.hits:
            if enemies.hit_check_chara(self.x, self.y, hit.size, effects, sound, damage):
                if self.can_move:
                    self._take_damage(sound)
                return

    def hit_check_bullet(self, bullets: Any, sound: Any) -> None:
        """Take damage from an enemy bullet."""
        if 0 < self.inv_time or not self.can_move:
            return
        for hit in self.hits:
            if 0 < bullets.hit_check_chara(self.x, self.y, hit.size, True, False):
                self._take_damage(sound)
                return

    def hit_check_item(self, cx: float, cy: float, hit_size: float) -> bool:
        """True if a circle at (cx, cy) touches one of the player's hit circles."""
        return any(
            math.hypot(cx - hit.x, cy - hit.y) <= hit_size + hit.size for hit in self.hits
        )