"""The player's four weapons and the energy they draw on."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

from .keys import Button

__all__ = [
    "AttackState",
    "rapid_shot",
    "control_shot",
    "rocket_hand",
    "dash",
    "ATTACKS",
    "MAX_ENERGY",
    "RES_TIME",
    "DASH_SPEED",
]

MAX_ENERGY = 4
RES_TIME = 30
DASH_SPEED = 8.0
_RAPID_INTERVAL = 12
_DASH_TIME = 30
_DASH_RECOVERY_END = 36

_RAPID_BULLET = 0
_CONTROL_BULLET = 1
_ROCKET_BULLET = 2
_DASH_BULLET = 3

_EMPTY_SOUND = 3
_ROCKET_SOUND = 6
_RAPID_SOUND = 7
_CONTROL_SOUND = 8
_DASH_SOUND = 9


@dataclass
class AttackState:
    """Whether the player is attacking, for how long, and the energy left."""

    flag: bool = False
    time: int = 0
    stop: bool = False
    energy: int = MAX_ENERGY
    res_time: int = 0

    def finish(self) -> None:
        """End the current attack."""
        self.flag = False
        self.stop = False
        self.time = 0

    def spend(self, cost: int) -> None:
        """Use up energy and restart the recovery countdown."""
        self.energy -= cost
        self.res_time = RES_TIME

    def recover(self, max_energy: int, res_time: int) -> None:
        """Count down while idle and regain one energy point each time it runs out."""
        if self.flag or self.res_time <= 0:
            return
        self.res_time -= 1
        if self.res_time == 0 and self.energy < max_energy:
            self.energy += 1
            if self.energy < max_energy:
                self.res_time = res_time


def _shoot_angle(player: Any) -> float:
    return math.pi if player.reverse else 0.0


def _gone(bullet: Any) -> bool:
    """True once the player's bullet no longer exists."""
    return bullet is None or bool(getattr(bullet, "ended", False))


def rapid_shot(player: Any, bullets: Any, key: Any, sound: Any) -> None:
    """Fire a fast bullet every 12 frames while the attack button is held."""
    attack: AttackState = player.attack
    if not key.check(Button.ATTACK):
        attack.finish()
        return
    attack.flag = True
    attack.stop = True
    if attack.time % _RAPID_INTERVAL == 0:
        if 0 < attack.energy:
            bullets.set_bullet(_RAPID_BULLET, player.x, player.y, 16.0, _shoot_angle(player))
            sound.play_sound_effect(_RAPID_SOUND)
            attack.spend(1)
        else:
            sound.play_sound_effect(_EMPTY_SOUND)
    attack.time += 1


def control_shot(player: Any, bullets: Any, key: Any, sound: Any) -> None:
    """Fire one steerable bullet, kept while the attack button is held."""
    attack: AttackState = player.attack
    if not key.check(Button.ATTACK):
        player.bullet = None
        attack.finish()
        return
    attack.flag = True
    attack.stop = True
    if attack.time == 0:
        if 1 < attack.energy:
            player.bullet = bullets.set_bullet(
                _CONTROL_BULLET, player.x, player.y, 8.0, _shoot_angle(player)
            )
            sound.play_sound_effect(_CONTROL_SOUND)
            attack.spend(2)
        else:
            sound.play_sound_effect(_EMPTY_SOUND)
    attack.time += 1


def rocket_hand(player: Any, bullets: Any, key: Any, sound: Any) -> None:
    """Launch a fist and stay in the attack pose until it has gone."""
    attack: AttackState = player.attack
    if key.check_once(Button.ATTACK) and not attack.flag:
        if 1 < attack.energy:
            attack.flag = True
            attack.stop = True
            player.bullet = bullets.set_bullet(
                _ROCKET_BULLET, player.x, player.y, 16.0, _shoot_angle(player)
            )
            sound.play_sound_effect(_ROCKET_SOUND)
            attack.spend(2)
        else:
            sound.play_sound_effect(_EMPTY_SOUND)
    if attack.flag:
        attack.time += 1
        if _gone(player.bullet):
            player.bullet = None
            attack.finish()


def dash(player: Any, bullets: Any, key: Any, sound: Any) -> None:
    """Charge forward invincibly for 30 frames, then pause briefly."""
    attack: AttackState = player.attack
    if key.check_once(Button.ATTACK) and not attack.flag:
        if 1 < attack.energy:
            player.inv_time = player.damage_inv_time
            player.flying = True
            attack.flag = True
            attack.stop = False
            player.bullet = bullets.set_bullet(_DASH_BULLET, player.x, player.y, 0.0, 0.0)
            sound.play_sound_effect(_DASH_SOUND)
            attack.spend(2)
        else:
            sound.play_sound_effect(_EMPTY_SOUND)
    if not attack.flag:
        return
    if player.bullet is not None:
        player.bullet.x = player.x
        player.bullet.y = player.y
    if attack.time == _DASH_TIME:
        player.inv_time = 0
        player.flying = False
        attack.stop = True
        if player.bullet is not None:
            player.bullet.ended = True
        player.bullet = None
    elif attack.time < _DASH_TIME:
        player.sx = -DASH_SPEED if player.reverse else DASH_SPEED
        player.sy = 0.0
    elif _DASH_RECOVERY_END < attack.time:
        attack.finish()
    attack.time += 1


ATTACKS: tuple[Callable[[Any, Any, Any, Any], None], ...] = (
    rapid_shot,
    control_shot,
    rocket_hand,
    dash,
)