"""The player's jointed body: poses for each kind of movement and part placement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from .calculation import homing_spin

__all__ = ["MoveType", "Part", "Skeleton", "choose_move_type", "DASH_WEAPON"]

PI = math.pi
DASH_WEAPON = 3
_WALK_THRESHOLD = 0.8


class MoveType(IntEnum):
    """What the player is doing, which selects the pose."""

    STAND = 0
    WALK = 1
    JUMP = 2
    ATTACK = 3
    DASH = 4


@dataclass
class Part:
    """One body part, placed relative to the body by a fixed offset and a pivot."""

    def_angle: float = 0.0
    def_distance: float = 0.0
    spin_angle: float = 0.0
    spin_point: float = 0.0
    angle: float = 0.0
    total_angle: float = 0.0
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def at(cls, dx: float, dy: float, pivot_x: float = 0.0, pivot_y: float = 0.0) -> "Part":
        """A part offset by (dx, dy) from the body, turning about a pivot."""
        return cls(
            def_angle=math.atan2(dy, dx),
            def_distance=math.hypot(dx, dy),
            spin_angle=math.atan2(pivot_y, pivot_x),
            spin_point=math.hypot(pivot_x, pivot_y),
        )


def choose_move_type(attacking: bool, weapon: int, jumping: bool, sx: float) -> MoveType:
    """Pick the movement from the player's state, most specific first."""
    if attacking and weapon == DASH_WEAPON:
        return MoveType.DASH
    if attacking:
        return MoveType.ATTACK
    if jumping:
        return MoveType.JUMP
    if _WALK_THRESHOLD < abs(sx):
        return MoveType.WALK
    return MoveType.STAND


class Skeleton:
    """Head, body, two arms and two legs of the player character."""

    def __init__(self) -> None:
        self.head = Part.at(0.0, -30.0)
        self.body = Part.at(0.0, 8.0)
        self.right_leg = Part.at(8.0, 18.0, 12.0, 0.0)
        self.left_leg = Part.at(-8.0, 18.0, 12.0, 0.0)
        self.right_arm = Part.at(12.0, -12.0, 10.0, 0.0)
        self.left_arm = Part.at(-12.0, -12.0, 10.0, 0.0)

    @property
    def limbs(self) -> tuple[Part, Part, Part, Part]:
        """Right leg, left leg, right arm, left arm."""
        return (self.right_leg, self.left_leg, self.right_arm, self.left_arm)

    def reset_limbs(self) -> None:
        """Straighten the body and let every limb hang down."""
        self.body.angle = 0.0
        for limb in self.limbs:
            limb.angle = 0.5 * PI

    def pose(self, move_type: MoveType, move_time: int) -> None:
        """Move the part angles one frame towards the pose for ``move_type``."""
        body, ra, la, rl, ll = (
            self.body, self.right_arm, self.left_arm, self.right_leg, self.left_leg,
        )
        if move_type == MoveType.WALK:
            body.angle = homing_spin(body.angle, PI * 0.025, 0.0)
            swing = math.sin(PI * 2.0 / 60.0 * move_time)
            rl.angle = 0.5 * PI + 0.125 * PI * swing
            ra.angle = 0.5 * PI - 0.25 * PI * swing
            ll.angle = 0.5 * PI - 0.125 * PI * swing
            la.angle = 0.5 * PI + 0.25 * PI * swing
        elif move_type == MoveType.ATTACK:
            body.angle = homing_spin(body.angle, PI * 0.025, 0.0)
            ra.angle = 0.0
        elif move_type == MoveType.DASH:
            body.angle = homing_spin(body.angle, PI * 0.025, 0.125 * PI)
            ra.angle = homing_spin(ra.angle, PI * 0.125, 0.875 * PI)
            la.angle = homing_spin(la.angle, PI * 0.1, 0.875 * PI)
        elif move_type == MoveType.JUMP:
            body.angle = homing_spin(body.angle, PI * 0.025, 0.0)
            ra.angle = homing_spin(ra.angle, PI * 0.125, -0.475 * PI)
            la.angle = homing_spin(la.angle, PI * 0.125, -0.475 * PI)
            rl.angle = homing_spin(rl.angle, PI * 0.025, 0.625 * PI)
            ll.angle = homing_spin(ll.angle, PI * 0.025, 0.375 * PI)
        else:
            body.angle = homing_spin(body.angle, PI * 0.025, 0.0)
            for limb in self.limbs:
                limb.angle = homing_spin(limb.angle, PI * 0.05, 0.5 * PI)
        self.head.angle = 0.0

    def place(self, x: float, y: float, angle: float, reverse: bool) -> None:
        """Position every part for a character at (x, y) turned by ``angle``."""
        direction = -1.0 if reverse else 1.0
        body = self.body
        body.total_angle = (angle + body.angle) * direction
        sum_angle = (body.def_angle + body.total_angle) * direction
        body.x = x + body.def_distance * math.cos(sum_angle)
        body.y = y + body.def_distance * math.sin(sum_angle) * direction

        head = self.head
        head.total_angle = body.total_angle + head.angle
        sum_angle = head.def_angle + head.total_angle
        head.x = body.x + head.def_distance * math.cos(sum_angle)
        head.y = body.y + head.def_distance * math.sin(sum_angle)

        for limb in self.limbs:
            limb.total_angle = body.total_angle + limb.angle * direction
            sum_angle = body.total_angle + limb.def_angle * direction
            sum_spin = (limb.spin_angle + limb.total_angle) * direction
            limb.x = body.x + (
                limb.def_distance * math.cos(sum_angle) * direction
                + limb.spin_point * math.cos(sum_spin) * direction
            )
            limb.y = body.y + (
                limb.def_distance * math.sin(sum_angle) * direction
                + limb.spin_point * math.sin(sum_spin)
            )