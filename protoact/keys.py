"""Button bindings and per-frame keyboard / gamepad state."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Mapping, Sequence

__all__ = [
    "Button",
    "KeyBinding",
    "Key",
    "KEY_COUNT",
    "PAD_BUTTON_COUNT",
    "DEFAULT_BINDINGS",
]

KEY_COUNT = 256
PAD_BUTTON_COUNT = 28

# Keyboard scan codes.
KEY_INPUT_A = 0x1E
KEY_INPUT_S = 0x1F
KEY_INPUT_D = 0x20
KEY_INPUT_Z = 0x2C
KEY_INPUT_X = 0x2D
KEY_INPUT_UP = 0xC8
KEY_INPUT_LEFT = 0xCB
KEY_INPUT_RIGHT = 0xCD
KEY_INPUT_DOWN = 0xD0

# Gamepad button bits.
PAD_INPUT_DOWN = 0x0001
PAD_INPUT_LEFT = 0x0002
PAD_INPUT_RIGHT = 0x0004
PAD_INPUT_UP = 0x0008
PAD_INPUT_1 = 0x0010
PAD_INPUT_2 = 0x0020
PAD_INPUT_3 = 0x0040
PAD_INPUT_4 = 0x0080
PAD_INPUT_5 = 0x0100


class Button(IntEnum):
    """Logical buttons used by the game."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    JUMP = 4
    ATTACK = 5
    L = 6
    R = 7
    PLUS = 8


@dataclass
class KeyBinding:
    """Keyboard scan code and gamepad bit bound to one button."""

    key: int
    pad: int


DEFAULT_BINDINGS: dict[Button, KeyBinding] = {
    Button.JUMP: KeyBinding(KEY_INPUT_Z, PAD_INPUT_1),
    Button.ATTACK: KeyBinding(KEY_INPUT_X, PAD_INPUT_2),
    Button.UP: KeyBinding(KEY_INPUT_UP, PAD_INPUT_UP),
    Button.DOWN: KeyBinding(KEY_INPUT_DOWN, PAD_INPUT_DOWN),
    Button.LEFT: KeyBinding(KEY_INPUT_LEFT, PAD_INPUT_LEFT),
    Button.RIGHT: KeyBinding(KEY_INPUT_RIGHT, PAD_INPUT_RIGHT),
    Button.L: KeyBinding(KEY_INPUT_A, PAD_INPUT_3),
    Button.R: KeyBinding(KEY_INPUT_S, PAD_INPUT_4),
    Button.PLUS: KeyBinding(KEY_INPUT_D, PAD_INPUT_5),
}

# Order in which bindings are stored in the configuration file.
_FILE_ORDER = (
    Button.JUMP,
    Button.ATTACK,
    Button.UP,
    Button.DOWN,
    Button.LEFT,
    Button.RIGHT,
    Button.L,
    Button.R,
    Button.PLUS,
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


class Key:
    """Tracks pressed keys and pad buttons across two consecutive frames."""

    def __init__(self, config_path: str | Path = "key_config.dat") -> None:
        self.config_path = Path(config_path)
        self._bindings = {b: KeyBinding(k.key, k.pad) for b, k in DEFAULT_BINDINGS.items()}
        self._keys: tuple[int, ...] = (0,) * KEY_COUNT
        self._old_keys: tuple[int, ...] = (0,) * KEY_COUNT
        self._pad = 0
        self._old_pad = 0
        self.load_setting()

    def load_setting(self) -> None:
        """Read bindings from the configuration file, or use the defaults."""
        try:
            lines = self.config_path.read_text().splitlines()
        except OSError:
            self._bindings = {
                b: KeyBinding(k.key, k.pad) for b, k in DEFAULT_BINDINGS.items()
            }
            return
        values = [_atoi(line) for line in lines]
        values += [0] * (2 * len(_FILE_ORDER) - len(values))
        count = len(_FILE_ORDER)
        for index, button in enumerate(_FILE_ORDER):
            self._bindings[button] = KeyBinding(values[index], values[count + index])

    def save_setting(self) -> None:
        """Write the bindings to the configuration file."""
        keys = [str(self._bindings[b].key) for b in _FILE_ORDER]
        pads = [str(self._bindings[b].pad) for b in _FILE_ORDER]
        self.config_path.write_text("".join(f"{v}\n" for v in keys + pads))

    def update(self, key_state: Sequence[int], pad_state: int) -> None:
        """Advance one frame with the current keyboard and pad state."""
        if len(key_state) > KEY_COUNT:
            raise ValueError(f"key_state holds more than {KEY_COUNT} entries")
        self._old_keys = self._keys
        self._old_pad = self._pad
        state = tuple(int(v) for v in key_state)
        self._keys = state + (0,) * (KEY_COUNT - len(state))
        self._pad = int(pad_state)

    def get_bindings(self) -> dict[Button, KeyBinding]:
        """Return a copy of the current bindings."""
        return {b: KeyBinding(k.key, k.pad) for b, k in self._bindings.items()}

    def set_bindings(self, bindings: Mapping[Button, KeyBinding]) -> None:
        """Replace the bindings for every button."""
        missing = [b.name for b in Button if b not in bindings]
        if missing:
            raise KeyError(f"no binding for {', '.join(missing)}")
        self._bindings = {b: KeyBinding(bindings[b].key, bindings[b].pad) for b in Button}

    def _pressed(self, button: Button, keys: Sequence[int], pad: int) -> bool:
        binding = self._bindings[Button(button)]
        return keys[binding.key] != 0 or bool(pad & binding.pad)

    def check(self, button: Button) -> bool:
        """True while the button is held."""
        return self._pressed(button, self._keys, self._pad)

    def check_once(self, button: Button) -> bool:
        """True only on the frame the button goes down."""
        return self._pressed(button, self._keys, self._pad) and not self._pressed(
            button, self._old_keys, self._old_pad
        )

    def check_let_go(self, button: Button) -> bool:
        """True only on the frame the button is released."""
        return not self._pressed(button, self._keys, self._pad) and self._pressed(
            button, self._old_keys, self._old_pad
        )

    def get_key_once(self) -> int | None:
        """Return the lowest scan code pressed this frame, or None."""
        return next(
            (
                code
                for code, (now, before) in enumerate(zip(self._keys, self._old_keys))
                if now != 0 and before == 0
            ),
            None,
        )

    def get_pad_once(self) -> int | None:
        """Return the bit of the lowest pad button pressed this frame, or None."""
        return next(
            (
                1 << i
                for i in range(PAD_BUTTON_COUNT)
                if self._pad & (1 << i) and not self._old_pad & (1 << i)
            ),
            None,
        )