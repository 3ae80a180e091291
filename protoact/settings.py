"""Persistent environment settings: FPS display and volumes."""

from __future__ import annotations

import re
from pathlib import Path

__all__ = ["EnvSetting", "DEFAULT_VOLUME"]

DEFAULT_VOLUME = 50

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


class EnvSetting:
    """Settings stored as three lines: fps flag, BGM volume, effect volume."""

    def __init__(self, path: str | Path = "config.dat") -> None:
        self.path = Path(path)
        self.fps_visible = False
        self.bgm_volume = DEFAULT_VOLUME
        self.sound_volume = DEFAULT_VOLUME
        self.load()

    def load(self) -> None:
        """Read the settings; a missing file is replaced by the defaults."""
        try:
            lines = self.path.read_text().splitlines()
        except OSError:
            self.fps_visible = False
            self.bgm_volume = DEFAULT_VOLUME
            self.sound_volume = DEFAULT_VOLUME
            self.save()
            return
        values = [_atoi(line) for line in lines[:3]]
        values += [0] * (3 - len(values))
        self.fps_visible = values[0] != 0
        self.bgm_volume = values[1]
        self.sound_volume = values[2]

    def save(self) -> None:
        """Write the settings to the file."""
        self.path.write_text(
            f"{int(self.fps_visible)}\n{self.bgm_volume}\n{self.sound_volume}\n"
        )