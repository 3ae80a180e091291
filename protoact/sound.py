"""Background music and sound effect management over a pluggable audio backend."""

from __future__ import annotations

import itertools
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "SoundEntry",
    "AudioBackend",
    "MemoryAudioBackend",
    "Sound",
    "load_sound_catalogue",
]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _play_volume(volume: int) -> int:
    return int(255.0 * (volume / 100.0))


@dataclass(frozen=True)
class SoundEntry:
    """A catalogue line: file name and loop time."""

    name: str
    loop_time: int


def load_sound_catalogue(path: str | Path, prefix: str) -> dict[int, SoundEntry]:
    """Read ``number,file,loop_time`` lines; a missing file gives an empty catalogue."""
    try:
        text = Path(path).read_text()
    except OSError:
        return {}
    catalogue: dict[int, SoundEntry] = {}
    for line in text.splitlines():
        line = line.rstrip("\r\n")
        if not line:
            continue
        fields = line.split(",")
        fields += [""] * (3 - len(fields))
        catalogue[_atoi(fields[0])] = SoundEntry(prefix + fields[1], _atoi(fields[2]))
    return catalogue


class AudioBackend(ABC):
    """Loads and plays sounds identified by integer handles."""

    @abstractmethod
    def load(self, name: str) -> int: ...

    @abstractmethod
    def delete(self, handle: int) -> None: ...

    @abstractmethod
    def is_playing(self, handle: int) -> bool: ...

    @abstractmethod
    def set_volume(self, handle: int, volume: int) -> None: ...

    @abstractmethod
    def play(self, handle: int, loop: bool) -> None: ...

    @abstractmethod
    def stop(self, handle: int) -> None: ...


class MemoryAudioBackend(AudioBackend):
    """Backend that only records what it is asked to do."""

    def __init__(self) -> None:
        self.loaded: dict[int, str] = {}
        self.volumes: dict[int, int] = {}
        self.playing: set[int] = set()
        self.history: list[tuple[int, bool]] = []
        self._handles = itertools.count(1)

    def load(self, name: str) -> int:
        handle = next(self._handles)
        self.loaded[handle] = name
        return handle

    def delete(self, handle: int) -> None:
        self.loaded.pop(handle, None)
        self.volumes.pop(handle, None)
        self.playing.discard(handle)

    def is_playing(self, handle: int) -> bool:
        return handle in self.playing

    def set_volume(self, handle: int, volume: int) -> None:
        self.volumes[handle] = volume

    def play(self, handle: int, loop: bool) -> None:
        if handle not in self.loaded:
            raise KeyError(f"unknown sound handle {handle}")
        self.playing.add(handle)
        self.history.append((handle, loop))

    def stop(self, handle: int) -> None:
        self.playing.discard(handle)


class Sound:
    """Background music and sound effects read from catalogue files."""

    def __init__(self, backend: AudioBackend, data_dir: str | Path = "data") -> None:
        self.backend = backend
        self.sound_volume = 0
        self._bgm_volume = 0
        self.playing_bgm: int | None = None
        self.loaded_bgm: dict[int, int] = {}
        self.loaded_effects: dict[int, int] = {}
        self.effect_data: dict[int, SoundEntry] = {}

        data_dir = Path(data_dir)
        bgm_path = data_dir / "bgm" / "bgm_data.csv"
        self.bgm_data = load_sound_catalogue(bgm_path, f"{data_dir / 'bgm'}/")
        if not bgm_path.is_file():
            return
        self.effect_data = load_sound_catalogue(
            data_dir / "sound" / "sound_data.csv", f"{data_dir / 'sound'}/"
        )

    @property
    def bgm_volume(self) -> int:
        return self._bgm_volume

    def load_sound_effects(self) -> None:
        """Load every sound effect in the catalogue."""
        for num, entry in self.effect_data.items():
            self.loaded_effects[num] = self.backend.load(entry.name)

    def load_bgm(self, num: int) -> None:
        """Load one piece of music if it is catalogued and not yet loaded."""
        if num not in self.bgm_data or num in self.loaded_bgm:
            return
        self.loaded_bgm[num] = self.backend.load(self.bgm_data[num].name)

    def set_bgm_volume(self, volume: int) -> None:
        """Set the music volume (0-100), applying it to the playing piece."""
        self._bgm_volume = volume
        if self.playing_bgm is None:
            return
        handle = self.loaded_bgm.get(self.playing_bgm)
        if handle is not None and self.backend.is_playing(handle):
            self.backend.set_volume(handle, _play_volume(volume))

    def play_sound_effect(self, num: int) -> None:
        """Play a loaded sound effect once."""
        handle = self.loaded_effects.get(num)
        if handle is None:
            return
        self.backend.set_volume(handle, _play_volume(self.sound_volume))
        self.backend.play(handle, loop=False)

    def play_bgm(self, num: int) -> None:
        """Loop a loaded piece of music unless it is already playing."""
        handle = self.loaded_bgm.get(num)
        if handle is None or self.backend.is_playing(handle):
            return
        self.stop_bgm()
        self.backend.set_volume(handle, _play_volume(self._bgm_volume))
        self.backend.play(handle, loop=True)
        self.playing_bgm = num

    def stop_bgm(self, num: int | None = None) -> None:
        """Stop one piece of music, or every piece that is playing."""
        if num is not None:
            handle = self.loaded_bgm.get(num)
            if handle is not None:
                self.backend.stop(handle)
            return
        for handle in self.loaded_bgm.values():
            if self.backend.is_playing(handle):
                self.backend.stop(handle)

    def close(self) -> None:
        """Stop and release everything that was loaded."""
        self.stop_bgm()
        for handle in self.loaded_bgm.values():
            self.backend.delete(handle)
        self.loaded_bgm.clear()
        for handle in self.loaded_effects.values():
            self.backend.delete(handle)
        self.loaded_effects.clear()
        self.effect_data.clear()
        self.bgm_data.clear()

    def __enter__(self) -> "Sound":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()