"""Map description files: chip catalogue, stage lists, layouts, warps and backgrounds."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

__all__ = [
    "MapChipData",
    "MapData",
    "EventData",
    "BackData",
    "WarpData",
    "WarpDoor",
    "ChipPlacement",
    "TILE_SIZE",
    "read_grid",
    "load_mapchip_data",
    "load_stage_list",
    "load_map_data",
    "load_warp_data",
    "load_back_data",
    "link_layout",
    "front_layout",
    "scroll_bounds",
    "event_positions",
    "warp_doors",
]

TILE_SIZE = 32.0
_EVENT_Y_OFFSET = 16.0
_EMPTY = -1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _lines(path: str | Path) -> list[str]:
    """Lines of a text file; raises FileNotFoundError when it is missing."""
    text = Path(path).read_text(encoding="utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def _fields(line: str, count: int) -> list[str]:
    """The first ``count`` comma-separated fields, missing ones empty."""
    fields = line.split(",")[:count]
    return fields + [""] * (count - len(fields))


def _cells(line: str) -> list[str]:
    """Comma-separated cells; a trailing comma does not add an empty cell."""
    if not line:
        return []
    cells = line.split(",")
    if cells[-1] == "":
        cells.pop()
    return cells


@dataclass(frozen=True)
class MapChipData:
    """Catalogue entry describing one kind of map chip."""

    type: int = 0
    image: int = 0
    size_x: int = 0
    size_y: int = 0
    through: bool = False
    breakable: int = 0
    hit_map: bool = False
    flying: bool = False
    friction: float = 0.0
    link_x1: int = 0
    link_x2: int = 0


@dataclass(frozen=True)
class MapData:
    """File names that together describe one map."""

    mapfile_name: str = ""
    mapfile_name2: str = ""
    scroll_name: str = ""
    back_name: str = ""
    enemy_name: str = ""
    item_name: str = ""
    warp_name: str = ""
    warp_data_name: str = ""
    event_name: str = ""
    event_data_name: str = ""


@dataclass
class EventData:
    """Where an event starts and whether it is still waiting to fire."""

    num: int
    x: float
    y: float
    flag: bool = True


@dataclass
class BackData:
    """One background layer."""

    image: int
    x: float = 0.0
    y: float = 0.0
    sx: float = 0.0
    sy: float = 0.0
    loop: bool = False


@dataclass(frozen=True)
class WarpData:
    """Destination and appearance of a warp door."""

    image: int = 0
    size_x: int = 0
    size_y: int = 0
    next_num: int = 0
    next_x: float = 0.0
    next_y: float = 0.0
    check_key: bool = False


@dataclass(frozen=True)
class WarpDoor:
    """A placed warp door referring to an entry in the warp data."""

    num: int
    x: float
    y: float


@dataclass(frozen=True)
class ChipPlacement:
    """A map chip to create: catalogue number, position and link settings."""

    num: int
    x: float
    y: float
    size_x: int
    link_x: int = 1
    link_img_x: tuple[int, int] = (-1, -1)
    hit_map: bool = True


def read_grid(path: str | Path) -> list[list[int]]:
    """Read a comma-separated grid of integers, one row per line."""
    return [[_atoi(cell) for cell in _cells(line)] for line in _lines(path)]


def load_mapchip_data(path: str | Path) -> dict[int, MapChipData]:
    """Read the chip catalogue, keyed by chip number."""
    catalogue: dict[int, MapChipData] = {}
    for line in _lines(path):
        if not line:
            continue
        f = _fields(line, 12)
        catalogue[_atoi(f[0])] = MapChipData(
            type=_atoi(f[1]),
            image=_atoi(f[2]),
            size_x=_atoi(f[3]),
            size_y=_atoi(f[4]),
            through=_atoi(f[5]) == 1,
            breakable=_atoi(f[6]),
            hit_map=_atoi(f[7]) == 1,
            flying=_atoi(f[8]) == 1,
            friction=_atof(f[9]),
            link_x1=_atoi(f[10]),
            link_x2=_atoi(f[11]),
        )
    return catalogue


def load_stage_list(path: str | Path) -> list[str]:
    """Read the list of stage files, one per line."""
    return _lines(path)


def load_map_data(path: str | Path) -> list[MapData]:
    """Read the maps of a stage, one line of ten file names per map."""
    maps: list[MapData] = []
    for line in _lines(path):
        f = _fields(line, 10)
        maps.append(MapData(*f))
    return maps


def load_warp_data(path: str | Path) -> list[WarpData]:
    """Read warp entries; they are referred to by their position in the file."""
    warps: list[WarpData] = []
    for line in _lines(path):
        f = _fields(line, 7)
        warps.append(
            WarpData(
                image=_atoi(f[1]),
                size_x=_atoi(f[2]),
                size_y=_atoi(f[3]),
                next_num=_atoi(f[4]),
                next_x=_atof(f[5]),
                next_y=_atof(f[6]),
            )
        )
    return warps


def load_back_data(path: str | Path) -> tuple[int, list[BackData]]:
    """Read the music number on the first line and a background layer per line after."""
    lines = _lines(path)
    if not lines:
        return 0, []
    bgm = _atoi(lines[0])
    layers = [BackData(image=_atoi(_fields(line, 1)[0])) for line in lines[1:]]
    return bgm, layers


def _chip(chip_data: Mapping[int, MapChipData], num: int) -> MapChipData:
    return chip_data.get(num, MapChipData())


def link_layout(
    grid: Sequence[Sequence[int]], chip_data: Mapping[int, MapChipData]
) -> list[ChipPlacement]:
    """Place the visible chips, joining horizontal runs of linkable tiles into one chip."""
    placements: list[ChipPlacement] = []
    for i, row in enumerate(grid):
        j = 0
        while j < len(row):
            num = row[j]
            if num == _EMPTY:
                j += 1
                continue
            data = _chip(chip_data, num)
            size_x = data.size_x
            plus_j = 1
            if data.link_x1 != -1 or data.link_x2 != -1:
                linked = (data.link_x1 + num, data.link_x2 + num)
                while j + plus_j < len(row) and row[j + plus_j] in linked:
                    size_x += _chip(chip_data, row[j + plus_j]).size_x
                    plus_j += 1
            placements.append(
                ChipPlacement(
                    num=num,
                    x=TILE_SIZE * j + 4.0 * size_x,
                    y=TILE_SIZE * i,
                    size_x=size_x,
                    link_x=plus_j,
                    link_img_x=(data.link_x1, data.link_x2),
                )
            )
            j += plus_j
    return placements


def front_layout(
    grid: Sequence[Sequence[int]], chip_data: Mapping[int, MapChipData]
) -> list[ChipPlacement]:
    """Place the hidden chips one per tile; they never collide with other chips."""
    return [
        ChipPlacement(
            num=num,
            x=TILE_SIZE * col + 4.0 * _chip(chip_data, num).size_x,
            y=TILE_SIZE * row,
            size_x=_chip(chip_data, num).size_x,
            hit_map=False,
        )
        for row, cells in enumerate(grid)
        for col, num in enumerate(cells)
        if num != _EMPTY
    ]


def scroll_bounds(
    grid: Sequence[Sequence[int]],
) -> tuple[int | None, int | None, int | None, int | None]:
    """Scroll limits (x_min, y_min, x_max, y_max) from the 0 and 1 markers.

    A 0 marks the top-left tile and a 1 the bottom-right tile; the last
    marker of each kind wins. Limits without a marker are None.
    """
    x_min = y_min = x_max = y_max = None
    for row, cells in enumerate(grid):
        for col, value in enumerate(cells):
            if value == 0:
                x_min, y_min = col * 32, row * 32
            elif value == 1:
                x_max, y_max = (col + 1) * 32, (row + 1) * 32
    return x_min, y_min, x_max, y_max


def event_positions(grid: Sequence[Sequence[int]]) -> list[EventData]:
    """Events waiting to fire at every tile that holds an event number."""
    return [
        EventData(num=num, x=TILE_SIZE * col, y=TILE_SIZE * row + _EVENT_Y_OFFSET)
        for row, cells in enumerate(grid)
        for col, num in enumerate(cells)
        if num != _EMPTY
    ]


def warp_doors(
    grid: Sequence[Sequence[int]], warp_data: Sequence[WarpData]
) -> list[WarpDoor]:
    """Place warp doors, each standing on the bottom of its tile."""
    doors: list[WarpDoor] = []
    for row, cells in enumerate(grid):
        for col, num in enumerate(cells):
            if num == _EMPTY:
                continue
            if not 0 <= num < len(warp_data):
                raise IndexError(f"warp door {num} has no warp data")
            warp = warp_data[num]
            doors.append(
                WarpDoor(
                    num=num,
                    x=TILE_SIZE * col + 4.0 * warp.size_x,
                    y=TILE_SIZE * row + TILE_SIZE - 4.0 * warp.size_y,
                )
            )
    return doors