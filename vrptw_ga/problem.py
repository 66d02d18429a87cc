"""Problem instances: depot, delivery stations, fleet limits and distances."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Station:
    """A delivery station; station 0 of an instance is the depot."""

    number: int
    x: int
    y: int
    demand: int
    early: float
    later: float
    service_time: int


@dataclass(frozen=True)
class Problem:
    """A vehicle routing instance with time windows."""

    vehicle_max: int
    capacity_max: int
    stations: tuple[Station, ...]
    _distances: tuple[tuple[float, ...], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        stations = tuple(self.stations)
        if self.vehicle_max < 1:
            raise ValueError("an instance needs at least one vehicle")
        if len(stations) < 2:
            raise ValueError("an instance needs a depot and at least one station")
        object.__setattr__(self, "stations", stations)
        distances = tuple(
            tuple(
                math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2) for b in stations
            )
            for a in stations
        )
        object.__setattr__(self, "_distances", distances)

    @property
    def station_count(self) -> int:
        """Number of delivery stations, the depot not counted."""
        return len(self.stations) - 1

    @property
    def depot(self) -> Station:
        return self.stations[0]

    @property
    def horizon(self) -> float:
        """Latest time a vehicle may be back at the depot."""
        return self.stations[0].later

    def distance(self, a: int, b: int) -> float:
        """Euclidean distance between stations ``a`` and ``b``."""
        return self._distances[a][b]


class _Tokens:
    def __init__(self, text: str) -> None:
        self._tokens = iter(text.split())

    def take(self, convert, what: str):
        try:
            token = next(self._tokens)
        except StopIteration:
            raise ValueError(f"instance ends before {what}") from None
        try:
            return convert(token)
        except ValueError:
            raise ValueError(f"bad {what}: {token!r}") from None


def parse_problem(text: str) -> Problem:
    """Parse an instance: vehicle count, capacity, station count, then one
    record per station (depot first) of number, x, y, demand, earliest time,
    latest time and service time."""
    tokens = _Tokens(text)
    vehicle_max = tokens.take(int, "vehicle count")
    capacity_max = tokens.take(int, "vehicle capacity")
    station_max = tokens.take(int, "station count")
    if station_max < 1:
        raise ValueError("an instance needs at least one station")
    stations = []
    for index in range(station_max + 1):
        what = f"station record {index}"
        stations.append(
            Station(
                number=tokens.take(int, f"{what} number"),
                x=tokens.take(int, f"{what} x"),
                y=tokens.take(int, f"{what} y"),
                demand=tokens.take(int, f"{what} demand"),
                early=tokens.take(float, f"{what} earliest time"),
                later=tokens.take(float, f"{what} latest time"),
                service_time=tokens.take(int, f"{what} service time"),
            )
        )
    return Problem(vehicle_max, capacity_max, tuple(stations))


def load_problem(path) -> Problem:
    """Read and parse an instance file."""
    return parse_problem(Path(path).read_text())


def find_instance_files(directory, suffix: str = ".txt") -> list[Path]:
    """List entries of ``directory`` whose names end with ``suffix``.

    Matching files are returned; matching subdirectories are searched in
    turn. Entries are visited in name order. A missing directory yields
    an empty list.
    """
    root = Path(directory)
    if not root.is_dir():
        return []
    found: list[Path] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if not entry.name.endswith(suffix):
            continue
        if entry.is_dir():
            found.extend(find_instance_files(entry, suffix))
        else:
            found.append(entry)
    return found