"""Turn a station order and a vehicle selection into routes and a cost."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations, pairwise
from typing import Iterable, Mapping

from .problem import Problem

INFEASIBLE_PENALTY = 50000.0
VEHICLE_COST = 30
REPORT_CAPACITY = 200


@dataclass(frozen=True)
class Schedule:
    """Routes built by :func:`decode` and their objective value."""

    sequence: tuple[int, ...]
    routes: tuple[tuple[int, ...], ...]
    arrivals: Mapping[int, float]
    departures: Mapping[int, float]
    loads: tuple[int, ...]
    served: int
    objective: float

    @property
    def feasible(self) -> bool:
        return self.served == len(self.sequence)

    @property
    def vehicle_count(self) -> int:
        return len(self.routes)


@dataclass
class _Vehicle:
    horizon: float
    route: list[int] = field(default_factory=list)
    load: int = 0
    start: dict[int, float] = field(default_factory=dict)
    end: dict[int, float] = field(default_factory=dict)

    def idle_blocks(self) -> list[tuple[float, float]]:
        if not self.route:
            return [(0.0, self.horizon)]
        blocks = [(0.0, self.start[self.route[0]])]
        blocks.extend((self.end[a], self.start[b]) for a, b in pairwise(self.route))
        blocks.append((self.end[self.route[-1]], self.horizon))
        return blocks

    def add(self, problem: Problem, number: int, begin: float) -> None:
        station = problem.stations[number]
        self.route.append(number)
        self.load += station.demand
        self.start[number] = begin
        self.end[number] = begin + station.service_time
        route = self.route
        for i, j in combinations(range(len(route)), 2):
            if self.start[route[i]] > self.start[route[j]]:
                route[i], route[j] = route[j], route[i]

    def try_insert(self, problem: Problem, number: int) -> bool:
        station = problem.stations[number]
        for g, (low, high) in enumerate(self.idle_blocks()):
            if not (low <= station.later <= high or low <= station.early <= high):
                continue
            before = self.route[g - 1] if g > 0 else 0
            after = self.route[g] if g < len(self.route) else 0
            arrive = low + problem.distance(before, number)
            if arrive > high or arrive > station.later:
                continue
            begin = max(station.early, arrive)
            if begin + station.service_time + problem.distance(number, after) <= high:
                self.add(problem, number, begin)
                return True
        return False


def _place(problem: Problem, fleet: list[_Vehicle], number: int, check_first: bool):
    for index, vehicle in enumerate(fleet):
        if (index > 0 or check_first) and vehicle.load > problem.capacity_max:
            continue
        if vehicle.try_insert(problem, number):
            return index
    return None


def decode(problem: Problem, sequence: Iterable[int], vehicles: Iterable[int]) -> Schedule:
    """Assign stations in ``sequence`` order to the selected vehicles.

    ``vehicles`` is a 0/1 mask over the fleet; every 1 adds one vehicle.
    Each station is placed in the first idle time block, on the first
    vehicle, where it fits. Placement stops at the first station that
    fits nowhere, which makes the schedule infeasible.
    """
    order = tuple(sequence)
    if sorted(order) != list(range(1, problem.station_count + 1)):
        raise ValueError("sequence must be a permutation of the station numbers")
    mask = tuple(vehicles)
    if len(mask) != problem.vehicle_max:
        raise ValueError(
            f"vehicle mask has {len(mask)} entries, expected {problem.vehicle_max}"
        )
    count = sum(1 for flag in mask if flag == 1)
    if count == 0:
        raise ValueError("at least one vehicle must be selected")

    fleet = [_Vehicle(problem.horizon) for _ in range(count)]
    first = order[0]
    fleet[0].add(
        problem,
        first,
        max(problem.stations[first].early, problem.distance(0, first)),
    )
    served = 1
    check_first = True
    for number in order[1:]:
        placed = _place(problem, fleet, number, check_first)
        if placed is None:
            break
        served += 1
        check_first = placed != 0

    routes = tuple(tuple(vehicle.route) for vehicle in fleet)
    if served < len(order):
        objective = INFEASIBLE_PENALTY
    else:
        objective = sum(
            problem.distance(a, b)
            for route in routes
            if route
            for a, b in pairwise((0, *route, 0))
        )
    objective += count * VEHICLE_COST

    arrivals: dict[int, float] = {}
    departures: dict[int, float] = {}
    for vehicle in fleet:
        arrivals.update(vehicle.start)
        departures.update(vehicle.end)
    return Schedule(
        sequence=order,
        routes=routes,
        arrivals=arrivals,
        departures=departures,
        loads=tuple(vehicle.load for vehicle in fleet),
        served=served,
        objective=objective,
    )


def report(problem: Problem, schedule: Schedule) -> str:
    """Describe a schedule: routes, objective and per-station service times."""
    lines = [
        "sequence: " + ",".join(map(str, schedule.sequence)),
        f"served: {schedule.served}",
    ]
    lines.extend(
        f"route {position}: " + ",".join(map(str, route))
        for position, route in enumerate(schedule.routes, start=1)
    )
    lines.append(f"objective: {schedule.objective:g}")

    in_window = 0
    within_capacity = 0
    for route in schedule.routes:
        load = 0
        for number in route:
            station = problem.stations[number]
            begin = schedule.arrivals[number]
            end = schedule.departures[number]
            lines.append(
                f"station {number}: window {station.early:g}-{station.later:g}, "
                f"service {begin:g}-{end:g}"
            )
            if station.early <= begin <= station.later or station.early <= end <= station.later:
                in_window += 1
            load += station.demand
        if load <= REPORT_CAPACITY:
            within_capacity += 1
    lines.append(f"in window: {in_window}")
    lines.append(f"within capacity: {within_capacity}")
    return "\n".join(lines)