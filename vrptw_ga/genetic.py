"""Genetic search over station orders and vehicle selections."""

from __future__ import annotations

import random
from dataclasses import dataclass
from operator import attrgetter
from statistics import fmean, pstdev
from typing import Iterable

from .decode import decode
from .problem import Problem

_MASK_SWAP_RATE = 0.2
_TOURNAMENT_BIAS = 0.8

_by_objective = attrgetter("objective")


@dataclass(frozen=True)
class Chromosome:
    """A station order, a 0/1 vehicle mask and the decoded objective."""

    sequence: tuple[int, ...]
    vehicles: tuple[int, ...]
    objective: float


@dataclass(frozen=True)
class RunSummary:
    """Best, mean and population standard deviation of several runs."""

    best: float
    average: float
    std: float

    def __str__(self) -> str:
        return f"{self.best:g} {self.average:g} {self.std:g}"


def _evaluate(problem: Problem, sequence: Iterable[int], vehicles: Iterable[int]) -> Chromosome:
    order = tuple(sequence)
    mask = tuple(vehicles)
    return Chromosome(order, mask, decode(problem, order, mask).objective)


def _flip(rng: random.Random, probability: float) -> bool:
    return rng.random() <= probability


def _prefix_mask(problem: Problem, rng: random.Random) -> tuple[int, ...]:
    used = rng.randrange(problem.vehicle_max) + 1
    return (1,) * used + (0,) * (problem.vehicle_max - used)


def _mix_masks(own, other, rng: random.Random) -> tuple[int, ...]:
    return tuple(b if _flip(rng, _MASK_SWAP_RATE) else a for a, b in zip(own, other))


def _cut_points(length: int, rng: random.Random) -> tuple[int, int]:
    if length < 4:
        raise ValueError("crossover needs at least four stations")
    while True:
        j1 = rng.randrange(length)
        j2 = rng.randrange(length)
        if 0 < j1 < j2 < length - 1:
            return j1, j2


def _check_parents(problem: Problem, parent1: Chromosome, parent2: Chromosome) -> int:
    length = problem.station_count
    if len(parent1.sequence) != length or len(parent2.sequence) != length:
        raise ValueError("parent sequences must cover every station")
    return length


def random_chromosome(problem: Problem, rng: random.Random) -> Chromosome:
    """Shuffle the stations with random swaps and select a random number of vehicles."""
    count = problem.station_count
    sequence = list(range(1, count + 1))
    for _ in range(count):
        a = rng.randrange(count)
        b = rng.randrange(count)
        sequence[a], sequence[b] = sequence[b], sequence[a]
    return _evaluate(problem, sequence, _prefix_mask(problem, rng))


def pox_crossover(
    problem: Problem, parent1: Chromosome, parent2: Chromosome, rng: random.Random
) -> tuple[Chromosome, Chromosome]:
    """Keep each parent's head and tail; refill the middle in the other parent's order."""
    length = _check_parents(problem, parent1, parent2)
    j1, j2 = _cut_points(length, rng)

    def child(keep: tuple[int, ...], donor: tuple[int, ...]) -> tuple[int, ...]:
        kept = set(keep[:j1]) | set(keep[j2:])
        middle = [gene for gene in donor if gene not in kept]
        return (*keep[:j1], *middle, *keep[j2:])

    sequence1 = child(parent1.sequence, parent2.sequence)
    sequence2 = child(parent2.sequence, parent1.sequence)
    mask1 = _mix_masks(parent1.vehicles, parent2.vehicles, rng)
    mask2 = _mix_masks(parent2.vehicles, parent1.vehicles, rng)
    return _evaluate(problem, sequence1, mask1), _evaluate(problem, sequence2, mask2)


def jox_crossover(
    problem: Problem, parent1: Chromosome, parent2: Chromosome, rng: random.Random
) -> tuple[Chromosome, Chromosome]:
    """Keep each parent's middle; fill the rest in the other parent's order."""
    length = _check_parents(problem, parent1, parent2)
    j1, j2 = _cut_points(length, rng)

    def child(keep: tuple[int, ...], donor: tuple[int, ...]) -> tuple[int, ...]:
        middle = keep[j1:j2]
        taken = set(middle)
        rest = [gene for gene in donor if gene not in taken]
        return (*rest[:j1], *middle, *rest[j1:])

    sequence1 = child(parent1.sequence, parent2.sequence)
    sequence2 = child(parent2.sequence, parent1.sequence)
    mask1 = _mix_masks(parent1.vehicles, parent2.vehicles, rng)
    mask2 = _mix_masks(parent2.vehicles, parent1.vehicles, rng)
    return _evaluate(problem, sequence1, mask1), _evaluate(problem, sequence2, mask2)


def _ordered_pair(length: int, rng: random.Random) -> tuple[int, int]:
    while True:
        a = rng.randrange(length)
        b = rng.randrange(length)
        if a < b:
            return a, b


def swap_mutation(problem: Problem, parent: Chromosome, rng: random.Random) -> Chromosome:
    """Swap two stations and draw a fresh vehicle selection."""
    length = len(parent.sequence)
    if length < 2:
        raise ValueError("mutation needs at least two stations")
    a1, a2 = _ordered_pair(length, rng)
    b1, b2 = _ordered_pair(length, rng)
    point1 = rng.randrange(a2 - a1)
    point2 = rng.randrange(b2 - b1)
    sequence = list(parent.sequence)
    sequence[point1], sequence[point2] = sequence[point2], sequence[point1]
    return _evaluate(problem, sequence, _prefix_mask(problem, rng))


def summarize(objectives: Iterable[float]) -> RunSummary:
    """Best, mean and population standard deviation of run results."""
    values = list(objectives)
    if not values:
        raise ValueError("no objectives to summarize")
    return RunSummary(best=min(values), average=fmean(values), std=pstdev(values))


class GeneticAlgorithm:
    """Elitist genetic algorithm with tournament selection."""

    def __init__(
        self,
        problem: Problem,
        population_size: int = 200,
        max_generations: int = 500,
        crossover_rate: float = 0.7,
        mutation_rate: float = 0.6,
        elite_ratio: float = 0.1,
        rng: random.Random | None = None,
    ) -> None:
        if population_size < 2:
            raise ValueError("population needs at least two chromosomes")
        if max_generations < 1:
            raise ValueError("at least one generation is required")
        for name, value in (
            ("crossover rate", crossover_rate),
            ("mutation rate", mutation_rate),
            ("elite ratio", elite_ratio),
        ):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie between 0 and 1")
        self.problem = problem
        self.population_size = population_size
        self.max_generations = max_generations
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.elite_ratio = elite_ratio
        self.rng = rng if rng is not None else random.Random()
        self.population: list[Chromosome] = []
        self.best: Chromosome | None = None
        self.generation = 0
        self.history: list[float] = []

    @property
    def elite_count(self) -> int:
        """Chromosomes carried over unchanged, rounded up to an even number."""
        top = int(self.population_size * self.elite_ratio)
        if top % 2 == 1:
            top += 1
        return min(top, self.population_size)

    def initialize(self) -> None:
        """Create a random population sorted by objective."""
        chromosomes = [
            random_chromosome(self.problem, self.rng) for _ in range(self.population_size)
        ]
        self.population = sorted(chromosomes, key=_by_objective)
        self.best = self.population[0]
        self.generation = 0
        self.history = []

    def _require_population(self) -> None:
        if not self.population:
            raise RuntimeError("call initialize() first")

    def tournament_select(self) -> int:
        """Index of the winner of a two-way tournament."""
        self._require_population()
        size = len(self.population)
        while True:
            first = self.rng.randrange(size)
            second = self.rng.randrange(size)
            if first != second:
                break
        if (
            self.population[first].objective <= self.population[second].objective
            and _flip(self.rng, _TOURNAMENT_BIAS)
        ):
            return first
        return second

    def _crossover(self, parent1: Chromosome, parent2: Chromosome):
        use_jox = self.rng.randrange(2) == 1
        if not _flip(self.rng, self.crossover_rate):
            return parent1, parent2
        operator = jox_crossover if use_jox else pox_crossover
        return operator(self.problem, parent1, parent2, self.rng)

    def _mutate(self, parent: Chromosome) -> Chromosome:
        if _flip(self.rng, self.mutation_rate):
            return swap_mutation(self.problem, parent, self.rng)
        return parent

    def step(self) -> Chromosome:
        """Produce the next generation and return the best chromosome so far."""
        self._require_population()
        old = self.population
        size = self.population_size
        top = self.elite_count
        offspring: list[Chromosome] = sorted(old, key=_by_objective)[:top]
        offspring.extend([old[0]] * (size - top))

        for slot in range(top, size - 1, 2):
            while True:
                mate1 = self.tournament_select()
                mate2 = self.tournament_select()
                if mate1 != mate2:
                    break
            offspring[slot], offspring[slot + 1] = self._crossover(old[mate1], old[mate2])

        # Mutation draws its parents from the previous generation, so it
        # replaces whatever crossover left in these slots.
        for slot in range(top, size):
            offspring[slot] = self._mutate(old[self.tournament_select()])

        self.population = offspring
        self.generation += 1
        leader = offspring[0]
        if self.best is None or leader.objective < self.best.objective:
            self.best = leader
        self.history.append(self.best.objective)
        return self.best

    def run(self) -> Chromosome:
        """Initialize and evolve for ``max_generations`` generations."""
        self.initialize()
        for _ in range(self.max_generations):
            self.step()
        assert self.best is not None
        return self.best