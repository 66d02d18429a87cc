# vrptw-ga

A genetic algorithm for the capacitated vehicle routing problem with time
windows (VRPTW). A single depot serves a set of delivery stations, each with a
demand, an earliest and a latest time and a service duration. The algorithm
searches for an ordering of the stations and a selection of vehicles that
minimises

    30 × (vehicles selected) + total distance travelled

When the stations cannot all be placed, the distance term is replaced by a
fixed penalty of 50000, so such a solution scores 50000 plus the vehicle cost.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Instance files

An instance is a whitespace-separated text file. It begins with three
integers:

    <max vehicles> <vehicle capacity> <number of stations>

followed by one record per node, the depot first (node 0) and then every
station:

    <id> <x> <y> <demand> <earliest> <latest> <service time>

The earliest and latest times are read as numbers with a fractional part
allowed; all other fields are integers. Distances are Euclidean distances
between node coordinates. The depot's latest time is the planning horizon:
the time by which vehicles must be back at the depot. A file that ends early
or holds a field of the wrong kind raises `ValueError`.

## Command line

    vrptw-ga DIRECTORY [options]

The command searches `DIRECTORY` for entries whose names end with the suffix
(`.txt` by default), descending into matching subdirectories, and visits them
in name order. For each instance it runs the genetic algorithm `--runs` times,
prints a detailed report of the best schedule of every run, and then writes a
summary line

    <position> <best> <average> <standard deviation>

where `<position>` is the instance's 1-based place in the list. Summary lines
go to standard output, or are appended to the file given with `--output`.

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `-o`, `--output FILE` | standard output | append summary lines to `FILE` |
| `--suffix SUFFIX` | `.txt` | instance file name suffix |
| `--runs N` | 1 | runs per instance (at least 1) |
| `--population N` | 200 | population size |
| `--generations N` | 500 | generations per run |
| `--crossover P` | 0.7 | crossover probability |
| `--mutation P` | 0.6 | mutation probability |
| `--elite P` | 0.1 | share of the population kept unchanged |
| `--seed N` | none | seed for reproducible runs |
| `-v`, `--verbose` | off | print the best objective after every generation |

A file that cannot be read or parsed, or an instance the algorithm cannot
work on, is reported on standard error and skipped; the command then exits
with status 1, otherwise with 0.

## Library use

```python
import random

from vrptw_ga.problem import load_problem
from vrptw_ga.decode import decode, report
from vrptw_ga.genetic import GeneticAlgorithm

problem = load_problem("instances/c101.txt")

ga = GeneticAlgorithm(
    problem,
    population_size=200,
    max_generations=500,
    crossover_rate=0.7,
    mutation_rate=0.6,
    elite_ratio=0.1,
    rng=random.Random(1),
)
best = ga.run()
print(report(problem, decode(problem, best.sequence, best.vehicles)))
```

### `vrptw_ga.problem`

- `Station` — a node record: `number`, `x`, `y`, `demand`, `early`, `later`,
  `service_time`.
- `Problem` — `vehicle_max`, `capacity_max` and `stations` (depot first), with
  `station_count`, `depot`, `horizon` and `distance(a, b)`.
- `parse_problem(text)` parses instance text; `load_problem(path)` reads a file.
- `find_instance_files(directory, suffix=".txt")` lists matching files, sorted
  by name; a missing directory gives an empty list.

### `vrptw_ga.decode`

- `decode(problem, sequence, vehicles)` takes a permutation of the station
  numbers and a 0/1 mask with one entry per vehicle. Each 1 selects a vehicle.
  Stations are taken in order; the first goes to the first vehicle, and each
  later one is put into the first idle time block, on the first vehicle, where
  its time window and travel times allow it. A vehicle whose load already
  exceeds the capacity is passed over. Placement stops at the first station
  that fits nowhere. It returns a `Schedule` with `routes`, `arrivals`,
  `departures`, `loads`, `served`, `objective`, `feasible` and
  `vehicle_count`. A bad sequence, a mask of the wrong length or a mask
  selecting no vehicle raises `ValueError`.
- `report(problem, schedule)` returns a text description: the sequence, the
  routes, the objective, each station's window and service times, and counts
  of stations served within their window and of routes whose load is at most
  200.

### `vrptw_ga.genetic`

- `Chromosome` — `sequence`, `vehicles` and the decoded `objective`.
- `random_chromosome(problem, rng)` — random station order and a random
  number of vehicles selected from the front of the mask.
- `pox_crossover` and `jox_crossover(problem, parent1, parent2, rng)` — two
  order-preserving crossovers returning two children; the vehicle masks are
  mixed entry by entry. Both need at least four stations.
- `swap_mutation(problem, parent, rng)` — swaps two stations and draws a new
  vehicle selection.
- `GeneticAlgorithm` — `initialize()`, `tournament_select()`, `step()` and
  `run()`; after a run, `best`, `generation` and `history` (best objective
  after each generation) are available. Each generation keeps the best
  `elite_count` chromosomes (the `elite_ratio` share rounded up to an even
  number) and fills the rest by tournament selection, crossover and mutation.
- `summarize(objectives)` — a `RunSummary` of best, mean and population
  standard deviation.

## What it does not do

The package writes no route files and keeps no results beyond the summary
lines; schedules are only available as `Schedule` objects or as the text of
`report`. There is no plotting and no other instance format than the one
described above.