"""Command line entry: solve every instance file in a directory."""

from __future__ import annotations

import argparse
import random
import sys

from .decode import decode, report
from .genetic import GeneticAlgorithm, summarize
from .problem import find_instance_files, load_problem


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vrptw-ga",
        description="Solve vehicle routing instances with time windows by a genetic algorithm.",
    )
    parser.add_argument("directory", help="directory searched for instance files")
    parser.add_argument("-o", "--output", help="file the summaries are appended to")
    parser.add_argument("--suffix", default=".txt", help="instance file name suffix")
    parser.add_argument("--runs", type=int, default=1, help="runs per instance")
    parser.add_argument("--population", type=int, default=200)
    parser.add_argument("--generations", type=int, default=500)
    parser.add_argument("--crossover", type=float, default=0.7)
    parser.add_argument("--mutation", type=float, default=0.6)
    parser.add_argument("--elite", type=float, default=0.1)
    parser.add_argument("--seed", type=int, help="seed for reproducible runs")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print the best objective of every generation"
    )
    return parser


def _emit(output: str | None, line: str) -> None:
    if output is None:
        print(line)
        return
    with open(output, "a", encoding="utf-8") as handle:
        handle.write(line + "\n")


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.runs < 1:
        parser.error("--runs must be at least 1")

    rng = random.Random(args.seed)
    status = 0
    for position, path in enumerate(find_instance_files(args.directory, args.suffix), start=1):
        try:
            problem = load_problem(path)
        except (OSError, ValueError) as error:
            print(f"Failed to read the file {path}: {error}", file=sys.stderr)
            status = 1
            continue

        objectives = []
        try:
            for _ in range(args.runs):
                algorithm = GeneticAlgorithm(
                    problem,
                    population_size=args.population,
                    max_generations=args.generations,
                    crossover_rate=args.crossover,
                    mutation_rate=args.mutation,
                    elite_ratio=args.elite,
                    rng=rng,
                )
                best = algorithm.run()
                if args.verbose:
                    for generation, value in enumerate(algorithm.history):
                        print(f"{generation} {value:g}")
                print(report(problem, decode(problem, best.sequence, best.vehicles)))
                objectives.append(best.objective)
        except ValueError as error:
            print(f"Cannot solve {path}: {error}", file=sys.stderr)
            status = 1
            continue

        _emit(args.output, f"{position} {summarize(objectives)}")
    return status


if __name__ == "__main__":
    raise SystemExit(main())