[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vrptw-ga"
version = "0.1.0"
description = "Genetic algorithm for the vehicle routing problem with time windows"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "vehicle routing",
    "vrptw",
    "time windows",
    "genetic algorithm",
    "optimization",
    "metaheuristic",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vrptw-ga = "vrptw_ga.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vrptw_ga"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
