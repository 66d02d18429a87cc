"""Genetic algorithm for the vehicle routing problem with time windows."""

__version__ = "0.1.0"
__all__ = ["problem", "decode", "genetic", "cli"]