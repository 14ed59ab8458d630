"""Stopwatch CLI - an interactive terminal stopwatch with laps."""

__version__ = "0.1.0"
