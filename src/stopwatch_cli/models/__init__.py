"""Domain models for Stopwatch CLI."""
