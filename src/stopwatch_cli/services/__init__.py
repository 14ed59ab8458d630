"""Services for Stopwatch CLI."""
