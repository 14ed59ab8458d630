"""Text formatting for elapsed times and the minute progress bar."""

import math

BAR_WIDTH = 50
SECONDS_PER_WINDOW = 60


def format_elapsed(seconds: float) -> str:
    """Format seconds as ``MM:SS.cc``.

    Minutes are not capped, so an hour reads as ``60:00.00``.
    """
    seconds = max(0.0, seconds)
    minutes = int(seconds) // 60
    remainder = math.fmod(seconds, 60.0)
    return f"{minutes:02d}:{remainder:05.2f}"


def progress_position(seconds: float, width: int = BAR_WIDTH) -> int:
    """Cursor cell for *seconds* within the current 60-second window."""
    return int((max(0.0, seconds) / SECONDS_PER_WINDOW) * width) % width


def format_progress_bar(seconds: float, width: int = BAR_WIDTH) -> str:
    """Render the minute progress bar, e.g. ``[=====>     ] 6s``."""
    progress = progress_position(seconds, width)
    cells = "=" * progress + ">" + " " * (width - progress - 1)
    return f"[{cells}] {int(max(0.0, seconds)) % 60}s"
