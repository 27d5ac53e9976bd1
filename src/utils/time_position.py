"""Utility functions for showing playback times and progress.

Provides:
- Seconds -> "MM:SS" clock label (scrubber centre, accessibility value)
- Seconds -> "M:SS" elapsed label (recording list rows)
- Current/duration -> progress fraction for progress bars
"""

import math

MIN_PROGRESS_DURATION = 0.001


def _whole_seconds(seconds: float) -> int:
    # Half away from zero, not Python's banker's rounding
    return max(0, int(math.floor(seconds + 0.5)))


def format_clock(seconds: float) -> str:
    """Format a time as zero-padded minutes and seconds.

    Args:
        seconds: Time in seconds

    Returns:
        "MM:SS" string, "00:00" for NaN, infinite or negative input
    """
    if math.isnan(seconds) or math.isinf(seconds):
        return "00:00"
    total = _whole_seconds(seconds)
    return f"{total // 60:02d}:{total % 60:02d}"


def format_elapsed(seconds: float) -> str:
    """Format a time as "M:SS" without padding the minutes."""
    if math.isnan(seconds) or math.isinf(seconds):
        return "0:00"
    total = _whole_seconds(seconds)
    return f"{total // 60}:{total % 60:02d}"


def playback_progress(current: float, duration: float) -> float:
    """Convert a playback time to a progress fraction.

    Args:
        current: Current playback time in seconds
        duration: Total duration in seconds

    Returns:
        current / duration, with duration floored at 1 ms so an unknown
        or zero duration never divides by zero
    """
    return current / max(duration, MIN_PROGRESS_DURATION)
