"""
Time formatting helpers for transport and keyframe labels.

Seconds are always the internal unit; these are display-only conversions.
"""
import math
from typing import Optional


def format_clock(seconds: Optional[float]) -> str:
    """
    Format seconds as mm:ss (minutes wrap past the hour, as on the player bar).

    Unknown or invalid values render as 00:00.
    """
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return "00:00"
    total = int(seconds)
    minutes = (total // 60) % 60
    return f"{minutes:02d}:{total % 60:02d}"


def format_transport(current: Optional[float], duration: Optional[float]) -> str:
    """Format the 'current / duration' readout shown under the seek bar."""
    return f"{format_clock(current)} / {format_clock(duration)}"
