"""Math for the rotary wheel scrubber.

Converts an accumulated rotation angle (radians) into a playback time offset:
- Angle -> delta seconds (linear, one full turn = seconds_per_turn)
- Dead zone gate that ignores small rotations at gesture start
- Clamping of a candidate time into [0, duration]
- Quarter-turn tick index for feedback

All functions are pure. Invalid inputs (NaN, non-positive seconds_per_turn)
are not guarded and propagate through the float arithmetic.
"""

import math
from typing import Tuple

DEAD_ZONE_RADIANS = math.pi / 30.0
QUARTER_TURN_RADIANS = math.pi / 2.0
DEFAULT_SECONDS_PER_TURN = 12.0
DEFAULT_KNOB_INSET = 12.0


def angle_to_delta_seconds(delta_angle_radians: float, seconds_per_turn: float) -> float:
    """Convert a rotation angle to a signed time offset.

    Args:
        delta_angle_radians: Rotation since gesture start, any sign
        seconds_per_turn: Seconds of playback per full 360° turn (must be > 0)

    Returns:
        Signed offset in seconds
    """
    return (delta_angle_radians / (2.0 * math.pi)) * seconds_per_turn


def angle_to_delta_seconds_considering_dead_zone(
    delta_angle_radians: float,
    seconds_per_turn: float,
    dead_zone: float = DEAD_ZONE_RADIANS,
) -> float:
    """Like angle_to_delta_seconds, but returns 0.0 inside the dead zone.

    The dead zone is a gate, not an offset: once abs(angle) reaches the
    threshold the full angle is mapped, so the result jumps from 0 straight
    to the linear value.

    Args:
        delta_angle_radians: Rotation since gesture start, any sign
        seconds_per_turn: Seconds of playback per full turn (must be > 0)
        dead_zone: Non-negative threshold in radians (strict comparison)

    Returns:
        Signed offset in seconds, exactly 0.0 if abs(angle) < dead_zone
    """
    if abs(delta_angle_radians) < dead_zone:
        return 0.0
    return angle_to_delta_seconds(delta_angle_radians, seconds_per_turn)


def clamp_time(current: float, delta: float, duration: float) -> float:
    """Apply delta to current and clamp the result into [0, duration].

    Args:
        current: Time the offset is applied to, in seconds
        delta: Signed offset in seconds
        duration: Upper bound in seconds (>= 0)

    Returns:
        Target time within [0, duration]
    """
    target = current + delta
    if target < 0:
        return 0.0
    if target > duration:
        return duration
    return target


def tick_index(angle: float) -> int:
    """Number of whole quarter turns in abs(angle)."""
    return int(math.floor(abs(angle) / QUARTER_TURN_RADIANS))


def knob_position(size: float, angle: float, inset: float = DEFAULT_KNOB_INSET) -> Tuple[float, float]:
    """Centre of the knob on a square wheel of the given side length.

    The knob runs on a ring of radius size/2 - inset around the wheel centre,
    angle 0 pointing right and growing clockwise in screen coordinates.
    An inset of half the size or more puts the knob at the centre.
    """
    center = size / 2.0
    radius = max(center - inset, 0.0)
    return center + math.cos(angle) * radius, center + math.sin(angle) * radius
