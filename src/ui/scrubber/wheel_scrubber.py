import logging
import math
from typing import Optional, Tuple
from PySide6.QtCore import QObject, Signal

from utils.scrub_math import (
    DEAD_ZONE_RADIANS,
    DEFAULT_KNOB_INSET,
    DEFAULT_SECONDS_PER_TURN,
    angle_to_delta_seconds_considering_dead_zone,
    clamp_time,
    knob_position,
    tick_index,
)
from utils.time_position import format_clock

logger = logging.getLogger(__name__)


def _check_duration(duration: float):
    if not math.isfinite(duration) or duration < 0:
        raise ValueError(f"duration must be a finite non-negative number, got {duration}")


class WheelScrubberController(QObject):
    """State behind the rotary scrubber.

    The view forwards rotation updates (accumulated radians since the gesture
    began) and the host player listens to seek_requested. Each gesture scrubs
    relative to the time at which it started, not the live playback time.
    """

    seek_requested = Signal(float)
    current_time_changed = Signal(float)
    tick = Signal(int)
    gesture_angle_changed = Signal(float)
    gesture_active_changed = Signal(bool)

    def __init__(
        self,
        duration: float = 0.0,
        current_time: float = 0.0,
        seconds_per_turn: float = DEFAULT_SECONDS_PER_TURN,
        dead_zone: float = DEAD_ZONE_RADIANS,
        accessibility_step: float = 1.0,
        knob_inset: float = DEFAULT_KNOB_INSET,
    ):
        super().__init__()
        if not math.isfinite(seconds_per_turn) or seconds_per_turn <= 0:
            raise ValueError(f"seconds_per_turn must be a positive number, got {seconds_per_turn}")
        if not math.isfinite(dead_zone) or dead_zone < 0:
            raise ValueError(f"dead_zone must be a non-negative number, got {dead_zone}")
        if not math.isfinite(knob_inset) or knob_inset < 0:
            raise ValueError(f"knob_inset must be a non-negative number, got {knob_inset}")
        if not math.isfinite(accessibility_step):
            raise ValueError(f"accessibility_step must be a finite number, got {accessibility_step}")
        if not math.isfinite(current_time):
            raise ValueError(f"current_time must be a finite number, got {current_time}")
        _check_duration(duration)

        self._duration = duration
        self._current_time = clamp_time(current_time, 0.0, duration)
        self.seconds_per_turn = seconds_per_turn
        self.dead_zone = dead_zone
        self.accessibility_step = accessibility_step
        self.knob_inset = knob_inset

        # Per-gesture state
        self._gesture_start_time: Optional[float] = None
        self._last_tick_index = 0
        self._gesture_radians = 0.0

    @classmethod
    def from_config(cls, config, duration: float = 0.0, current_time: float = 0.0) -> "WheelScrubberController":
        """Create a controller using the [Scrubber] section of config."""
        return cls(
            duration=duration,
            current_time=current_time,
            seconds_per_turn=config.seconds_per_turn,
            dead_zone=config.dead_zone_radians,
            accessibility_step=config.accessibility_step_seconds,
            knob_inset=config.knob_inset,
        )

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def gesture_radians(self) -> float:
        return self._gesture_radians

    @property
    def gesture_start_time(self) -> Optional[float]:
        return self._gesture_start_time

    @property
    def last_tick_index(self) -> int:
        return self._last_tick_index

    @property
    def is_gesture_active(self) -> bool:
        return self._gesture_start_time is not None

    @property
    def accessibility_value(self) -> str:
        return format_clock(self._current_time)

    @property
    def duration_label(self) -> str:
        return "/ " + format_clock(self._duration)

    def set_duration(self, duration: float):
        """Update the playable range, e.g. after new media was loaded."""
        _check_duration(duration)
        self._duration = duration
        if self._current_time > duration:
            self._set_current_time(duration)

    def set_current_time(self, current_time: float):
        """Sync with the host player's playback position. NaN/inf positions are ignored."""
        if not math.isfinite(current_time):
            logger.warning("Ignoring non-finite playback position: %s", current_time)
            return
        self._set_current_time(clamp_time(current_time, 0.0, self._duration))

    def _set_current_time(self, value: float):
        if value == self._current_time:
            return
        self._current_time = value
        self.current_time_changed.emit(value)

    def _target_for(self, angle: float) -> float:
        delta = angle_to_delta_seconds_considering_dead_zone(angle, self.seconds_per_turn, self.dead_zone)
        start = self._gesture_start_time if self._gesture_start_time is not None else self._current_time
        return clamp_time(start, delta, self._duration)

    def _emit_tick_if_needed(self, angle: float):
        ticks = tick_index(angle)
        if ticks > self._last_tick_index:
            self._last_tick_index = ticks
            self.tick.emit(ticks)

    def on_rotation_changed(self, angle: float) -> float:
        """Handle a rotation update and request a seek to the scrubbed time.

        Args:
            angle: Accumulated rotation since the gesture began, in radians

        Returns:
            The target time that was requested
        """
        if self._gesture_start_time is None:
            self._gesture_start_time = self._current_time
            self._last_tick_index = 0
            logger.debug("Scrub gesture started at %.3fs", self._current_time)
            self.gesture_active_changed.emit(True)

        self._gesture_radians = angle
        self.gesture_angle_changed.emit(angle)
        self._emit_tick_if_needed(angle)

        target = self._target_for(angle)
        self.seek_requested.emit(target)
        return target

    def on_rotation_ended(self, angle: float) -> float:
        """Commit the final angle of a gesture.

        Returns:
            The committed playback time
        """
        target = self._target_for(angle)
        logger.debug(
            "Scrub gesture ended: angle=%.3frad start=%s target=%.3fs", angle, self._gesture_start_time, target
        )
        self._set_current_time(target)
        self.seek_requested.emit(target)
        self._reset_gesture()
        return target

    def cancel_gesture(self):
        """Drop the current gesture without seeking."""
        if self._gesture_start_time is None:
            return
        logger.debug("Scrub gesture cancelled")
        self._reset_gesture()

    def _reset_gesture(self):
        was_active = self._gesture_start_time is not None
        self._gesture_start_time = None
        self._last_tick_index = 0
        if self._gesture_radians != 0.0:
            self._gesture_radians = 0.0
            self.gesture_angle_changed.emit(0.0)
        if was_active:
            self.gesture_active_changed.emit(False)

    def increment(self) -> float:
        """Accessibility adjust action: step forward."""
        return self._step(self.accessibility_step)

    def decrement(self) -> float:
        """Accessibility adjust action: step backward."""
        return self._step(-self.accessibility_step)

    def _step(self, delta: float) -> float:
        if delta == 0:
            return self._current_time
        target = clamp_time(self._current_time, delta, self._duration)
        self._set_current_time(target)
        self.seek_requested.emit(target)
        return target

    def knob_position(self, size: float) -> Tuple[float, float]:
        """Knob centre for a wheel of the given side length at the current gesture angle."""
        return knob_position(size, self._gesture_radians, self.knob_inset)
