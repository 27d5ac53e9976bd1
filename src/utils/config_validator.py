"""
Configuration Validator

Validates scrubber configuration values before they reach the scrubber math,
which does not guard its own inputs. Auto-fixes invalid values with warnings.
"""

import logging
import math
from typing import List, Tuple

logger = logging.getLogger(__name__)

QUARTER_TURN_DEGREES = 90.0
# Half of a 120 pt wheel
MAX_KNOB_INSET = 60.0


class ConfigValidationError:
    """Represents a configuration validation issue."""

    def __init__(self, key: str, current_value, recommended_value, reason: str, severity: str = "warning"):
        self.key = key
        self.current_value = current_value
        self.recommended_value = recommended_value
        self.reason = reason
        self.severity = severity  # "warning", "error", "info"

    def __str__(self):
        return (
            f"[{self.severity.upper()}] {self.key}={self.current_value} "
            f"(recommended: {self.recommended_value}) - {self.reason}"
        )


def validate_scrubber_config(config) -> List[ConfigValidationError]:
    """
    Validate wheel scrubber configuration.

    Checks for:
    - Non-positive or non-finite seconds per turn (breaks the angle mapping)
    - Negative or oversized dead zone
    - Non-finite or non-positive accessibility step
    - Negative, non-finite or oversized knob inset

    Args:
        config: Config object to validate

    Returns:
        List of ConfigValidationError objects (empty if all valid)
    """
    errors = []
    defaults = config._get_defaults()["Scrubber"]

    spt = config.seconds_per_turn
    if not math.isfinite(spt) or spt <= 0:
        errors.append(
            ConfigValidationError(
                key="Scrubber.seconds_per_turn",
                current_value=spt,
                recommended_value=defaults["seconds_per_turn"],
                reason="Seconds per turn must be a positive number",
                severity="error",
            )
        )

    dead_zone = config.dead_zone_degrees
    if not math.isfinite(dead_zone) or dead_zone < 0:
        errors.append(
            ConfigValidationError(
                key="Scrubber.dead_zone_degrees",
                current_value=dead_zone,
                recommended_value=defaults["dead_zone_degrees"],
                reason="Dead zone must be zero or positive",
                severity="error",
            )
        )
    elif dead_zone >= QUARTER_TURN_DEGREES:
        errors.append(
            ConfigValidationError(
                key="Scrubber.dead_zone_degrees",
                current_value=dead_zone,
                recommended_value=defaults["dead_zone_degrees"],
                reason="Dead zone of a quarter turn or more swallows the first tick",
                severity="warning",
            )
        )

    step = config.accessibility_step_seconds
    if not math.isfinite(step):
        errors.append(
            ConfigValidationError(
                key="Scrubber.accessibility_step_seconds",
                current_value=step,
                recommended_value=defaults["accessibility_step_seconds"],
                reason="Accessibility step must be a finite number",
                severity="error",
            )
        )
    elif step <= 0:
        errors.append(
            ConfigValidationError(
                key="Scrubber.accessibility_step_seconds",
                current_value=step,
                recommended_value=defaults["accessibility_step_seconds"],
                reason="Accessibility step must be positive or adjust actions do nothing",
                severity="warning",
            )
        )

    inset = config.knob_inset
    if not math.isfinite(inset) or inset < 0:
        errors.append(
            ConfigValidationError(
                key="Scrubber.knob_inset",
                current_value=inset,
                recommended_value=defaults["knob_inset"],
                reason="Knob inset must be zero or positive or the knob leaves the ring",
                severity="error",
            )
        )
    elif inset > MAX_KNOB_INSET:
        errors.append(
            ConfigValidationError(
                key="Scrubber.knob_inset",
                current_value=inset,
                recommended_value=defaults["knob_inset"],
                reason="Knob inset larger than half of a typical wheel collapses the ring to its centre",
                severity="warning",
            )
        )

    return errors


def validate_config(config, auto_fix: bool = True) -> Tuple[bool, List[ConfigValidationError]]:
    """
    Validate configuration and optionally auto-fix errors.

    Args:
        config: Config object to validate
        auto_fix: If True, reset values with severity "error" to their defaults

    Returns:
        Tuple of (is_valid, list_of_errors)
        is_valid is False only if there are unfixed errors
    """
    all_errors = validate_scrubber_config(config)

    if auto_fix and any(error.severity == "error" for error in all_errors):
        for error in all_errors:
            if error.severity != "error":
                continue
            logger.warning(f"Auto-fixing config: {error}")
            if error.key == "Scrubber.seconds_per_turn":
                config.seconds_per_turn = error.recommended_value
            elif error.key == "Scrubber.dead_zone_degrees":
                config.dead_zone_degrees = error.recommended_value
            elif error.key == "Scrubber.accessibility_step_seconds":
                config.accessibility_step_seconds = error.recommended_value
            elif error.key == "Scrubber.knob_inset":
                config.knob_inset = error.recommended_value

        # Re-validate to get fresh error list after fixes
        all_errors = validate_scrubber_config(config)

    for error in all_errors:
        if error.severity == "error":
            logger.error(str(error))
        elif error.severity == "warning":
            logger.warning(str(error))
        else:
            logger.info(str(error))

    is_valid = not any(error.severity == "error" for error in all_errors)
    return is_valid, all_errors
