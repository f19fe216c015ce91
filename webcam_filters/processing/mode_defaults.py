"""
Default threshold/max-value pairs per binarization mode.

When the user moves the "Binarization Type" slider, the threshold and
max value sliders jump to values that give a visible result for the new
mode. Truncate and to-zero modes ignore max value, so it is parked at 0.

Defaults are applied on the transition only; afterwards the user is free
to move the sliders again.
"""
from enum import IntEnum
from typing import Dict, Optional, Tuple
import logging

from webcam_filters.core import ParameterSet

logger = logging.getLogger(__name__)


class BinarizationMode(IntEnum):
    """Fixed threshold variants, numbered as cv2.THRESH_* flags."""
    BINARY = 0
    BINARY_INV = 1
    TRUNC = 2
    TOZERO = 3
    TOZERO_INV = 4


# mode -> (threshold, max_value)
MODE_DEFAULTS: Dict[int, Tuple[int, int]] = {
    BinarizationMode.BINARY: (127, 255),
    BinarizationMode.BINARY_INV: (127, 255),
    BinarizationMode.TRUNC: (127, 0),
    BinarizationMode.TOZERO: (127, 0),
    BinarizationMode.TOZERO_INV: (127, 0),
}


def lookup_mode_defaults(mode: int) -> Optional[Tuple[int, int]]:
    """Return (threshold, max_value) for a mode, or None if unknown."""
    return MODE_DEFAULTS.get(mode)


def apply_mode_defaults(current_mode: int, last_mode: int, params: ParameterSet) -> int:
    """
    Apply mode defaults to params if the mode changed.

    Args:
        current_mode: Mode selected now
        last_mode: Mode seen on the previous call
        params: Parameters to update in place

    Returns:
        The mode to remember as last seen
    """
    if current_mode == last_mode:
        return last_mode

    defaults = lookup_mode_defaults(current_mode)
    if defaults is not None:
        params.low_threshold, params.max_value = defaults
    return current_mode


class ModeDefaultController:
    """
    Tracks the last seen binarization mode and resets threshold/max value
    once per mode change.

    Example:
        controller = ModeDefaultController()
        if controller.update(params):
            panel.sync(ModeDefaultController.RESET_FIELDS)
    """

    RESET_FIELDS = ("low_threshold", "max_value")

    def __init__(self, last_mode: int = BinarizationMode.BINARY):
        self.last_mode = int(last_mode)
        self.transitions = 0

    def update(self, params: ParameterSet) -> bool:
        """
        Check params.binarization_mode against the last seen mode.

        Returns:
            True if threshold/max value were overwritten
        """
        current = int(params.binarization_mode)
        if current == self.last_mode:
            return False

        previous = self.last_mode
        self.last_mode = apply_mode_defaults(current, previous, params)
        self.transitions += 1

        if lookup_mode_defaults(current) is None:
            # Out of range: leave parameters untouched
            logger.warning(f"Unknown binarization mode {current}, keeping parameters")
            return False

        logger.debug(
            f"Binarization mode {previous} -> {current}: "
            f"threshold={params.low_threshold}, max_value={params.max_value}"
        )
        return True

    def reset(self, last_mode: int = BinarizationMode.BINARY) -> None:
        self.last_mode = int(last_mode)
