"""
OpenCV HighGUI windows and sliders bound to a ParameterSet.

Windows and trackbars are created once, up front. Trackbar callbacks
write straight into the shared parameters; sync() pushes values set in
code (mode defaults, reset) back onto the sliders.
"""
import cv2
from typing import Dict, Iterable, List, Tuple
from dataclasses import dataclass
import logging

from webcam_filters.core import ParameterSet, PARAMETER_LIMITS
from webcam_filters.processing import FilterOutputs

logger = logging.getLogger(__name__)

WINDOW_ORIGINAL = "imgOriginal"
WINDOW_CANNY = "imgCanny"
WINDOW_BINARIZED = "imgBinarized"
WINDOW_ADAPTIVE = "imgAdaptiveBinarized"
WINDOW_HISTOGRAM = "imgHistogram"


@dataclass(frozen=True)
class SliderSpec:
    """One trackbar bound to one ParameterSet field."""
    name: str
    window: str
    field: str

    @property
    def max_value(self) -> int:
        return PARAMETER_LIMITS[self.field][1]


SLIDERS: Tuple[SliderSpec, ...] = (
    # Canny shares its thresholds with fixed binarization
    SliderSpec("Threshold", WINDOW_CANNY, "low_threshold"),
    SliderSpec("Max Value", WINDOW_CANNY, "max_value"),

    SliderSpec("Binarization Type", WINDOW_BINARIZED, "binarization_mode"),
    SliderSpec("Threshold", WINDOW_BINARIZED, "low_threshold"),
    SliderSpec("Max Value", WINDOW_BINARIZED, "max_value"),

    SliderSpec("Adaptive Method", WINDOW_ADAPTIVE, "adaptive_method"),
    SliderSpec("Threshold Type", WINDOW_ADAPTIVE, "adaptive_threshold_type"),
    SliderSpec("Block Size", WINDOW_ADAPTIVE, "block_size_index"),
    SliderSpec("C", WINDOW_ADAPTIVE, "subtraction_constant"),
)


class ControlPanel:
    """
    Display windows plus parameter sliders.

    Example:
        panel = ControlPanel(params)
        panel.show(outputs)
        key = panel.poll_key(1)
        panel.close()
    """

    def __init__(self, params: ParameterSet, show_histogram: bool = True):
        """
        Create all windows and sliders.

        Args:
            params: Shared parameters the sliders edit in place
            show_histogram: Also open the histogram window
        """
        self.params = params
        self.show_histogram = show_histogram
        self._syncing = False
        self._closed = False

        self.windows: List[str] = [
            WINDOW_ORIGINAL,
            WINDOW_CANNY,
            WINDOW_BINARIZED,
            WINDOW_ADAPTIVE,
        ]
        if show_histogram:
            self.windows.append(WINDOW_HISTOGRAM)

        for window in self.windows:
            cv2.namedWindow(window, cv2.WINDOW_AUTOSIZE)

        self._sliders_by_field: Dict[str, List[SliderSpec]] = {}
        for slider in SLIDERS:
            cv2.createTrackbar(
                slider.name,
                slider.window,
                int(getattr(params, slider.field)),
                slider.max_value,
                self._make_callback(slider)
            )
            self._sliders_by_field.setdefault(slider.field, []).append(slider)

        logger.info(f"Control panel ready: {len(self.windows)} windows, {len(SLIDERS)} sliders")

    def _make_callback(self, slider: SliderSpec):
        def on_change(position: int) -> None:
            self._on_slider(slider, position)
        return on_change

    def _on_slider(self, slider: SliderSpec, position: int) -> None:
        """Mirror a slider move into the parameters and sibling sliders."""
        if self._syncing:
            return
        setattr(self.params, slider.field, int(position))
        logger.debug(f"{slider.window}/{slider.name} -> {slider.field}={position}")

        # Same field on another window (Canny/binarized thresholds)
        siblings = [s for s in self._sliders_by_field[slider.field] if s is not slider]
        self._set_positions(siblings)

    def sync(self, fields: Iterable[str] = ()) -> None:
        """
        Move sliders to the current parameter values.

        Args:
            fields: Fields to push (empty = all)
        """
        names = list(fields) or list(self._sliders_by_field)
        sliders = [s for name in names for s in self._sliders_by_field.get(name, [])]
        self._set_positions(sliders)

    def _set_positions(self, sliders: Iterable[SliderSpec]) -> None:
        # setTrackbarPos fires the callback on some backends; ignore the echo
        self._syncing = True
        try:
            for slider in sliders:
                cv2.setTrackbarPos(slider.name, slider.window, int(getattr(self.params, slider.field)))
        finally:
            self._syncing = False

    def show(self, outputs: FilterOutputs) -> None:
        cv2.imshow(WINDOW_ORIGINAL, outputs.original)
        cv2.imshow(WINDOW_CANNY, outputs.edges)
        cv2.imshow(WINDOW_BINARIZED, outputs.binarized)
        cv2.imshow(WINDOW_ADAPTIVE, outputs.adaptive)
        if self.show_histogram and outputs.histogram is not None:
            cv2.imshow(WINDOW_HISTOGRAM, outputs.histogram)

    def poll_key(self, timeout_ms: int = 1) -> int:
        """
        Block up to timeout_ms for a key press.

        Returns:
            Key code (0-255), or 255 if nothing was pressed
        """
        return cv2.waitKey(timeout_ms) & 0xFF

    def close(self) -> None:
        if self._closed:
            return
        cv2.destroyAllWindows()
        self._closed = True
        logger.debug("Control panel closed")
