"""
Tests for the slider/window control panel.

HighGUI calls are recorded by a fake so the tests run headless.
"""
import numpy as np
import pytest

from webcam_filters.core import ParameterSet
from webcam_filters.processing import FilterOutputs
from webcam_filters.ui import ControlPanel, SLIDERS
from webcam_filters.ui import control_panel


class FakeHighGUI:
    """Records window/trackbar calls; setTrackbarPos echoes like Qt/GTK do."""

    def __init__(self):
        self.windows = []
        self.trackbars = {}  # (name, window) -> [position, callback]
        self.shown = {}
        self.destroyed = False
        self.keys = []

    def namedWindow(self, name, flags=None):
        self.windows.append(name)

    def createTrackbar(self, name, window, value, count, on_change):
        assert (name, window) not in self.trackbars, "trackbar registered twice"
        assert 0 <= value <= count
        self.trackbars[(name, window)] = [value, on_change]

    def setTrackbarPos(self, name, window, pos):
        entry = self.trackbars[(name, window)]
        entry[0] = pos
        entry[1](pos)

    def move(self, name, window, pos):
        """Simulate the user dragging a slider."""
        entry = self.trackbars[(name, window)]
        entry[0] = pos
        entry[1](pos)

    def imshow(self, window, image):
        self.shown[window] = image

    def waitKey(self, delay):
        return self.keys.pop(0) if self.keys else -1

    def destroyAllWindows(self):
        self.destroyed = True


@pytest.fixture
def gui(monkeypatch):
    fake = FakeHighGUI()
    for name in ("namedWindow", "createTrackbar", "setTrackbarPos", "imshow", "waitKey", "destroyAllWindows"):
        monkeypatch.setattr(control_panel.cv2, name, getattr(fake, name))
    return fake


def test_windows_and_sliders_registered_once(gui):
    ControlPanel(ParameterSet())

    assert gui.windows == [
        "imgOriginal", "imgCanny", "imgBinarized", "imgAdaptiveBinarized", "imgHistogram",
    ]
    assert len(gui.trackbars) == len(SLIDERS)


def test_histogram_window_optional(gui):
    panel = ControlPanel(ParameterSet(), show_histogram=False)
    assert "imgHistogram" not in gui.windows
    assert "imgHistogram" not in panel.windows


def test_slider_starts_at_parameter_value(gui):
    ControlPanel(ParameterSet(subtraction_constant=9, block_size_index=2))
    assert gui.trackbars[("C", "imgAdaptiveBinarized")][0] == 9
    assert gui.trackbars[("Block Size", "imgAdaptiveBinarized")][0] == 2


def test_slider_moves_update_parameters(gui):
    params = ParameterSet()
    ControlPanel(params)

    gui.move("Binarization Type", "imgBinarized", 3)
    gui.move("Block Size", "imgAdaptiveBinarized", 3)
    gui.move("Adaptive Method", "imgAdaptiveBinarized", 1)

    assert params.binarization_mode == 3
    assert params.block_size == 11
    assert params.adaptive_method == 1


def test_shared_threshold_sliders_follow_each_other(gui):
    """Canny and binarized windows edit the same threshold value."""
    params = ParameterSet()
    ControlPanel(params)

    gui.move("Threshold", "imgCanny", 60)

    assert params.low_threshold == 60
    assert gui.trackbars[("Threshold", "imgBinarized")][0] == 60


def test_sync_pushes_values_without_echo(gui):
    params = ParameterSet()
    panel = ControlPanel(params)

    params.low_threshold = 127
    params.max_value = 0
    panel.sync(("low_threshold", "max_value"))

    assert gui.trackbars[("Max Value", "imgBinarized")][0] == 0
    assert gui.trackbars[("Max Value", "imgCanny")][0] == 0
    assert params.max_value == 0


def test_show_and_poll(gui):
    panel = ControlPanel(ParameterSet())
    img = np.zeros((10, 10, 3), dtype=np.uint8)
    gray = np.zeros((10, 10), dtype=np.uint8)
    outputs = FilterOutputs(
        original=img, gray=gray, blurred=gray, edges=gray,
        binarized=gray, adaptive=gray, histogram=img,
    )

    panel.show(outputs)
    assert set(gui.shown) == set(gui.windows)

    gui.keys = [27]
    assert panel.poll_key(1) == 27
    # No key pressed: waitKey returns -1
    assert panel.poll_key(1) == 255

    panel.close()
    assert gui.destroyed
