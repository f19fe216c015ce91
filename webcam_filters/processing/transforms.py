"""
Per-frame image transforms.
Thin wrappers around OpenCV so each view can be computed and tested on
its own, plus a FrameTransformer that runs the whole set for one frame.
"""
import cv2
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass
import logging

from webcam_filters.core import Frame, ParameterSet

logger = logging.getLogger(__name__)

ADAPTIVE_METHODS = (cv2.ADAPTIVE_THRESH_MEAN_C, cv2.ADAPTIVE_THRESH_GAUSSIAN_C)
ADAPTIVE_THRESHOLD_TYPES = (cv2.THRESH_BINARY, cv2.THRESH_BINARY_INV)
THRESHOLD_TYPES = (
    cv2.THRESH_BINARY,
    cv2.THRESH_BINARY_INV,
    cv2.THRESH_TRUNC,
    cv2.THRESH_TOZERO,
    cv2.THRESH_TOZERO_INV,
)

# Histogram line colors per BGR channel
HISTOGRAM_COLORS = ((255, 0, 0), (0, 255, 0), (0, 0, 255))


@dataclass
class TransformConfig:
    """Fixed settings that are not exposed as sliders."""
    blur_kernel_size: int = 5
    blur_sigma: float = 1.8
    compute_histogram: bool = True
    histogram_width: int = 512
    histogram_height: int = 400
    histogram_bins: int = 256

    def __post_init__(self):
        if self.blur_kernel_size < 1 or self.blur_kernel_size % 2 == 0:
            raise ValueError("blur_kernel_size must be a positive odd number")


@dataclass
class FilterOutputs:
    """All views computed for one frame."""
    original: np.ndarray
    gray: np.ndarray
    blurred: np.ndarray
    edges: np.ndarray
    binarized: np.ndarray
    adaptive: np.ndarray
    histogram: Optional[np.ndarray] = None
    frame_id: int = 0


def to_gray(image: np.ndarray) -> np.ndarray:
    """BGR to single channel; grayscale input is returned unchanged."""
    if image.ndim == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def blur(gray: np.ndarray, kernel_size: int = 5, sigma: float = 1.8) -> np.ndarray:
    return cv2.GaussianBlur(gray, (kernel_size, kernel_size), sigma)


def detect_edges(blurred: np.ndarray, low_threshold: int, high_threshold: int) -> np.ndarray:
    """Canny edges. OpenCV swaps the thresholds itself if low > high."""
    return cv2.Canny(blurred, low_threshold, high_threshold)


def binarize(gray: np.ndarray, threshold: int, max_value: int, mode: int) -> np.ndarray:
    """
    Fixed-threshold binarization.

    Args:
        gray: Single channel image
        threshold: Cutoff value
        max_value: Value given to pixels passing the cutoff (binary modes)
        mode: Index into THRESHOLD_TYPES (0 binary .. 4 to-zero inverted)
    """
    if not 0 <= mode < len(THRESHOLD_TYPES):
        raise ValueError(f"Unknown binarization mode: {mode}")
    _, binary = cv2.threshold(gray, threshold, max_value, THRESHOLD_TYPES[mode])
    return binary


def adaptive_binarize(
        gray: np.ndarray,
        max_value: int,
        method: int,
        threshold_type: int,
        block_size: int,
        c: int
) -> np.ndarray:
    """
    Adaptive binarization over a block_size x block_size neighborhood.

    Args:
        gray: Single channel image
        max_value: Value given to pixels passing their local cutoff
        method: 0 mean, 1 gaussian-weighted mean
        threshold_type: 0 binary, 1 binary inverted
        block_size: Odd neighborhood size > 1
        c: Constant subtracted from the local mean
    """
    return cv2.adaptiveThreshold(
        gray,
        max_value,
        ADAPTIVE_METHODS[method],
        ADAPTIVE_THRESHOLD_TYPES[threshold_type],
        block_size,
        c
    )


def rgb_histogram(
        image: np.ndarray,
        size: Tuple[int, int] = (512, 400),
        bins: int = 256
) -> np.ndarray:
    """
    Draw per-channel intensity histograms as lines on a black canvas.

    Args:
        image: BGR image (grayscale is drawn as three equal channels)
        size: Canvas (width, height)
        bins: Histogram bins per channel

    Returns:
        BGR canvas of shape (height, width, 3)
    """
    width, height = size
    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)

    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    xs = np.arange(bins) * (width / bins)

    for channel, color in enumerate(HISTOGRAM_COLORS):
        hist = cv2.calcHist([image], [channel], None, [bins], [0, 256])
        cv2.normalize(hist, hist, alpha=0, beta=height - 1, norm_type=cv2.NORM_MINMAX)
        points = np.column_stack([xs, (height - 1) - hist.ravel()])
        cv2.polylines(canvas, [points.astype(np.int32)], False, color, 2)

    return canvas


class FrameTransformer:
    """
    Computes every view for a frame from the shared ParameterSet.

    The parameters are read on each call, so slider changes take effect
    on the next frame without any extra wiring.
    """

    def __init__(self, params: ParameterSet, config: Optional[TransformConfig] = None):
        self.params = params
        self.config = config or TransformConfig()
        logger.debug(f"FrameTransformer initialized: {self.config}")

    def process(self, frame: Frame) -> FilterOutputs:
        p = self.params
        gray = to_gray(frame.image)
        blurred = blur(gray, self.config.blur_kernel_size, self.config.blur_sigma)

        histogram = None
        if self.config.compute_histogram:
            histogram = rgb_histogram(
                frame.image,
                (self.config.histogram_width, self.config.histogram_height),
                self.config.histogram_bins
            )

        return FilterOutputs(
            original=frame.image,
            gray=gray,
            blurred=blurred,
            edges=detect_edges(blurred, p.low_threshold, p.max_value),
            binarized=binarize(gray, p.low_threshold, p.max_value, p.binarization_mode),
            adaptive=adaptive_binarize(
                gray,
                p.adaptive_max_value,
                p.adaptive_method,
                p.adaptive_threshold_type,
                p.block_size,
                p.subtraction_constant
            ),
            histogram=histogram,
            frame_id=frame.frame_id,
        )
