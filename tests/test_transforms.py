"""
Unit tests for frame transforms.
"""
import numpy as np
import pytest
import time

from webcam_filters.core import Frame, ParameterSet
from webcam_filters.processing import (
    FrameTransformer,
    TransformConfig,
    adaptive_binarize,
    binarize,
    blur,
    detect_edges,
    rgb_histogram,
    to_gray,
)


def _gradient_image(height=120, width=160):
    """BGR image with a horizontal ramp 0..255 in every channel."""
    ramp = np.linspace(0, 255, width, dtype=np.uint8)
    gray = np.tile(ramp, (height, 1))
    return np.dstack([gray, gray, gray])


def test_to_gray():
    img = np.random.randint(0, 255, (48, 64, 3), dtype=np.uint8)
    gray = to_gray(img)
    assert gray.shape == (48, 64)

    # Already grayscale passes through
    assert to_gray(gray) is gray


def test_blur_keeps_shape():
    gray = np.random.randint(0, 255, (48, 64), dtype=np.uint8)
    assert blur(gray).shape == gray.shape


def test_binary_threshold():
    """Binary mode: pixels above threshold become max_value, others 0."""
    gray = np.array([[10, 100, 200]], dtype=np.uint8)
    out = binarize(gray, threshold=127, max_value=255, mode=0)
    assert out.tolist() == [[0, 0, 255]]

    inverted = binarize(gray, threshold=127, max_value=255, mode=1)
    assert inverted.tolist() == [[255, 255, 0]]


def test_truncate_and_to_zero_modes():
    gray = np.array([[10, 100, 200]], dtype=np.uint8)
    assert binarize(gray, 127, 0, mode=2).tolist() == [[10, 100, 127]]
    assert binarize(gray, 127, 0, mode=3).tolist() == [[0, 0, 200]]
    assert binarize(gray, 127, 0, mode=4).tolist() == [[10, 100, 0]]


def test_binarize_rejects_unknown_mode():
    gray = np.zeros((4, 4), dtype=np.uint8)
    with pytest.raises(ValueError):
        binarize(gray, 127, 255, mode=5)


@pytest.mark.parametrize("block_size", [3, 5, 7, 11])
def test_adaptive_binarize_outputs_binary(block_size):
    gray = to_gray(_gradient_image())
    out = adaptive_binarize(gray, 255, method=1, threshold_type=0, block_size=block_size, c=5)

    assert out.shape == gray.shape
    assert set(np.unique(out)) <= {0, 255}


def test_edges_on_step_image():
    """A vertical step produces edge pixels, a flat image none."""
    flat = np.full((60, 60), 128, dtype=np.uint8)
    assert detect_edges(flat, 50, 150).max() == 0

    step = flat.copy()
    step[:, 30:] = 255
    assert detect_edges(step, 50, 150).max() == 255


def test_rgb_histogram_canvas():
    hist = rgb_histogram(_gradient_image(), size=(256, 100))
    assert hist.shape == (100, 256, 3)
    assert hist.dtype == np.uint8
    assert hist.any()


def test_rgb_histogram_accepts_grayscale():
    gray = np.random.randint(0, 255, (40, 40), dtype=np.uint8)
    assert rgb_histogram(gray).shape == (400, 512, 3)


def test_transform_config_validation():
    with pytest.raises(ValueError):
        TransformConfig(blur_kernel_size=4)


def test_frame_transformer_outputs():
    """All views share the frame size; histogram only when enabled."""
    img = np.random.randint(0, 255, (120, 160, 3), dtype=np.uint8)
    frame = Frame(image=img, timestamp=time.time(), frame_id=7)

    transformer = FrameTransformer(ParameterSet())
    outputs = transformer.process(frame)

    assert outputs.frame_id == 7
    assert outputs.original is img
    for view in (outputs.gray, outputs.blurred, outputs.edges, outputs.binarized, outputs.adaptive):
        assert view.shape == (120, 160)
    assert outputs.histogram.shape == (400, 512, 3)

    no_hist = FrameTransformer(ParameterSet(), TransformConfig(compute_histogram=False))
    assert no_hist.process(frame).histogram is None


def test_frame_transformer_reads_live_parameters():
    """Parameter edits apply on the next frame."""
    img = _gradient_image()
    frame = Frame(image=img, timestamp=time.time(), frame_id=0)
    params = ParameterSet(low_threshold=127, max_value=255, binarization_mode=0)
    transformer = FrameTransformer(params)

    first = transformer.process(frame).binarized
    params.max_value = 100
    second = transformer.process(frame).binarized

    assert first.max() == 255
    assert second.max() == 100


def test_frame_transformer_last_block_size():
    """Largest block size index runs without overrunning the sequence."""
    frame = Frame(image=_gradient_image(), timestamp=time.time(), frame_id=0)
    params = ParameterSet(block_size_index=3, adaptive_method=1, adaptive_threshold_type=1)

    outputs = FrameTransformer(params).process(frame)
    assert outputs.adaptive.shape == (120, 160)
