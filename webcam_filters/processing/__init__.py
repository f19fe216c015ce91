"""
Processing module - per-frame transforms and mode defaults.
"""
from .mode_defaults import (
    BinarizationMode,
    MODE_DEFAULTS,
    ModeDefaultController,
    apply_mode_defaults,
    lookup_mode_defaults,
)
from .transforms import (
    FilterOutputs,
    FrameTransformer,
    TransformConfig,
    adaptive_binarize,
    binarize,
    blur,
    detect_edges,
    rgb_histogram,
    to_gray,
)

__all__ = [
    "BinarizationMode",
    "MODE_DEFAULTS",
    "ModeDefaultController",
    "apply_mode_defaults",
    "lookup_mode_defaults",
    "FilterOutputs",
    "FrameTransformer",
    "TransformConfig",
    "adaptive_binarize",
    "binarize",
    "blur",
    "detect_edges",
    "rgb_histogram",
    "to_gray",
]
