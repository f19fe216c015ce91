"""
Core data types for the webcam filter demo.
Defines the contracts shared by capture, processing and UI modules.
"""
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple
import numpy as np
from numpy.typing import NDArray
import logging

logger = logging.getLogger(__name__)


# Neighborhood sizes selectable for adaptive thresholding (must be odd, > 1)
BLOCK_SIZES: Tuple[int, ...] = (3, 5, 7, 11)

# Inclusive value ranges: field name -> (min, max)
PARAMETER_LIMITS: Dict[str, Tuple[int, int]] = {
    "low_threshold": (0, 255),
    "max_value": (0, 255),
    "binarization_mode": (0, 4),
    "adaptive_method": (0, 1),
    "adaptive_threshold_type": (0, 1),
    "block_size_index": (0, len(BLOCK_SIZES) - 1),
    "subtraction_constant": (0, 15),
    "adaptive_max_value": (0, 255),  # config only, no slider
}


@dataclass
class Frame:
    """
    Represents a single captured frame with metadata.
    """
    image: NDArray[np.uint8]  # Raw image data (H, W, C) or (H, W)
    timestamp: float  # Unix timestamp
    frame_id: int  # Sequential frame counter

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.image.shape

    @property
    def is_grayscale(self) -> bool:
        return len(self.image.shape) == 2


@dataclass
class ParameterSet:
    """
    Live transform parameters shared by the sliders, the mode controller
    and the transforms. One instance per session, mutated in place.
    """
    # Fixed binarization (also used as Canny thresholds)
    low_threshold: int = 127
    max_value: int = 255
    binarization_mode: int = 0  # 0 binary .. 4 to-zero inverted

    # Adaptive binarization
    adaptive_method: int = 0  # 0 mean, 1 gaussian
    adaptive_threshold_type: int = 0  # 0 binary, 1 binary inverted
    block_size_index: int = 0  # index into BLOCK_SIZES
    subtraction_constant: int = 5  # C, subtracted from the local mean
    adaptive_max_value: int = 255

    @property
    def block_size(self) -> int:
        """Block size for the current index, clamped to BLOCK_SIZES."""
        index = min(max(int(self.block_size_index), 0), len(BLOCK_SIZES) - 1)
        return BLOCK_SIZES[index]

    def clamp(self) -> None:
        """Clamp every field into its allowed range."""
        for name, (low, high) in PARAMETER_LIMITS.items():
            value = int(getattr(self, name))
            setattr(self, name, min(max(value, low), high))

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterSet":
        """
        Build from a mapping.

        Unknown keys are ignored, values that are not integers keep their
        default, and the result is clamped to PARAMETER_LIMITS.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown parameter key: %s", key)
                continue
            try:
                values[key] = int(value)
            except (TypeError, ValueError):
                logger.warning(f"Invalid value for {key}: {value!r}, keeping default")

        params = cls(**values)
        params.clamp()
        return params
