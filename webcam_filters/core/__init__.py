"""
Core module - shared data types, errors, and configuration.
"""
from .types import (
    BLOCK_SIZES,
    PARAMETER_LIMITS,
    Frame,
    ParameterSet,
)
from .errors import (
    DemoError,
    UsageError,
    SourceUnavailable,
    FrameReadError,
)
from .io_utils import (
    atomic_write_yaml,
    load_yaml,
    save_parameters,
)
from .config_loader import Config, DEFAULT_CONFIG_PATH

__all__ = [
    # Types
    "BLOCK_SIZES",
    "PARAMETER_LIMITS",
    "Frame",
    "ParameterSet",
    # Errors
    "DemoError",
    "UsageError",
    "SourceUnavailable",
    "FrameReadError",
    # I/O
    "atomic_write_yaml",
    "load_yaml",
    "save_parameters",
    # Config
    "Config",
    "DEFAULT_CONFIG_PATH",
]
