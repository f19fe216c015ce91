"""
Configuration loader with validation and defaults.
"""
import copy
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from .io_utils import load_yaml
from .types import ParameterSet

logger = logging.getLogger(__name__)

# Read when no --config is given; relative to the working directory
DEFAULT_CONFIG_PATH = Path("config/default_config.yaml")


class Config:
    """
    Configuration container. User YAML is merged section by section
    over DEFAULTS; unknown sections are kept as-is.
    """

    DEFAULTS = {
        "camera": {
            "width": None,  # None = keep the driver's resolution
            "height": None,
            "backend": "any",  # "any", "dshow", "msmf", "v4l2"
        },

        # Initial slider positions
        "parameters": ParameterSet().as_dict(),

        # Gaussian blur ahead of Canny
        "blur": {
            "kernel_size": 5,
            "sigma": 1.8,
        },

        "display": {
            "poll_timeout_ms": 1,  # waitKey timeout, also paces the loop
            "escape_key": 27,
            "show_histogram": True,
            "histogram_width": 512,
            "histogram_height": 400,
        },

        "snapshot": {
            "path": "config/parameters.yaml",
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load configuration from file or use defaults.

        Args:
            config_path: Path to config YAML (None = DEFAULT_CONFIG_PATH
                if it exists, else built-in defaults)
        """
        self.data = copy.deepcopy(self.DEFAULTS)

        if config_path is None and DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH

        if config_path and Path(config_path).exists():
            try:
                user_config = load_yaml(Path(config_path))
                self._merge_config(user_config)
                logger.info(f"Configuration loaded from {config_path}")
            except Exception as e:
                logger.warning(f"Failed to load config: {e}, using defaults")
        elif config_path:
            logger.warning(f"Config file {config_path} not found, using defaults")
        else:
            logger.info("Using default configuration")

    def _merge_config(self, user_config: Dict[str, Any]) -> None:
        """
        Merge user config with defaults.

        Known sections must be mappings; anything else is skipped with a
        warning so the defaults stay usable.
        """
        for section, values in user_config.items():
            if section not in self.data:
                self.data[section] = values
            elif isinstance(values, dict):
                self.data[section].update(values)
            else:
                logger.warning(
                    f"Config section '{section}' must be a mapping, "
                    f"got {type(values).__name__}; using defaults"
                )

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get config value."""
        return self.data.get(section, {}).get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire config section."""
        return self.data.get(section, {})

    def build_parameter_set(self) -> ParameterSet:
        """
        Build the session ParameterSet from the "parameters" section.

        Unknown keys are ignored, invalid values keep their default and
        everything is clamped to its allowed range.
        """
        return ParameterSet.from_dict(self.get_section("parameters"))
