"""
YAML helpers for configuration files and parameter snapshots.
Snapshots are written atomically so a crash never leaves half a file behind.
"""
import os
import yaml
import tempfile
from pathlib import Path
from typing import Any, Dict
import logging

from .types import ParameterSet

logger = logging.getLogger(__name__)


def atomic_write_yaml(filepath: Path, data: Dict[str, Any]) -> None:
    """
    Write a YAML file through a temporary sibling and os.replace().

    Args:
        filepath: Target file path
        data: Dictionary to serialize

    Raises:
        IOError: If the write fails
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Temp file must live on the same filesystem for os.replace()
    fd, temp_path = tempfile.mkstemp(
        dir=filepath.parent,
        prefix=f".{filepath.stem}_",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        os.replace(temp_path, filepath)
        logger.debug(f"Atomically wrote {filepath}")

    except Exception as e:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        logger.error(f"Failed to write {filepath}: {e}")
        raise IOError(f"Atomic write failed: {e}") from e


def load_yaml(filepath: Path) -> Dict[str, Any]:
    """
    Load a YAML mapping.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is malformed
        ValueError: If the top level is not a mapping
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse {filepath}: {e}")
        raise

    logger.debug(f"Loaded {filepath}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {filepath}")
    return data


def save_parameters(filepath: Path, params: ParameterSet) -> None:
    """Write a parameter snapshot loadable through --config."""
    atomic_write_yaml(filepath, {"parameters": params.as_dict()})
    logger.info(f"Parameters saved to {filepath}")
