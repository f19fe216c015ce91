"""
UI module - HighGUI windows and parameter sliders.
"""
from .control_panel import ControlPanel, SliderSpec, SLIDERS

__all__ = [
    "ControlPanel",
    "SliderSpec",
    "SLIDERS",
]
