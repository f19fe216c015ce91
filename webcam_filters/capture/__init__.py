"""
Capture module - synchronous camera capture.
"""
from .video_source import VideoSource, CameraConfig

__all__ = [
    "VideoSource",
    "CameraConfig",
]
