"""
Synchronous camera capture.
One frame per call, no background thread: the demo loop paces itself
through the key poll, so frames are read exactly when they are needed.
"""
import cv2
import time
import logging
from typing import Optional
from dataclasses import dataclass

from webcam_filters.core import Frame, FrameReadError, SourceUnavailable

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Configuration for camera capture."""
    index: int = 0  # Camera index, usually 0 = integrated, 2 = first USB
    width: Optional[int] = None  # None = driver default
    height: Optional[int] = None
    backend: str = "any"  # "any", "dshow", "msmf", "v4l2"

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Camera index must be non-negative, got {self.index}")

    def get_backend_flag(self) -> int:
        """Convert backend string to OpenCV flag."""
        backends = {
            "any": cv2.CAP_ANY,
            "dshow": cv2.CAP_DSHOW,
            "msmf": cv2.CAP_MSMF,
            "v4l2": cv2.CAP_V4L2,
        }
        return backends.get(self.backend.lower(), cv2.CAP_ANY)


class VideoSource:
    """
    Video source opened by camera index.

    Example:
        source = VideoSource(CameraConfig(index=0))
        source.open()
        frame = source.read()
        source.release()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._capture: Optional[cv2.VideoCapture] = None
        self._frame_counter = 0
        self._start_time: Optional[float] = None

    def open(self) -> None:
        """
        Open the camera.

        Raises:
            SourceUnavailable: If OpenCV cannot open the device
        """
        if self.is_open:
            logger.warning("Video source already open")
            return

        self._capture = cv2.VideoCapture(self.config.index, self.config.get_backend_flag())

        if not self._capture.isOpened():
            self._capture.release()
            self._capture = None
            raise SourceUnavailable(self.config.index)

        if self.config.width:
            self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        if self.config.height:
            self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)

        self._frame_counter = 0
        self._start_time = time.time()

        props = self.get_capture_properties()
        logger.info(
            f"Camera {self.config.index} opened: "
            f"{props['width']}x{props['height']} @ {props['fps']} FPS"
        )

    def read(self) -> Frame:
        """
        Read the next frame.

        Raises:
            FrameReadError: If the source is closed, the read fails or the
                frame is empty
        """
        if not self.is_open:
            raise FrameReadError("Video source is not open")

        ok, image = self._capture.read()
        if not ok or image is None or image.size == 0:
            raise FrameReadError(f"Frame {self._frame_counter} could not be read")

        frame = Frame(image=image, timestamp=time.time(), frame_id=self._frame_counter)
        self._frame_counter += 1
        return frame

    def release(self) -> None:
        """Release the camera handle."""
        if self._capture is None:
            return
        self._capture.release()
        self._capture = None
        logger.info(f"Camera {self.config.index} released after {self._frame_counter} frames")

    @property
    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    @property
    def frames_read(self) -> int:
        return self._frame_counter

    @property
    def mean_fps(self) -> float:
        """Average frames per second since open()."""
        if self._start_time is None:
            return 0.0
        elapsed = time.time() - self._start_time
        return self._frame_counter / elapsed if elapsed > 0 else 0.0

    def get_capture_properties(self) -> dict:
        """
        Get actual capture properties.

        Returns:
            Dictionary with capture properties (empty if not open)
        """
        if not self._capture:
            return {}

        return {
            "width": int(self._capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
            "height": int(self._capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            "fps": int(self._capture.get(cv2.CAP_PROP_FPS)),
            "backend": self._capture.getBackendName(),
        }

    def __enter__(self):
        """Context manager support."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.release()
