"""
Live webcam filter demo.

Shows the camera feed next to grayscale/blur/Canny, fixed binarization,
adaptive binarization and an RGB histogram, with sliders to tune the
parameters while the video runs.

Usage:
    webcam-filters 0
    webcam-filters 2 --config config/parameters.yaml
    python -m webcam_filters.app 0 --no-histogram

Controls:
    - 'ESC': Quit
    - 's': Save current parameters
    - 'r': Restore startup parameters
"""
import argparse
import copy
import logging
import sys
from pathlib import Path
from typing import List, Optional

from webcam_filters.capture import CameraConfig, VideoSource
from webcam_filters.core import (
    Config,
    FrameReadError,
    ParameterSet,
    SourceUnavailable,
    UsageError,
    save_parameters,
)
from webcam_filters.processing import FrameTransformer, ModeDefaultController, TransformConfig
from webcam_filters.ui import ControlPanel

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class FilterDemo:
    """Capture loop: read, apply mode defaults, transform, show, poll."""

    def __init__(
            self,
            source: VideoSource,
            panel: ControlPanel,
            params: ParameterSet,
            transformer: Optional[FrameTransformer] = None,
            controller: Optional[ModeDefaultController] = None,
            poll_timeout_ms: int = 1,
            escape_key: int = 27,
            snapshot_path: Optional[Path] = None
    ):
        """
        Initialize demo loop.

        Args:
            source: Opened video source
            panel: Windows and sliders bound to params
            params: Shared parameters
            transformer: Frame transforms (default: FrameTransformer(params))
            controller: Mode-default controller (default: last mode = params mode)
            poll_timeout_ms: Key poll timeout, also the per-frame delay
            escape_key: Key code that stops the loop
            snapshot_path: Where 's' saves parameters (None = disabled)
        """
        self.source = source
        self.panel = panel
        self.params = params
        self.transformer = transformer or FrameTransformer(params)
        self.controller = controller or ModeDefaultController(params.binarization_mode)
        self.poll_timeout_ms = poll_timeout_ms
        self.escape_key = escape_key
        self.snapshot_path = snapshot_path

        self._initial_params = copy.deepcopy(params)
        self.frames_processed = 0

    def step(self) -> bool:
        """
        Process one frame.

        Returns:
            False once the escape key was pressed

        Raises:
            FrameReadError: If the source fails to deliver a frame
        """
        frame = self.source.read()

        if self.controller.update(self.params):
            self.panel.sync(ModeDefaultController.RESET_FIELDS)

        outputs = self.transformer.process(frame)
        self.panel.show(outputs)
        self.frames_processed += 1

        key = self.panel.poll_key(self.poll_timeout_ms)
        if key == self.escape_key:
            logger.info("Escape pressed, stopping")
            return False
        self._handle_key(key)
        return True

    def run(self) -> int:
        """
        Loop until escape or a frame read failure.

        Returns:
            Number of frames processed
        """
        try:
            while self.step():
                pass
        except FrameReadError as e:
            logger.error(f"error: {e}")
        except KeyboardInterrupt:
            logger.info("Interrupted by user")

        logger.info(f"Processed {self.frames_processed} frames")
        return self.frames_processed

    def _handle_key(self, key: int) -> None:
        if key == ord('s'):
            self._save_snapshot()
        elif key == ord('r'):
            self._restore_parameters()

    def _save_snapshot(self) -> None:
        if self.snapshot_path is None:
            logger.info("No snapshot path configured")
            return
        try:
            save_parameters(self.snapshot_path, self.params)
        except IOError as e:
            logger.error(f"Snapshot failed: {e}")

    def _restore_parameters(self) -> None:
        for name, value in self._initial_params.as_dict().items():
            setattr(self.params, name, value)
        self.controller.reset(self.params.binarization_mode)
        self.panel.sync()
        logger.info("Parameters restored")


def _source_index(value: str) -> int:
    """argparse type for a non-negative camera index."""
    try:
        index = int(value)
    except ValueError:
        raise UsageError(f"invalid video source index: {value!r}")
    if index < 0:
        raise UsageError(f"video source index must be >= 0, got {index}")
    return index


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webcam-filters",
        description="Live webcam demo of grayscale, Canny, threshold and adaptive threshold filters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  webcam-filters 0                                  # integrated camera
  webcam-filters 2 --config config/parameters.yaml  # first USB camera, saved sliders
        """
    )

    parser.add_argument(
        "source",
        type=_source_index,
        help="Video source number (0 = integrated camera)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config or saved parameter snapshot (default: config/default_config.yaml if present)"
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Where 's' saves the parameters (default: from config)"
    )
    parser.add_argument(
        "--no-histogram",
        action="store_true",
        help="Don't draw the RGB histogram window"
    )
    parser.add_argument("--width", type=int, default=None, help="Requested frame width")
    parser.add_argument("--height", type=int, default=None, help="Requested frame height")
    parser.add_argument(
        "-V", "--verbose",
        action="store_true",
        help="Debug logging"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Missing or invalid arguments make argparse print usage and exit with
    status 2.
    """
    return build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demo. Returns the process exit status."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = Config(args.config)
    params = config.build_parameter_set()
    display = config.get_section("display")
    show_histogram = display.get("show_histogram", True) and not args.no_histogram

    cam_config = CameraConfig(
        index=args.source,
        width=args.width or config.get("camera", "width"),
        height=args.height or config.get("camera", "height"),
        backend=config.get("camera", "backend", "any"),
    )
    source = VideoSource(cam_config)
    try:
        source.open()
    except SourceUnavailable as e:
        logger.error(f"error: {e}")
        return EXIT_FAILURE

    blur = config.get_section("blur")
    transformer = FrameTransformer(
        params,
        TransformConfig(
            blur_kernel_size=blur.get("kernel_size", 5),
            blur_sigma=blur.get("sigma", 1.8),
            compute_histogram=show_histogram,
            histogram_width=display.get("histogram_width", 512),
            histogram_height=display.get("histogram_height", 400),
        )
    )
    snapshot_path = args.snapshot or Path(config.get("snapshot", "path", "config/parameters.yaml"))

    print("=" * 60)
    print(f"Webcam Filters - camera {args.source}")
    print("=" * 60)
    print("Controls:")
    print("  'ESC' - Quit")
    print(f"  's'   - Save parameters to {snapshot_path}")
    print("  'r'   - Restore startup parameters")
    print("=" * 60)

    panel = None
    try:
        panel = ControlPanel(params, show_histogram=show_histogram)
        demo = FilterDemo(
            source,
            panel,
            params,
            transformer=transformer,
            poll_timeout_ms=display.get("poll_timeout_ms", 1),
            escape_key=display.get("escape_key", 27),
            snapshot_path=snapshot_path,
        )
        demo.run()
        logger.info(f"Mean capture rate: {source.mean_fps:.1f} FPS")
    finally:
        source.release()
        if panel is not None:
            panel.close()

    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
