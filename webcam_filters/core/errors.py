"""
Error taxonomy. Every error here is terminal for the session.
"""
from argparse import ArgumentTypeError


class DemoError(Exception):
    """Base class for webcam filter demo errors."""


class UsageError(DemoError, ArgumentTypeError):
    """
    Command line argument is invalid.

    Raised from argparse type converters, so argparse prints the usage
    line with this message and exits with status 2.
    """


class SourceUnavailable(DemoError):
    """Video source could not be opened at startup."""

    def __init__(self, source: int):
        super().__init__(f"Video source {source} could not be opened")
        self.source = source


class FrameReadError(DemoError):
    """Frame read failed or returned an empty image mid-stream."""
