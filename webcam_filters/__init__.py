"""
Webcam filters - live OpenCV transform demo with tunable sliders.
"""
__version__ = "0.1.0"
