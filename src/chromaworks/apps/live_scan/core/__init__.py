"""Live-scan core: session pipeline, background worker, capture and stills.

This package wires the colour primitives into the flows used by the camera
screens: continuous scanning of a video feed and one-shot analysis of a
captured photo.
"""

from .config import ScanConfig, ScanSettings, build_runtime_config, load_config
from .image_analysis import ImageAnalysisResult, analyze_image
from .session import LatestResult, ScanResult, ScanSession
from .worker import ScanWorker

__version__ = "0.1.0"
__all__ = [
    "ImageAnalysisResult",
    "LatestResult",
    "ScanConfig",
    "ScanResult",
    "ScanSession",
    "ScanSettings",
    "ScanWorker",
    "analyze_image",
    "build_runtime_config",
    "load_config",
]
