"""OpenCV-backed frame source for live scanning."""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Union

import cv2

from chromaworks.libs.color.sampler import BGR, PixelBufferView, PixelFormat

logger = logging.getLogger(__name__)


class FrameSourceError(RuntimeError):
    """Raised when a camera or video source cannot be opened."""


class VideoFrameSource:
    """Iterate ``cv2.VideoCapture`` frames as :class:`PixelBufferView` objects.

    ``source`` is a camera index or anything ``VideoCapture`` accepts as a
    filename (video files, image sequences, stream URLs). OpenCV delivers
    frames as packed BGR, hence the default pixel format.
    """

    def __init__(
        self, source: Union[int, str], *, pixel_format: PixelFormat = BGR
    ) -> None:
        self.source = source
        self.pixel_format = pixel_format
        self._capture: Optional[cv2.VideoCapture] = None

    def open(self) -> "VideoFrameSource":
        if self._capture is not None:
            return self
        capture = cv2.VideoCapture(self.source)
        if not capture.isOpened():
            capture.release()
            raise FrameSourceError(f"Unable to open video source: {self.source!r}")
        self._capture = capture
        logger.info("Opened video source %r", self.source)
        return self

    def close(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info("Released video source %r", self.source)

    def __enter__(self) -> "VideoFrameSource":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[PixelBufferView]:
        self.open()
        # close() during iteration ends the stream
        while self._capture is not None:
            ok, frame = self._capture.read()
            if not ok or frame is None:
                break
            yield PixelBufferView.from_array(frame, self.pixel_format)


__all__ = ["FrameSourceError", "VideoFrameSource"]
