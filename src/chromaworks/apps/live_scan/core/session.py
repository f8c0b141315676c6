"""Live scan pipeline: sample a frame, smooth it over time, name it.

A :class:`ScanSession` is owned by exactly one producer thread (the one
receiving camera frames). Results are handed to readers through a
:class:`LatestResult` slot: newer results overwrite older ones that nobody
has looked at yet, so a slow reader never builds up a backlog.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, Sequence, Tuple, TypeVar

from chromaworks.libs.color.naming import ColorNamer
from chromaworks.libs.color.sample import ColorSample
from chromaworks.libs.color.sampler import (
    LIVE_WINDOW_SIZE,
    OutOfBoundsError,
    PixelBufferView,
    sample,
)
from chromaworks.libs.color.smoothing import (
    DEFAULT_HISTORY_LENGTH,
    RECOMMENDED_PUSH_INTERVAL,
    TemporalSmoother,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestResult(Generic[T]):
    """Thread-safe single-slot cell holding the most recent published value."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._value: Optional[T] = None
        self._version = 0

    def publish(self, value: T) -> None:
        with self._condition:
            self._value = value
            self._version += 1
            self._condition.notify_all()

    def latest(self) -> Optional[T]:
        with self._condition:
            return self._value

    @property
    def version(self) -> int:
        with self._condition:
            return self._version

    def snapshot(self) -> Tuple[int, Optional[T]]:
        """Return ``(version, value)`` read atomically."""

        with self._condition:
            return self._version, self._value

    def wait_for_update(
        self, seen_version: int, timeout: Optional[float] = None
    ) -> Tuple[int, Optional[T]]:
        """Block until a value newer than *seen_version* is published.

        Returns ``(version, value)``; on timeout the version is unchanged and
        the value is ``None``.
        """

        with self._condition:
            updated = self._condition.wait_for(
                lambda: self._version > seen_version, timeout=timeout
            )
            if not updated:
                return seen_version, None
            return self._version, self._value

    def clear(self) -> None:
        with self._condition:
            self._value = None


@dataclass(frozen=True)
class ScanResult:
    color_name: str
    hex_code: str
    sample: ColorSample
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color_name": self.color_name,
            "hex_code": self.hex_code,
            "rgb": [self.sample.red, self.sample.green, self.sample.blue],
            "timestamp": self.timestamp,
        }


class ScanSession:
    """Per-camera-session state for continuous colour identification."""

    def __init__(
        self,
        *,
        window_size: int = LIVE_WINDOW_SIZE,
        history_length: int = DEFAULT_HISTORY_LENGTH,
        update_interval: float = RECOMMENDED_PUSH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sink: Optional[LatestResult[ScanResult]] = None,
        namer: Optional[ColorNamer] = None,
    ) -> None:
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        if update_interval < 0:
            raise ValueError("update_interval cannot be negative")
        self.window_size = window_size
        self.update_interval = update_interval
        self.smoother = TemporalSmoother(history_length)
        self.sink: LatestResult[ScanResult] = sink or LatestResult()
        self.namer = namer or ColorNamer()
        self._clock = clock
        self._last_update: Optional[float] = None
        self.frames_seen = 0
        self.frames_skipped = 0

    def _throttled(self, now: float) -> bool:
        # an interval of 0 processes every frame, even with a coarse clock
        if self._last_update is None or self.update_interval <= 0:
            return False
        return now - self._last_update <= self.update_interval

    def process_frame(
        self, view: PixelBufferView, center: Optional[Sequence[float]] = None
    ) -> Optional[ScanResult]:
        """Run one frame through the pipeline.

        Returns ``None`` when the frame is throttled or the window holds no
        pixels; otherwise the freshly published result.
        """

        self.frames_seen += 1
        now = self._clock()
        if self._throttled(now):
            return None

        try:
            frame_color = sample(view, center, self.window_size)
        except OutOfBoundsError as exc:
            self.frames_skipped += 1
            logger.debug("No colour this frame: %s", exc)
            return None

        smoothed = self.smoother.push(frame_color)
        named = self.namer.describe(smoothed)
        result = ScanResult(
            color_name=named.name, hex_code=named.hex_code, sample=smoothed
        )
        self._last_update = now
        self.sink.publish(result)
        logger.debug("Published %s (%s)", result.color_name, result.hex_code)
        return result

    @property
    def latest(self) -> Optional[ScanResult]:
        return self.sink.latest()

    def restart(self) -> None:
        """Start a fresh scan: empty the history, the throttle and the slot."""

        self.smoother.reset()
        self.sink.clear()
        self._last_update = None
        self.frames_seen = 0
        self.frames_skipped = 0
        logger.info("Scan session restarted")


__all__ = ["LatestResult", "ScanResult", "ScanSession"]
