"""Background thread that feeds frames into a :class:`ScanSession`."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional, Sequence

from chromaworks.libs.color.sampler import PixelBufferView

from .session import ScanSession

logger = logging.getLogger(__name__)


class ScanWorker(threading.Thread):
    """Single producer for one session: pulls frames until exhausted or stopped.

    Results are only visible through ``session.sink``; the worker never hands
    values to readers directly.
    """

    def __init__(
        self,
        session: ScanSession,
        frames: Iterable[PixelBufferView],
        *,
        center: Optional[Sequence[float]] = None,
        max_frames: int = 0,
        name: str = "chromaworks-scan",
    ) -> None:
        super().__init__(name=name, daemon=True)
        self.session = session
        self.frames = frames
        self.center = center
        self.max_frames = max_frames
        self.frames_processed = 0
        self.error: Optional[BaseException] = None
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        logger.info("Scan worker started")
        try:
            for view in self.frames:
                if self._stop_event.is_set():
                    break
                self.session.process_frame(view, self.center)
                self.frames_processed += 1
                if self.max_frames and self.frames_processed >= self.max_frames:
                    break
        except Exception as exc:  # noqa: BLE001 - reported via self.error
            self.error = exc
            logger.error("Frame source failed: %s", exc, exc_info=True)
        finally:
            self._stop_event.set()
            logger.info(
                "Scan worker finished after %d frames (%d without colour)",
                self.frames_processed,
                self.session.frames_skipped,
            )


__all__ = ["ScanWorker"]
