"""Temporal smoothing of per-frame colour samples."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from .sample import ColorSample, mean_color

DEFAULT_HISTORY_LENGTH = 5
# Frames arrive at ~30 fps; ten pushes a second is plenty for a readable name.
RECOMMENDED_PUSH_INTERVAL = 0.1


class TemporalSmoother:
    """Average the most recent ``capacity`` samples to damp sensor flicker.

    The smoother has no clock: callers decide how often to :meth:`push`
    (see :data:`RECOMMENDED_PUSH_INTERVAL`). It is not thread-safe; a single
    producer should own it.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_LENGTH) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._history: Deque[ColorSample] = deque(maxlen=capacity)
        self._smoothed: Optional[ColorSample] = None

    def push(self, sample: ColorSample) -> ColorSample:
        """Record *sample*, evicting the oldest when full, and return the mean."""

        self._history.append(sample)
        self._smoothed = mean_color(self._history)
        return self._smoothed

    def reset(self) -> None:
        """Forget all history; :attr:`smoothed` is ``None`` until the next push."""

        self._history.clear()
        self._smoothed = None

    @property
    def smoothed(self) -> Optional[ColorSample]:
        return self._smoothed

    @property
    def history(self) -> List[ColorSample]:
        """Retained samples, oldest first."""

        return list(self._history)

    def __len__(self) -> int:
        return len(self._history)


__all__ = ["DEFAULT_HISTORY_LENGTH", "RECOMMENDED_PUSH_INTERVAL", "TemporalSmoother"]
