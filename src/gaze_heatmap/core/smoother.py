from collections import deque

from ..models import ScreenPoint


class TemporalSmoother:
    """
    Running average over the last `window_size` raw estimates.

    The mean is recomputed from the whole window on every push; the window
    is small and fixed, so there is no drift to manage.
    """

    def __init__(self, window_size: int = 10):
        if window_size <= 0:
            raise ValueError("window_size must be a positive integer.")
        self._window: deque[ScreenPoint] = deque(maxlen=window_size)

    @property
    def window_size(self) -> int:
        return self._window.maxlen

    def __len__(self) -> int:
        return len(self._window)

    def push(self, point: ScreenPoint) -> ScreenPoint:
        # deque evicts the oldest entry once maxlen is reached
        self._window.append(point)

        total_x = 0.0
        total_y = 0.0
        for p in self._window:
            total_x += p.x
            total_y += p.y

        count = len(self._window)
        return ScreenPoint(total_x / count, total_y / count)

    def clear(self) -> None:
        self._window.clear()
