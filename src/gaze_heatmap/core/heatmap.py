import logging
from typing import Final

import numpy as np

logger = logging.getLogger(__name__)

_MAX_VALUE: Final[int] = 255


class HeatmapAccumulator:
    """
    Fixed-resolution intensity grid fed one gaze position at a time.

    Every call adds a disc of linearly decaying increments around the given
    pixel. Cells at a distance of `radius` or more are left alone, cells
    outside the grid are skipped, and values saturate at 255. The grid is
    accumulate-only for the lifetime of a session.

    The grid is indexed as ``grid[y, x]``.
    """

    def __init__(self, width: int, height: int, radius: int = 46, max_increment: int = 25):
        if width <= 0 or height <= 0:
            raise ValueError("Grid dimensions must be positive.")
        if radius <= 0:
            raise ValueError("radius must be a positive integer.")
        if not 0 < max_increment <= _MAX_VALUE:
            raise ValueError("max_increment must be in [1, 255].")

        self.width = width
        self.height = height
        self.radius = radius
        self.max_increment = max_increment

        self._grid = np.zeros((height, width), dtype=np.uint8)
        self._kernel = self._build_kernel(radius, max_increment)

        logger.debug(f"Heatmap allocated: {width}x{height}, radius {radius}px.")

    @staticmethod
    def _build_kernel(radius: int, max_increment: int) -> np.ndarray:
        """
        Per-offset increments for a (2r+1)x(2r+1) window centered on the
        accumulation point. Offsets outside the disc get 0.
        """
        offsets = np.arange(-radius, radius + 1, dtype=np.float64)
        dx, dy = np.meshgrid(offsets, offsets)
        length = np.hypot(dx, dy)

        # Round half up: an exact .5 step goes to the larger increment
        increments = np.floor((1.0 - length / radius) * max_increment + 0.5)
        increments[length >= radius] = 0
        return increments.astype(np.int16)

    @property
    def grid(self) -> np.ndarray:
        """The live grid. Callers must not write to it."""
        return self._grid

    def snapshot(self) -> np.ndarray:
        return self._grid.copy()

    def value_at(self, x: int, y: int) -> int:
        return int(self._grid[y, x])

    def increment_at(self, dx: int, dy: int) -> int:
        """Increment a single accumulate call applies at offset (dx, dy)."""
        if abs(dx) > self.radius or abs(dy) > self.radius:
            return 0
        return int(self._kernel[dy + self.radius, dx + self.radius])

    def accumulate(self, x: int, y: int) -> None:
        r = self.radius

        # Window bounds clipped to the grid
        x0, x1 = max(x - r, 0), min(x + r + 1, self.width)
        y0, y1 = max(y - r, 0), min(y + r + 1, self.height)
        if x0 >= x1 or y0 >= y1:
            return

        increments = self._kernel[y0 - (y - r):y1 - (y - r), x0 - (x - r):x1 - (x - r)]
        region = self._grid[y0:y1, x0:x1]

        headroom = _MAX_VALUE - region.astype(np.int16)
        region[...] = np.where(headroom > increments, region + increments, _MAX_VALUE)
