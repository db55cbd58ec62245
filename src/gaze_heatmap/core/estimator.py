import logging
import math
from typing import Optional

from .converter import UnitConverter
from .smoother import TemporalSmoother
from ..models import RayHit, ScreenPoint

logger = logging.getLogger(__name__)


class GazeEstimator:
    """
    Turns a pair of eye-ray hits into one smoothed screen coordinate.

    The two hits are averaged to approximate the binocular fixation point,
    projected to point-space, clamped to the screen and then blended into
    the smoothing window. Clamping happens before smoothing, so an
    out-of-bounds ray enters the average as an edge value.
    """

    def __init__(self, converter: UnitConverter, smoother: TemporalSmoother):
        self.converter = converter
        self.smoother = smoother
        self.last_raw: Optional[ScreenPoint] = None

    def project(self, left_hit: RayHit, right_hit: RayHit) -> ScreenPoint:
        """Projects and clamps a pair of hits without touching the smoother."""
        left = left_hit.local_coordinates
        right = right_hit.local_coordinates
        raw = self.converter.to_points((left.x + right.x) / 2.0, (left.y + right.y) / 2.0)
        return self.clamp(raw)

    def clamp(self, point: ScreenPoint) -> ScreenPoint:
        max_x = self.converter.screen_width - 1
        max_y = self.converter.screen_height - 1
        return ScreenPoint(
            max(min(point.x, max_x), 0.0),
            max(min(point.y, max_y), 0.0),
        )

    def estimate(
        self,
        left_hit: Optional[RayHit],
        right_hit: Optional[RayHit],
    ) -> Optional[ScreenPoint]:
        """
        Returns the smoothed estimate for this frame, or None when either
        hit is missing or carries a non-finite coordinate. Such a frame
        leaves the window untouched.
        """
        if left_hit is None or right_hit is None:
            return None
        if not (self._is_finite(left_hit) and self._is_finite(right_hit)):
            logger.debug("Non-finite hit coordinates, frame skipped.")
            return None

        self.last_raw = self.project(left_hit, right_hit)
        return self.smoother.push(self.last_raw)

    @staticmethod
    def _is_finite(hit: RayHit) -> bool:
        c = hit.local_coordinates
        return math.isfinite(c.x) and math.isfinite(c.y)

    def reset(self) -> None:
        self.smoother.clear()
        self.last_raw = None
