import logging
import threading
from typing import Optional

import numpy as np

from .converter import UnitConverter
from .estimator import GazeEstimator
from .heatmap import HeatmapAccumulator
from .recorder import SessionRecorder
from .smoother import TemporalSmoother
from ..configs import AppSettings
from ..models import RayHit, ScreenPoint

logger = logging.getLogger(__name__)


class Session:
    """
    All mutable state of one tracking session.

    Bundles the smoothing window (inside the estimator), the intensity grid
    and the record buffer. Frame updates run under `lock`, so readers taking
    a snapshot never observe a half-applied disc write.
    """

    def __init__(
        self,
        estimator: GazeEstimator,
        heatmap: HeatmapAccumulator,
        recorder: SessionRecorder,
        pixel_scale: float = 3.0,
    ):
        self.estimator = estimator
        self.heatmap = heatmap
        self.recorder = recorder
        self.pixel_scale = pixel_scale
        self.lock = threading.Lock()

        self.frames_processed = 0
        self.frames_skipped = 0

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "Session":
        device = settings.device
        estimator = GazeEstimator(
            UnitConverter.from_settings(device),
            TemporalSmoother(settings.smoothing.window_size),
        )
        heatmap = HeatmapAccumulator(
            device.grid_width,
            device.grid_height,
            radius=settings.heatmap.radius_px,
            max_increment=settings.heatmap.max_increment,
        )
        return cls(estimator, heatmap, SessionRecorder(), pixel_scale=device.pixel_scale)

    def update(
        self,
        left_hit: Optional[RayHit],
        right_hit: Optional[RayHit],
        timestamp: float,
    ) -> Optional[ScreenPoint]:
        """Runs estimate, record and accumulate for one frame."""
        with self.lock:
            point = self.estimator.estimate(left_hit, right_hit)
            if point is None:
                self.frames_skipped += 1
                return None

            # Nothing is written until the pixel position is known
            pixel = point.to_pixels(self.pixel_scale)
            self.recorder.record(point, timestamp)
            self.heatmap.accumulate(*pixel)
            self.frames_processed += 1
            return point

    def heatmap_snapshot(self) -> np.ndarray:
        with self.lock:
            return self.heatmap.snapshot()

    def export(self) -> Optional[bytes]:
        # The recorder copies its buffer under its own lock; the frame lock
        # is not held while encoding. Encoding errors propagate.
        return self.recorder.encode()
