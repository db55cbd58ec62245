import asyncio
import logging
import math
import random
import time
from typing import Optional

from gaze_heatmap.models.gaze import GazeFrame, RayHit, Vector3
from gaze_heatmap.utils.types import _END
from .base import HitSource

logger = logging.getLogger(__name__)


class DummyHitSource(HitSource):
    """
    A HitSource that simulates eye-ray hits for development and testing.

    This class generates a continuous stream of `GazeFrame` objects at a
    specified frequency, with the fixation point following a circular path
    on the virtual plane. With a non-zero `dropout`, one eye's hit is
    randomly missing from a frame, as happens when a ray misses the plane.
    """

    def __init__(
        self,
        *args,
        frequency: int = 60,
        radius: float = 0.01,
        center: tuple[float, float] = (0.0156, -0.0078),
        speed: float = 0.25,
        dropout: float = 0.0,
        eye_offset: float = 0.001,
        max_frames: Optional[int] = None,
        seed: Optional[int] = None,
        **kwargs,
    ):
        """
        Initializes the DummyHitSource.

        Args:
            frequency: The frequency in Hz to emit frames.
            radius: The radius of the circular path, in plane meters.
            center: The (x, y) center of the circular path, in plane meters.
            speed: The speed of the fixation point along the circle
                   (in revolutions per second).
            dropout: Probability that one of the two hits is missing.
            eye_offset: Horizontal distance of each eye's hit from the
                        fixation point, in plane meters.
            max_frames: Stop on its own after this many frames.
            seed: Seed for the dropout generator.
        """
        super().__init__(*args, **kwargs)
        if frequency <= 0:
            raise ValueError("Frequency must be positive.")
        if not 0.0 <= dropout < 1.0:
            raise ValueError("Dropout must be in [0, 1).")

        self._frequency = frequency
        self._interval_s = 1.0 / self._frequency
        self._radius = radius
        self._center_x, self._center_y = center
        self._speed = speed  # Revolutions per second
        self._dropout = dropout
        self._eye_offset = eye_offset
        self._max_frames = max_frames
        self._rng = random.Random(seed)

        logger.info(
            f"DummyHitSource initialized to run at {self._frequency} Hz."
        )

    def _make_frame(self, elapsed_s: float) -> GazeFrame:
        angle = elapsed_s * self._speed * 2 * math.pi
        gaze_x = self._center_x + self._radius * math.cos(angle)
        gaze_y = self._center_y + self._radius * math.sin(angle)

        left: Optional[RayHit] = RayHit(Vector3(gaze_x - self._eye_offset, gaze_y, 0.0))
        right: Optional[RayHit] = RayHit(Vector3(gaze_x + self._eye_offset, gaze_y, 0.0))

        if self._dropout and self._rng.random() < self._dropout:
            if self._rng.random() < 0.5:
                left = None
            else:
                right = None

        return GazeFrame(left_hit=left, right_hit=right, timestamp=time.time())

    async def run(self) -> None:
        """
        Main execution loop for the dummy source.

        Generates and queues frames at the configured frequency until the
        stop event is set or `max_frames` have been emitted.
        """
        start_time = time.monotonic()
        frame_counter = 0

        logger.info("Starting dummy hit stream...")
        try:
            while not self._stop_event.is_set():
                if self._max_frames is not None and frame_counter >= self._max_frames:
                    break

                # --- Calculate precise timing for this frame ---
                target_time = start_time + ((frame_counter + 1) * self._interval_s)

                # --- Queue the frame and wait for the next one ---
                await self._output_queue.put(self._make_frame(time.monotonic() - start_time))

                sleep_duration = target_time - time.monotonic()
                if sleep_duration > 0:
                    await asyncio.sleep(sleep_duration)

                frame_counter += 1

        except asyncio.CancelledError:
            logger.info("Dummy source run task was cancelled.")
        finally:
            await self._output_queue.put(_END)
            logger.info(f"DummyHitSource has stopped after {frame_counter} frames.")
