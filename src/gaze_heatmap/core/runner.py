import asyncio
import logging
from typing import Sequence

from .tracker import EyeTracker
from ..acquisition import HitSource
from ..models import GazeFrame, PositionRecord
from ..sinks import GazeSink
from ..utils.logging import ThrottledLogger
from ..utils.types import _END

logger = logging.getLogger(__name__)

class GazeRunner:
    """
    Orchestrates the per-frame flow from Source -> Tracker -> Sinks.
    Created fresh for every tracking session.
    """
    def __init__(self, source: HitSource, tracker: EyeTracker, sinks: Sequence[GazeSink]):
        self.source = source
        self.tracker = tracker
        self.sinks = sinks
        self._running = False
        self._loop_task: asyncio.Task | None = None
        self._source_task: asyncio.Task | None = None
        self._sink_logger = ThrottledLogger(logger, interval_sec=5.0)

        self.frames_received = 0
        self.estimates_emitted = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return

        logger.info("Starting GazeRunner...")
        self._running = True

        if not self.tracker.is_active:
            self.tracker.start()

        # Start sinks
        await asyncio.gather(*(s.start() for s in self.sinks))

        # Start source
        self._source_task = asyncio.create_task(self.source.run())

        # Start frame loop
        self._loop_task = asyncio.create_task(self._process_loop())
        logger.info("GazeRunner active.")

    async def stop(self) -> None:
        if not self._running:
            return

        logger.info("Stopping GazeRunner...")
        self._running = False

        # Stop source; it terminates the stream with _END
        await self.source.stop()
        if self._source_task:
            await self._source_task

        # Drain remaining frames
        if self._loop_task:
            await self._loop_task

        # Close sinks
        await asyncio.gather(*(s.close() for s in self.sinks))

        logger.info(
            f"GazeRunner stopped. Frames: {self.frames_received:,}, estimates: {self.estimates_emitted:,}."
        )

    async def _process_loop(self) -> None:
        """Hot loop."""
        queue = self.source.output_queue

        try:
            while True:
                item = await queue.get()

                if item is _END:
                    break

                await self._handle_frame(item)

        except asyncio.CancelledError:
            logger.info("Runner loop cancelled unexpectedly.")

    async def _handle_frame(self, frame: GazeFrame) -> None:
        self.frames_received += 1
        point = self.tracker.process_frame(frame.left_hit, frame.right_hit, frame.timestamp)
        if point is None:
            return

        self.estimates_emitted += 1
        if not self.tracker.is_showing_target or not self.sinks:
            return

        record = PositionRecord(position=point, timestamp=frame.timestamp)
        results = await asyncio.gather(*(s.send(record) for s in self.sinks), return_exceptions=True)
        for sink, result in zip(self.sinks, results):
            if isinstance(result, Exception):
                self._sink_logger.warning("Sink %s failed: %s", type(sink).__name__, result)
