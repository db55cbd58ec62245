from abc import ABC, abstractmethod
from asyncio import Queue, Event
from typing import final

from gaze_heatmap.models.gaze import GazeFrame
from gaze_heatmap.utils.types import EndToken


class HitSource(ABC):
    """
    Abstract Base Class for all eye-ray hit sources.

    A HitSource is a runnable component that acquires per-frame ray/plane
    hits from a specific origin (e.g., a face-tracking session, a replay
    file) and puts `GazeFrame` objects into an output queue. When it stops
    it must put the `_END` token on the queue.
    """

    def __init__(self, output_queue: Queue[GazeFrame | EndToken], stop_event: Event):
        self._output_queue = output_queue
        self._stop_event = stop_event

    @property
    def output_queue(self) -> Queue[GazeFrame | EndToken]:
        return self._output_queue

    @abstractmethod
    async def run(self) -> None:
        """
        Starts the acquisition process.

        This method should run continuously, acquiring frames and placing
        them into the output queue until the `stop_event` is set. It must be
        implemented by all concrete subclasses.
        """
        raise NotImplementedError

    @final
    async def stop(self) -> None:
        """
        Signals the source to stop acquiring data.

        This is a final method and should not be overridden. Subclasses can
        perform cleanup in their 'run' method's finally block.
        """
        self._stop_event.set()
