from abc import ABC, abstractmethod

from ..models import PositionRecord


class GazeSink(ABC):
    """
    Abstract Base Class for consumers of live gaze estimates.

    A sink receives every smoothed estimate the runner emits while the
    target is shown, e.g. to drive a cursor in another process.
    """

    async def start(self) -> None:
        """Acquire resources. Called once before the first `send`."""

    @abstractmethod
    async def send(self, record: PositionRecord) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        """Release resources. Called once after the last `send`."""
