import logging
import struct
from typing import Final

import zmq
import zmq.asyncio

from .base import GazeSink
from ..models import PositionRecord

logger = logging.getLogger(__name__)

class ZMQSink(GazeSink):
    """
    Real-time broadcast of smoothed gaze estimates using ZMQ PUB/SUB.
    A UI shell subscribes to position its cursor/marker.

    Wire Format (16 bytes + 4 byte topic):
    - Topic: 'gaze' (4 bytes)
    - Epoch TS: int64 (8 bytes, milliseconds)
    - X: float32 (4 bytes, points)
    - Y: float32 (4 bytes, points)
    """

    # ! = Network (Big Endian)
    # q = int64 (timestamp)
    # f = float32 (x)
    # f = float32 (y)
    _PACKER: Final[struct.Struct] = struct.Struct("!qff")
    _TOPIC: Final[bytes] = b"gaze"

    def __init__(self, host: str = "tcp://*:5556"):
        """
        Args:
            host: The ZMQ binding address. Default binds to all interfaces on port 5556.
        """
        self.host = host

        # Async ZMQ setup
        self._ctx = zmq.asyncio.Context()
        self._sock = self._ctx.socket(zmq.PUB)

        # Set High Water Mark to prevent memory bloating if subscribers are slow
        # Buffer of 10 seconds at 60Hz
        self._sock.setsockopt(zmq.SNDHWM, 60 * 10)

    @classmethod
    def pack(cls, record: PositionRecord) -> bytes:
        return cls._TOPIC + cls._PACKER.pack(
            int(record.timestamp * 1000),
            record.position.x,
            record.position.y,
        )

    @classmethod
    def unpack(cls, message: bytes) -> tuple[int, float, float]:
        if not message.startswith(cls._TOPIC):
            raise ValueError(f"Unexpected topic in message: {message[:len(cls._TOPIC)]!r}")
        return cls._PACKER.unpack(message[len(cls._TOPIC):])

    async def start(self) -> None:
        """Bind the publisher socket."""
        try:
            self._sock.bind(self.host)
            logger.info(f"ZMQSink bound to {self.host}")
        except Exception as e:
            logger.error(f"Failed to bind ZMQSink to {self.host}: {e}")
            raise e

    async def send(self, record: PositionRecord) -> None:
        """
        Serializes and broadcasts one estimate.
        This is a non-blocking operation (ZMQ hands off to internal buffer).
        Send errors propagate to the runner, which logs them throttled.
        """
        await self._sock.send(self.pack(record))

    async def close(self) -> None:
        """Shut down the ZMQ context."""
        logger.info("Closing ZMQSink...")
        # Close immediately, don't wait for unsent messages
        self._sock.close(linger=0)
        self._ctx.term()
