import time
from dataclasses import dataclass, field
from typing import Optional

from pydantic import TypeAdapter


@dataclass(slots=True, frozen=True)
class Vector3:
    x: float
    y: float
    z: float = 0.0


@dataclass(slots=True, frozen=True)
class RayHit:
    """
    Where one eye's gaze ray crosses the virtual screen plane.

    Coordinates are plane-local and expressed in meters, with the origin at
    the plane center.
    """
    local_coordinates: Vector3


@dataclass(slots=True, frozen=True)
class ScreenPoint:
    """A 2D coordinate in device point-space."""
    x: float
    y: float

    def to_pixels(self, scale: float) -> tuple[int, int]:
        return int(self.x * scale), int(self.y * scale)


@dataclass(slots=True, frozen=True)
class PositionRecord:
    """
    A single retained gaze estimate.

    This is the unit appended to the session buffer and the unit written
    out by an export.
    """
    position: ScreenPoint
    timestamp: float


@dataclass(slots=True, frozen=True)
class GazeFrame:
    """
    One capture frame as delivered by a hit source.

    Either hit may be missing when the corresponding eye ray did not cross
    the plane this frame.
    """
    left_hit: Optional[RayHit]
    right_hit: Optional[RayHit]
    timestamp: float = field(default_factory=time.time)

    @property
    def is_complete(self) -> bool:
        return self.left_hit is not None and self.right_hit is not None


_RECORDS_ADAPTER: TypeAdapter[list[PositionRecord]] = TypeAdapter(list[PositionRecord])


def dump_records(records: list[PositionRecord]) -> bytes:
    """Encodes records as a JSON array of {position: {x, y}, timestamp} objects."""
    return _RECORDS_ADAPTER.dump_json(records)


def load_records(payload: bytes | str) -> list[PositionRecord]:
    """Decodes and validates an exported JSON payload."""
    return _RECORDS_ADAPTER.validate_json(payload)
