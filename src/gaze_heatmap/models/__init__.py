from .gaze import (
    GazeFrame,
    PositionRecord,
    RayHit,
    ScreenPoint,
    Vector3,
    dump_records,
    load_records,
)

__all__ = [
    "GazeFrame",
    "PositionRecord",
    "RayHit",
    "ScreenPoint",
    "Vector3",
    "dump_records",
    "load_records",
]
