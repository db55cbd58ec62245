from .core import EyeTracker, GazeRunner, Session
from .models import GazeFrame, PositionRecord, RayHit, ScreenPoint, Vector3
