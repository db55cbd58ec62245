from .converter import UnitConverter
from .estimator import GazeEstimator
from .heatmap import HeatmapAccumulator
from .protocols import ExportTarget
from .recorder import SessionRecorder
from .session import Session
from .smoother import TemporalSmoother
from .state import ExportStatus, TrackerState
from .tracker import EyeTracker
from .runner import GazeRunner
