import logging
import time
from typing import Optional

import numpy as np

from .protocols import ExportTarget
from .session import Session
from .state import ExportStatus, TrackerState
from ..configs import AppSettings
from ..models import RayHit, ScreenPoint

logger = logging.getLogger(__name__)


class EyeTracker:
    """
    The headless core the UI shell talks to.

    Owns at most one Session and moves between INACTIVE and ACTIVE. The
    shell feeds it hit pairs once per capture frame, reads back the
    smoothed position and the heatmap, and triggers exports.
    """
    def __init__(self, settings: AppSettings, export_target: Optional[ExportTarget] = None):
        self.settings = settings
        self.export_target = export_target

        self.is_showing_target: bool = settings.display.show_target
        self.is_export_enabled: bool = settings.export.enabled

        self.session: Optional[Session] = None
        self.current_position: Optional[ScreenPoint] = None
        self.last_export_status: Optional[ExportStatus] = None

    @property
    def state(self) -> TrackerState:
        return TrackerState.ACTIVE if self.session is not None else TrackerState.INACTIVE

    @property
    def is_active(self) -> bool:
        return self.session is not None

    # --- Lifecycle ---

    def start(self) -> Session:
        if self.session is not None:
            logger.warning("Tracking session already active.")
            return self.session

        self.session = Session.from_settings(self.settings)
        self.current_position = None
        logger.info(
            f"Tracking started. Heatmap {self.session.heatmap.width}x{self.session.heatmap.height}px."
        )
        return self.session

    def stop(self) -> None:
        if self.session is None:
            return

        session = self.session
        with session.lock:
            self.session = None
        logger.info(
            f"Tracking stopped. Frames processed: {session.frames_processed:,}, "
            f"skipped: {session.frames_skipped:,}."
        )
        self.current_position = None

    # --- Per-frame ---

    def process_frame(
        self,
        left_hit: Optional[RayHit],
        right_hit: Optional[RayHit],
        timestamp: Optional[float] = None,
    ) -> Optional[ScreenPoint]:
        """
        Returns the smoothed position for this frame, or None if no estimate
        was produced. Never raises for bad frame data.
        """
        session = self.session
        if session is None:
            logger.warning("Frame received while tracking is inactive.")
            return None

        if timestamp is None:
            timestamp = time.time()

        try:
            point = session.update(left_hit, right_hit, timestamp)
        except Exception:
            logger.exception("Failed to process frame; skipping.")
            return None

        if point is None:
            logger.debug("Incomplete hit pair, frame skipped.")
            return None

        self.current_position = point
        return point

    def heatmap_snapshot(self) -> Optional[np.ndarray]:
        if self.session is None:
            return None
        return self.session.heatmap_snapshot()

    # --- Export ---

    def trigger_export(self) -> Optional[bytes]:
        """
        Exports the session buffer. Hands the bytes to the export target,
        if any, and returns them. Returns None when nothing was exported;
        `last_export_status` says why. Never raises.
        """
        payload, status = self._export()
        if payload is not None and self.export_target is not None:
            status = self._persist(payload)

        self.last_export_status = status
        if status is not ExportStatus.EXPORTED:
            logger.info(f"Export skipped: {status.name}.")
            return None
        return payload

    def _persist(self, payload: bytes) -> ExportStatus:
        try:
            location = self.export_target.save(payload)
        except Exception:
            logger.exception("Export target failed to save %d bytes.", len(payload))
            return ExportStatus.FAILED

        if location is None:
            logger.warning("Export target did not persist the payload.")
            return ExportStatus.FAILED
        return ExportStatus.EXPORTED

    def _export(self) -> tuple[Optional[bytes], ExportStatus]:
        if not self.is_export_enabled:
            return None, ExportStatus.DISABLED

        session = self.session
        if session is None:
            return None, ExportStatus.INACTIVE

        try:
            payload = session.export()
        except Exception:
            logger.exception("Failed to serialize the session buffer.")
            return None, ExportStatus.FAILED

        if payload is None:
            return None, ExportStatus.EMPTY
        return payload, ExportStatus.EXPORTED
