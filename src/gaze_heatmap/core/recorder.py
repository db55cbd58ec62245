import logging
import threading
from typing import Optional

from ..models import PositionRecord, ScreenPoint, dump_records

logger = logging.getLogger(__name__)


class SessionRecorder:
    """
    Append-only log of gaze estimates for one session.

    Records are never deduplicated or capped. `export()` serializes the
    records whose position is strictly positive on both axes, which drops
    the origin artifacts produced by clamping.
    """

    def __init__(self):
        self._records: list[PositionRecord] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def record(self, point: ScreenPoint, timestamp: float) -> PositionRecord:
        entry = PositionRecord(position=point, timestamp=timestamp)
        with self._lock:
            self._records.append(entry)
        return entry

    def snapshot(self) -> list[PositionRecord]:
        """A stable copy of the buffer."""
        with self._lock:
            return list(self._records)

    def exportable(self) -> list[PositionRecord]:
        return [r for r in self.snapshot() if r.position.x > 0.0 and r.position.y > 0.0]

    def encode(self) -> Optional[bytes]:
        """
        Returns the filtered buffer as JSON bytes, or None when there is
        nothing to export. Encoding errors propagate.
        """
        records = self.exportable()
        if not records:
            logger.info("Nothing to export: no records with a positive position.")
            return None

        payload = dump_records(records)
        logger.info(f"Exported {len(records)} of {len(self)} records ({len(payload):,} bytes).")
        return payload

    def export(self) -> Optional[bytes]:
        """Like `encode`, but an encoding failure is logged and yields None."""
        try:
            return self.encode()
        except Exception:
            logger.exception("Failed to serialize the session buffer.")
            return None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
