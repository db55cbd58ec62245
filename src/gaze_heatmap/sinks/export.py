import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class JsonFileExporter:
    """
    Persists exported session buffers as JSON files.

    Each export lands in its own file named
    ``<prefix>_<unix-epoch-seconds>.json``. The payload is written to a
    temporary file in the same directory and renamed into place, so a
    failed write never leaves a partial export behind.
    """

    def __init__(
        self,
        output_dir: Path,
        filename_prefix: str = "eyetrackingbuffer",
        clock: Callable[[], float] = time.time,
    ):
        self.output_dir = Path(output_dir)
        self.filename_prefix = filename_prefix
        self._clock = clock

    def _target_path(self) -> Path:
        stem = f"{self.filename_prefix}_{int(self._clock())}"
        path = self.output_dir / f"{stem}.json"

        # Several exports within the same second get a counter suffix
        counter = 1
        while path.exists():
            path = self.output_dir / f"{stem}_{counter}.json"
            counter += 1
        return path

    def save(self, payload: bytes) -> Optional[Path]:
        """Returns the written file, or None if the write failed."""
        tmp_name: Optional[str] = None
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self._target_path()

            fd, tmp_name = tempfile.mkstemp(dir=self.output_dir, suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None

            logger.info(f"Export written: {path} ({len(payload):,} bytes)")
            return path

        except OSError:
            logger.exception(f"Failed to write export to {self.output_dir}")
            return None

        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
