import logging
import time
from pathlib import Path
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


def save_heatmap(grid: np.ndarray, output_dir: Path, prefix: str = "heatmap") -> Optional[Path]:
    """
    Dumps an intensity grid as a `.npy` array for offline visualisation.
    Returns the written path, or None if the write failed.
    """
    path = Path(output_dir) / f"{prefix}_{int(time.time())}.npy"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        np.save(path, grid)
    except OSError:
        logger.exception(f"Failed to save heatmap to {path}")
        return None

    logger.info(f"Heatmap saved: {path} ({grid.shape[1]}x{grid.shape[0]}, peak {int(grid.max())})")
    return path
