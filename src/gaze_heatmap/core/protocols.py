from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

@runtime_checkable
class ExportTarget(Protocol):
    """
    Receives exported session bytes for persistence or sharing.
    Whether it writes a file, uploads, or opens a share sheet is up to it.
    """
    def save(self, payload: bytes) -> Optional[Path]: ...
