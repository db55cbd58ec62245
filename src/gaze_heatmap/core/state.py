from enum import Enum, auto


class TrackerState(Enum):
    """
    Lifecycle of the eye tracker. A session exists only while ACTIVE.
    """
    INACTIVE = auto() # No session; frames and exports are ignored.
    ACTIVE = auto() # A session is allocated and accepting frames.


class ExportStatus(Enum):
    EXPORTED = auto()
    DISABLED = auto() # Export switched off by the UI shell.
    INACTIVE = auto() # No session to export from.
    EMPTY = auto() # No record with a positive position.
    FAILED = auto() # Encoding or persistence failed.
