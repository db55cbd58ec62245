from .app import (
    AppSettings,
    DeviceSettings,
    DisplaySettings,
    DummySourceConfig,
    ExportSettings,
    HeatmapSettings,
    SmoothingSettings,
    ZmqSinkConfig,
)
from .utils import LoggingConfig
