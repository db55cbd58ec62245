import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, PositiveFloat, PositiveInt, model_validator

from .utils import LoggingConfig, package_version

logger = logging.getLogger(__name__)

class DeviceSettings(BaseModel):
    """
    Screen geometry of the tracked device.
    The default values describe a 375x812 pt phone with a 3x pixel density.
    """
    screen_width: PositiveFloat = Field(375.0, description="Screen width in points.")
    screen_height: PositiveFloat = Field(812.0, description="Screen height in points.")
    width_scale: PositiveFloat = Field(0.0623908297 / 375.0, description="Physical meters per point, horizontally.")
    height_scale: PositiveFloat = Field(0.135096943231532 / 812.0, description="Physical meters per point, vertically.")
    vertical_offset_pt: float = Field(312.0, description="Fitted offset between the plane anchor and the screen, in points.")
    pixel_scale: PositiveFloat = Field(3.0, description="Device pixels per point.")

    @property
    def grid_width(self) -> int:
        return int(self.screen_width * self.pixel_scale)

    @property
    def grid_height(self) -> int:
        return int(self.screen_height * self.pixel_scale)

class SmoothingSettings(BaseModel):
    window_size: PositiveInt = 10

class HeatmapSettings(BaseModel):
    radius_px: PositiveInt = Field(46, description="Radius of the falloff disc in pixels.")
    max_increment: int = Field(25, ge=1, le=255, description="Increment applied at the disc center.")

class ExportSettings(BaseModel):
    enabled: bool = True
    output_dir: Path = Path("./exports")
    filename_prefix: str = "eyetrackingbuffer"

class DisplaySettings(BaseModel):
    show_target: bool = True

class ZmqSinkConfig(BaseModel):
    enabled: bool = False
    host: str = "tcp://*:5556"

class DummySourceConfig(BaseModel):
    frequency: PositiveInt = 60
    radius: PositiveFloat = 0.01 # meters on the virtual plane
    center: tuple[float, float] = (0.0156, -0.0078) # roughly screen center
    speed: PositiveFloat = 0.25 # revolutions per second
    dropout: float = Field(0.05, ge=0.0, lt=1.0, description="Probability that one eye hit is missing in a frame.")
    queue_size: PositiveInt = 60 * 10

    @model_validator(mode='after')
    def validate_queue_size(self) -> "DummySourceConfig":
        if self.queue_size < self.frequency:
            raise ValueError('Queue must hold at least one second of frames.')
        return self

class AppSettings(BaseSettings):
    """
    Main application settings, loaded from environment variables and defaults.
    """
    # Device
    device: DeviceSettings = Field(default_factory=DeviceSettings)

    # Processing
    smoothing: SmoothingSettings = Field(default_factory=SmoothingSettings)
    heatmap: HeatmapSettings = Field(default_factory=HeatmapSettings)

    # Outputs
    export: ExportSettings = Field(default_factory=ExportSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    zmq: ZmqSinkConfig = Field(default_factory=ZmqSinkConfig)

    # Simulation
    dummy_source: DummySourceConfig = Field(default_factory=DummySourceConfig)

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    __version__ = package_version("gaze-heatmap")

    model_config = SettingsConfigDict(
        env_prefix="GAZE__",
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False
    )
