from ..configs import DeviceSettings
from ..models import ScreenPoint


class UnitConverter:
    """
    Maps plane-local hit coordinates (meters) to device point-space.

    The result is relative to the plane center on the horizontal axis. The
    vertical axis is flipped, since the plane's local Y grows upward, and
    shifted by a fitted offset that accounts for the plane anchor not being
    the screen center.
    """

    def __init__(
        self,
        screen_width: float,
        screen_height: float,
        width_scale: float,
        height_scale: float,
        vertical_offset: float = 312.0,
    ):
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError("Screen dimensions must be positive.")
        if width_scale <= 0 or height_scale <= 0:
            raise ValueError("Physical-to-point scale factors must be positive.")

        self.screen_width = screen_width
        self.screen_height = screen_height
        self.vertical_offset = vertical_offset

        # Half the physical plane size, in meters
        self._half_width_m = screen_width * width_scale / 2.0
        self._half_height_m = screen_height * height_scale / 2.0

    @classmethod
    def from_settings(cls, cfg: DeviceSettings) -> "UnitConverter":
        return cls(
            screen_width=cfg.screen_width,
            screen_height=cfg.screen_height,
            width_scale=cfg.width_scale,
            height_scale=cfg.height_scale,
            vertical_offset=cfg.vertical_offset_pt,
        )

    def to_points(self, x_m: float, y_m: float) -> ScreenPoint:
        x = x_m / self._half_width_m * self.screen_width
        y = -y_m / self._half_height_m * self.screen_height + self.vertical_offset
        return ScreenPoint(x, y)
