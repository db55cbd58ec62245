import pytest

from gaze_heatmap.configs import AppSettings, DeviceSettings
from gaze_heatmap.core import EyeTracker, UnitConverter
from gaze_heatmap.models import RayHit, Vector3


@pytest.fixture
def settings(tmp_path, monkeypatch) -> AppSettings:
    # Keep a stray .env or GAZE__ variable out of the tests
    monkeypatch.chdir(tmp_path)
    return AppSettings(_env_file=None, export={"output_dir": tmp_path / "exports"})


@pytest.fixture
def device() -> DeviceSettings:
    return DeviceSettings()


@pytest.fixture
def converter(device) -> UnitConverter:
    return UnitConverter.from_settings(device)


@pytest.fixture
def tracker(settings) -> EyeTracker:
    return EyeTracker(settings)


def hit_for(device: DeviceSettings, x: float, y: float) -> RayHit:
    """Builds a plane hit that projects onto point (x, y) with the default device."""
    half_w = device.screen_width * device.width_scale / 2.0
    half_h = device.screen_height * device.height_scale / 2.0
    x_m = x / device.screen_width * half_w
    y_m = -(y - device.vertical_offset_pt) / device.screen_height * half_h
    return RayHit(Vector3(x_m, y_m, 0.0))
