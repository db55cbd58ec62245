import pytest
from pydantic import ValidationError

from gaze_heatmap.configs import AppSettings, DeviceSettings, DummySourceConfig


def test_defaults_match_reference_device(settings):
    device = settings.device
    assert device.screen_width == 375.0
    assert device.screen_height == 812.0
    assert device.width_scale == pytest.approx(0.0623908297 / 375.0)
    assert device.height_scale == pytest.approx(0.135096943231532 / 812.0)
    assert device.vertical_offset_pt == 312.0
    assert (device.grid_width, device.grid_height) == (1125, 2436)

    assert settings.smoothing.window_size == 10
    assert settings.heatmap.radius_px == 46
    assert settings.heatmap.max_increment == 25
    assert settings.export.filename_prefix == "eyetrackingbuffer"


def test_nested_env_override(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GAZE__HEATMAP__RADIUS_PX", "30")
    monkeypatch.setenv("GAZE__DEVICE__VERTICAL_OFFSET_PT", "0")

    settings = AppSettings(_env_file=None)

    assert settings.heatmap.radius_px == 30
    assert settings.device.vertical_offset_pt == 0.0


@pytest.mark.parametrize("field", ["width_scale", "height_scale", "screen_width", "pixel_scale"])
def test_non_positive_device_values_are_rejected(field):
    with pytest.raises(ValidationError):
        DeviceSettings(**{field: 0})


def test_max_increment_bounds():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, heatmap={"max_increment": 300})


def test_dummy_queue_must_hold_a_second_of_frames():
    with pytest.raises(ValidationError):
        DummySourceConfig(frequency=120, queue_size=60)
