import pytest
import yaml
from pydantic import ValidationError

from binclock.core.config import ClockConfig, Config, ConfigManager
from binclock.core.errors import ConfigurationError


def test_defaults():
    config = Config()
    assert config.clock.timezone is None
    assert config.clock.show_date is True
    assert config.clock.widget_interval == 60.0
    assert config.store.key_prefix == "widgetStyle_"
    assert config.render.scale == 2


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        ClockConfig(timezone="Mars/Olympus_Mons")


def test_zone_resolution():
    assert ClockConfig().zone() is None
    assert str(ClockConfig(timezone="Europe/Berlin").zone()) == "Europe/Berlin"


def test_missing_file_is_created_with_defaults(tmp_path):
    path = tmp_path / "conf" / "config.yaml"
    manager = ConfigManager(path)

    assert manager.get() == Config()
    assert path.exists()
    assert yaml.safe_load(path.read_text())["clock"]["show_date"] is True


def test_invalid_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"render": {"scale": 99}}))

    assert ConfigManager(path).get().render.scale == 2


def test_update_section_persists(tmp_path):
    path = tmp_path / "config.yaml"
    manager = ConfigManager(path)
    manager.update_section("clock", timezone="Europe/Paris", show_date=False)

    reloaded = ConfigManager(path).get()
    assert reloaded.clock.timezone == "Europe/Paris"
    assert reloaded.clock.show_date is False


def test_invalid_update_is_rejected_and_not_applied(tmp_path):
    manager = ConfigManager(tmp_path / "config.yaml")
    with pytest.raises(ConfigurationError):
        manager.update_section("clock", live_interval=0)
    with pytest.raises(ConfigurationError):
        manager.update_section("weather", city="Berlin")
    with pytest.raises(ConfigurationError):
        manager.update_section("clock", colour="red")
    assert manager.get().clock.live_interval == 1.0


def test_get_returns_a_copy(tmp_path):
    manager = ConfigManager(tmp_path / "config.yaml")
    config = manager.get()
    config.clock.show_date = False
    assert manager.get().clock.show_date is True


def test_singleton(tmp_path):
    path = tmp_path / "config.yaml"
    first = ConfigManager.get_instance(path)
    assert ConfigManager.get_instance() is first
    assert ConfigManager.get_instance(tmp_path / "other.yaml") is first
