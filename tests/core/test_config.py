import json

import pytest
from pydantic import ValidationError

from cardstack.core.config import ConfigManager, FilterSettings, ViewSettings, read_config_file


def test_config_defaults():
    manager = ConfigManager()

    assert manager.data.view.items_per_page == 50
    assert manager.data.view.local_pagination is False
    assert manager.data.filters.filter_value_limit == 10
    assert manager.data.filters.filter_value_increment == 10


def test_config_update_event(tmp_path):
    path = tmp_path / "cardstack.json"
    manager = ConfigManager(str(path))
    received = []

    def on_change(section, key, val):
        received.append((section, key, val))

    manager.on_changed.connect(on_change)
    manager.update("view", "items_per_page", 25)

    assert manager.get("view", "items_per_page") == 25
    assert received[-1] == ("view", "items_per_page", 25)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["view"]["items_per_page"] == 25


def test_config_reload_from_json(tmp_path):
    path = tmp_path / "cardstack.json"
    path.write_text(json.dumps({"view": {"local_pagination": True, "items_per_page": 5}}), encoding="utf-8")

    manager = ConfigManager(str(path))

    assert manager.data.view.local_pagination is True
    assert manager.data.view.items_per_page == 5
    assert manager.data.filters.filter_value_limit == 10


def test_config_load_toml(tmp_path):
    path = tmp_path / "cardstack.toml"
    path.write_text("[filters]\nfilter_value_limit = 25\n", encoding="utf-8")

    manager = ConfigManager(str(path))

    assert manager.data.filters.filter_value_limit == 25


def test_config_invalid_section_and_key():
    manager = ConfigManager()

    with pytest.raises(ValueError):
        manager.update("network", "timeout", 5)
    with pytest.raises(ValueError):
        manager.update("view", "page_size", 5)


def test_config_update_is_validated():
    manager = ConfigManager()

    with pytest.raises(ValidationError):
        manager.update("view", "items_per_page", 0)
    assert manager.data.view.items_per_page == 50


def test_settings_models_validate():
    with pytest.raises(ValidationError):
        ViewSettings(items_per_page=-1)
    assert FilterSettings(filter_value_increment=3).filter_value_increment == 3


def test_config_unreadable_file_keeps_defaults(tmp_path):
    path = tmp_path / "cardstack.json"
    path.write_text("{not json", encoding="utf-8")

    manager = ConfigManager(str(path))

    assert manager.view.items_per_page == 50
    assert manager.filters.filter_value_limit == 10


def test_read_config_file_validates(tmp_path):
    path = tmp_path / "cardstack.json"
    path.write_text(json.dumps({"view": {"items_per_page": 0}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        read_config_file(str(path))
