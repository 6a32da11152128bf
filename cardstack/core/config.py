"""
Engine settings.

`ViewSettings` and `FilterSettings` seed new views. `ConfigManager` keeps
both in one `CardstackConfig`, optionally backed by a file, and announces
edits through `on_changed` so live views can follow them.
"""
from typing import Any, Optional
import json
import os
from pydantic import BaseModel, Field
from loguru import logger

from .events import Signal


# --- Settings Models ---
class ViewSettings(BaseModel):
    """Pagination strategy and diagnostics for one view."""
    items_per_page: int = Field(50, gt=0)
    local_pagination: bool = False
    verbose: bool = False

class FilterSettings(BaseModel):
    """Fallbacks for characteristics that omit the value-list hints."""
    filter_value_limit: int = Field(10, gt=0)
    filter_value_increment: int = Field(10, gt=0)

class CardstackConfig(BaseModel):
    view: ViewSettings = Field(default_factory=ViewSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)


def read_config_file(path: str) -> CardstackConfig:
    """
    Parse a settings file into a validated config.

    `.toml` files go through tomllib, anything else is read as JSON.

    Raises:
        OSError: File cannot be read
        ValueError: Malformed file or settings failing validation
    """
    if path.endswith(".toml"):
        import tomllib
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    return CardstackConfig.model_validate(raw)


# --- Manager ---
class ConfigManager:
    """
    Shared engine settings.

    Without a filepath the configuration lives in memory only. JSON files
    are written back on every update; TOML files are read-only.

    Example:
        config = ConfigManager("cardstack.json")
        view = CardstackView(source, characteristics, config=config)
        config.update("view", "items_per_page", 25)  # view follows
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = CardstackConfig()
        self.on_changed = Signal("ConfigChanged")
        if filepath:
            self._load()

    @property
    def data(self) -> CardstackConfig:
        return self._data

    @property
    def view(self) -> ViewSettings:
        return self._data.view

    @property
    def filters(self) -> FilterSettings:
        return self._data.filters

    def update(self, section: str, key: str, value: Any):
        """
        Change one setting and notify `on_changed(section, key, value)`.

        Raises:
            ValueError: Unknown section or key
            pydantic.ValidationError: Value rejected by the settings model
        """
        current = self._section(section)
        model = type(current)
        if key not in model.model_fields:
            raise ValueError(f"Unknown setting '{section}.{key}'")

        setattr(self._data, section, model.model_validate({**current.model_dump(), key: value}))
        logger.debug(f"Setting changed: {section}.{key} = {value!r}")
        self._save()
        self.on_changed.emit(section, key, value)

    def get(self, section: str, key: str) -> Any:
        return getattr(self._section(section), key)

    def _section(self, section: str) -> BaseModel:
        if section not in CardstackConfig.model_fields:
            raise ValueError(f"Unknown settings section '{section}'")
        return getattr(self._data, section)

    def _load(self):
        if not os.path.isfile(self.filepath):
            self._save()
            return
        try:
            self._data = read_config_file(self.filepath)
            logger.debug(f"Settings loaded from {self.filepath}")
        except (OSError, ValueError) as e:
            logger.error(f"Ignoring unreadable settings file {self.filepath}: {e}")

    def _save(self):
        if not self.filepath or self.filepath.endswith(".toml"):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Cannot write settings to {self.filepath}: {e}")
