"""
Cardstack - reusable view-state engine for card lists.

    from cardstack import CardstackView, Characteristics, ViewSettings
"""
from loguru import logger

from cardstack.core import (
    CardstackError,
    ConfigurationError,
    ConfigManager,
    ConsistencyError,
    FilterSettings,
    UsageError,
    ViewPhase,
    ViewSettings,
    setup_logging,
    silence,
)
from cardstack.cardview import (
    Card,
    CardstackSchema,
    CardstackSource,
    CardstackView,
    Characteristics,
    PropertyDescriptor,
    ValueDescriptor,
)

# Library default: silent until the host calls setup_logging()
logger.disable("cardstack")

__version__ = "0.1.0"

__all__ = [
    "CardstackView",
    "CardstackSchema",
    "CardstackSource",
    "Card",
    "Characteristics",
    "PropertyDescriptor",
    "ValueDescriptor",
    "ViewSettings",
    "FilterSettings",
    "ConfigManager",
    "ViewPhase",
    "CardstackError",
    "ConfigurationError",
    "ConsistencyError",
    "UsageError",
    "setup_logging",
    "silence",
]
