"""
Cardstack Core - Engine Infrastructure.

Provides:
- Exception hierarchy (UsageError, ConfigurationError, ConsistencyError)
- ConfigManager: engine defaults with optional persistence
- Signal: synchronous change notification
- ViewLifecycle: view load-phase state machine
- setup_logging / silence: loguru sinks for host applications, and muting them again
"""
from .errors import (
    CardstackError,
    UsageError,
    ConfigurationError,
    PropertyNotFoundError,
    DuplicateDescriptorError,
    MissingValueDictionaryError,
    UnknownValueError,
    ConsistencyError,
)
from .config import ConfigManager, CardstackConfig, ViewSettings, FilterSettings
from .events import Signal
from .lifecycle import ViewLifecycle, ViewPhase
from .logging import setup_logging, silence

__all__ = [
    # Errors
    "CardstackError",
    "UsageError",
    "ConfigurationError",
    "PropertyNotFoundError",
    "DuplicateDescriptorError",
    "MissingValueDictionaryError",
    "UnknownValueError",
    "ConsistencyError",

    # Configuration
    "ConfigManager",
    "CardstackConfig",
    "ViewSettings",
    "FilterSettings",

    # Events / lifecycle
    "Signal",
    "ViewLifecycle",
    "ViewPhase",

    # Logging
    "setup_logging",
    "silence",
]
