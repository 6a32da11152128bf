"""
Cardstack exception hierarchy.

All engine errors derive from CardstackError so hosts can catch
them in one place.
"""
from typing import Any, Optional


class CardstackError(Exception):
    """Base class for all cardstack errors."""
    pass


class UsageError(CardstackError):
    """Raised when the view is driven in an unsupported way."""
    pass


class ConfigurationError(CardstackError):
    """
    Raised for invalid characteristics or schema lookups.

    Attributes:
        property_key: Property the error refers to (if any)
    """

    def __init__(self, message: str, property_key: Optional[str] = None):
        super().__init__(message)
        self.property_key = property_key


class PropertyNotFoundError(ConfigurationError):
    """Property key is not registered in the definitions dictionary."""

    def __init__(self, property_key: str, message: Optional[str] = None):
        super().__init__(
            message or f"property descriptor '{property_key}' not found in definitions dictionary.",
            property_key,
        )


class DuplicateDescriptorError(ConfigurationError):
    """Two raw descriptors were supplied for the same property key."""

    def __init__(self, property_key: str):
        super().__init__(
            f"there are multiple descriptors for the property '{property_key}'; "
            f"these should be consolidated into the definitions dictionary.",
            property_key,
        )


class MissingValueDictionaryError(ConfigurationError):
    """Property has no discrete values to look up."""

    def __init__(self, property_key: str):
        super().__init__(
            f"The property '{property_key}' does not have a dictionary of discrete values.",
            property_key,
        )


class UnknownValueError(ConfigurationError):
    """
    No discrete value of a property matches the requested value.

    Attributes:
        value: The raw value or value key that was requested
    """

    def __init__(self, property_key: str, value: Any):
        super().__init__(
            f"The property '{property_key}' does not have a discrete value '{value}'",
            property_key,
        )
        self.value = value


class ConsistencyError(CardstackError):
    """Raised when card properties cannot be compared consistently."""
    pass
