"""
CardstackSchema - normalized characteristics for one view.

Normalization runs exactly once per view; afterwards the schema is
read-only configuration.
"""
from typing import Any, Dict, Optional, Union
from loguru import logger

from cardstack.core.config import FilterSettings
from cardstack.core.errors import (
    ConfigurationError,
    DuplicateDescriptorError,
    MissingValueDictionaryError,
    PropertyNotFoundError,
    UnknownValueError,
)
from cardstack.cardview.models.card_item import ActiveFilters
from cardstack.cardview.models.descriptors import (
    Characteristics,
    PropertyDescriptor,
    ValueDescriptor,
)


class CardstackSchema:
    """
    Owns the characteristics of a view and its definitions registry.

    Example:
        schema = CardstackSchema.normalize(characteristics)
        status = schema.get_property("status")
        open_value = schema.get_value("status", "open")
    """

    def __init__(self, characteristics: Characteristics):
        self._characteristics = characteristics
        self._default_filters: ActiveFilters = {}
        self._frozen = False

    @classmethod
    def normalize(
        cls,
        characteristics: Union[Characteristics, Dict[str, Any]],
        defaults: Optional[FilterSettings] = None,
    ) -> "CardstackSchema":
        """
        Validate and normalize characteristics.

        Fills defaults, registers every referenced raw descriptor into
        `definitions`, assigns missing value keys and collects the
        `default` values as the initial active filters.

        Raises:
            ConfigurationError: Wrapping whatever went wrong
        """
        defaults = defaults or FilterSettings()
        try:
            if not isinstance(characteristics, Characteristics):
                characteristics = Characteristics.model_validate(characteristics)

            if not characteristics.filter_value_limit:
                characteristics.filter_value_limit = defaults.filter_value_limit
            if not characteristics.filter_value_increment:
                characteristics.filter_value_increment = defaults.filter_value_increment

            schema = cls(characteristics)
            schema._register_all()
        except ConfigurationError as e:
            raise ConfigurationError(
                f"Failed to normalize characteristics object: {e}",
                e.property_key,
            ) from e
        except Exception as e:
            raise ConfigurationError(
                f"Failed to normalize characteristics object: {e}"
            ) from e

        schema._frozen = True
        logger.debug(
            f"Characteristics normalized: {len(characteristics.definitions)} properties, "
            f"{sum(len(v) for v in schema._default_filters.values())} default filter(s)"
        )
        return schema

    def _register_all(self):
        c = self._characteristics
        for attr, flag in (
            ("sortable_by", "sortable"),
            ("filterable_by", "filterable"),
            ("groupable_by", "groupable"),
        ):
            keys = []
            for ref in getattr(c, attr):
                descriptor = self.resolve_descriptor(ref)
                setattr(descriptor, flag, True)
                self._prepare_values(descriptor)
                keys.append(descriptor.property)
            setattr(c, attr, keys)

    def _prepare_values(self, descriptor: PropertyDescriptor):
        for value in descriptor.values:
            value.property = descriptor.property
            if value.value_key is None:
                value.value_key = f"{descriptor.property}-{value.value}"
            if value.default:
                self._default_filters.setdefault(descriptor.property, {})[value.value_key] = value

    # --- Lookups ---

    @property
    def characteristics(self) -> Characteristics:
        return self._characteristics

    @property
    def definitions(self) -> Dict[str, PropertyDescriptor]:
        return self._characteristics.definitions

    @property
    def searchable_by(self):
        return self._characteristics.searchable_by

    @property
    def greedy_consumer(self) -> bool:
        return self._characteristics.greedy_consumer

    def default_filters(self) -> ActiveFilters:
        """Fresh copy of the filters activated by `default` values."""
        return {prop: dict(values) for prop, values in self._default_filters.items()}

    def resolve_descriptor(
        self, descriptor: Union[str, PropertyDescriptor]
    ) -> PropertyDescriptor:
        """
        Return the canonical descriptor for a key or raw descriptor.

        A raw descriptor is registered on first sight while normalizing;
        a raw descriptor whose key is already registered is an error.

        Raises:
            PropertyNotFoundError: Unregistered string key
            DuplicateDescriptorError: Key already registered
        """
        definitions = self._characteristics.definitions
        if isinstance(descriptor, str):
            if descriptor not in definitions:
                raise PropertyNotFoundError(descriptor)
            return definitions[descriptor]

        if descriptor.property in definitions:
            raise DuplicateDescriptorError(descriptor.property)
        if not self._frozen:
            definitions[descriptor.property] = descriptor
        return descriptor

    def get_property(
        self, property_id: Union[str, PropertyDescriptor]
    ) -> PropertyDescriptor:
        """Look up a registered property; descriptors pass through."""
        if isinstance(property_id, PropertyDescriptor):
            return property_id
        definitions = self._characteristics.definitions
        if property_id not in definitions:
            raise PropertyNotFoundError(
                property_id,
                f"Internal error: cannot access undefined property '{property_id}'",
            )
        return definitions[property_id]

    def get_value(
        self, property_id: Union[str, PropertyDescriptor], value: Any
    ) -> ValueDescriptor:
        """
        Find a discrete value of a property by raw value or value key.

        Raises:
            MissingValueDictionaryError: Property has no discrete values
            UnknownValueError: No value matches
        """
        return lookup_value(self.get_property(property_id), value)


def lookup_value(descriptor: PropertyDescriptor, value: Any) -> ValueDescriptor:
    """Match a discrete value of `descriptor` by raw value or value key."""
    if not descriptor.values:
        raise MissingValueDictionaryError(descriptor.property)
    found = descriptor.find_value(value)
    if found is None:
        raise UnknownValueError(descriptor.property, value)
    return found
