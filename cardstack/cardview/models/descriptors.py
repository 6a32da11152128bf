"""
Schema Descriptor Models.

Pydantic models describing the queryable properties of a view and the
characteristics (groupable/sortable/filterable/searchable sets) built
from them.
"""
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


class ValueDescriptor(BaseModel):
    """
    One discrete value of a property.

    Attributes:
        value: Raw value as it appears in card properties
        value_key: Stable string identity (`<property>-<value>` if omitted)
        caption: Display text
        default: Activate as a filter when the schema is normalized
        property: Key of the owning property (set during normalization)

    Example:
        ValueDescriptor(value="open", caption="Open", default=True)
    """
    value: Any = Field(..., description="Raw value")
    value_key: Optional[str] = Field(None, description="Stable identity")
    caption: str = Field("", description="Display text")
    default: bool = Field(False, description="Pre-activate as filter")
    property: Optional[str] = Field(None, description="Owning property key")

    class Config:
        """Pydantic config."""
        arbitrary_types_allowed = True


class PropertyDescriptor(BaseModel):
    """
    Describes one queryable property of an entity.

    The participation flags are filled in by normalization from the
    characteristics sets that reference the property.
    """
    property: str = Field(..., description="Stable property key")
    caption: str = Field("", description="Display text")
    values: List[ValueDescriptor] = Field(default_factory=list)
    sortable: bool = False
    filterable: bool = False
    groupable: bool = False

    def find_value(self, value: Any) -> Optional[ValueDescriptor]:
        """Match by raw value first, then by value key."""
        for descriptor in self.values:
            if descriptor.value == value or descriptor.value_key == value:
                return descriptor
        return None


DescriptorRef = Union[str, PropertyDescriptor]


class Characteristics(BaseModel):
    """
    Schema for a cardstack view.

    `groupable_by`, `sortable_by` and `filterable_by` accept property keys
    or raw descriptors; once normalized they hold keys only and every
    descriptor lives in `definitions`.
    """
    groupable_by: List[DescriptorRef] = Field(default_factory=list)
    sortable_by: List[DescriptorRef] = Field(default_factory=list)
    filterable_by: List[DescriptorRef] = Field(default_factory=list)
    definitions: Dict[str, PropertyDescriptor] = Field(default_factory=dict)
    searchable_by: List[str] = Field(default_factory=list)
    filter_value_limit: Optional[int] = None
    filter_value_increment: Optional[int] = None
    greedy_consumer: bool = False
