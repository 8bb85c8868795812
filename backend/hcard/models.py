"""
h-card Data Models

- PropertyValue: a single microformats property value
- StructuredItem: one parsed microformats item
- IdentityCard: the card served to clients
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

HCARD_TYPE = "h-card"


# ==================== Property Values ====================

@dataclass(frozen=True)
class PlainString:
    """A property value given as a bare string."""
    value: str


@dataclass(frozen=True)
class NamedValue:
    """A property value given as a mapping with a "value" field (e.g. u-photo with alt, embedded items)."""
    value: str


@dataclass(frozen=True)
class OtherValue:
    """Any other shape; reads as empty."""
    value: str = ""


PropertyValue = Union[PlainString, NamedValue, OtherValue]


def property_value(raw: Any) -> PropertyValue:
    """Classify a raw parser value."""
    if isinstance(raw, str):
        return PlainString(raw)
    if isinstance(raw, Mapping) and isinstance(raw.get("value"), str):
        return NamedValue(raw["value"])
    return OtherValue()


# ==================== Structured Items ====================

@dataclass(frozen=True)
class StructuredItem:
    """
    One microformats item: its types and its properties.

    Embedded items found in property values and children are kept in
    `embedded` in document order, so candidates can be collected from the
    whole tree.
    """
    types: FrozenSet[str]
    properties: Mapping[str, Tuple[PropertyValue, ...]] = field(default_factory=dict)
    embedded: Tuple["StructuredItem", ...] = ()

    def string(self, name: str) -> str:
        """First value of a property as a string, "" when absent."""
        values = self.properties.get(name, ())
        if not values:
            return ""
        return values[0].value

    def is_a(self, item_type: str) -> bool:
        return item_type in self.types

    def walk(self):
        """Yield this item and every embedded item, depth first."""
        yield self
        for child in self.embedded:
            yield from child.walk()

    @classmethod
    def from_mf2(cls, data: Mapping[str, Any]) -> "StructuredItem":
        """Build an item from an mf2 JSON item (as produced by mf2py)."""
        properties: Dict[str, Tuple[PropertyValue, ...]] = {}
        embedded: List[StructuredItem] = []

        for name, values in (data.get("properties") or {}).items():
            if not isinstance(values, list):
                values = [values]
            properties[name] = tuple(property_value(v) for v in values)
            for v in values:
                if isinstance(v, Mapping) and v.get("type"):
                    embedded.append(cls.from_mf2(v))

        for child in data.get("children") or []:
            if isinstance(child, Mapping):
                embedded.append(cls.from_mf2(child))

        return cls(
            types=frozenset(data.get("type") or ()),
            properties=properties,
            embedded=tuple(embedded),
        )


# ==================== Identity Card ====================

class IdentityCard(BaseModel):
    """
    Representative h-card of a page.

    Serialized with the wire names source/pname/uphoto/nickname/note;
    empty fields are omitted, so an empty card serializes as {}.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source: str = ""
    display_name: str = Field(default="", alias="pname")
    photo_url: str = Field(default="", alias="uphoto")
    nickname: str = ""
    note: str = ""

    @property
    def is_empty(self) -> bool:
        return self == IdentityCard()

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_defaults=True).encode("utf-8")

    @classmethod
    def from_json(cls, content: bytes) -> "IdentityCard":
        return cls.model_validate_json(content)
