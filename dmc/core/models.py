"""Value types shared by the DMC services."""
from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class SubscriptionMode(str, Enum):
    """How a user is subscribed to a group."""
    CONFIRMED_OPT_IN = "CONFIRMED_OPT_IN"
    DOUBLE_OPT_IN = "DOUBLE_OPT_IN"
    OPT_IN = "OPT_IN"


class AttributeType(str, Enum):
    """Value type of a custom attribute definition."""
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"


def coerce_enum(enum_cls, value: Any) -> Optional[Enum]:
    """Return the enum member named by value (case-insensitive), or None."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        return None


@dataclass(frozen=True)
class LinkCategory:
    """Server-side classification rule for links found in messages.
    
    Attributes:
        name: Unique category name
        description: Free text description
        pattern: Regular expression matched against link URLs
    """
    name: str
    description: str = ""
    pattern: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


LinkCategoryLike = Union[LinkCategory, Mapping[str, Any]]


def link_category_payload(category: LinkCategoryLike) -> Dict[str, Any]:
    """Convert a LinkCategory or mapping to the wire record."""
    if isinstance(category, LinkCategory):
        return category.to_dict()
    return {
        "name": category.get("name"),
        "description": category.get("description", ""),
        "pattern": category.get("pattern", ""),
    }
