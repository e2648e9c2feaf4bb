"""DMC attribute definition and link category operations."""
from __future__ import annotations
from typing import Any, Iterable, List, Optional, Tuple, Union

from dmc.core.attributes import as_list
from dmc.core.models import AttributeType, LinkCategoryLike, coerce_enum, link_category_payload
from .client import DmcClient, unwrap
from .preconditions import requires, one_of


def _category_list(categories: Union[LinkCategoryLike, Iterable[LinkCategoryLike]]) -> List[LinkCategoryLike]:
    # A single mapping is one category, not a list of its keys.
    if isinstance(categories, (list, tuple)):
        return list(categories)
    return [categories]


class MetaService:
    """Service for attribute definitions and link categories."""
    
    def __init__(self, client: DmcClient):
        """Initialize meta service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    # ─────────────────────────────────────────────────────────────────────
    # Attribute definitions
    # ─────────────────────────────────────────────────────────────────────
    
    @requires(one_of("attribute_type", AttributeType))
    def create_attribute(
        self,
        name: str,
        attribute_type: Union[str, AttributeType],
        enumeration_values: Optional[List[Any]] = None,
        active: bool = True,
    ) -> bool:
        """Create a custom attribute definition.
        
        Args:
            name: Attribute name
            attribute_type: "string", "number" or "boolean" (any case)
            enumeration_values: Allowed values, if restricted
            active: Create the attribute as active
            
        Returns:
            True if the definition was created
        """
        reply = self.client.call("metaCreateAttributeDefinitions", {
            "attributeDefinitions": {
                "name": name,
                "type": coerce_enum(AttributeType, attribute_type).value,
                "enumerationValues": list(enumeration_values or []),
                "active": active,
            },
        })
        return bool(reply)
    
    def get_attributes(self) -> Union[List[dict], bool]:
        """Return all attribute definitions, or False."""
        reply = self.client.call("metaGetAttributeDefinitions")
        definitions = as_list(unwrap(reply, "attributeDefinitions"))
        return definitions if definitions else False
    
    def archive_attribute(self, names: Union[str, List[str]]) -> bool:
        """Archive one or more attribute definitions by name."""
        reply = self.client.call("metaArchiveAttributeDefinitions", {"attributeNames": as_list(names)})
        return bool(reply)
    
    def activate_attribute(self, names: Union[str, List[str]]) -> bool:
        """Activate one or more archived attribute definitions by name."""
        reply = self.client.call("metaActivateAttributeDefinitions", {"attributeNames": as_list(names)})
        return bool(reply)
    
    # ─────────────────────────────────────────────────────────────────────
    # Link categories
    # ─────────────────────────────────────────────────────────────────────
    
    def get_link_categories(self) -> Union[List[dict], bool]:
        """Return all link categories, or False."""
        reply = self.client.call("metaGetLinkCategories")
        categories = as_list(unwrap(reply, "linkCategories"))
        return categories if categories else False
    
    def create_link_categories(self, categories: Union[LinkCategoryLike, Iterable[LinkCategoryLike]]) -> bool:
        """Create one or more link categories.
        
        Args:
            categories: LinkCategory, mapping with name/description/pattern,
                or a list of either
                
        Returns:
            True if the categories were created
        """
        payload = [link_category_payload(category) for category in _category_list(categories)]
        reply = self.client.call("metaCreateLinkCategories", {"categories": payload})
        return bool(reply)
    
    def update_link_category(self, category: LinkCategoryLike) -> bool:
        """Update the link category with the same name."""
        reply = self.client.call("metaUpdateLinkCategory", {"category": link_category_payload(category)})
        return bool(reply)
    
    def delete_link_categories(self, names: Union[str, List[str], Tuple[str, ...]]) -> bool:
        """Delete link categories by name (a single name, a list or a tuple)."""
        if isinstance(names, tuple):
            names = list(names)
        elif not isinstance(names, list):
            names = [names]
        reply = self.client.call("metaDeleteLinkCategory", {"categoryNames": names})
        return bool(reply)
