"""DMC group operations."""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Union

from dmc.core.attributes import as_list, attribute_records, decode, encode
from .client import DmcClient, unwrap

GroupIds = Union[int, str, List[Union[int, str]]]


def _result_keys(results: Any) -> set:
    return {
        str(result.get("entityKey"))
        for result in as_list(results)
        if isinstance(result, Mapping) and result.get("entityKey") is not None
    }


class GroupService:
    """Service for managing DMC groups."""
    
    def __init__(self, client: DmcClient):
        """Initialize group service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    def get_group(self, group_id: Union[int, str]) -> Union[dict, bool]:
        """Return the group representation, or False."""
        reply = self.client.call("groupGet", {"groupId": group_id})
        group = unwrap(reply, "group")
        return group if group else False
    
    def clone_group(self, group_id: Union[int, str], options: Optional[Dict[str, Any]] = None) -> Union[dict, bool]:
        """Clone a group and return the new group, or False.
        
        Args:
            group_id: Group to clone
            options: Clone options (e.g. name, email, copy flags)
        """
        reply = self.client.call("groupClone", {"groupId": group_id, "options": options or {}})
        group = unwrap(reply, "group")
        return group if group else False
    
    def get_group_attributes(self, group_id: Union[int, str]) -> Union[dict, bool]:
        """Return the group's attributes as a flat map, or False.
        
        A response without attributes counts as a failure.
        """
        reply = self.client.call("groupGetAttributes", {"groupId": group_id})
        records = attribute_records(reply)
        if records is None:
            return False
        attributes = decode(records)
        return attributes if attributes else False
    
    def set_group_attributes(self, group_id: Union[int, str], attributes: Mapping[str, Any]) -> bool:
        """Set attributes on a group."""
        reply = self.client.call("groupSetAttributes", {
            "groupId": group_id,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    def find_groups_by_attributes(self, attributes: Mapping[str, Any]) -> Union[List[Any], bool]:
        """Return the ids of groups whose attributes match, or False."""
        reply = self.client.call("groupFindIdsByAttributes", {"attributes": encode(attributes)})
        group_ids = as_list(unwrap(reply, "groupIds"))
        return group_ids if group_ids else False
    
    def get_prepared_messages(self, group_id: Union[int, str]) -> Union[List[Any], bool]:
        """Return the ids of messages prepared for a group, or False."""
        reply = self.client.call("groupGetPreparedMessages", {"groupId": group_id})
        message_ids = as_list(unwrap(reply, "messageIds"))
        return message_ids if message_ids else False
    
    def archive_group(self, group_ids: GroupIds) -> bool:
        """Archive one or more groups.
        
        Returns:
            True only if the result names every submitted group id
        """
        submitted = as_list(group_ids)
        reply = self.client.call("groupArchive", {"groupIds": submitted})
        return self._all_acknowledged(submitted, unwrap(reply, "archivingResults"))
    
    def activate_group(self, group_ids: GroupIds) -> bool:
        """Activate one or more archived groups.
        
        Returns:
            True only if the result names every submitted group id
        """
        submitted = as_list(group_ids)
        reply = self.client.call("groupActivate", {"groupIds": submitted})
        return self._all_acknowledged(submitted, unwrap(reply, "activatingResults"))
    
    @staticmethod
    def _all_acknowledged(submitted: List[Any], results: Any) -> bool:
        if not submitted or not results:
            return False
        return {str(group_id) for group_id in submitted} <= _result_keys(results)
