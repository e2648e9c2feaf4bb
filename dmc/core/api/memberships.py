"""DMC group membership operations."""
from __future__ import annotations
from typing import Any, List, Mapping, Union

from dmc.core.attributes import decode_response, encode, group_ids_from_memberships
from dmc.core.models import SubscriptionMode, coerce_enum
from .client import DmcClient, unwrap
from .preconditions import requires, valid_email, user_exists, one_of

Id = Union[int, str]


class MembershipService:
    """Service for subscriptions and membership-scoped attributes.
    
    Subscribe/unsubscribe notify the user according to the group settings;
    create/delete change membership silently.
    """
    
    def __init__(self, client: DmcClient):
        """Initialize membership service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    @requires(one_of("mode", SubscriptionMode))
    def subscribe_member(self, user_id: Id, group_id: Id, mode: Union[str, SubscriptionMode]) -> bool:
        """Subscribe a user to a group.
        
        Args:
            user_id: User id
            group_id: Group id
            mode: CONFIRMED_OPT_IN, DOUBLE_OPT_IN or OPT_IN
        """
        reply = self.client.call("membershipSubscribe", {
            "userId": user_id,
            "groupId": group_id,
            "subscriptionMode": coerce_enum(SubscriptionMode, mode).value,
        })
        return bool(reply)
    
    @requires(valid_email("email"), one_of("mode", SubscriptionMode))
    def subscribe_member_by_email(self, email: str, group_id: Id, mode: Union[str, SubscriptionMode]) -> bool:
        """Subscribe the user with this email to a group."""
        reply = self.client.call("membershipSubscribeByEmail", {
            "email": email,
            "groupId": group_id,
            "subscriptionMode": coerce_enum(SubscriptionMode, mode).value,
        })
        return bool(reply)
    
    def unsubscribe_member(self, user_id: Id, group_id: Id) -> bool:
        """Unsubscribe a user from a group."""
        reply = self.client.call("membershipUnsubscribe", {"userId": user_id, "groupId": group_id})
        return bool(reply)
    
    @requires(valid_email("email"))
    def unsubscribe_member_by_email(self, email: str, group_id: Id) -> bool:
        """Unsubscribe the user with this email from a group."""
        reply = self.client.call("membershipUnsubscribeByEmail", {"email": email, "groupId": group_id})
        return bool(reply)
    
    def create_membership(self, user_id: Id, group_id: Id) -> bool:
        """Add a user to a group without notification."""
        reply = self.client.call("membershipCreate", {"userId": user_id, "groupId": group_id})
        return bool(reply)
    
    def delete_membership(self, user_id: Id, group_id: Id) -> bool:
        """Remove a user from a group without notification."""
        reply = self.client.call("membershipDelete", {"userId": user_id, "groupId": group_id})
        return bool(reply)
    
    def find_all_memberships(self, user_id: Id) -> Union[List[Any], bool]:
        """Return the ids of all groups the user belongs to, or False."""
        reply = self.client.call("membershipFindAll", {"userId": user_id})
        return self._group_ids(reply)
    
    @requires(valid_email("email"))
    def find_all_memberships_by_email(self, email: str) -> Union[List[Any], bool]:
        """Return the ids of all groups the user with this email belongs to, or False."""
        reply = self.client.call("membershipFindAllByEmail", {"email": email})
        return self._group_ids(reply)
    
    def get_membership_attributes(self, user_id: Id, group_id: Id) -> Union[dict, bool]:
        """Return the attributes scoped to (user, group) as a flat map, or False."""
        reply = self.client.call("membershipGetAttributes", {"userId": user_id, "groupId": group_id})
        return decode_response(reply) if reply else False
    
    @requires(valid_email("email"))
    def get_membership_attributes_by_email(self, email: str, group_id: Id) -> Union[dict, bool]:
        """Return the membership attributes of the user with this email, or False."""
        reply = self.client.call("membershipGetAttributesByEmail", {"email": email, "groupId": group_id})
        return decode_response(reply) if reply else False
    
    @requires(user_exists("user_id"))
    def update_membership_attributes(self, user_id: Id, group_id: Id, attributes: Mapping[str, Any]) -> bool:
        """Update the given membership attributes, leaving others untouched."""
        reply = self.client.call("membershipUpdateAttributes", {
            "userId": user_id,
            "groupId": group_id,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @requires(user_exists("user_id"))
    def replace_membership_attributes(self, user_id: Id, group_id: Id, attributes: Mapping[str, Any]) -> bool:
        """Replace all membership attributes; attributes not given are cleared."""
        reply = self.client.call("membershipReplaceAttributes", {
            "userId": user_id,
            "groupId": group_id,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @staticmethod
    def _group_ids(reply: Any) -> Union[List[Any], bool]:
        if not reply:
            return False
        group_ids = group_ids_from_memberships(unwrap(reply, "memberships"))
        return group_ids if group_ids else False
