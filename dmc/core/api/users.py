"""DMC user management operations."""
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

from dmc.core.attributes import decode_response, encode
from .client import DmcClient, unwrap
from .preconditions import (
    requires,
    valid_email,
    user_exists,
    user_exists_by_email,
    user_absent_by_email,
)

logger = logging.getLogger(__name__)

UserId = Union[int, str]


class UserService:
    """Service for managing DMC users and their profiles."""
    
    def __init__(self, client: DmcClient):
        """Initialize user service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    @requires(valid_email("email"), user_absent_by_email("email"))
    def create_user(
        self,
        email: str,
        mobile: Optional[str] = None,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Union[dict, bool]:
        """Create a user unless one already exists with this email.
        
        Args:
            email: Email address (must be valid and unused)
            mobile: Mobile number
            attributes: Initial profile attributes
            
        Returns:
            Created user representation, or False
        """
        reply = self.client.call("userCreate", {
            "email": email,
            "mobileNumber": mobile,
            "attributes": encode(attributes),
        })
        user = unwrap(reply, "user")
        if user:
            logger.info("[dmc] User '%s' created", email)
        return user if user else False
    
    def get_user(self, user_id: UserId) -> Union[dict, bool]:
        """Return the user representation, or False."""
        reply = self.client.call("userGet", {"userId": user_id})
        user = unwrap(reply, "user")
        return user if user else False
    
    @requires(valid_email("email"))
    def get_user_by_email(self, email: str) -> Union[dict, bool]:
        """Return the user with this email, or False."""
        reply = self.client.call("userGetByEmail", {"email": email})
        user = unwrap(reply, "user")
        return user if user else False
    
    def get_profile(self, user_id: UserId) -> Union[dict, bool]:
        """Return the user's profile attributes as a flat map, or False."""
        reply = self.client.call("userGetProfile", {"userId": user_id})
        return decode_response(reply) if reply else False
    
    @requires(valid_email("email"))
    def get_profile_by_email(self, email: str) -> Union[dict, bool]:
        """Return the profile of the user with this email, or False."""
        reply = self.client.call("userGetProfileByEmail", {"email": email})
        return decode_response(reply) if reply else False
    
    @requires(user_exists("user_id"))
    def update_profile(self, user_id: UserId, attributes: Mapping[str, Any]) -> bool:
        """Update the given profile attributes, leaving others untouched."""
        reply = self.client.call("userUpdateProfile", {
            "userId": user_id,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @requires(valid_email("email"), user_exists_by_email("email"))
    def update_profile_by_email(self, email: str, attributes: Mapping[str, Any]) -> bool:
        """Update profile attributes of the user with this email."""
        reply = self.client.call("userUpdateProfileByEmail", {
            "email": email,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @requires(user_exists("user_id"))
    def replace_profile(self, user_id: UserId, attributes: Mapping[str, Any]) -> bool:
        """Replace the whole profile; attributes not given are cleared."""
        reply = self.client.call("userReplaceProfile", {
            "userId": user_id,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @requires(valid_email("email"), user_exists_by_email("email"))
    def replace_profile_by_email(self, email: str, attributes: Mapping[str, Any]) -> bool:
        """Replace the whole profile of the user with this email."""
        reply = self.client.call("userReplaceProfileByEmail", {
            "email": email,
            "attributes": encode(attributes),
        })
        return bool(reply)
    
    @requires(user_exists("user_id"))
    def delete_user(self, user_id: UserId) -> bool:
        """Delete a user by id."""
        reply = self.client.call("userDelete", {"userId": user_id})
        if reply:
            logger.info("[dmc] User %s deleted", user_id)
        return bool(reply)
    
    @requires(valid_email("email"))
    def delete_user_by_email(self, email: str) -> bool:
        """Look up the user with this email, then delete it by id."""
        user = self.get_user_by_email(email)
        if not user or user.get("id") is None:
            logger.debug("[dmc] delete_user_by_email skipped: no user '%s'", email)
            return False
        reply = self.client.call("userDelete", {"userId": user["id"]})
        if reply:
            logger.info("[dmc] User '%s' deleted (id=%s)", email, user["id"])
        return bool(reply)
