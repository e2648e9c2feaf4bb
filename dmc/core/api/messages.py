"""DMC message operations."""
from __future__ import annotations
from typing import Any, List, Mapping, Optional, Union

from dmc.core.attributes import as_list
from .client import DmcClient, unwrap
from .preconditions import requires, user_exists, message_valid

Id = Union[int, str]


class MessageService:
    """Service for sending and validating DMC messages."""
    
    def __init__(self, client: DmcClient):
        """Initialize message service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    @requires(user_exists("user_id"))
    def send_single_message(self, message_id: Id, user_id: Id, extra: Optional[Any] = None) -> bool:
        """Send a prepared message to one existing user.
        
        Args:
            message_id: Message id
            user_id: Recipient user id
            extra: Additional content merged into the message
        """
        reply = self.client.call("messageSendSingle", {
            "messageId": message_id,
            "recipientId": user_id,
            "additionalContent": extra,
        })
        return bool(reply)
    
    @requires(user_exists("user_id"), message_valid("message_id"))
    def send_transactional_message(
        self,
        message_id: Id,
        transaction_id: str,
        user_id: Id,
        extra: Optional[Any] = None,
    ) -> bool:
        """Send a transactional message to an existing user.
        
        The message must pass remote validation first.
        
        Args:
            message_id: Message id
            transaction_id: External transaction reference
            user_id: Recipient user id
            extra: Additional content merged into the message
        """
        reply = self.client.call("messageSendTransactional", {
            "messageId": message_id,
            "externalTransactionFormula": transaction_id,
            "recipientId": user_id,
            "additionalContent": extra,
        })
        return bool(reply)
    
    @requires(message_valid("message_id"))
    def get_message_personalizations(self, message_id: Id) -> Union[List[str], bool]:
        """Return the attribute names a valid message personalizes with, or False."""
        reply = self.client.call("messageGetUsedPersonalizations", {"messageId": message_id})
        names = as_list(unwrap(reply, "attributeNames"))
        return names if names else False
    
    def validate_message(self, message_id: Id) -> bool:
        """Return True if the message passes remote validation.
        
        A validation result carrying an error code means the message is invalid.
        """
        reply = self.client.call("messageValidate", {"messageId": message_id}, allow_empty=True)
        if reply is None:
            return False
        result = unwrap(reply, "validationResult")
        if isinstance(result, Mapping) and result.get("code") is not None:
            return False
        return True
