"""DMC SOAP API client library.

This package provides a modular, testable interface to DMC API operations.

Architecture:
- client.py: SOAP transport (zeep) with fault capture
- preconditions.py: Named checks run before remote calls
- system.py: API/build versions and exposed operations
- meta.py: Attribute definitions and link categories
- groups.py: Group lookup, cloning, attributes, archiving
- users.py: User lifecycle and profiles
- memberships.py: Subscriptions and membership attributes
- messages.py: Message sending and validation
- facade.py: DMC class combining all services
- exceptions.py: Construction and configuration errors

Usage:
    # Using the facade (recommended)
    from dmc.core.api import DMC

    dmc = DMC("https://host/api/soap/v2?wsdl", "api@example.com", "secret")
    user = dmc.get_user_by_email("alice@example.com")

    # Using a single service
    from dmc.core.api import DmcClient, UserService

    users = UserService(DmcClient(soap_url, login, password))
    users.get_user(42)
"""
from .client import DmcClient, REQUEST_TIMEOUT
from .exceptions import DmcError, DmcConfigError, DmcConnectionError
from .facade import DMC
from .groups import GroupService
from .memberships import MembershipService
from .messages import MessageService
from .meta import MetaService
from .system import SystemService
from .users import UserService

__all__ = [
    # Client
    "DmcClient",
    "REQUEST_TIMEOUT",
    "DMC",
    
    # Exceptions
    "DmcError",
    "DmcConfigError",
    "DmcConnectionError",
    
    # Services
    "SystemService",
    "MetaService",
    "GroupService",
    "UserService",
    "MembershipService",
    "MessageService",
]
