"""DMC system introspection operations."""
from __future__ import annotations
from typing import List, Union

from .client import DmcClient, unwrap


class SystemService:
    """Service for DMC system information."""
    
    def __init__(self, client: DmcClient):
        """Initialize system service.
        
        Args:
            client: DMC SOAP client
        """
        self.client = client
    
    def api_version(self) -> Union[str, bool]:
        """Return the API version string, or False."""
        reply = self.client.call("systemGetApiVersion")
        version = unwrap(reply, "version")
        return version if version else False
    
    def ecm_version(self) -> Union[str, bool]:
        """Return the platform build number (without the "Build " prefix), or False."""
        reply = self.client.call("systemGetEcmVersion")
        version = unwrap(reply, "version")
        return str(version).replace("Build ", "") if version else False
    
    def functions(self) -> Union[List[str], bool]:
        """Return the remote operation names exposed by the WSDL, or False."""
        names = self.client.operation_names()
        return names if names else False
