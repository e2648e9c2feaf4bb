"""DMC-specific exceptions.

Remote faults never surface as exceptions: operations return ``False``
instead. These are raised only where no operation result exists yet
(configuration loading, client construction).
"""


class DmcError(Exception):
    """Base exception for the DMC client."""
    pass


class DmcConfigError(DmcError):
    """Required connection setting is missing or malformed."""
    pass


class DmcConnectionError(DmcError):
    """The WSDL could not be fetched or parsed.
    
    Attributes:
        soap_url: Endpoint that failed
    """
    
    def __init__(self, soap_url: str, message: str):
        self.soap_url = soap_url
        self.message = message
        super().__init__(f"{soap_url}: {message}")
