"""Digital Messaging Center SOAP client package.

To use the client:
    from dmc import DMC

    with DMC(soap_url, "apiuser@example.com", "secret") as dmc:
        user = dmc.get_user_by_email("alice@example.com")

To load connection settings from the environment:
    from dmc.config import load_settings
    dmc = DMC.from_config(load_settings())
"""
from dmc.core.api import DMC

__all__ = ["DMC"]
