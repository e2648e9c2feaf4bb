"""Single entry point to every DMC operation."""
from __future__ import annotations
import logging
import time
import weakref
from typing import TYPE_CHECKING, Any, Dict, Optional

from dmc.core.fault_report import FaultReporter
from dmc.core.info_report import collect_info
from .client import DmcClient, REQUEST_TIMEOUT
from .groups import GroupService
from .memberships import MembershipService
from .messages import MessageService
from .meta import MetaService
from .system import SystemService
from .users import UserService

if TYPE_CHECKING:
    from dmc.config.settings import DmcConfig

logger = logging.getLogger(__name__)


def _log_elapsed(start: float) -> float:
    seconds = time.perf_counter() - start
    logger.info("[benchmark] Action completed in %.4f seconds.", seconds)
    return seconds


class DMC(SystemService, MetaService, GroupService, UserService, MembershipService, MessageService):
    """Facade over the DMC SOAP API.
    
    Every operation returns its result on success and False otherwise;
    remote faults never raise. Set ``fault_trace`` to report every fault,
    including those expected during normal operation (e.g. a lookup for a
    user that does not exist yet).
    
    Usage:
        dmc = DMC("https://host/api/soap/v2?wsdl", "api@example.com", "secret")
        if not dmc.get_user_by_email("alice@example.com"):
            dmc.create_user("alice@example.com", attributes={"firstName": "Alice"})
    """
    
    def __init__(
        self,
        soap_url: str,
        login: str,
        password: str,
        fault_trace: bool = False,
        benchmark: bool = False,
        *,
        timeout: float = REQUEST_TIMEOUT,
        soap: Any = None,
        reporter: Optional[FaultReporter] = None,
    ):
        """Connect to a DMC instance.
        
        Args:
            soap_url: WSDL URL of the DMC instance
            login: API user login
            password: API user password
            fault_trace: Report faults through the fault reporter
            benchmark: Log elapsed time when the facade is closed or collected
            timeout: HTTP timeout in seconds
            soap: Pre-built SOAP client (skips WSDL loading)
            reporter: Fault reporter (defaults to logging)
            
        Raises:
            DmcConnectionError: If the WSDL cannot be loaded
        """
        self._benchmark = weakref.finalize(self, _log_elapsed, time.perf_counter()) if benchmark else None
        self.client = DmcClient(
            soap_url,
            login,
            password,
            fault_trace=fault_trace,
            timeout=timeout,
            soap=soap,
            reporter=reporter,
        )
    
    @classmethod
    def from_config(cls, config: "DmcConfig", **kwargs) -> "DMC":
        """Build a facade from loaded settings."""
        return cls(
            config.soap_url,
            config.login,
            config.password,
            fault_trace=config.fault_trace,
            benchmark=config.benchmark,
            timeout=config.timeout,
            **kwargs,
        )
    
    @property
    def soap_url(self) -> str:
        return self.client.soap_url
    
    @property
    def fault_trace(self) -> bool:
        return self.client.fault_trace
    
    def dmc_info(self) -> Dict[str, Dict[str, Any]]:
        """Return system information (status, endpoint, versions, operations)."""
        return collect_info(self)
    
    def close(self) -> Optional[float]:
        """Log and return elapsed seconds when benchmarking.
        
        The elapsed time is logged once: on the first close, or when the
        facade is garbage-collected without being closed.
        """
        if self._benchmark is None or not self._benchmark.alive:
            return None
        return self._benchmark()
    
    def __enter__(self) -> "DMC":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
