"""Low-level SOAP client for the DMC API.

Handles WSDL loading, authentication, remote calls and fault capture.
"""
from __future__ import annotations
import logging
import traceback
from typing import Any, Dict, List, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth
from lxml import etree
from zeep import Client, Settings
from zeep.exceptions import Error as ZeepError, Fault, TransportError
from zeep.helpers import serialize_object
from zeep.plugins import HistoryPlugin
from zeep.transports import Transport

from dmc.core.fault_report import FaultRecord, FaultReporter
from .exceptions import DmcConnectionError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


def element_to_data(element: Any) -> Any:
    """Convert an lxml element (e.g. a fault detail) to nested dicts."""
    if element is None:
        return None
    if not etree.iselement(element):
        return element
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return (element.text or "").strip()
    data: Dict[str, Any] = {}
    for child in children:
        key = etree.QName(child).localname
        value = element_to_data(child)
        if key in data:
            if not isinstance(data[key], list):
                data[key] = [data[key]]
            data[key].append(value)
        else:
            data[key] = value
    return data


def unwrap(reply: Any, key: str) -> Any:
    """Return ``reply[key]``, or reply itself when zeep already unwrapped it.

    zeep collapses single-element response wrappers, so ``userGetResponse``
    may arrive as ``{"user": {...}}`` or directly as the user.
    """
    if isinstance(reply, Mapping) and key in reply:
        return reply[key]
    return reply


class DmcClient:
    """SOAP client for the DMC API with fault capture.

    Features:
    - HTTP basic authentication on a shared requests session
    - Faults never raise: ``call`` returns None and records the fault
    - Request/response history kept for fault reports

    Usage:
        client = DmcClient("https://host/api/soap/v2?wsdl", "api@example.com", "secret")
        reply = client.call("userGetByEmail", {"email": "alice@example.com"})
    """

    def __init__(
        self,
        soap_url: str,
        login: str,
        password: str,
        fault_trace: bool = False,
        timeout: float = REQUEST_TIMEOUT,
        soap: Any = None,
        reporter: Optional[FaultReporter] = None,
    ):
        """Initialize DMC client.

        Args:
            soap_url: WSDL URL of the DMC instance
            login: API user login
            password: API user password
            fault_trace: Report faults through the fault reporter
            timeout: HTTP timeout in seconds
            soap: Pre-built SOAP client exposing ``service.<operation>``;
                a zeep client is created when omitted
            reporter: Fault reporter (defaults to logging)

        Raises:
            DmcConnectionError: If the WSDL cannot be loaded
        """
        self.soap_url = soap_url
        self.login = login
        self.fault_trace = fault_trace
        self.timeout = timeout
        self.reporter = reporter or FaultReporter()
        self.history: Optional[HistoryPlugin] = None

        if soap is None:
            soap = self._build_soap_client(soap_url, login, password, timeout)
        self.soap = soap

    def _build_soap_client(self, soap_url: str, login: str, password: str, timeout: float) -> Client:
        session = requests.Session()
        session.auth = HTTPBasicAuth(login, password)
        transport = Transport(session=session, timeout=timeout, operation_timeout=timeout)
        self.history = HistoryPlugin()
        try:
            return Client(
                wsdl=soap_url,
                transport=transport,
                plugins=[self.history],
                settings=Settings(strict=False),
            )
        except (requests.RequestException, ZeepError, OSError) as e:
            raise DmcConnectionError(soap_url, str(e)) from e

    def call(
        self,
        operation: str,
        parameters: Optional[Dict[str, Any]] = None,
        allow_empty: bool = False,
    ) -> Any:
        """Invoke a remote operation.

        Args:
            operation: Remote operation name (e.g., "userGet")
            parameters: Operation parameters
            allow_empty: Return {} instead of None for an empty response

        Returns:
            Response converted to plain dicts/lists, or None on fault or
            empty response
        """
        logger.debug("[dmc] -> %s", operation)
        try:
            method = getattr(self.soap.service, operation)
        except AttributeError as e:
            self._handle_fault(operation, e)
            return None

        try:
            reply = method(**(parameters or {}))
        except (ZeepError, requests.RequestException) as e:
            self._handle_fault(operation, e)
            return None

        result = serialize_object(reply, dict)
        if result is None or result == {} or result == []:
            logger.debug("[dmc] %s returned no payload", operation)
            return {} if allow_empty else None
        return result

    def operation_names(self) -> List[str]:
        """Return the operation names exposed by the loaded WSDL."""
        wsdl = getattr(self.soap, "wsdl", None)
        if wsdl is None:
            return []
        names: List[str] = []
        for service in wsdl.services.values():
            for port in service.ports.values():
                for name in port.binding.all():
                    if name not in names:
                        names.append(name)
        return names

    def _handle_fault(self, operation: str, exc: Exception) -> None:
        """Record a failed call and report it when fault tracing is on."""
        record = self._fault_record(operation, exc)
        logger.debug("[dmc] %s failed (code=%s): %s", operation, record.code, record.message)
        if not self.fault_trace:
            return
        try:
            self.reporter.report(record)
        except Exception:
            logger.exception("[dmc] Fault reporter failed for %s", operation)

    def _fault_record(self, operation: str, exc: Exception) -> FaultRecord:
        if isinstance(exc, Fault):
            code, message, detail = exc.code, exc.message, element_to_data(exc.detail)
        elif isinstance(exc, TransportError):
            content = exc.content
            if isinstance(content, bytes):
                content = content.decode("utf-8", errors="replace")
            code, message, detail = str(exc.status_code), exc.message, content
        elif isinstance(exc, AttributeError):
            code, message, detail = "Client", f"Function ({operation}) is not a valid method for this service", None
        else:
            code, message, detail = type(exc).__name__, str(exc), None

        trace = [
            {"file": frame.filename, "line": frame.lineno, "function": frame.name, "code": frame.line or ""}
            for frame in traceback.extract_tb(exc.__traceback__)
        ]
        last_sent, last_received = self._last_exchange()
        return FaultRecord(
            operation=operation,
            code=code,
            message=message or "",
            detail=detail,
            trace=trace,
            last_sent=last_sent,
            last_received=last_received,
        )

    def _last_exchange(self) -> tuple:
        if self.history is None:
            return None, None
        envelopes = []
        for attr in ("last_sent", "last_received"):
            try:
                entry = getattr(self.history, attr)
            except IndexError:
                entry = None
            if entry and entry.get("envelope") is not None:
                envelopes.append(etree.tostring(entry["envelope"], encoding="unicode", pretty_print=True))
            else:
                envelopes.append(None)
        return envelopes[0], envelopes[1]
