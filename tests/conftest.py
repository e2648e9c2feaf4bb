"""Pytest shared fixtures for DMC client tests."""
import pathlib
import sys
from typing import Any, Callable, Dict, List, Tuple

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests
from zeep.exceptions import Fault

from dmc.core.api import DMC, DmcClient
from dmc.core.fault_report import FaultReporter


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching a live DMC instance.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _fail(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _fail)


# ─────────────────────────────────────────────────────────────────────────────
# SOAP stub
# ─────────────────────────────────────────────────────────────────────────────
class StubSoap:
    """Stand-in for a zeep client.

    ``service.<operation>(**params)`` returns the canned response registered
    for that operation (a value, or a callable receiving the params) and
    records every call. Operations without a response raise a SOAP fault.
    """

    def __init__(self):
        self.responses: Dict[str, Any] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.service = _StubService(self)

    def respond(self, operation: str, response: Any) -> "StubSoap":
        self.responses[operation] = response
        return self

    def fault(self, operation: str, message: str = "Fault", code: str = "soap:Server") -> "StubSoap":
        def _raise(**params):
            raise Fault(message, code=code)

        self.responses[operation] = _raise
        return self

    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]

    def count(self, operation: str) -> int:
        return self.operations().count(operation)

    def params(self, operation: str) -> Dict[str, Any]:
        for name, params in reversed(self.calls):
            if name == operation:
                return params
        raise AssertionError(f"{operation} was never called")


class _StubService:
    def __init__(self, stub: StubSoap):
        self._stub = stub

    def __getattr__(self, operation: str) -> Callable[..., Any]:
        def _invoke(**params):
            self._stub.calls.append((operation, params))
            response = self._stub.responses.get(operation)
            if response is None:
                raise Fault(f"No stubbed response for {operation}", code="soap:Client")
            if callable(response):
                return response(**params)
            return response

        return _invoke


@pytest.fixture()
def soap():
    return StubSoap()


@pytest.fixture()
def reports():
    """Fault reports captured by the ``dmc``/``traced_dmc`` fixtures."""
    return []


@pytest.fixture()
def dmc(soap, reports):
    """DMC facade with fault tracing disabled."""
    return DMC("https://dmc.example.com/api/soap/v2?wsdl", "api@example.com", "secret",
               soap=soap, reporter=FaultReporter(renderer=reports.append))


@pytest.fixture()
def traced_dmc(soap, reports):
    """DMC facade with fault tracing enabled."""
    return DMC("https://dmc.example.com/api/soap/v2?wsdl", "api@example.com", "secret",
               fault_trace=True, soap=soap, reporter=FaultReporter(renderer=reports.append))


@pytest.fixture()
def client(soap):
    return DmcClient("https://dmc.example.com/api/soap/v2?wsdl", "api@example.com", "secret", soap=soap)
