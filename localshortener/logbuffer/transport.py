"""HTTP transport relaying log entries to a remote collector

Classes:
    LogTransport:
        Protocol every transport follows; tests substitute fakes.
    HTTPLogTransport:
        POSTs one JSON-encoded entry per call using requests.

Example:
    >>> transport = HTTPLogTransport(timeout=5)
    >>> transport.send('http://localhost:3001/api/logs', {'level': 'info', 'message': 'hello'})
    201
"""

from typing import Any, Protocol

import requests

from localshortener.constants import Defaults


class LogTransport(Protocol):
    def send(self, endpoint: str, payload: dict[str, Any]) -> int:
        """Deliver `payload` to `endpoint` and return the HTTP status code.

        Transport failures (connection refused, timeouts, ...) are raised.
        """
        ...

    def close(self) -> None: ...


class HTTPLogTransport:
    """requests-based transport

    Attributes:
        timeout (float):
            Seconds to wait for connect and read. Defaults to 5.
        session (requests.Session):
            Session reusing connections to the collector.
    """

    def __init__(self, timeout: float = Defaults.LOG_DELIVERY_TIMEOUT, session: requests.Session | None = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, endpoint: str, payload: dict[str, Any]) -> int:
        response = self.session.post(
            endpoint,
            json=payload,
            headers={'Content-Type': 'application/json'},
            timeout=self.timeout,
        )
        return response.status_code

    def close(self) -> None:
        self.session.close()
