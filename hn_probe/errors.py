from typing import Optional


class ProbeError(Exception):
    """Base class for failures talking to the Hacker News API."""


class TransportError(ProbeError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"GET {url} failed: {cause}")


class ProtocolError(ProbeError):
    """The API answered, but not with the status or body we require."""

    def __init__(
        self,
        url: str,
        status: int,
        body: Optional[str] = None,
        reason: str = "unexpected response",
    ):
        self.url = url
        self.status = status
        self.body = body
        self.reason = reason
        super().__init__(f"GET {url}: {reason} (status {status})")
