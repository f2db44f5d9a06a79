"""HTTP transport capability and its httpx implementation."""

from .cancellation import CancelSource, CancelToken
from .exceptions import RequestCancelled, TransportError, TransportTimeout
from .httpx_transport import DEFAULT_TIMEOUT, HttpxTransport, decode_body
from .interfaces import HttpTransport, OutboundRequest, TransportResponse

__all__ = [
    "DEFAULT_TIMEOUT",
    "CancelSource",
    "CancelToken",
    "HttpTransport",
    "HttpxTransport",
    "OutboundRequest",
    "RequestCancelled",
    "TransportError",
    "TransportResponse",
    "TransportTimeout",
    "decode_body",
]
