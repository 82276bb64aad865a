"""Fetch-style asynchronous HTTP client with retries, timeouts and hooks."""

from .body import BodyKind, classify_body, transform_body
from .client import HttpClient, wrap_fetch
from .config import HttpClientConfig
from .errors import HttpClientError, MissingBaseURLError, RequestTimeoutError
from .forms import MultipartForm, URLEncodedParams
from .headers import (
    append_header,
    delete_header,
    get_header,
    set_header,
    to_headers,
)
from .interceptors import Interceptors
from .request import CallOptions, MaterializedRequest
from .retry import RetryControl, RetryPolicy, exponential_backoff
from .transport import RequestsTransport, Transport

__all__ = [
    "BodyKind",
    "CallOptions",
    "HttpClient",
    "HttpClientConfig",
    "HttpClientError",
    "Interceptors",
    "MaterializedRequest",
    "MissingBaseURLError",
    "MultipartForm",
    "RequestTimeoutError",
    "RequestsTransport",
    "RetryControl",
    "RetryPolicy",
    "Transport",
    "URLEncodedParams",
    "append_header",
    "classify_body",
    "delete_header",
    "exponential_backoff",
    "get_header",
    "set_header",
    "to_headers",
    "transform_body",
    "wrap_fetch",
]
__version__ = "0.1.0"
