"""Error types raised by the wrapfetch client."""

from __future__ import annotations

TIMEOUT_MESSAGE = "Timeout has been exceeded"


class HttpClientError(Exception):
    """Base class for errors raised by wrapfetch itself.

    Transport and interceptor errors are never wrapped; they reach the caller
    unchanged.
    """


class MissingBaseURLError(HttpClientError, ValueError):
    """A relative target was given but the client has no base URL."""

    def __init__(self, target: str) -> None:
        super().__init__(
            f"Cannot resolve relative url {target!r}: use an absolute url "
            "or configure base_url when creating the client"
        )
        self.target = target


class RequestTimeoutError(HttpClientError, TimeoutError):
    """An attempt was aborted because its timeout elapsed."""

    def __init__(self, message: str = TIMEOUT_MESSAGE) -> None:
        super().__init__(message)
