"""Configuration model for the HttpClient."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import SplitResult, ParseResult

from .headers import to_headers
from .interceptors import Interceptors
from .retry import DEFAULT_RETRY_DELAY_SECONDS, RetryDelay


def _default_headers() -> Mapping[str, str]:
    """Return immutable empty default headers mapping."""

    return MappingProxyType({})


@dataclass(frozen=True)
class HttpClientConfig:
    """Client-wide defaults, fixed once the client is built.

    Every per-call option overrides the matching default here.
    """

    user_agent: str | None = None
    default_headers: Mapping[str, str] = field(
        default_factory=_default_headers
    )
    base_url: str | None = None
    timeout_seconds: float | None = None
    retries: int = 0
    retry_delay: RetryDelay = DEFAULT_RETRY_DELAY_SECONDS
    interceptors: Interceptors = field(default_factory=Interceptors)

    def __post_init__(self) -> None:
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")
        if (
            isinstance(self.retry_delay, (int, float))
            and self.retry_delay < 0
        ):
            raise ValueError("retry_delay must be >= 0")

        base_url: Any = self.base_url
        if isinstance(base_url, (SplitResult, ParseResult)):
            object.__setattr__(self, "base_url", base_url.geturl())

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(to_headers(self.default_headers)),
        )
