"""Asynchronous HTTP client built on an injected transport.

The client normalizes each call into a ``MaterializedRequest`` and then runs
the attempt loop: request interceptors, the transport call under a timeout,
and the retry decision. Response interceptors run once, after the first
successful attempt.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Any

from .config import HttpClientConfig
from .errors import RequestTimeoutError
from .headers import HeadersLike
from .interceptors import Interceptors, run_request_hooks, run_response_hooks
from .request import CallOptions, MaterializedRequest, build_request
from .retry import DEFAULT_RETRY_DELAY_SECONDS, RetryDelay, RetryPolicy
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class HttpClient:
    """Callable client bound to one transport and one set of defaults.

    ``HttpClient`` keeps no per-call state, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self, config: HttpClientConfig, *, transport: Transport
    ) -> None:
        """Create a new HttpClient.

        Args:
            config: Defaults for headers, base URL, timeout, retries and
                interceptors.
            transport: Coroutine function performing the actual I/O.
        """
        self._config = config
        self._transport = transport

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    def _retry_policy(self, options: CallOptions) -> RetryPolicy:
        return RetryPolicy.resolve(
            options.retry,
            self._config.retries,
            options.retry_delay,
            self._config.retry_delay,
        )

    async def _attempt(self, request: MaterializedRequest) -> Any:
        """Call the transport once, bounded by the request timeout."""
        deadline = asyncio.timeout(request.timeout_seconds)
        try:
            async with deadline:
                return await self._transport(request)
        except TimeoutError as exc:
            if deadline.expired():
                raise RequestTimeoutError() from exc
            raise

    async def _dispatch(
        self, request: MaterializedRequest, options: CallOptions
    ) -> Any:
        """Run the attempt loop and the response hooks."""
        policy = self._retry_policy(options)
        hooks = (self._config.interceptors, options.interceptors)
        failures = 0
        while True:
            try:
                await run_request_hooks(hooks, request)
                response = await self._attempt(request)
                break
            except Exception as exc:
                failures += 1
                if failures >= policy.max_attempts:
                    logger.debug(
                        "Giving up on %s %s after %d attempt(s): %r",
                        request.method,
                        request.url_string,
                        failures,
                        exc,
                    )
                    raise
                logger.debug(
                    "Attempt %d/%d for %s %s failed: %r",
                    failures,
                    policy.max_attempts,
                    request.method,
                    request.url_string,
                    exc,
                )
                if not await policy.wait(failures, request):
                    logger.debug(
                        "Retries cancelled for %s %s",
                        request.method,
                        request.url_string,
                    )
                    raise

        await run_response_hooks(hooks, request, response)
        return response

    async def __call__(
        self,
        target: Any,
        options: CallOptions | None = None,
        **overrides: Any,
    ) -> Any:
        """Send a request and return the transport's response.

        Args:
            target: URL string, parsed URL, or request handle. Relative URLs
                are resolved against the configured base URL.
            options: Per-call options.
            **overrides: ``CallOptions`` fields, applied on top of
                ``options``.

        Returns:
            The response produced by the transport. HTTP error statuses are
            returned, not raised.

        Raises:
            MissingBaseURLError: ``target`` is relative and no base URL is set.
            RequestTimeoutError: The last attempt timed out.
            Exception: Transport and interceptor errors, unchanged.
        """
        if not target:
            return await self._transport(target)

        if options is None:
            options = CallOptions(**overrides)
        elif overrides:
            options = dataclasses.replace(options, **overrides)

        request = build_request(target, options, self._config)
        return await self._dispatch(request, options)

    async def request(self, method: str, target: Any, **overrides: Any) -> Any:
        return await self(target, method=method, **overrides)

    async def get(self, target: Any, **overrides: Any) -> Any:
        return await self.request("GET", target, **overrides)

    async def head(self, target: Any, **overrides: Any) -> Any:
        return await self.request("HEAD", target, **overrides)

    async def post(self, target: Any, **overrides: Any) -> Any:
        return await self.request("POST", target, **overrides)

    async def put(self, target: Any, **overrides: Any) -> Any:
        return await self.request("PUT", target, **overrides)

    async def patch(self, target: Any, **overrides: Any) -> Any:
        return await self.request("PATCH", target, **overrides)

    async def delete(self, target: Any, **overrides: Any) -> Any:
        return await self.request("DELETE", target, **overrides)


def wrap_fetch(
    *,
    fetch: Transport | None = None,
    user_agent: str | None = None,
    timeout: float | None = None,
    headers: HeadersLike | None = None,
    base_url: Any = None,
    interceptors: Interceptors | None = None,
    retry: int = 0,
    retry_delay: RetryDelay = DEFAULT_RETRY_DELAY_SECONDS,
) -> HttpClient:
    """Build an independently configured client.

    Args:
        fetch: Transport to use; a new ``RequestsTransport`` when omitted.
        user_agent: Sent as ``User-Agent`` unless a call sets its own.
        timeout: Default per-attempt timeout in seconds.
        headers: Default headers; calls may override them.
        base_url: Base for relative targets (string or parsed URL).
        interceptors: Hooks run before per-call hooks.
        retry: Default number of retries after the first attempt.
        retry_delay: Seconds between attempts, or a function
            ``(attempt, request) -> seconds``. Calling
            ``request.retry_control.cancel()`` ends the retries of that call.
    """
    config = HttpClientConfig(
        user_agent=user_agent,
        default_headers=headers or {},
        base_url=base_url,
        timeout_seconds=timeout,
        retries=retry,
        retry_delay=retry_delay,
        interceptors=interceptors or Interceptors(),
    )
    return HttpClient(config, transport=fetch or RequestsTransport())
