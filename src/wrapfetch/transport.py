"""Transport interface and the default requests-based implementation.

A transport performs the actual I/O for one attempt. It must raise on
network failure and stop work when its task is cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import requests

from .forms import MultipartForm
from .request import MaterializedRequest

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def __call__(self, request: MaterializedRequest) -> Any: ...


class RequestsTransport:
    """Run requests through a ``requests.Session`` on a worker thread.

    The attempt timeout is forwarded to requests so an abandoned worker
    thread finishes on its own once the client stops waiting.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        verify_tls: bool = True,
    ) -> None:
        self._session = session or requests.Session()
        self._verify_tls = verify_tls

    async def __call__(self, request: Any) -> requests.Response:
        if not isinstance(request, MaterializedRequest):
            # Let requests reject whatever it was given.
            return await asyncio.to_thread(
                self._session.request, "GET", request
            )

        kwargs: dict[str, Any] = {
            "headers": dict(request.headers),
            "timeout": request.timeout_seconds,
            "allow_redirects": request.allow_redirects,
            "verify": self._verify_tls,
        }
        if isinstance(request.body, MultipartForm):
            kwargs["files"] = [
                (name, (None, value)) for name, value in request.body
            ]
        elif request.body is not None:
            kwargs["data"] = request.body

        logger.debug("Sending %s %s", request.method, request.url_string)
        return await asyncio.to_thread(
            self._session.request,
            request.method,
            request.url_string,
            **kwargs,
        )

    def close(self) -> None:
        self._session.close()

    async def __aenter__(self) -> "RequestsTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
