"""Request/response interceptor hooks."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable

if TYPE_CHECKING:
    from .request import MaterializedRequest

RequestHook = Callable[["MaterializedRequest"], Awaitable[None] | None]
ResponseHook = Callable[["MaterializedRequest", Any], Awaitable[None] | None]


@dataclass(frozen=True)
class Interceptors:
    """Optional callbacks run around each transport call.

    Hooks may be plain functions or coroutine functions. Raising from a hook
    fails the call.
    """

    request: RequestHook | None = None
    response: ResponseHook | None = None


async def _invoke(hook: Callable[..., Any], *args: Any) -> None:
    result = hook(*args)
    if inspect.isawaitable(result):
        await result


async def run_request_hooks(
    levels: Iterable[Interceptors | None], request: "MaterializedRequest"
) -> None:
    """Run request hooks level by level, each awaited before the next."""
    for interceptors in levels:
        if interceptors is not None and interceptors.request is not None:
            await _invoke(interceptors.request, request)


async def run_response_hooks(
    levels: Iterable[Interceptors | None],
    request: "MaterializedRequest",
    response: Any,
) -> None:
    """Run response hooks level by level, each awaited before the next."""
    for interceptors in levels:
        if interceptors is not None and interceptors.response is not None:
            await _invoke(interceptors.response, request, response)
