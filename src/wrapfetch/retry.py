"""Retry policy and delay strategies."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .request import MaterializedRequest

DEFAULT_RETRY_DELAY_SECONDS = 0.5

DelayFunction = Callable[[int, "MaterializedRequest"], float]
RetryDelay = float | DelayFunction


class RetryControl:
    """Cancel switch for the remaining retries of one call.

    Every ``MaterializedRequest`` owns its own instance. Delay functions,
    hooks or other tasks holding the request may call ``cancel()``; a pending
    retry wait then ends at once and the call fails with the last attempt's
    error.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._wakeup: asyncio.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._wakeup is not None:
            self._wakeup.set()

    async def sleep(self, seconds: float) -> bool:
        """Wait ``seconds``; return False if cancelled before or during."""
        if self._cancelled:
            return False
        # Bound to the running loop, one per wait.
        self._wakeup = asyncio.Event()
        try:
            async with asyncio.timeout(max(0.0, seconds)):
                await self._wakeup.wait()
        except TimeoutError:
            return not self._cancelled
        finally:
            self._wakeup = None
        return False


def exponential_backoff(
    base_seconds: float, max_seconds: float | None = None
) -> DelayFunction:
    """Return a delay function doubling ``base_seconds`` on every failure."""
    if base_seconds < 0:
        raise ValueError("base_seconds must be >= 0")

    def delay(attempt: int, request: "MaterializedRequest") -> float:
        seconds = base_seconds * (2 ** max(0, attempt - 1))
        if max_seconds is not None:
            seconds = min(seconds, max_seconds)
        return seconds

    return delay


@dataclass(frozen=True)
class RetryPolicy:
    """Effective retry count and delay for one call."""

    retries: int = 0
    delay: RetryDelay = DEFAULT_RETRY_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.retries < 0:
            raise ValueError("retry must be >= 0")

    @classmethod
    def resolve(
        cls,
        local_retries: int | None,
        global_retries: int | None,
        local_delay: RetryDelay | None,
        global_delay: RetryDelay | None,
    ) -> "RetryPolicy":
        """Pick local overrides over client defaults."""
        retries = (
            local_retries if local_retries is not None else global_retries
        )
        delay = local_delay if local_delay is not None else global_delay
        return cls(
            retries=retries or 0,
            delay=DEFAULT_RETRY_DELAY_SECONDS if delay is None else delay,
        )

    @property
    def max_attempts(self) -> int:
        """Return the total number of attempts for one request."""
        return self.retries + 1

    async def wait(self, attempt: int, request: "MaterializedRequest") -> bool:
        """Sleep before the next attempt.

        Returns False when the request's retries were cancelled and no
        further attempt may run.
        """
        if callable(self.delay):
            seconds = self.delay(attempt, request)
        else:
            seconds = self.delay
        return await request.retry_control.sleep(seconds)
