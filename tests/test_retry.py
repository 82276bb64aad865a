import asyncio
from urllib.parse import urlsplit

import pytest

from wrapfetch.request import MaterializedRequest
from wrapfetch.retry import RetryControl, RetryPolicy, exponential_backoff


@pytest.fixture
def request_():
    return MaterializedRequest(url=urlsplit("http://example.com"))


def test_policy_local_values_win():
    policy = RetryPolicy.resolve(0, 10, 1.0, 2.0)

    assert policy.retries == 0
    assert policy.max_attempts == 1
    assert policy.delay == 1.0


def test_policy_falls_back_to_global_then_defaults():
    assert RetryPolicy.resolve(None, 3, None, 0.1) == RetryPolicy(3, 0.1)
    assert RetryPolicy.resolve(None, None, None, None) == RetryPolicy(0, 0.5)


def test_policy_rejects_negative_retries():
    with pytest.raises(ValueError):
        RetryPolicy.resolve(-1, 0, None, None)


def test_exponential_backoff_doubles_and_caps(request_):
    delay = exponential_backoff(0.1, max_seconds=0.3)

    assert [delay(n, request_) for n in (1, 2, 3)] == [0.1, 0.2, 0.3]


def test_exponential_backoff_rejects_negative_base():
    with pytest.raises(ValueError):
        exponential_backoff(-1)


@pytest.mark.asyncio
async def test_policy_wait_calls_delay_function(request_):
    seen = []

    def delay(attempt, request):
        seen.append((attempt, request))
        return 0

    assert await RetryPolicy(2, delay).wait(1, request_) is True
    assert seen == [(1, request_)]


@pytest.mark.asyncio
async def test_retry_control_sleep_completes_when_not_cancelled():
    assert await RetryControl().sleep(0) is True


@pytest.mark.asyncio
async def test_cancelled_request_stops_policy_wait(request_):
    request_.retry_control.cancel()

    assert request_.retry_control.cancelled
    assert await RetryPolicy(1, 10).wait(1, request_) is False


@pytest.mark.asyncio
async def test_retry_control_cancel_interrupts_pending_wait():
    control = RetryControl()

    waiter = asyncio.create_task(control.sleep(10))
    await asyncio.sleep(0)
    control.cancel()

    assert await asyncio.wait_for(waiter, 1) is False


def test_each_request_gets_its_own_retry_control():
    first = MaterializedRequest(url=urlsplit("http://example.com"))
    second = MaterializedRequest(url=urlsplit("http://example.com"))

    first.retry_control.cancel()

    assert not second.retry_control.cancelled
    assert first == second


def test_retry_control_sleeps_on_separate_event_loops():
    control = RetryControl()

    assert asyncio.run(control.sleep(0)) is True
    assert asyncio.run(control.sleep(0)) is True
