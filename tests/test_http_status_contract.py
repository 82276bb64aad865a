# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
from unittest.mock import AsyncMock, Mock

import pytest

from wrapfetch.client import wrap_fetch


def _mock_response(*, status: int = 200, reason: str = "OK"):
    response = Mock()
    response.status_code = status
    response.reason = reason
    return response


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "reason"),
    [
        (404, "Not Found"),
        (500, "Internal Server Error"),
        (302, "Found"),
    ],
)
async def test_error_statuses_are_returned_without_retry(status, reason):
    transport = AsyncMock(
        return_value=_mock_response(status=status, reason=reason)
    )
    client = wrap_fetch(fetch=transport, retry=3, retry_delay=0)

    response = await client("http://example.com/status", allow_redirects=False)

    assert response.status_code == status
    assert response.reason == reason
    transport.assert_awaited_once()
    assert transport.await_args.args[0].allow_redirects is False
