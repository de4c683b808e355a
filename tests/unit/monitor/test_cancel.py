import anyio
import pytest

from sourcewatch.monitor import CancellationToken

pytestmark = pytest.mark.anyio


class TestCancellationToken:
    async def test_starts_not_cancelled(self) -> None:
        token = CancellationToken()

        assert not token.is_cancelled

    async def test_cancel_is_idempotent(self) -> None:
        token = CancellationToken()

        token.cancel()
        token.cancel()

        assert token.is_cancelled

    async def test_wait_returns_once_cancelled(self) -> None:
        token = CancellationToken()

        async with anyio.create_task_group() as tg:
            tg.start_soon(token.wait)
            await anyio.sleep(0)
            token.cancel()

        assert token.is_cancelled

    async def test_wait_returns_immediately_if_already_cancelled(self) -> None:
        token = CancellationToken()
        token.cancel()

        with anyio.fail_after(1):
            await token.wait()
