"""Unit tests for the fan-out barrier."""

from __future__ import annotations

import asyncio

import pytest

from feedgate.errors import UpstreamFetchError
from feedgate.fanout import gather_settled


async def _after(delay: float, value: object) -> object:
    await asyncio.sleep(delay)
    return value


async def _fail(delay: float = 0) -> object:
    await asyncio.sleep(delay)
    raise UpstreamFetchError("test", "boom")


class TestGatherSettled:
    async def test_results_follow_issue_order_not_completion_order(self) -> None:
        results = await gather_settled(
            [
                ("slow", _after(0.03, "a")),
                ("medium", _after(0.02, "b")),
                ("fast", _after(0.0, "c")),
            ],
            default=lambda: None,
            source="test",
        )
        assert results == ["a", "b", "c"]

    async def test_failed_branch_yields_default(self) -> None:
        results = await gather_settled(
            [("a", _after(0, [1, 2])), ("b", _fail()), ("c", _after(0, [3]))],
            default=list,
            source="test",
        )
        assert results == [[1, 2], [], [3]]

    async def test_all_branches_failing_does_not_raise(self) -> None:
        results = await gather_settled(
            [("a", _fail()), ("b", _fail(0.01))],
            default=lambda: None,
            source="test",
        )
        assert results == [None, None]

    async def test_non_upstream_exceptions_are_absorbed(self) -> None:
        async def _bad_shape() -> list:
            return {}["data"]  # KeyError

        results = await gather_settled([("a", _bad_shape())], default=list, source="test")
        assert results == [[]]

    async def test_default_factory_called_per_failure(self) -> None:
        results = await gather_settled(
            [("a", _fail()), ("b", _fail())],
            default=list,
            source="test",
        )
        assert results[0] is not results[1]

    async def test_waits_for_every_branch(self) -> None:
        finished: list[str] = []

        async def _track(name: str, delay: float) -> str:
            await asyncio.sleep(delay)
            finished.append(name)
            return name

        await gather_settled(
            [("a", _track("a", 0.02)), ("b", _fail()), ("c", _track("c", 0.01))],
            default=lambda: None,
            source="test",
        )
        assert sorted(finished) == ["a", "c"]

    async def test_empty_branch_list(self) -> None:
        assert await gather_settled([], default=list, source="test") == []

    async def test_cancellation_propagates(self) -> None:
        task = asyncio.create_task(
            gather_settled([("a", _after(10, "never"))], default=list, source="test")
        )
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
