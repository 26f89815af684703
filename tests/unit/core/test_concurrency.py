"""Unit tests for each_limit."""

import asyncio

import pytest

from linkportal.core.concurrency import each_limit


class TestEachLimit:
    @pytest.mark.asyncio
    async def test_results_follow_input_order(self) -> None:
        async def worker(item):
            await asyncio.sleep(0.01 * (5 - item))
            return item * 10

        assert await each_limit([1, 2, 3, 4], 2, worker) == [10, 20, 30, 40]

    @pytest.mark.asyncio
    async def test_never_exceeds_limit(self) -> None:
        in_flight = 0
        peak = 0

        async def worker(item):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return item

        await each_limit(range(8), 2, worker)

        assert peak == 2

    @pytest.mark.asyncio
    async def test_limit_one_is_sequential(self) -> None:
        events = []

        async def worker(item):
            events.append(("start", item))
            await asyncio.sleep(0)
            events.append(("end", item))

        await each_limit(["a", "b"], 1, worker)

        assert events == [("start", "a"), ("end", "a"), ("start", "b"), ("end", "b")]

    @pytest.mark.asyncio
    async def test_empty_input(self) -> None:
        async def worker(item):
            raise AssertionError("not called")

        assert await each_limit([], 2, worker) == []

    @pytest.mark.asyncio
    async def test_invalid_limit(self) -> None:
        async def worker(item):
            return item

        with pytest.raises(ValueError):
            await each_limit([1], 0, worker)

    @pytest.mark.asyncio
    async def test_worker_error_propagates(self) -> None:
        async def worker(item):
            if item == 2:
                raise RuntimeError("boom")
            return item

        with pytest.raises(RuntimeError, match="boom"):
            await each_limit([1, 2, 3], 2, worker)
