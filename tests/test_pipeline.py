"""Tests for processor composition."""

import asyncio

import pytest

from kiwi.pipeline import apply, apply_all, apply_each


class Boom(Exception):
    pass


async def add(value, amount=1):
    await asyncio.sleep(0)
    return value + amount


class TestApply:
    @pytest.mark.asyncio
    async def test_without_args(self):
        assert await apply(1, add) == 2

    @pytest.mark.asyncio
    async def test_with_args(self):
        assert await apply(1, add, [10]) == 11

    @pytest.mark.asyncio
    async def test_none_args_treated_as_empty(self):
        assert await apply(1, add, None) == 2

    @pytest.mark.asyncio
    async def test_sync_processor(self):
        assert await apply("abc", str.upper) == "ABC"

    @pytest.mark.asyncio
    async def test_error_propagates_verbatim(self):
        error = Boom("nope")

        async def failing(value):
            raise error

        with pytest.raises(Boom) as excinfo:
            await apply(1, failing)
        assert excinfo.value is error

    @pytest.mark.asyncio
    async def test_result_returned_unchanged(self):
        marker = object()
        assert await apply(None, lambda value: marker) is marker


class TestApplyAll:
    @pytest.mark.asyncio
    async def test_threads_value_in_order(self):
        async def double(value):
            return value * 2

        # (1 + 1) * 2 + 1
        assert await apply_all(1, [add, double, add]) == 5

    @pytest.mark.asyncio
    async def test_same_args_for_every_processor(self):
        seen = []

        async def record(value, *args):
            seen.append(args)
            return value

        await apply_all("x", [record, record], ["a", "b"])
        assert seen == [("a", "b"), ("a", "b")]

    @pytest.mark.asyncio
    async def test_empty_returns_input(self):
        marker = object()
        assert await apply_all(marker, []) is marker

    @pytest.mark.asyncio
    async def test_stops_at_first_error(self):
        calls = []
        error = Boom("p2")

        async def p1(value):
            calls.append("p1")
            return value

        async def p2(value):
            calls.append("p2")
            raise error

        async def p3(value):
            calls.append("p3")
            return value

        with pytest.raises(Boom) as excinfo:
            await apply_all(0, [p1, p2, p3])

        assert excinfo.value is error
        assert calls == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_strictly_sequential(self):
        events = []

        def step(name, delay):
            async def run(value):
                events.append(f"start:{name}")
                await asyncio.sleep(delay)
                events.append(f"end:{name}")
                return value + [name]

            return run

        result = await apply_all([], [step("slow", 0.02), step("fast", 0)])

        assert result == ["slow", "fast"]
        assert events == ["start:slow", "end:slow", "start:fast", "end:fast"]


class TestApplyEach:
    @pytest.mark.asyncio
    async def test_results_in_processor_order(self):
        async def slow(value):
            await asyncio.sleep(0.02)
            return f"slow:{value}"

        async def fast(value):
            return f"fast:{value}"

        assert await apply_each("v", [slow, fast]) == ["slow:v", "fast:v"]

    @pytest.mark.asyncio
    async def test_error_raised(self):
        async def failing(value, *args):
            raise Boom("x")

        with pytest.raises(Boom):
            await apply_each("v", [add, failing], [""])

    @pytest.mark.asyncio
    async def test_failure_settles_every_sibling(self):
        started = asyncio.Event()
        tasks = []

        async def slow(value):
            tasks.append(asyncio.current_task())
            started.set()
            await asyncio.sleep(1)
            return value

        async def failing(value):
            await started.wait()
            raise Boom("first")

        async def also_failing(value):
            await started.wait()
            raise Boom("second")

        with pytest.raises(Boom):
            await apply_each("v", [slow, failing, also_failing])

        assert tasks[0].cancelled()
