import asyncio

from hosted_login import EventStream


def test_results_are_posted_back_in_order():
    order = []

    async def work(value, delay):
        await asyncio.sleep(delay)
        order.append(f"work {value}")
        return value

    async def scenario():
        stream = EventStream()
        stream.spawn(work("slow", 0.02), on_result=lambda v: order.append(f"result {v}"))
        stream.spawn(work("fast", 0), on_result=lambda v: order.append(f"result {v}"))
        assert stream.pending_tasks == 2
        await stream.drain()
        assert stream.pending_tasks == 0

    asyncio.run(scenario())
    # Results are applied on the stream, in completion order
    assert order == ["work fast", "work slow", "result fast", "result slow"]


def test_result_handlers_do_not_run_inside_the_task():
    calls = []

    async def scenario():
        stream = EventStream()

        async def work():
            return 1

        stream.spawn(work(), on_result=calls.append)
        while stream.pending_tasks:
            await asyncio.sleep(0)
        # Posted, but not run until the stream is processed
        assert calls == []
        assert await stream.process_pending() == 1

    asyncio.run(scenario())
    assert calls == [1]


def test_errors_go_to_error_handler():
    errors = []
    results = []

    async def boom():
        raise RuntimeError("exchange exploded")

    async def scenario():
        stream = EventStream()
        stream.spawn(boom(), on_result=results.append, on_error=errors.append)
        await stream.drain()

    asyncio.run(scenario())
    assert results == []
    assert len(errors) == 1
    assert str(errors[0]) == "exchange exploded"


def test_async_handlers_are_awaited():
    seen = []

    async def handler(value):
        await asyncio.sleep(0)
        seen.append(value)

    async def scenario():
        stream = EventStream()
        stream.post(handler, "a")
        stream.post(seen.append, "b")
        await stream.drain()

    asyncio.run(scenario())
    assert seen == ["a", "b"]


def test_cancel_all_drops_results():
    results = []

    async def never():
        await asyncio.sleep(10)
        return "late"

    async def scenario():
        stream = EventStream()
        stream.spawn(never(), on_result=results.append)
        stream.cancel_all()
        await stream.drain()

    asyncio.run(scenario())
    assert results == []


def test_run_forever_consumes_posted_handlers():
    seen = []

    async def scenario():
        stream = EventStream()
        consumer = asyncio.get_running_loop().create_task(stream.run_forever())
        stream.post(seen.append, 1)
        stream.post(lambda: 1 / 0)
        stream.post(seen.append, 2)
        while len(seen) < 2:
            await asyncio.sleep(0)
        consumer.cancel()

    asyncio.run(scenario())
    assert seen == [1, 2]
