"""Single-consumer event stream for navigation events and async results

Navigation handlers and the results of background work run one at a time,
in arrival order, so flow state has a single writer.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set, Tuple

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventStream:
    """Serializes handlers posted by the host and by background tasks"""

    def __init__(self):
        self._queue: "asyncio.Queue[Tuple[Handler, tuple]]" = asyncio.Queue()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def post(self, handler: Handler, *args: Any) -> None:
        """Queue a handler to run on the stream"""
        self._queue.put_nowait((handler, args))

    def spawn(
        self,
        work: Awaitable[Any],
        on_result: Handler,
        on_error: Optional[Callable[[BaseException], Any]] = None,
        name: Optional[str] = None,
    ) -> asyncio.Task:
        """Run work in the background and post its outcome back onto the stream

        Args:
            work: Coroutine to run off the stream
            on_result: Handler posted with the result on success
            on_error: Handler posted with the exception on failure
            name: Task name for logging

        Returns:
            The background task
        """
        task = asyncio.get_running_loop().create_task(work, name=name)
        self._tasks.add(task)

        def _done(finished: asyncio.Task) -> None:
            self._tasks.discard(finished)
            if finished.cancelled():
                logger.debug(f"Background task {finished.get_name()} cancelled")
                return
            error = finished.exception()
            if error is None:
                self.post(on_result, finished.result())
            elif on_error is not None:
                self.post(on_error, error)
            else:
                logger.error(f"Background task {finished.get_name()} failed: {error}")

        task.add_done_callback(_done)
        return task

    async def process_pending(self) -> int:
        """Run every handler currently queued

        Returns:
            Number of handlers run
        """
        count = 0
        while not self._queue.empty():
            handler, args = self._queue.get_nowait()
            try:
                await self._invoke(handler, args)
            finally:
                self._queue.task_done()
            count += 1
        return count

    async def run_forever(self) -> None:
        """Consume the stream until cancelled"""
        while True:
            handler, args = await self._queue.get()
            try:
                await self._invoke(handler, args)
            except Exception as e:
                logger.exception(f"Event handler {getattr(handler, '__name__', handler)} failed: {e}")
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait for background tasks and run their result handlers until idle"""
        while self._tasks or not self._queue.empty():
            if self._tasks:
                await asyncio.wait(set(self._tasks))
            await self.process_pending()

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    @staticmethod
    async def _invoke(handler: Handler, args: tuple) -> None:
        result = handler(*args)
        if inspect.isawaitable(result):
            await result
