import asyncio
import contextlib
from typing import Any, Awaitable, Callable, Optional, Set


class Debouncer:
    """Cancellable scheduled task: each ``schedule`` cancels the pending one and restarts the delay.

    Once the delay has elapsed the call is moved to the running set, so a later
    ``schedule`` never cancels a call that is already in flight.
    """

    def __init__(self, delay: float = 0.5):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def in_flight(self) -> bool:
        return bool(self._running)

    def schedule(self, callback: Callable[..., Awaitable[Any]], *args: Any) -> asyncio.Task:
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run(callback, args))
        self._task = task
        return task

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _run(self, callback: Callable[..., Awaitable[Any]], args: tuple) -> None:
        await asyncio.sleep(self.delay)
        task = asyncio.current_task()
        if self._task is task:
            self._task = None
        self._running.add(task)
        try:
            await callback(*args)
        finally:
            self._running.discard(task)

    async def wait(self) -> None:
        """Wait until the pending call has fired and every started call has finished"""
        while True:
            tasks = [t for t in (self._task, *self._running) if t is not None and not t.done()]
            if not tasks:
                return
            for task in tasks:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
