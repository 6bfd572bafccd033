import asyncio
from typing import Any, Awaitable, Callable

from config import settings


class Debouncer:
    """Trailing-edge debounce for async callables, e.g. a search box handler.

    A caller-side helper for front ends: the explorer never debounces, so
    whoever wires user input to ``search_countries`` wraps it in this.

    Each call restarts the wait; only the last call inside the window runs.
    Once the wait is over the call is no longer cancellable.
    """

    def __init__(self, func: Callable[..., Awaitable[Any]], wait_ms: int | None = None):
        self._func = func
        wait_ms = settings.search_debounce_ms if wait_ms is None else wait_ms
        self._wait = wait_ms / 1000
        self._pending: asyncio.Task | None = None

    def __call__(self, *args, **kwargs) -> asyncio.Task:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.create_task(self._run(args, kwargs))
        return self._pending

    async def _run(self, args: tuple, kwargs: dict):
        await asyncio.sleep(self._wait)
        if self._pending is asyncio.current_task():
            self._pending = None
        return await self._func(*args, **kwargs)
