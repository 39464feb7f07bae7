from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Trailing debounce on the running event loop.

    Each :meth:`push` replaces the pending value; the callback only sees a value
    that stayed unchanged for ``delay_ms``. A zero delay still defers to the next
    loop iteration.
    """

    def __init__(self, delay_ms: int, callback: Callable[[T], None], *, initial: T | None = None) -> None:
        self.delay_ms = max(0, delay_ms)
        self.value = initial
        self._callback = callback
        self._handle: asyncio.Handle | None = None
        self._settled = asyncio.Event()
        self._settled.set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        if self.delay_ms == 0:
            self._handle = loop.call_soon(self._fire, value)
        else:
            self._handle = loop.call_later(self.delay_ms / 1000, self._fire, value)
        self._settled.clear()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._settled.set()

    async def wait(self) -> None:
        await self._settled.wait()

    def _fire(self, value: T) -> None:
        self._handle = None
        self.value = value
        try:
            self._callback(value)
        finally:
            self._settled.set()
