from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from .exceptions import ApiError
from .logger import get_logger, log_event
from .models import QueryResult, TableState

T = TypeVar("T")

Fetcher = Callable[[TableState], Awaitable[QueryResult[T]]]
Listener = Callable[[], None]


class FetchCoordinator(Generic[T]):
    """Runs one current fetch at a time and applies only the latest result.

    Every :meth:`start` takes the next request id. A completion whose id is no
    longer the latest is dropped without touching ``rows``, ``total``, ``error``
    or ``loading``. Superseded tasks are also cancelled, but the id check alone
    decides what becomes visible.
    """

    def __init__(self, fetcher: Fetcher[T], *, logger: logging.Logger | None = None) -> None:
        self._fetcher = fetcher
        self._logger = logger or get_logger("tablekit.fetch")
        self._latest = 0
        self._task: asyncio.Task | None = None
        self._listeners: list[Listener] = []
        self.rows: list[T] = []
        self.total = 0
        self.loading = False
        self.error: Exception | None = None

    @property
    def latest_request_id(self) -> int:
        return self._latest

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self, params: TableState) -> asyncio.Task:
        self._latest += 1
        request_id = self._latest
        self._cancel_current()
        self.loading = True
        self.error = None
        self._notify()
        task = asyncio.get_running_loop().create_task(self._run(request_id, params))
        self._task = task
        return task

    def close(self) -> None:
        # Bumping the id makes anything still in flight stale.
        self._latest += 1
        self._cancel_current()
        self.loading = False

    async def wait(self) -> None:
        while self._task is not None and not self._task.done():
            await asyncio.gather(self._task, return_exceptions=True)

    def _is_current(self, request_id: int) -> bool:
        return request_id == self._latest

    def _cancel_current(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self, request_id: int, params: TableState) -> None:
        log_event(self._logger, "fetch_started", level=logging.DEBUG, request_id=request_id, page=params.page)
        try:
            result = await self._fetcher(params)
        except asyncio.CancelledError:
            log_event(self._logger, "fetch_cancelled", level=logging.DEBUG, request_id=request_id)
            raise
        except Exception as exc:
            if self._is_current(request_id):
                self.error = exc
                log_event(
                    self._logger,
                    "fetch_failed",
                    level=logging.WARNING,
                    request_id=request_id,
                    error=exc.code if isinstance(exc, ApiError) else type(exc).__name__,
                    trace_id=getattr(exc, "trace_id", None),
                )
            else:
                log_event(self._logger, "fetch_stale_discarded", level=logging.DEBUG, request_id=request_id)
        else:
            if self._is_current(request_id):
                self.rows = list(result.items)
                self.total = result.total
            else:
                log_event(self._logger, "fetch_stale_discarded", level=logging.DEBUG, request_id=request_id)
        finally:
            if self._is_current(request_id):
                self.loading = False
                self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
