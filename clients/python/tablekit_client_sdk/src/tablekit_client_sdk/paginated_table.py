from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, Mapping, TypeVar

from .debounce import Debouncer
from .fetch_coordinator import FetchCoordinator, Listener
from .http_client import HttpClient
from .location import Location, read_state, write_state
from .models import PAGE_SIZE_OPTIONS, QueryResult, Sort, TableState
from .pager import PageButton, make_page_buttons
from .query_codec import build_params

T = TypeVar("T")

ParamsBuilder = Callable[[TableState], list[tuple[str, str]]]


@dataclass
class TableConfig(Generic[T]):
    endpoint: str
    parse: Callable[[Any], QueryResult[T]]
    initial_page: int = 1
    initial_page_size: int = 10
    initial_query: str = ""
    initial_sort: Sort | None = None
    initial_filters: Mapping[str, str] = field(default_factory=dict)
    build_params: ParamsBuilder | None = None
    debounce_ms: int = 300
    page_size_options: tuple[int, ...] = PAGE_SIZE_OPTIONS

    def initial_state(self) -> TableState:
        return TableState(
            page=self.initial_page,
            page_size=self.initial_page_size,
            query=self.initial_query,
            sort=self.initial_sort,
            filters={key: str(value) for key, value in self.initial_filters.items() if value not in (None, "")},
        )


class PaginatedTable(Generic[T]):
    """Table state kept in step with a location and with the server.

    State is read from the location once, at construction, and written back on
    every change. Fetches go through a :class:`FetchCoordinator`, so only the
    newest request's result is shown. The search text reaches the fetch only
    after it stops changing for ``debounce_ms``; the location gets it at once.

    Use as ``async with PaginatedTable(config, http, location=loc) as table:``
    or call :meth:`open` / :meth:`close` explicitly.
    """

    def __init__(
        self,
        config: TableConfig[T],
        http: HttpClient,
        *,
        location: Location | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self._http = http
        self._location = location
        fallback = config.initial_state()
        state = read_state(location, fallback)
        if state.page_size not in config.page_size_options and state.page_size != fallback.page_size:
            state = replace(state, page_size=fallback.page_size)
        self._state = state
        self._debounced_query = state.query
        self._debouncer: Debouncer[str] = Debouncer(config.debounce_ms, self._on_query_settled, initial=state.query)
        self._coordinator: FetchCoordinator[T] = FetchCoordinator(self._fetch, logger=logger)
        self._coordinator.subscribe(self._notify)
        self._last_params: TableState | None = None
        self._listeners: list[Listener] = []
        self._opened = False

    async def __aenter__(self) -> "PaginatedTable[T]":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def debounced_query(self) -> str:
        return self._debounced_query

    @property
    def sort(self) -> Sort | None:
        return self._state.sort

    @property
    def filters(self) -> dict[str, str]:
        return dict(self._state.filters)

    @property
    def rows(self) -> list[T]:
        return self._coordinator.rows

    @property
    def total(self) -> int:
        return self._coordinator.total

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def loading(self) -> bool:
        return self._coordinator.loading

    @property
    def error(self) -> Exception | None:
        return self._coordinator.error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def open(self) -> None:
        self._opened = True
        write_state(self._location, self._state)
        self._sync(force=True)

    async def close(self) -> None:
        self._opened = False
        self._debouncer.cancel()
        self._coordinator.close()

    async def wait_idle(self) -> None:
        await self._debouncer.wait()
        await self._coordinator.wait()

    def set_page(self, page: int) -> None:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        self._update(page=page)

    def set_page_size(self, page_size: int) -> None:
        if page_size not in self.config.page_size_options:
            raise ValueError(f"page_size must be one of {self.config.page_size_options}, got {page_size}")
        self._update(page_size=page_size)

    def set_query(self, query: str) -> None:
        self._update(query=query, page=1)
        if self._opened:
            self._debouncer.push(query)
        else:
            self._debounced_query = query

    def set_sort(self, sort: Sort | None) -> None:
        self._update(sort=sort)

    def set_filter(self, key: str, value: object | None) -> None:
        filters = dict(self._state.filters)
        if value is None or value == "":
            filters.pop(key, None)
        else:
            filters[key] = str(value)
        self._update(filters=filters, page=1)

    def clear_filters(self) -> None:
        self._update(filters={}, page=1)

    def refresh(self) -> asyncio.Task | None:
        if not self._opened:
            return None
        return self._start(self._fetch_params())

    def page_buttons(self, max_buttons: int = 7) -> list[PageButton]:
        return make_page_buttons(self.page, self.total_pages, max_buttons)

    def _update(self, **changes: Any) -> None:
        state = replace(self._state, **changes)
        if state == self._state:
            return
        self._state = state
        if self._opened:
            write_state(self._location, state)
            self._sync()
        self._notify()

    def _fetch_params(self) -> TableState:
        return replace(self._state, query=self._debounced_query)

    def _sync(self, *, force: bool = False) -> asyncio.Task | None:
        params = self._fetch_params()
        if not force and params == self._last_params:
            return None
        return self._start(params)

    def _start(self, params: TableState) -> asyncio.Task:
        self._last_params = params
        return self._coordinator.start(params)

    def _on_query_settled(self, query: str) -> None:
        self._debounced_query = query
        if self._opened:
            self._sync()

    async def _fetch(self, params: TableState) -> QueryResult[T]:
        builder = self.config.build_params or build_params
        payload = await self._http.request(
            "GET",
            self.config.endpoint,
            params=builder(params),
            module="table",
            operation=f"GET {self.config.endpoint}",
        )
        return self.config.parse(payload)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
