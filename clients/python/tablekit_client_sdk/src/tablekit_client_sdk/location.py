from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlsplit

from .models import TableState
from .query_codec import decode_state, encode_state


class Location(Protocol):
    def read_query(self) -> str: ...

    def replace_query(self, query: str) -> None: ...


@dataclass
class MemoryLocation:
    """Address-bar stand-in: a path plus a query string, replaced in place."""

    path: str = "/"
    query: str = ""
    history: list[str] = field(default_factory=list)

    @classmethod
    def from_url(cls, url: str) -> "MemoryLocation":
        parts = urlsplit(url)
        return cls(path=parts.path or "/", query=parts.query)

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path

    def read_query(self) -> str:
        return self.query

    def replace_query(self, query: str) -> None:
        self.query = query
        self.history.append(self.url)


def read_state(location: Location | None, fallback: TableState) -> TableState:
    if location is None:
        return fallback
    return decode_state(location.read_query(), fallback)


def write_state(location: Location | None, state: TableState) -> None:
    if location is None:
        return
    location.replace_query(encode_state(state))
