"""Flat query-string encoding of :class:`TableState`.

The same parameter list is used for the address bar and for the fetch, e.g.::

    page=2&pageSize=20&q=ana&sort=createdAt%3Adesc&filters%5Bstatus%5D=active
"""
from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlencode

from .models import Sort, SortDirection, TableState

FILTER_KEY_PATTERN = re.compile(r"^filters\[(.+)\]$")


def filter_key(name: str) -> str:
    return f"filters[{name}]"


def build_params(state: TableState) -> list[tuple[str, str]]:
    params = [("page", str(state.page)), ("pageSize", str(state.page_size))]
    if state.query:
        params.append(("q", state.query))
    if state.sort is not None:
        params.append(("sort", state.sort.encode()))
    for name, value in state.filters.items():
        if value is None or value == "":
            continue
        params.append((filter_key(name), str(value)))
    return params


def encode_state(state: TableState) -> str:
    return urlencode(build_params(state))


def decode_sort(raw: str) -> Sort | None:
    # Keys may contain ":"; the direction is whatever follows the last one.
    key, sep, direction = raw.rpartition(":")
    if not sep:
        key, direction = raw, ""
    if not key:
        return None
    try:
        resolved = SortDirection(direction.lower())
    except ValueError:
        resolved = SortDirection.ASC
    return Sort(key=key, direction=resolved)


def _positive_int(raw: str | None, fallback: int) -> int:
    if raw is None:
        return fallback
    try:
        value = int(raw.strip())
    except ValueError:
        return fallback
    return value if value >= 1 else fallback


def decode_state(query_string: str, fallback: TableState) -> TableState:
    """Rebuild a state from a query string, falling back field by field.

    Never raises: anything unreadable keeps the fallback's value, and keys the
    codec does not know are ignored.
    """
    pairs = parse_qsl(query_string.lstrip("?"), keep_blank_values=True)
    first: dict[str, str] = {}
    for key, value in pairs:
        first.setdefault(key, value)

    sort_raw = first.get("sort")
    sort = decode_sort(sort_raw) if sort_raw else None

    filters = dict(fallback.filters)
    for key, value in pairs:
        match = FILTER_KEY_PATTERN.match(key)
        if not match:
            continue
        if value == "":
            filters.pop(match.group(1), None)
        else:
            filters[match.group(1)] = value

    return TableState(
        page=_positive_int(first.get("page"), fallback.page),
        page_size=_positive_int(first.get("pageSize"), fallback.page_size),
        query=first["q"] if "q" in first else fallback.query,
        sort=sort or fallback.sort,
        filters=filters,
    )
