from __future__ import annotations

from urllib.parse import parse_qsl

import pytest

from tablekit_client_sdk.models import Sort, SortDirection, TableState
from tablekit_client_sdk.query_codec import build_params, decode_sort, decode_state, encode_state

DEFAULTS = TableState(page=1, page_size=10, query="", sort=None, filters={})


def test_encode_always_includes_page_and_page_size() -> None:
    assert build_params(DEFAULTS) == [("page", "1"), ("pageSize", "10")]
    assert encode_state(DEFAULTS) == "page=1&pageSize=10"


def test_encode_includes_query_sort_and_non_empty_filters() -> None:
    state = TableState(
        page=3,
        page_size=20,
        query="ana lytica",
        sort=Sort(key="createdAt", direction=SortDirection.DESC),
        filters={"status": "active", "company": ""},
    )
    params = build_params(state)

    assert params == [
        ("page", "3"),
        ("pageSize", "20"),
        ("q", "ana lytica"),
        ("sort", "createdAt:desc"),
        ("filters[status]", "active"),
    ]
    assert parse_qsl(encode_state(state)) == params


@pytest.mark.parametrize(
    "state",
    [
        DEFAULTS,
        TableState(page=7, page_size=50, query="User 1", sort=Sort("name"), filters={"status": "trial"}),
        TableState(
            page=2,
            page_size=20,
            query="a&b=c",
            sort=Sort("createdAt", SortDirection.DESC),
            filters={"company": "Delta Labs", "createdAtFrom": "2024-01-01T00:00:00.000Z"},
        ),
    ],
)
def test_decode_of_encode_reconstructs_state(state: TableState) -> None:
    assert decode_state(encode_state(state), state) == state


def test_decode_falls_back_for_missing_and_non_numeric_numbers() -> None:
    fallback = TableState(page=4, page_size=20)
    assert decode_state("", fallback) == fallback
    decoded = decode_state("page=abc&pageSize=", fallback)
    assert decoded.page == 4
    assert decoded.page_size == 20


def test_decode_falls_back_for_non_positive_numbers() -> None:
    decoded = decode_state("page=0&pageSize=-5", DEFAULTS)
    assert decoded.page == 1
    assert decoded.page_size == 10


def test_decode_accepts_leading_question_mark() -> None:
    assert decode_state("?page=5", DEFAULTS).page == 5


def test_decode_sort_without_direction_defaults_to_ascending() -> None:
    assert decode_state("sort=name", DEFAULTS).sort == Sort("name", SortDirection.ASC)
    assert decode_state("sort=name:sideways", DEFAULTS).sort == Sort("name", SortDirection.ASC)
    assert decode_state("sort=name:DESC", DEFAULTS).sort == Sort("name", SortDirection.DESC)


def test_decode_sort_without_key_keeps_fallback() -> None:
    fallback = TableState(sort=Sort("createdAt", SortDirection.DESC))
    assert decode_sort(":desc") is None
    assert decode_state("sort=:desc", fallback).sort == fallback.sort


def test_decode_ignores_unknown_keys_and_collects_bracketed_filters() -> None:
    decoded = decode_state(
        "utm_source=mail&filters%5Bstatus%5D=churned&filters[company]=Epsilon&filter[x]=1",
        DEFAULTS,
    )
    assert decoded.filters == {"status": "churned", "company": "Epsilon"}


def test_decode_merges_filters_over_fallback() -> None:
    fallback = TableState(filters={"status": "active", "company": "Epsilon"})
    decoded = decode_state("filters[status]=trial&filters[company]=", fallback)
    assert decoded.filters == {"status": "trial"}


def test_decode_empty_query_overrides_fallback_but_absent_query_does_not() -> None:
    fallback = TableState(query="seed")
    assert decode_state("q=", fallback).query == ""
    assert decode_state("page=2", fallback).query == "seed"


def test_sort_key_containing_colon_round_trips() -> None:
    state = TableState(sort=Sort("meta:region", SortDirection.DESC))
    assert encode_state(state) == "page=1&pageSize=10&sort=meta%3Aregion%3Adesc"
    assert decode_state(encode_state(state), DEFAULTS).sort == state.sort
    assert decode_sort("meta:region:asc") == Sort("meta:region", SortDirection.ASC)
