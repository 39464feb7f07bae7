from __future__ import annotations

import pydantic
import pytest

from table_helpers import customer
from tablekit_client_sdk.customers import CUSTOMERS_PATH, customers_table_config, parse_customer_page
from tablekit_client_sdk.models import Sort, SortDirection


def test_parse_customer_page_reads_rows_and_total() -> None:
    result = parse_customer_page({"items": [customer(1), customer(2, status="trial")], "total": 90, "page": 1, "pageSize": 2})
    assert result.total == 90
    assert [row.id for row in result.items] == ["c_001", "c_002"]
    assert result.items[1].status == "trial"
    assert result.items[0].created_at == "2024-06-29T12:00:00.000Z"


def test_parse_customer_page_rejects_bad_payloads() -> None:
    with pytest.raises(ValueError):
        parse_customer_page(None)
    with pytest.raises(pydantic.ValidationError):
        parse_customer_page({"items": [customer(1, status="paused")], "total": 1})


def test_customers_table_config_defaults() -> None:
    config = customers_table_config(initial_filters={"status": "active", "company": ""})
    state = config.initial_state()
    assert config.endpoint == CUSTOMERS_PATH
    assert state.sort == Sort("createdAt", SortDirection.DESC)
    assert state.filters == {"status": "active"}
    assert state.page == 1
    assert state.page_size == 10
