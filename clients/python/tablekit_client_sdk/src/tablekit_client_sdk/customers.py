from __future__ import annotations

from typing import Any

from .models import CustomerPage, CustomerRow, QueryResult, Sort, SortDirection
from .paginated_table import TableConfig

CUSTOMERS_PATH = "/api/customers"
COMPANIES: tuple[str, ...] = ("Analytica", "ByteForge", "CloudNine", "Delta Labs", "Epsilon")
STATUSES: tuple[str, ...] = ("active", "trial", "churned")


def parse_customer_page(payload: Any) -> QueryResult[CustomerRow]:
    if not isinstance(payload, dict):
        raise ValueError("Expected customers response to be a JSON object")
    page = CustomerPage.model_validate(payload)
    return QueryResult(items=list(page.items), total=page.total)


def customers_table_config(**overrides: Any) -> TableConfig[CustomerRow]:
    values: dict[str, Any] = {
        "endpoint": CUSTOMERS_PATH,
        "parse": parse_customer_page,
        "initial_sort": Sort(key="createdAt", direction=SortDirection.DESC),
    }
    values.update(overrides)
    return TableConfig(**values)
