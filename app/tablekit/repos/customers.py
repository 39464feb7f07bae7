from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import cmp_to_key, lru_cache
from typing import Any

from app.tablekit.core.config import settings
from app.tablekit.db.seed import build_customer_rows

SEARCH_FIELDS = ("name", "email", "company")


@dataclass(frozen=True)
class CustomerQueryFilters:
    q: str | None = None
    status: str | None = None
    company: str | None = None
    created_at_from: str | None = None
    created_at_to: str | None = None

    @classmethod
    def from_params(cls, q: str | None, filters: Mapping[str, str]) -> "CustomerQueryFilters":
        return cls(
            q=(q or "").lower() or None,
            status=filters.get("status") or None,
            company=filters.get("company") or None,
            created_at_from=filters.get("createdAtFrom") or None,
            created_at_to=filters.get("createdAtTo") or None,
        )


def compare_values(left: Any, right: Any) -> int:
    # Values that cannot be ordered against each other (missing fields, mixed types) tie.
    try:
        if left > right:
            return 1
        if left < right:
            return -1
    except TypeError:
        return 0
    return 0


class CustomerRepository:
    def __init__(self, rows: Sequence[dict[str, Any]]):
        self.rows = rows

    def list_customers(
        self,
        filters: CustomerQueryFilters,
        *,
        page: int,
        page_size: int,
        sort: str | None,
    ) -> tuple[list[dict[str, Any]], int]:
        data = self._apply_filters(filters)
        if sort:
            data = self._apply_sort(data, sort)
        total = len(data)
        start = (page - 1) * page_size
        return data[start : start + page_size], total

    def _apply_filters(self, filters: CustomerQueryFilters) -> list[dict[str, Any]]:
        data = list(self.rows)
        if filters.q:
            needle = filters.q
            data = [
                row for row in data if any(needle in str(row.get(field, "")).lower() for field in SEARCH_FIELDS)
            ]
        if filters.status:
            data = [row for row in data if row.get("status") == filters.status]
        if filters.company:
            data = [row for row in data if row.get("company") == filters.company]
        if filters.created_at_from:
            data = [row for row in data if row.get("createdAt", "") >= filters.created_at_from]
        if filters.created_at_to:
            data = [row for row in data if row.get("createdAt", "") <= filters.created_at_to]
        return data

    @staticmethod
    def _apply_sort(rows: list[dict[str, Any]], sort: str) -> list[dict[str, Any]]:
        field, sep, direction = sort.rpartition(":")
        if not sep:
            field, direction = sort, ""
        sign = -1 if direction == "desc" else 1
        return sorted(
            rows,
            key=cmp_to_key(lambda a, b: compare_values(a.get(field), b.get(field)) * sign),
        )


@lru_cache(maxsize=1)
def _seed_rows() -> tuple[dict[str, str], ...]:
    return tuple(build_customer_rows(settings.CUSTOMERS_SEED_ROWS))


def get_customer_repository() -> CustomerRepository:
    return CustomerRepository(_seed_rows())
