from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tablekit_client_sdk.customers import COMPANIES, STATUSES
from tablekit_client_sdk.exceptions import ApiError
from tablekit_client_sdk.models import CustomerRow, Sort, SortDirection
from tablekit_client_sdk.paginated_table import PaginatedTable

COLUMNS: tuple[str, ...] = ("name", "email", "company", "status", "createdAt")
_SORT_INDICATORS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}
_ARIA_SORT = {SortDirection.ASC: "ascending", SortDirection.DESC: "descending"}


def format_created_at(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def error_message(error: Exception) -> str:
    if isinstance(error, ApiError):
        return error.message
    return str(error) or type(error).__name__


@dataclass
class CustomersTableView:
    table: PaginatedTable[CustomerRow]
    max_page_buttons: int = 7

    def toggle_sort(self, column: str) -> None:
        current = self.table.sort
        if current is not None and current.key == column:
            self.table.set_sort(current.toggled())
        else:
            self.table.set_sort(Sort(key=column, direction=SortDirection.ASC))

    def select_company(self, company: str | None) -> None:
        self.table.set_filter("company", company or None)

    def select_status(self, status: str | None) -> None:
        self.table.set_filter("status", status or None)

    def go_previous(self) -> None:
        if self.table.page > 1:
            self.table.set_page(self.table.page - 1)

    def go_next(self) -> None:
        if self.table.page < self.table.total_pages:
            self.table.set_page(self.table.page + 1)

    def header(self, column: str) -> dict[str, Any]:
        sort = self.table.sort
        direction = sort.direction if sort is not None and sort.key == column else None
        return {
            "key": column,
            "label": column,
            "aria_sort": _ARIA_SORT[direction] if direction else "none",
            "indicator": _SORT_INDICATORS[direction] if direction else "",
        }

    def body(self) -> dict[str, Any]:
        span = len(COLUMNS)
        if self.table.loading:
            return {"kind": "loading", "colspan": span, "message": "Loading…", "rows": []}
        if self.table.error is not None:
            return {
                "kind": "error",
                "colspan": span,
                "message": f"Error: {error_message(self.table.error)}",
                "trace_id": getattr(self.table.error, "trace_id", None),
                "rows": [],
            }
        if not self.table.rows:
            return {"kind": "empty", "colspan": span, "message": "No results", "rows": []}
        return {"kind": "rows", "colspan": span, "message": None, "rows": [self._cells(row) for row in self.table.rows]}

    def pager(self) -> dict[str, Any]:
        return {
            "page": self.table.page,
            "total_pages": self.table.total_pages,
            "previous_enabled": self.table.page > 1,
            "next_enabled": self.table.page < self.table.total_pages,
            "buttons": [
                {"label": str(item), "page": item if isinstance(item, int) else None, "current": item == self.table.page}
                for item in self.table.page_buttons(self.max_page_buttons)
            ],
            "page_size": self.table.page_size,
            "page_size_options": list(self.table.config.page_size_options),
            "summary": f"{self.table.total} results",
        }

    def controls(self) -> dict[str, Any]:
        filters = self.table.filters
        return {
            "query": self.table.query,
            "company": filters.get("company", ""),
            "company_options": ["", *COMPANIES],
            "status": filters.get("status", ""),
            "status_options": ["", *STATUSES],
        }

    def render(self) -> dict[str, Any]:
        return {
            "controls": self.controls(),
            "headers": [self.header(column) for column in COLUMNS],
            "body": self.body(),
            "pager": self.pager(),
        }

    @staticmethod
    def _cells(row: CustomerRow) -> dict[str, str]:
        return {
            "id": row.id,
            "name": row.name,
            "email": row.email,
            "company": row.company,
            "status": row.status.capitalize(),
            "createdAt": format_created_at(row.created_at),
        }
