from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

PAGE_SIZE_OPTIONS: tuple[int, ...] = (10, 20, 50)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Sort:
    key: str
    direction: SortDirection = SortDirection.ASC

    def toggled(self) -> "Sort":
        flipped = SortDirection.DESC if self.direction is SortDirection.ASC else SortDirection.ASC
        return Sort(key=self.key, direction=flipped)

    def encode(self) -> str:
        return f"{self.key}:{self.direction.value}"


@dataclass(frozen=True)
class TableState:
    """Everything that selects which slice of data is shown and in what order.

    Filter values are strings: whatever a caller sets is stringified, and the URL
    and the wire carry them unchanged.
    """

    page: int = 1
    page_size: int = 10
    query: str = ""
    sort: Sort | None = None
    filters: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    items: list[T]
    total: int


class CustomerRow(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str
    email: str
    company: str
    status: Literal["active", "trial", "churned"]
    created_at: str = Field(alias="createdAt")


class CustomerPage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    items: list[CustomerRow]
    total: int
    page: int | None = None
    page_size: int | None = Field(default=None, alias="pageSize")
