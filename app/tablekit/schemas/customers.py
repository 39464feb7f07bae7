from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CustomerStatus = Literal["active", "trial", "churned"]


class CustomerRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    company: str
    status: CustomerStatus
    created_at: str = Field(alias="createdAt")


class CustomerListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[CustomerRow]
    total: int
    page: int
    page_size: int = Field(alias="pageSize")
