import re

from fastapi import APIRouter, Depends, Query, Request

from app.tablekit.core.config import settings
from app.tablekit.repos.customers import CustomerQueryFilters, CustomerRepository, get_customer_repository
from app.tablekit.schemas.customers import CustomerListResponse, CustomerRow
from app.tablekit.schemas.errors import ApiErrorResponse

router = APIRouter()
_FILTER_KEY = re.compile(r"^filters\[(.+)\]$")


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _extract_filters(request: Request) -> dict[str, str]:
    filters: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        match = _FILTER_KEY.match(key)
        if match and match.group(1) not in filters:
            filters[match.group(1)] = value
    return filters


@router.get(
    "/customers",
    response_model=CustomerListResponse,
    responses={500: {"model": ApiErrorResponse}},
)
async def list_customers(
    request: Request,
    repo: CustomerRepository = Depends(get_customer_repository),
    page: str | None = None,
    page_size: str | None = Query(None, alias="pageSize"),
    q: str | None = None,
    sort: str | None = None,
):
    resolved_page = max(1, _parse_int(page, 1))
    resolved_page_size = min(
        settings.CUSTOMERS_MAX_PAGE_SIZE,
        max(1, _parse_int(page_size, settings.CUSTOMERS_DEFAULT_PAGE_SIZE)),
    )
    filters = CustomerQueryFilters.from_params(q, _extract_filters(request))
    rows, total = repo.list_customers(
        filters,
        page=resolved_page,
        page_size=resolved_page_size,
        sort=sort,
    )
    return CustomerListResponse(
        items=[CustomerRow.model_validate(row) for row in rows],
        total=total,
        page=resolved_page,
        page_size=resolved_page_size,
    )
