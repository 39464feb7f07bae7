from .config import ClientConfig, ConfigError, load_config
from .customers import CUSTOMERS_PATH, customers_table_config, parse_customer_page
from .debounce import Debouncer
from .exceptions import ApiError, NotFoundError, RateLimitError, ServerError, TransportError, ValidationError
from .fetch_coordinator import FetchCoordinator
from .http_client import HttpClient
from .location import Location, MemoryLocation, read_state, write_state
from .models import (
    PAGE_SIZE_OPTIONS,
    CustomerPage,
    CustomerRow,
    QueryResult,
    Sort,
    SortDirection,
    TableState,
)
from .pager import ELLIPSIS, make_page_buttons
from .paginated_table import PaginatedTable, TableConfig
from .query_codec import build_params, decode_state, encode_state
from .tracing import TraceContext

__all__ = [
    "ApiError",
    "CUSTOMERS_PATH",
    "ClientConfig",
    "ConfigError",
    "CustomerPage",
    "CustomerRow",
    "Debouncer",
    "ELLIPSIS",
    "FetchCoordinator",
    "HttpClient",
    "Location",
    "MemoryLocation",
    "NotFoundError",
    "PAGE_SIZE_OPTIONS",
    "PaginatedTable",
    "QueryResult",
    "RateLimitError",
    "ServerError",
    "Sort",
    "SortDirection",
    "TableConfig",
    "TableState",
    "TraceContext",
    "TransportError",
    "ValidationError",
    "build_params",
    "customers_table_config",
    "decode_state",
    "encode_state",
    "load_config",
    "make_page_buttons",
    "parse_customer_page",
    "read_state",
    "write_state",
]
