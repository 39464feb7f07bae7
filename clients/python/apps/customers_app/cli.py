from __future__ import annotations

import argparse
import asyncio
import json

import httpx

from tablekit_client_sdk import ConfigError, HttpClient, MemoryLocation, PaginatedTable, customers_table_config, load_config
from tablekit_client_sdk.exceptions import ApiError
from tablekit_client_sdk.models import CustomerRow
from tablekit_client_sdk.query_codec import decode_sort
from tablekit_client_sdk.tracing import TraceContext

from customers_app.ui.customers_table_view import CustomersTableView
from customers_app.ui.table_printer import print_table


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected an integer >= 1, got {raw}")
    return value


def _initial_filters(args: argparse.Namespace) -> dict[str, str]:
    values = {
        "status": args.status,
        "company": args.company,
        "createdAtFrom": args.created_from,
        "createdAtTo": args.created_to,
    }
    return {key: value for key, value in values.items() if value not in (None, "")}


async def load_table(
    args: argparse.Namespace,
    location: MemoryLocation,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PaginatedTable[CustomerRow]:
    config = load_config(args.env_file)
    http = HttpClient(config, trace=TraceContext(), transport=transport)
    overrides = {
        "initial_page": args.page,
        "initial_page_size": args.page_size,
        "initial_query": args.q or "",
        "initial_filters": _initial_filters(args),
        "debounce_ms": config.debounce_ms,
    }
    if args.sort:
        overrides["initial_sort"] = decode_sort(args.sort)
    table = PaginatedTable(customers_table_config(**overrides), http, location=location)
    try:
        async with table:
            await table.wait_idle()
    finally:
        await http.aclose()
    return table


def cmd_list(args: argparse.Namespace, *, transport: httpx.AsyncBaseTransport | None = None) -> int:
    location = MemoryLocation(path="/", query=args.url_query or "")
    table = asyncio.run(load_table(args, location, transport=transport))
    view = CustomersTableView(table)
    print(f"URL: {location.url}")

    if table.error is not None:
        error = table.error
        if isinstance(error, ApiError):
            payload = {"error": error.code, "message": error.message, "trace_id": error.trace_id}
        else:
            payload = {"error": type(error).__name__, "message": str(error)}
        print(json.dumps(payload, indent=2))
        return 1

    rendered = view.render()
    print_table(
        f"Customers (page {table.page} of {table.total_pages})",
        rendered["body"]["rows"],
        [(header["key"], header["label"] + header["indicator"]) for header in rendered["headers"]],
    )
    pager = rendered["pager"]
    print(" ".join(button["label"] for button in pager["buttons"]) + f"  ({pager['summary']})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query the customers table from a terminal")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--url-query", default="", help='e.g. "page=2&filters[status]=active"')
    parser.add_argument("--q")
    parser.add_argument("--status")
    parser.add_argument("--company")
    parser.add_argument("--created-from")
    parser.add_argument("--created-to")
    parser.add_argument("--sort", help="key:asc|desc")
    parser.add_argument("--page", type=_positive_int, default=1)
    parser.add_argument("--page-size", type=_positive_int, default=10)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        code = cmd_list(args)
    except ConfigError as exc:
        parser.error(str(exc))
    raise SystemExit(code)


if __name__ == "__main__":
    main()
