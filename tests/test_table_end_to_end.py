import httpx
import pytest

from app.main import create_app
from app.tablekit.repos.customers import CustomerRepository, get_customer_repository
from tablekit_client_sdk import ClientConfig, HttpClient, MemoryLocation, PaginatedTable, customers_table_config
from tablekit_client_sdk.models import Sort, SortDirection


@pytest.fixture()
def asgi_http(seeded_rows):
    app = create_app()
    app.dependency_overrides[get_customer_repository] = lambda: CustomerRepository(seeded_rows)
    config = ClientConfig(env_name="test", api_base_url="http://testserver")
    return HttpClient(config, transport=httpx.ASGITransport(app=app))


@pytest.mark.asyncio
async def test_table_state_round_trips_through_the_endpoint(asgi_http):
    location = MemoryLocation.from_url("/customers?filters[status]=active")
    table = PaginatedTable(customers_table_config(debounce_ms=0), asgi_http, location=location)

    async with table:
        await table.wait_idle()
        assert len(table.rows) == 10
        assert {row.status for row in table.rows} == {"active"}
        assert table.total == 167
        assert table.total_pages == 17

        table.set_page(17)
        await table.wait_idle()
        assert len(table.rows) == 7

        table.set_filter("company", "ByteForge")
        table.set_filter("status", "churned")
        table.set_sort(Sort("name", SortDirection.ASC))
        await table.wait_idle()
        assert table.page == 1
        assert table.total == 33
        names = [row.name for row in table.rows]
        assert names == sorted(names)
        assert {(row.company, row.status) for row in table.rows} == {("ByteForge", "churned")}

        table.set_query("USER 1")
        await table.wait_idle()
        assert table.rows
        assert all("user 1" in row.name.lower() for row in table.rows)

    await asgi_http.aclose()
    reopened = PaginatedTable(customers_table_config(), asgi_http, location=MemoryLocation.from_url(location.url))
    assert reopened.state == table.state
