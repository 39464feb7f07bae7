from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.tablekit.db.seed import build_customer_rows
from app.tablekit.repos.customers import CustomerRepository, get_customer_repository

REFERENCE_TIME = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def seeded_rows():
    return build_customer_rows(500, now=REFERENCE_TIME)


@pytest.fixture()
def client(seeded_rows):
    app = create_app()
    app.dependency_overrides[get_customer_repository] = lambda: CustomerRepository(seeded_rows)
    with TestClient(app) as client:
        yield client
