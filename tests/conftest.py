"""Pytest fixtures and configuration for SoilReport tests."""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from fastapi.testclient import TestClient


class FakeWarehouseClient:
    """Stand-in for BigQueryClient that records queries and returns canned rows."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[BaseException] = None):
        self.rows = rows or []
        self.error = error
        self.queries: List[str] = []

    def execute_query(self, query, cancel_event=None):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.rows)

    def close(self):
        pass


@pytest.fixture
def test_settings():
    """Settings pointing at the default table, without reading the environment."""
    from soilreport.config import Settings
    return Settings(
        bq_project_id="soil-report-486813",
        bq_dataset="crm",
        bq_table="users",
    )


@pytest.fixture
def sample_rows():
    """Three users-table rows as the BigQuery client returns them (already ordered)."""
    return [
        {
            "user_id": "u-3",
            "email": "carol@example.com",
            "phone_number": "+15550003",
            "full_name": "Carol",
            "role": 2,
            "created_at": datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 3, 2, 8, 30, 0, 123456, tzinfo=timezone.utc),
        },
        {
            "user_id": "u-2",
            "email": "bob@example.com",
            "phone_number": None,
            "full_name": "Bob",
            "role": Decimal("1"),
            "created_at": datetime(2024, 2, 1, 12, 0, 0, tzinfo=timezone.utc),
            "updated_at": None,
        },
        {
            "user_id": "u-1",
            "email": "alice@example.com",
            "phone_number": None,
            "full_name": None,
            "role": None,
            "created_at": None,
            "updated_at": None,
        },
    ]


@pytest.fixture
def fake_warehouse(sample_rows):
    """Fake warehouse client returning the sample rows."""
    return FakeWarehouseClient(rows=sample_rows)


@pytest.fixture
def test_client(test_settings, fake_warehouse):
    """Create a FastAPI test client with overridden settings and warehouse dependencies."""
    from soilreport.api.app import app
    from soilreport.api.dependencies import get_warehouse_client
    from soilreport.config import get_settings

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_warehouse_client] = lambda: fake_warehouse

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def install_warehouse(test_client):
    """Swap the warehouse client used by `test_client` for a new fake.

    Returns a function taking FakeWarehouseClient arguments and returning the fake.
    """
    from soilreport.api.app import app
    from soilreport.api.dependencies import get_warehouse_client

    def _install(**kwargs):
        fake = FakeWarehouseClient(**kwargs)
        app.dependency_overrides[get_warehouse_client] = lambda: fake
        return fake

    return _install
