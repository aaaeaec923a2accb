"""FastAPI dependencies for the users endpoint."""

from fastapi import Depends

from soilreport.config import Settings, get_settings
from soilreport.integrations.bigquery import BigQueryClient


def get_warehouse_client(settings: Settings = Depends(get_settings)) -> BigQueryClient:
    """Get a BigQuery client for the current request.

    The google client is created lazily on first query and closed when the
    request finishes.
    """
    client = BigQueryClient(
        project_id=settings.bq_project_id,
        timeout_sec=settings.query_timeout_sec,
    )
    try:
        yield client
    finally:
        client.close()
