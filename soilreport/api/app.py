"""FastAPI web application for the SoilReport users API."""

import asyncio
import logging
import threading
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from soilreport import __version__
from soilreport.api.dependencies import get_warehouse_client
from soilreport.config import Settings, get_settings
from soilreport.engine.identifiers import resolve_table_reference
from soilreport.engine.parameters import LIMIT_POLICY, OFFSET_POLICY, parse_with_policy
from soilreport.engine.query_builder import build_users_query
from soilreport.engine.row_mapper import map_row
from soilreport.errors import ConfigurationError, ParameterValidationError, QueryCancelledError
from soilreport.integrations.bigquery import BigQueryClient
from soilreport.logging_config import configure_logging
from soilreport.models.constants import (
    HTTP_499_CLIENT_CLOSED_REQUEST,
    CONFIGURATION_ERROR_TITLE,
    CONFIGURATION_ERROR_DETAIL,
    QUERY_FAILED_TITLE,
    QUERY_FAILED_DETAIL,
)
from soilreport.models.user import UserRecord

logger = logging.getLogger(__name__)

router = APIRouter()

# How often the handler checks for a client disconnect while a query runs
DISCONNECT_POLL_INTERVAL_SEC = 0.25

PROBLEM_TYPE_SERVER_ERROR = "https://tools.ietf.org/html/rfc9110#section-15.6.1"


def configure_cors(app: FastAPI, allowed_origins: List[str]) -> bool:
    """Attach CORS middleware for the configured origins.

    An empty list leaves CORS off (browsers block cross-origin calls); a
    single '*' allows any origin; anything else is an explicit allow-list.

    Returns:
        True if the middleware was added
    """
    if not allowed_origins:
        return False

    if allowed_origins == ["*"]:
        origins = ["*"]
    else:
        origins = list(allowed_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return True


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Startup settings (logging, CORS). Defaults to the environment.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)

    application = FastAPI(
        title="SoilReport Users API",
        description="Read-only, paginated listing of CRM users from BigQuery",
        version=__version__,
    )
    if configure_cors(application, settings.allowed_origins):
        logger.info(f"CORS enabled for origins: {settings.allowed_origins}")

    application.include_router(router)
    return application


def _raw_query_value(request: Request, name: str) -> Optional[str]:
    """Return the raw text of a query parameter (repeated values joined by ',')."""
    values = request.query_params.getlist(name)
    if not values:
        return None
    return ",".join(values)


def _problem(title: str, detail: str, status_code: int) -> JSONResponse:
    """Build a problem-details response with a fixed, non-sensitive body."""
    return JSONResponse(
        status_code=status_code,
        media_type="application/problem+json",
        content={
            "type": PROBLEM_TYPE_SERVER_ERROR,
            "title": title,
            "status": status_code,
            "detail": detail,
        },
    )


async def _run_query(request: Request, warehouse: BigQueryClient, query: str) -> List[Dict[str, Any]]:
    """Run a query in the thread pool, cancelling it if the client disconnects."""
    cancel_event = threading.Event()
    query_task = asyncio.ensure_future(run_in_threadpool(warehouse.execute_query, query, cancel_event))
    try:
        while True:
            done, _ = await asyncio.wait({query_task}, timeout=DISCONNECT_POLL_INTERVAL_SEC)
            if done:
                return query_task.result()
            if not cancel_event.is_set() and await request.is_disconnected():
                logger.debug("Client disconnected; cancelling BigQuery query")
                cancel_event.set()
    except asyncio.CancelledError:
        cancel_event.set()
        raise


@router.get("/")
async def root():
    """Health check endpoint."""
    return "OK"


@router.get("/users", response_model=List[UserRecord])
async def list_users(
    request: Request,
    settings: Settings = Depends(get_settings),
    warehouse: BigQueryClient = Depends(get_warehouse_client),
):
    """List users, newest first, one page at a time."""
    try:
        limit = parse_with_policy(_raw_query_value(request, "limit"), LIMIT_POLICY)
        offset = parse_with_policy(_raw_query_value(request, "offset"), OFFSET_POLICY)
    except ParameterValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        table = resolve_table_reference(settings.bq_project_id, settings.bq_dataset, settings.bq_table)
    except ConfigurationError as e:
        logger.error(str(e))
        return _problem(CONFIGURATION_ERROR_TITLE, CONFIGURATION_ERROR_DETAIL, 500)

    query = build_users_query(table, limit, offset)

    try:
        rows = await _run_query(request, warehouse, query)
        users = [map_row(row) for row in rows]
    except QueryCancelledError:
        logger.info("Request cancelled while querying BigQuery.")
        return Response(status_code=HTTP_499_CLIENT_CLOSED_REQUEST)
    except Exception:
        logger.exception("Failed to query BigQuery users.")
        return _problem(QUERY_FAILED_TITLE, QUERY_FAILED_DETAIL, 500)

    return users


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
