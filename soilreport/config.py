"""Configuration for the SoilReport users API.

Values come from the process environment (optionally seeded from a `.env`
file). Handlers receive a `Settings` instance through the `get_settings`
dependency instead of reading the environment directly.
"""

import logging
import os
from typing import List, Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BQ_PROJECT_ID = "soil-report-486813"
DEFAULT_BQ_DATASET = "crm"
DEFAULT_BQ_TABLE = "users"


def parse_allowed_origins(raw: Optional[str]) -> List[str]:
    """Split a comma-separated ALLOWED_ORIGINS value into a list of origins.

    Entries are trimmed and empty entries are dropped, so an unset or blank
    value yields an empty list (cross-origin access disabled).
    """
    if not raw:
        return []
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    """Parse BQ_QUERY_TIMEOUT_SEC; unset, invalid or non-positive means no deadline."""
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid BQ_QUERY_TIMEOUT_SEC value {raw!r}; no query deadline applied")
        return None
    return timeout if timeout > 0 else None


class Settings(BaseModel):
    """Runtime settings."""

    bq_project_id: str = Field(DEFAULT_BQ_PROJECT_ID, description="BigQuery project id")
    bq_dataset: str = Field(DEFAULT_BQ_DATASET, description="BigQuery dataset name")
    bq_table: str = Field(DEFAULT_BQ_TABLE, description="BigQuery table name")
    allowed_origins: List[str] = Field(default_factory=list, description="CORS allow-list ('*' for any origin)")
    query_timeout_sec: Optional[float] = Field(None, description="Deadline for a single BigQuery query (None = no deadline)")
    log_level: str = Field("INFO", description="Root log level")
    log_format: str = Field("json", description="Log output format: 'json' or 'text'")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, applying defaults."""
        return cls(
            bq_project_id=os.getenv("BQ_PROJECT_ID", DEFAULT_BQ_PROJECT_ID),
            bq_dataset=os.getenv("BQ_DATASET", DEFAULT_BQ_DATASET),
            bq_table=os.getenv("BQ_TABLE", DEFAULT_BQ_TABLE),
            allowed_origins=parse_allowed_origins(os.getenv("ALLOWED_ORIGINS")),
            query_timeout_sec=_parse_timeout(os.getenv("BQ_QUERY_TIMEOUT_SEC")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
        )


def get_settings() -> Settings:
    """Get settings for the current request (dependency for FastAPI)."""
    return Settings.from_env()
