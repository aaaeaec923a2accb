"""BigQuery integration for the SoilReport users API.

Authentication uses Application Default Credentials (the Cloud Run service
account in production, `gcloud auth application-default login` locally); no
credential material is read from configuration.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional
from google.cloud import bigquery

from soilreport.errors import QueryCancelledError, QueryExecutionError

logger = logging.getLogger(__name__)

# How often a running job is checked for completion, cancellation and deadline
POLL_INTERVAL_SEC = 0.25


class BigQueryClient:
    """Thin adapter over `google.cloud.bigquery.Client` for read queries."""

    def __init__(
        self,
        project_id: str,
        client: Optional[bigquery.Client] = None,
        timeout_sec: Optional[float] = None,
        poll_interval_sec: float = POLL_INTERVAL_SEC,
    ):
        """Initialize BigQuery client.

        Args:
            project_id: Project that runs (and is billed for) the query jobs
            client: Pre-built google client; if None one is created on first use
            timeout_sec: Deadline for a single query; None waits indefinitely
            poll_interval_sec: Seconds between job status checks
        """
        self.project_id = project_id
        self.timeout_sec = timeout_sec
        self.poll_interval_sec = poll_interval_sec
        self._client = client

    @property
    def client(self) -> bigquery.Client:
        if self._client is None:
            self._client = bigquery.Client(project=self.project_id)
        return self._client

    def close(self) -> None:
        """Release the underlying HTTP session, if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def execute_query(self, query: str, cancel_event: Optional[threading.Event] = None) -> List[Dict[str, Any]]:
        """Run a query and return all rows.

        Blocks until the job finishes. While waiting, `cancel_event` and the
        configured deadline are checked every poll interval.

        Args:
            query: Query text (Standard SQL)
            cancel_event: Set by the caller to abandon the query

        Returns:
            List of rows, each a dict of column name -> value

        Raises:
            QueryCancelledError: If cancelled or the deadline passed before completion
            QueryExecutionError: If the query could not be run for any other reason
        """
        if cancel_event is not None and cancel_event.is_set():
            raise QueryCancelledError("Query cancelled before submission")

        deadline = time.monotonic() + self.timeout_sec if self.timeout_sec else None
        try:
            job = self.client.query(query)
            logger.debug(f"Submitted BigQuery job {job.job_id}")

            while not job.done():
                if deadline is not None and time.monotonic() >= deadline:
                    self._cancel_job(job)
                    raise QueryCancelledError(f"Query deadline of {self.timeout_sec}s exceeded")
                if cancel_event is not None:
                    if cancel_event.wait(self.poll_interval_sec):
                        self._cancel_job(job)
                        raise QueryCancelledError("Query cancelled by caller")
                else:
                    time.sleep(self.poll_interval_sec)

            rows = job.result()
            return [dict(row.items()) for row in rows]
        except QueryCancelledError:
            raise
        except Exception as e:
            raise QueryExecutionError(f"BigQuery query failed: {type(e).__name__}: {e}") from e

    def _cancel_job(self, job) -> None:
        """Ask BigQuery to stop a running job; failures are logged, not raised."""
        try:
            job.cancel()
        except Exception as e:
            logger.warning(f"Failed to cancel BigQuery job {job.job_id}: {type(e).__name__}: {e}")
