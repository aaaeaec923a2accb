"""Constants for the SoilReport users API.

This module centralizes the paging bounds and response texts used by the API.
"""

# Paging: limit
DEFAULT_LIMIT = 200
MIN_LIMIT = 1
MAX_LIMIT = 1000

# Paging: offset
DEFAULT_OFFSET = 0
MIN_OFFSET = 0
MAX_OFFSET = 100000

# Non-standard status used when the client goes away before the query finishes
HTTP_499_CLIENT_CLOSED_REQUEST = 499

# Problem responses (fixed texts; internal details stay in server logs)
CONFIGURATION_ERROR_TITLE = "Configuration error"
CONFIGURATION_ERROR_DETAIL = "Server BigQuery configuration is invalid."
QUERY_FAILED_TITLE = "BigQuery query failed"
QUERY_FAILED_DETAIL = "Unable to fetch users at this time."
