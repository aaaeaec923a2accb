"""Exception types for the SoilReport users API.

Each type maps to exactly one HTTP outcome in the API layer:

- ParameterValidationError -> 400, message is safe to echo to the caller
- ConfigurationError -> 500, details stay in server logs
- QueryExecutionError -> 500, details stay in server logs
- QueryCancelledError -> 499 (client closed request)
"""


class ParameterValidationError(ValueError):
    """A client-supplied query parameter failed validation."""


class ConfigurationError(Exception):
    """Server-side BigQuery configuration is invalid."""


class QueryExecutionError(Exception):
    """The BigQuery query could not be executed."""


class QueryCancelledError(Exception):
    """The BigQuery query was cancelled before it completed."""
