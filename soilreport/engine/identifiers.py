"""BigQuery identifier validation.

Project, dataset and table names are interpolated into query text, so they
are restricted to grammars that cannot carry quoting or SQL syntax.
"""

import re
from typing import NamedTuple

from soilreport.errors import ConfigurationError

# Lowercase letter, then 4-29 lowercase letters, digits or hyphens
_PROJECT_ID_PATTERN = re.compile(r"[a-z][a-z0-9\-]{4,29}", re.ASCII)

# One or more ASCII letters, digits or underscores
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_]+", re.ASCII)


def is_valid_project_id(value: str) -> bool:
    """Check whether a string is a safe BigQuery project id."""
    return isinstance(value, str) and _PROJECT_ID_PATTERN.fullmatch(value) is not None


def is_valid_identifier(value: str) -> bool:
    """Check whether a string is a safe BigQuery dataset or table name."""
    return isinstance(value, str) and _IDENTIFIER_PATTERN.fullmatch(value) is not None


class TableReference(NamedTuple):
    """Validated, fully qualified BigQuery table reference."""
    project: str
    dataset: str
    table: str

    @property
    def qualified_name(self) -> str:
        """Backtick-quoted `project.dataset.table` form used in query text."""
        return f"`{self.project}.{self.dataset}.{self.table}`"


def resolve_table_reference(project: str, dataset: str, table: str) -> TableReference:
    """Validate configured identifiers and build a table reference.

    Raises:
        ConfigurationError: If any identifier fails validation. The message
            carries the offending values and is meant for server logs only.
    """
    if not is_valid_project_id(project) or not is_valid_identifier(dataset) or not is_valid_identifier(table):
        raise ConfigurationError(
            f"Invalid BigQuery identifier configuration. "
            f"project={project!r}, dataset={dataset!r}, table={table!r}"
        )
    return TableReference(project, dataset, table)
