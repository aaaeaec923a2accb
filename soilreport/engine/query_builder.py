"""Composition of the users listing query."""

from soilreport.engine.identifiers import TableReference, is_valid_identifier, is_valid_project_id

USER_COLUMNS = (
    "user_id",
    "email",
    "phone_number",
    "full_name",
    "role",
    "created_at",
    "updated_at",
)

USERS_QUERY_TEMPLATE = (
    "SELECT {columns}\n"
    "FROM {table}\n"
    "ORDER BY created_at DESC NULLS LAST\n"
    "LIMIT {limit} OFFSET {offset}"
)


def build_users_query(table: TableReference, limit: int, offset: int) -> str:
    """Build the paged users query.

    Values are interpolated directly into the query text. Only a validated
    table reference and plain integers are accepted, so no client text can
    reach the query.

    Args:
        table: Table reference from `resolve_table_reference`
        limit: Page size from the paging validator
        offset: Row offset from the paging validator

    Returns:
        The query text

    Raises:
        ValueError: If any component is not of the accepted, validated form
    """
    if not isinstance(table, TableReference) or not (
        is_valid_project_id(table.project)
        and is_valid_identifier(table.dataset)
        and is_valid_identifier(table.table)
    ):
        raise ValueError("Query table must be a validated TableReference")
    for name, value in (("limit", limit), ("offset", offset)):
        # bool is an int subclass but never a valid page bound
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"Query {name} must be a non-negative integer, got {value!r}")

    return USERS_QUERY_TEMPLATE.format(
        columns=", ".join(USER_COLUMNS),
        table=table.qualified_name,
        limit=limit,
        offset=offset,
    )
