"""Request-to-query and row-mapping engine for the SoilReport users API."""

from soilreport.engine.parameters import parse_bounded_int, parse_with_policy, BoundedIntPolicy, LIMIT_POLICY, OFFSET_POLICY
from soilreport.engine.identifiers import is_valid_project_id, is_valid_identifier, resolve_table_reference, TableReference
from soilreport.engine.query_builder import build_users_query, USER_COLUMNS
from soilreport.engine.values import classify_value, ColumnValue, ValueKind
from soilreport.engine.row_mapper import map_row

__all__ = [
    "parse_bounded_int",
    "parse_with_policy",
    "BoundedIntPolicy",
    "LIMIT_POLICY",
    "OFFSET_POLICY",
    "is_valid_project_id",
    "is_valid_identifier",
    "resolve_table_reference",
    "TableReference",
    "build_users_query",
    "USER_COLUMNS",
    "classify_value",
    "ColumnValue",
    "ValueKind",
    "map_row",
]
