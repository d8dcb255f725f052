from decimal import Decimal
from typing import Any, Iterable, Optional

from pydocuments.indexes import DocumentIndex
from pydocuments.query.consts import (
    CRITERIA_PARAM,
    DATA,
    DATA_PARAM,
    FIELD_PARAM,
    ID_PARAM,
    NAME_PARAM,
    PATH_PARAM,
)
from pydocuments.query.operations import Field, FieldValue
from pydocuments.query.query import DocumentQuery, bind, split_schema_and_table


class PostgresQuery(DocumentQuery):
    """
    Statements for ``JSONB`` document tables

    Patching merges with ``||``, which replaces top-level keys wholesale: patching ``{"a": {"x": 1}}`` onto
    ``{"a": {"x": 1, "y": 2}}`` leaves ``{"a": {"x": 1}}``.
    """

    dialect = "postgresql"

    def ensure_table(self, table_name: str) -> str:
        return self.ensure_table_for(table_name, "JSONB")

    def ensure_document_index(self, table_name: str, index_type: DocumentIndex) -> str:
        _, table = split_schema_and_table(table_name)
        extra_ops = " jsonb_path_ops" if index_type == DocumentIndex.OPTIMIZED else ""
        return f"CREATE INDEX IF NOT EXISTS idx_{table}_document ON {table_name} USING GIN ({DATA}{extra_ops})"

    def where_data_contains(self, param_name: str = bind(CRITERIA_PARAM)) -> str:
        return f"{DATA} @> {param_name}"

    def where_json_path_matches(self, param_name: str = bind(PATH_PARAM)) -> str:
        return f"{DATA} @? CAST({param_name} AS jsonpath)"

    # counts

    def count_by_contains(self, table_name: str) -> str:
        return f"{self.count_all(table_name)} WHERE {self.where_data_contains()}"

    def count_by_json_path(self, table_name: str) -> str:
        return f"{self.count_all(table_name)} WHERE {self.where_json_path_matches()}"

    # existence

    def exists_by_contains(self, table_name: str) -> str:
        return self.exists(table_name, self.where_data_contains())

    def exists_by_json_path(self, table_name: str) -> str:
        return self.exists(table_name, self.where_json_path_matches())

    # finds

    def find_by_contains(self, table_name: str) -> str:
        return f"{self.select_from_table(table_name)} WHERE {self.where_data_contains()}"

    def find_by_json_path(self, table_name: str) -> str:
        return f"{self.select_from_table(table_name)} WHERE {self.where_json_path_matches()}"

    def find_first_by_contains(self, table_name: str) -> str:
        return f"{self.find_by_contains(table_name)} LIMIT 1"

    def find_first_by_json_path(self, table_name: str) -> str:
        return f"{self.find_by_json_path(table_name)} LIMIT 1"

    # patches

    def _patch(self, table_name: str, where: str) -> str:
        return f"UPDATE {table_name} SET {DATA} = {DATA} || {bind(DATA_PARAM)} WHERE {where}"

    def patch_by_id(self, table_name: str) -> str:
        return self._patch(table_name, self.where_by_id())

    def patch_by_field(self, table_name: str, field: Field) -> str:
        return self._patch(table_name, self.where_by_field(field))

    def patch_by_contains(self, table_name: str) -> str:
        return self._patch(table_name, self.where_data_contains())

    def patch_by_json_path(self, table_name: str) -> str:
        return self._patch(table_name, self.where_json_path_matches())

    # field removal

    def _remove_fields(self, table_name: str, where: str) -> str:
        return f"UPDATE {table_name} SET {DATA} = {DATA} - CAST({bind(NAME_PARAM)} AS text[]) WHERE {where}"

    def remove_fields_by_id(self, table_name: str) -> str:
        return self._remove_fields(table_name, self.where_by_id())

    def remove_fields_by_field(self, table_name: str, field: Field) -> str:
        return self._remove_fields(table_name, self.where_by_field(field))

    def remove_fields_by_contains(self, table_name: str) -> str:
        return self._remove_fields(table_name, self.where_data_contains())

    def remove_fields_by_json_path(self, table_name: str) -> str:
        return self._remove_fields(table_name, self.where_json_path_matches())

    # deletes

    def delete_by_contains(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE {self.where_data_contains()}"

    def delete_by_json_path(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE {self.where_json_path_matches()}"


def render_field_value(value: FieldValue) -> Optional[str]:
    """
    Render a criterion value as the text ``->>`` extracts, so ``=`` and ``<>`` compare like for like

    Ordering comparisons are therefore textual on Postgres. Floats are written positionally (``0.00001`` rather
    than ``1e-05``), the way Postgres prints numeric values.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    if isinstance(value, (int, str)):
        return str(value)
    raise TypeError(f"unsupported field value type {type(value).__name__}")


def id_param(key: Any) -> dict[str, Any]:
    return {ID_PARAM: str(key)}


def field_param(field: Field) -> dict[str, Any]:
    if not field.op.takes_value:
        return {}
    return {FIELD_PARAM: render_field_value(field.value)}


def field_name_param(field_names: Iterable[str]) -> dict[str, Any]:
    return {NAME_PARAM: list(field_names)}


def path_param(json_path: str) -> dict[str, Any]:
    return {PATH_PARAM: json_path}
