from typing import Any, Iterable, Sequence

from pydocuments.query.consts import DATA, DATA_PARAM, FIELD_PARAM, ID_PARAM, NAME_PARAM
from pydocuments.query.operations import Field, FieldValue
from pydocuments.query.query import DocumentQuery, bind


class SqliteQuery(DocumentQuery):
    """
    Statements for ``TEXT`` document tables using SQLite's JSON functions

    Patching goes through ``json_patch`` (RFC 7396), which merges nested objects key by key: patching
    ``{"a": {"x": 1}}`` onto ``{"a": {"x": 1, "y": 2}}`` keeps ``y``. There are no containment or JSON path
    statements for SQLite.
    """

    dialect = "sqlite"

    def ensure_table(self, table_name: str) -> str:
        return self.ensure_table_for(table_name, "TEXT")

    # patches

    def _patch(self, table_name: str, where: str) -> str:
        return f"UPDATE {table_name} SET {DATA} = json_patch({DATA}, json({bind(DATA_PARAM)})) WHERE {where}"

    def patch_by_id(self, table_name: str) -> str:
        return self._patch(table_name, self.where_by_id())

    def patch_by_field(self, table_name: str, field: Field) -> str:
        return self._patch(table_name, self.where_by_field(field))

    # field removal

    def _remove_fields(self, table_name: str, param_names: Sequence[str], where: str) -> str:
        if not param_names:
            raise ValueError("at least one field name parameter is required")
        paths = ", ".join(bind(name) for name in param_names)
        return f"UPDATE {table_name} SET {DATA} = json_remove({DATA}, {paths}) WHERE {where}"

    def remove_fields_by_id(self, table_name: str, param_names: Sequence[str]) -> str:
        return self._remove_fields(table_name, param_names, self.where_by_id())

    def remove_fields_by_field(self, table_name: str, field: Field, param_names: Sequence[str]) -> str:
        return self._remove_fields(table_name, param_names, self.where_by_field(field))


def render_field_value(value: FieldValue) -> FieldValue:
    """
    SQLite's ``->>`` yields SQL-typed values (integers, reals, text, 0/1 for booleans), so values bind natively
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    raise TypeError(f"unsupported field value type {type(value).__name__}")


def id_param(key: Any) -> dict[str, Any]:
    if isinstance(key, (int, float, str)) and not isinstance(key, bool):
        return {ID_PARAM: key}
    return {ID_PARAM: str(key)}


def field_param(field: Field) -> dict[str, Any]:
    if not field.op.takes_value:
        return {}
    return {FIELD_PARAM: render_field_value(field.value)}


def field_name_params(field_names: Iterable[str]) -> dict[str, Any]:
    return {f"{NAME_PARAM}{i}": f"$.{name}" for i, name in enumerate(field_names)}
