from typing import Any, Iterable

from pydocuments.connection.session import DocumentSession
from pydocuments.query import sqlite
from pydocuments.query.operations import Field
from pydocuments.query.sqlite import SqliteQuery


class SqliteSession(DocumentSession):
    """
    Document operations over ``TEXT`` tables through SQLite's JSON functions

    Patches are deep merges (``json_patch``). Containment and JSON path selectors do not exist here.

    Ids bind natively, so a document stored with ``"Id": "7"`` is not found by id ``7`` (Postgres compares both as
    text and finds it). Removing an empty list of field names runs no statement and returns 0.
    """

    query_class = SqliteQuery
    query: SqliteQuery

    def _id_param(self, doc_id: Any) -> dict[str, Any]:
        return sqlite.id_param(doc_id)

    def _field_param(self, field: Field) -> dict[str, Any]:
        return sqlite.field_param(field)

    async def remove_fields_by_id(self, table_name: str, doc_id: Any, field_names: Iterable[str]) -> int:
        names = sqlite.field_name_params(field_names)
        if not names:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_id(table_name, list(names)), {**self._id_param(doc_id), **names}
        )

    async def remove_fields_by_field(self, table_name: str, field: Field, field_names: Iterable[str]) -> int:
        names = sqlite.field_name_params(field_names)
        if not names:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_field(table_name, field, list(names)), {**self._field_param(field), **names}
        )
