from typing import Any, Iterable, Optional, Type, TypeVar

from pydocuments.connection.executor import to_count, to_exists
from pydocuments.connection.session import DocumentSession
from pydocuments.indexes import DocumentIndex
from pydocuments.query import postgres
from pydocuments.query.consts import CRITERIA_PARAM, DATA_PARAM, NAME_PARAM
from pydocuments.query.operations import Field
from pydocuments.query.postgres import PostgresQuery

T = TypeVar("T")


class PostgresSession(DocumentSession):
    """
    Document operations over ``JSONB`` tables, adding containment (``@>``) and JSON path (``@?``) selectors

    Patches are shallow merges (``||``). Ids and field values bind as text. Removing an empty list of field names
    runs no statement and returns 0.
    """

    query_class = PostgresQuery
    query: PostgresQuery

    def _id_param(self, doc_id: Any) -> dict[str, Any]:
        return postgres.id_param(doc_id)

    def _field_param(self, field: Field) -> dict[str, Any]:
        return postgres.field_param(field)

    def _criteria_param(self, criteria: Any) -> dict[str, Any]:
        return self._json_param(CRITERIA_PARAM, criteria)

    async def ensure_document_index(self, table_name: str, index_type: DocumentIndex = DocumentIndex.FULL):
        await self.custom_non_query(self.query.ensure_document_index(table_name, index_type))

    # counts

    async def count_by_contains(self, table_name: str, criteria: Any) -> int:
        return await self.custom_scalar(
            self.query.count_by_contains(table_name), self._criteria_param(criteria), to_count
        )

    async def count_by_json_path(self, table_name: str, json_path: str) -> int:
        return await self.custom_scalar(
            self.query.count_by_json_path(table_name), postgres.path_param(json_path), to_count
        )

    # existence

    async def exists_by_contains(self, table_name: str, criteria: Any) -> bool:
        return await self.custom_scalar(
            self.query.exists_by_contains(table_name), self._criteria_param(criteria), to_exists
        )

    async def exists_by_json_path(self, table_name: str, json_path: str) -> bool:
        return await self.custom_scalar(
            self.query.exists_by_json_path(table_name), postgres.path_param(json_path), to_exists
        )

    # finds

    async def find_by_contains(
        self, table_name: str, criteria: Any, model: Type[T] = dict  # type: ignore[assignment]
    ) -> list[T]:
        return await self.custom_list(
            self.query.find_by_contains(table_name), self._criteria_param(criteria), self._from_data(model)
        )

    async def find_by_json_path(
        self, table_name: str, json_path: str, model: Type[T] = dict  # type: ignore[assignment]
    ) -> list[T]:
        return await self.custom_list(
            self.query.find_by_json_path(table_name), postgres.path_param(json_path), self._from_data(model)
        )

    async def find_first_by_contains(
        self, table_name: str, criteria: Any, model: Type[T] = dict  # type: ignore[assignment]
    ) -> Optional[T]:
        return await self.custom_single(
            self.query.find_first_by_contains(table_name), self._criteria_param(criteria), self._from_data(model)
        )

    async def find_first_by_json_path(
        self, table_name: str, json_path: str, model: Type[T] = dict  # type: ignore[assignment]
    ) -> Optional[T]:
        return await self.custom_single(
            self.query.find_first_by_json_path(table_name), postgres.path_param(json_path), self._from_data(model)
        )

    # patches

    async def patch_by_contains(self, table_name: str, criteria: Any, patch: Any) -> int:
        return await self.custom_non_query(
            self.query.patch_by_contains(table_name),
            {**self._criteria_param(criteria), **self._json_param(DATA_PARAM, patch)},
        )

    async def patch_by_json_path(self, table_name: str, json_path: str, patch: Any) -> int:
        return await self.custom_non_query(
            self.query.patch_by_json_path(table_name),
            {**postgres.path_param(json_path), **self._json_param(DATA_PARAM, patch)},
        )

    # field removal

    async def remove_fields_by_id(self, table_name: str, doc_id: Any, field_names: Iterable[str]) -> int:
        names = postgres.field_name_param(field_names)
        if not names[NAME_PARAM]:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_id(table_name),
            {**self._id_param(doc_id), **names},
        )

    async def remove_fields_by_field(self, table_name: str, field: Field, field_names: Iterable[str]) -> int:
        names = postgres.field_name_param(field_names)
        if not names[NAME_PARAM]:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_field(table_name, field),
            {**self._field_param(field), **names},
        )

    async def remove_fields_by_contains(self, table_name: str, criteria: Any, field_names: Iterable[str]) -> int:
        names = postgres.field_name_param(field_names)
        if not names[NAME_PARAM]:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_contains(table_name),
            {**self._criteria_param(criteria), **names},
        )

    async def remove_fields_by_json_path(self, table_name: str, json_path: str, field_names: Iterable[str]) -> int:
        names = postgres.field_name_param(field_names)
        if not names[NAME_PARAM]:
            return 0
        return await self.custom_non_query(
            self.query.remove_fields_by_json_path(table_name),
            {**postgres.path_param(json_path), **names},
        )

    # deletes

    async def delete_by_contains(self, table_name: str, criteria: Any) -> int:
        return await self.custom_non_query(self.query.delete_by_contains(table_name), self._criteria_param(criteria))

    async def delete_by_json_path(self, table_name: str, json_path: str) -> int:
        return await self.custom_non_query(self.query.delete_by_json_path(table_name), postgres.path_param(json_path))
