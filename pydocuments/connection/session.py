import logging
from typing import Any, Callable, Iterable, Optional, Type, TypeVar, overload

from pydocuments.config import DEFAULT_CONFIG, DocumentConfig
from pydocuments.connection import executor
from pydocuments.connection.engine import create_async_engine_for_dsn
from pydocuments.connection.exceptions import SessionNotInitializedError, UnsupportedDialectError
from pydocuments.connection.executor import Bind, Parameters, RowMapper, connect, from_data, to_count, to_exists
from pydocuments.query.consts import DATA_PARAM
from pydocuments.query.operations import Field
from pydocuments.query.query import DocumentQuery

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentSession:
    """
    Document operations shared by every backend

    Each call issues a single statement. Bound to an engine, every call runs in its own connection and
    transaction; bound to a connection (see :meth:`with_connection`) calls join whatever transaction the caller
    holds open. Writes return the number of affected rows, and zero is not an error.
    """

    query_class: Type[DocumentQuery] = DocumentQuery

    @overload
    def __init__(self, *, bind: Bind, config: DocumentConfig = DEFAULT_CONFIG): ...

    @overload
    def __init__(self, *, dsn: str, config: DocumentConfig = DEFAULT_CONFIG, **engine_kwargs: Any): ...

    def __init__(
        self,
        *,
        bind: Optional[Bind] = None,
        dsn: Optional[str] = None,
        config: DocumentConfig = DEFAULT_CONFIG,
        **engine_kwargs: Any,
    ):
        if bind is None and dsn is None:
            raise ValueError("either `bind` or `dsn` is required")

        self.dsn = dsn
        self.config = config
        self.query = self.query_class(config.id_field)
        self._engine_kwargs = engine_kwargs
        self._owns_engine = False
        self.bind: Optional[Bind] = None
        if bind is not None:
            self._check_dialect(bind)
            self.bind = bind

    def __repr__(self):
        return f"<{self.__class__.__name__} bind={self.bind!r} id_field={self.config.id_field!r}>"

    def _check_dialect(self, bind: Bind):
        name = bind.dialect.name
        if name != self.query_class.dialect:
            raise UnsupportedDialectError(f"{self.__class__.__name__} cannot run on a {name} database")

    async def initialize(self):
        if self.bind is None:
            engine = create_async_engine_for_dsn(self.dsn, **self._engine_kwargs)  # type: ignore[arg-type]
            try:
                self._check_dialect(engine)
            except UnsupportedDialectError:
                await engine.dispose()
                raise
            self.bind = engine
            self._owns_engine = True
        return self

    @property
    def initialized(self) -> bool:
        return self.bind is not None

    async def close(self):
        if self._owns_engine and self.bind is not None:
            await self.bind.dispose()  # type: ignore[union-attr]
            self.bind = None
            self._owns_engine = False

    async def __aenter__(self):
        return await self.initialize()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def with_connection(self, connection: Bind):
        return self.__class__(bind=connection, config=self.config)

    @property
    def _bind(self) -> Bind:
        if self.bind is None:
            raise SessionNotInitializedError(
                f"you should call `await {self.initialize.__name__}()` before using the session or initialize it"
                " with `bind`"
            )
        return self.bind

    # parameters

    def _id_param(self, doc_id: Any) -> dict[str, Any]:
        raise NotImplementedError

    def _field_param(self, field: Field) -> dict[str, Any]:
        raise NotImplementedError

    def _json_param(self, name: str, document: Any) -> dict[str, Any]:
        return {name: self.config.serializer.serialize(document)}

    def _from_data(self, model: Type[T]) -> RowMapper[T]:
        return from_data(model, self.config.serializer)

    # custom

    async def custom_scalar(self, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> T:
        return await executor.scalar(self._bind, sql, params, map_row)

    async def custom_single(self, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> Optional[T]:
        return await executor.single(self._bind, sql, params, map_row)

    async def custom_list(self, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> list[T]:
        return await executor.list_(self._bind, sql, params, map_row)

    async def custom_non_query(self, sql: str, params: Optional[Parameters] = None) -> int:
        return await executor.non_query(self._bind, sql, params)

    # definition

    async def ensure_table(self, table_name: str):
        logger.debug("ensuring table", extra={"table": table_name, "id_field": self.config.id_field})
        async with connect(self._bind) as conn:
            await executor.non_query(conn, self.query.ensure_table(table_name))
            await executor.non_query(conn, self.query.ensure_key(table_name))

    async def ensure_key(self, table_name: str):
        await self.custom_non_query(self.query.ensure_key(table_name))

    async def ensure_field_index(self, table_name: str, index_name: str, fields: Iterable[str]):
        await self.custom_non_query(self.query.ensure_index_on(table_name, index_name, fields))

    # writes

    async def insert(self, table_name: str, document: Any) -> int:
        return await self.custom_non_query(self.query.insert(table_name), self._json_param(DATA_PARAM, document))

    async def save(self, table_name: str, document: Any) -> int:
        return await self.custom_non_query(self.query.save(table_name), self._json_param(DATA_PARAM, document))

    async def update_by_id(self, table_name: str, doc_id: Any, document: Any) -> int:
        return await self.custom_non_query(
            self.query.update(table_name), {**self._id_param(doc_id), **self._json_param(DATA_PARAM, document)}
        )

    async def update_by_func(self, table_name: str, id_func: Callable[[Any], Any], document: Any) -> int:
        return await self.update_by_id(table_name, id_func(document), document)

    async def patch_by_id(self, table_name: str, doc_id: Any, patch: Any) -> int:
        return await self.custom_non_query(
            self.query.patch_by_id(table_name), {**self._id_param(doc_id), **self._json_param(DATA_PARAM, patch)}
        )

    async def patch_by_field(self, table_name: str, field: Field, patch: Any) -> int:
        return await self.custom_non_query(
            self.query.patch_by_field(table_name, field),
            {**self._field_param(field), **self._json_param(DATA_PARAM, patch)},
        )

    async def remove_fields_by_id(self, table_name: str, doc_id: Any, field_names: Iterable[str]) -> int:
        raise NotImplementedError

    async def remove_fields_by_field(self, table_name: str, field: Field, field_names: Iterable[str]) -> int:
        raise NotImplementedError

    async def delete_by_id(self, table_name: str, doc_id: Any) -> int:
        return await self.custom_non_query(self.query.delete_by_id(table_name), self._id_param(doc_id))

    async def delete_by_field(self, table_name: str, field: Field) -> int:
        return await self.custom_non_query(self.query.delete_by_field(table_name, field), self._field_param(field))

    # counts

    async def count_all(self, table_name: str) -> int:
        return await self.custom_scalar(self.query.count_all(table_name), None, to_count)

    async def count_by_field(self, table_name: str, field: Field) -> int:
        return await self.custom_scalar(
            self.query.count_by_field(table_name, field), self._field_param(field), to_count
        )

    # existence

    async def exists_by_id(self, table_name: str, doc_id: Any) -> bool:
        return await self.custom_scalar(self.query.exists_by_id(table_name), self._id_param(doc_id), to_exists)

    async def exists_by_field(self, table_name: str, field: Field) -> bool:
        return await self.custom_scalar(
            self.query.exists_by_field(table_name, field), self._field_param(field), to_exists
        )

    # finds

    async def find_all(self, table_name: str, model: Type[T] = dict) -> list[T]:  # type: ignore[assignment]
        return await self.custom_list(self.query.select_from_table(table_name), None, self._from_data(model))

    async def find_by_id(
        self, table_name: str, doc_id: Any, model: Type[T] = dict  # type: ignore[assignment]
    ) -> Optional[T]:
        return await self.custom_single(
            self.query.find_by_id(table_name), self._id_param(doc_id), self._from_data(model)
        )

    async def find_by_field(
        self, table_name: str, field: Field, model: Type[T] = dict  # type: ignore[assignment]
    ) -> list[T]:
        return await self.custom_list(
            self.query.find_by_field(table_name, field), self._field_param(field), self._from_data(model)
        )

    async def find_first_by_field(
        self, table_name: str, field: Field, model: Type[T] = dict  # type: ignore[assignment]
    ) -> Optional[T]:
        """
        Any one of the matching documents; which one is not defined when several match
        """
        return await self.custom_single(
            self.query.find_first_by_field(table_name, field), self._field_param(field), self._from_data(model)
        )
