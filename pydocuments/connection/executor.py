import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable, Mapping, Optional, Type, TypeVar, Union

from sqlalchemy import Row, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from pydocuments.connection.exceptions import NoResultError
from pydocuments.query.consts import DATA

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from sqlalchemy import CursorResult

    from pydocuments.serializer import DocumentSerializer

logger = logging.getLogger(__name__)

T = TypeVar("T")

Bind: TypeAlias = Union[AsyncEngine, AsyncConnection]
Parameters: TypeAlias = Mapping[str, Any]
RowMapper: TypeAlias = Callable[[Row], T]


@asynccontextmanager
async def connect(bind: Bind) -> AsyncIterator[AsyncConnection]:
    """
    An engine gets a fresh connection and transaction, committed when the block exits cleanly; a connection is used
    as is and its transaction stays with the caller.
    """
    if isinstance(bind, AsyncConnection):
        yield bind
    else:
        async with bind.begin() as conn:
            yield conn


async def _execute(conn: AsyncConnection, sql: str, params: Optional[Parameters]) -> "CursorResult":
    params = dict(params or {})
    logger.debug("executing query", extra={"query": sql, "bind_vars": json.dumps(params, default=str)})
    try:
        return await conn.execute(text(sql), params)
    except DBAPIError:
        logger.exception(sql)
        raise


async def scalar(bind: Bind, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> T:
    async with connect(bind) as conn:
        result = await _execute(conn, sql, params)
        row = result.first()
    if row is None:
        raise NoResultError(f"query returned no rows: {sql}")
    return map_row(row)


async def single(bind: Bind, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> Optional[T]:
    async with connect(bind) as conn:
        result = await _execute(conn, sql, params)
        row = result.first()
    if row is None:
        return None
    return map_row(row)


async def list_(bind: Bind, sql: str, params: Optional[Parameters], map_row: RowMapper[T]) -> list[T]:
    async with connect(bind) as conn:
        result = await _execute(conn, sql, params)
        rows = result.all()
    return [map_row(row) for row in rows]


async def non_query(bind: Bind, sql: str, params: Optional[Parameters] = None) -> int:
    async with connect(bind) as conn:
        result = await _execute(conn, sql, params)
        rowcount = result.rowcount
    return rowcount


def from_document(column: str, model: Type[T], serializer: "DocumentSerializer") -> RowMapper[T]:
    def _map(row: Row) -> T:
        return serializer.deserialize(row._mapping[column], model)

    return _map


def from_data(model: Type[T], serializer: "DocumentSerializer") -> RowMapper[T]:
    return from_document(DATA, model, serializer)


def to_count(row: Row) -> int:
    return int(row[0])


def to_exists(row: Row) -> bool:
    return bool(row[0])
