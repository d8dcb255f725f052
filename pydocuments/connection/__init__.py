from typing import Any, Union

from pydocuments.config import DEFAULT_CONFIG, DocumentConfig
from pydocuments.connection.engine import POSTGRESQL, SQLITE, create_async_engine_for_dsn, detect_dialect
from pydocuments.connection.exceptions import UnsupportedDialectError
from pydocuments.connection.postgres import PostgresSession
from pydocuments.connection.session import DocumentSession
from pydocuments.connection.sqlite import SqliteSession

_SESSION_MAPPING: dict[str, type[DocumentSession]] = {
    POSTGRESQL: PostgresSession,
    SQLITE: SqliteSession,
}


def create_session(
    dsn: str, config: DocumentConfig = DEFAULT_CONFIG, **engine_kwargs: Any
) -> Union[PostgresSession, SqliteSession]:
    dialect = detect_dialect(dsn)
    try:
        session_class = _SESSION_MAPPING[dialect]
    except KeyError:
        raise UnsupportedDialectError(dialect) from None
    return session_class(dsn=dsn, config=config, **engine_kwargs)  # type: ignore[return-value]


__all__ = [
    "DocumentSession",
    "PostgresSession",
    "SqliteSession",
    "create_session",
    "create_async_engine_for_dsn",
]
