from .config import DEFAULT_CONFIG, DocumentConfig
from .connection import create_session
from .connection.exceptions import (
    DocumentsError,
    NoResultError,
    SessionNotInitializedError,
    UnsupportedDialectError,
)
from .connection.postgres import PostgresSession
from .connection.session import DocumentSession
from .connection.sqlite import SqliteSession
from .indexes import DocumentIndex
from .query import Field, InvalidFieldError, Op
from .serializer import DocumentSerializer, PydanticSerializer

__version__ = "0.1.0"
__all__ = [
    "DocumentSession",
    "PostgresSession",
    "SqliteSession",
    "create_session",
    "DocumentConfig",
    "DEFAULT_CONFIG",
    "DocumentSerializer",
    "PydanticSerializer",
    "DocumentIndex",
    "Field",
    "Op",
    "InvalidFieldError",
    "DocumentsError",
    "NoResultError",
    "SessionNotInitializedError",
    "UnsupportedDialectError",
]
