from .operations import Field, FieldValue, InvalidFieldError, Op
from .postgres import PostgresQuery
from .query import DocumentQuery
from .sqlite import SqliteQuery

__all__ = [
    "DocumentQuery",
    "PostgresQuery",
    "SqliteQuery",
    "Field",
    "FieldValue",
    "Op",
    "InvalidFieldError",
]
