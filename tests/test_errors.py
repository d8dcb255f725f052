import pytest

from pydocuments.config import DocumentConfig
from pydocuments.connection import create_session
from pydocuments.connection.engine import create_async_engine_for_dsn
from pydocuments.connection.exceptions import DocumentsError, UnsupportedDialectError
from pydocuments.connection.postgres import PostgresSession
from pydocuments.connection.sqlite import SqliteSession
from pydocuments.query.operations import Field, InvalidFieldError, Op


@pytest.mark.parametrize(
    "name, op, value",
    [
        ("Age", Op.GT, None),  # comparison without a value
        ("Age", Op.EX, 3),  # existence check with a value
        ("Age", Op.EQ, [1, 2]),
        ("Age", Op.EQ, {"a": 1}),
        ("Age", "~~", 1),  # unknown operation token
    ],
)
def test_invalid_field(name, op, value):
    with pytest.raises(InvalidFieldError):
        Field(name, op, value)


def test_invalid_field_is_value_error():
    with pytest.raises(ValueError):
        Field.equal("Age", None)


def test_field_op_from_token():
    assert Field("Age", "<=", 3).op is Op.LE


def test_unknown_dsn():
    with pytest.raises(UnsupportedDialectError):
        create_session("mysql://localhost/db")
    with pytest.raises(ValueError):
        create_session("oracle://localhost/db")


def test_session_needs_bind_or_dsn():
    with pytest.raises(ValueError):
        SqliteSession()


async def test_session_rejects_other_dialect(sqlite_dsn):
    engine = create_async_engine_for_dsn(sqlite_dsn)
    try:
        with pytest.raises(DocumentsError):
            PostgresSession(bind=engine)
        assert SqliteSession(bind=engine, config=DocumentConfig(id_field="Key")).query.id_field == "Key"
    finally:
        await engine.dispose()


async def test_dsn_of_other_dialect_fails_on_initialize(sqlite_dsn):
    session = PostgresSession(dsn=sqlite_dsn)
    with pytest.raises(UnsupportedDialectError):
        await session.initialize()
    assert not session.initialized
