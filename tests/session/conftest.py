import os
from typing import Optional

import pytest
from pydantic import BaseModel

from pydocuments.connection.postgres import PostgresSession
from pydocuments.connection.sqlite import SqliteSession
from tests.conftest import AsyncFixture

TABLE = "test_table"

POSTGRES_DSN_ENV = "PYDOCUMENTS_TEST_POSTGRES_DSN"


class SubDocument(BaseModel):
    Foo: str
    Bar: str


class JsonDocument(BaseModel):
    Id: str
    Value: str = ""
    NumValue: int = 0
    Sub: Optional[SubDocument] = None


DOCUMENTS = [
    JsonDocument(Id="one", Value="FIRST!", NumValue=0),
    JsonDocument(Id="two", Value="another", NumValue=10, Sub=SubDocument(Foo="green", Bar="blue")),
    JsonDocument(Id="three", Value="", NumValue=4),
    JsonDocument(Id="four", Value="purple", NumValue=17, Sub=SubDocument(Foo="green", Bar="red")),
    JsonDocument(Id="five", Value="purple", NumValue=18),
]


async def load_documents(session):
    for document in DOCUMENTS:
        await session.insert(TABLE, document)


@pytest.fixture
async def sqlite_session(sqlite_dsn: str) -> AsyncFixture[SqliteSession]:
    async with SqliteSession(dsn=sqlite_dsn) as session:
        await session.ensure_table(TABLE)
        yield session


@pytest.fixture
async def sqlite_loaded(sqlite_session: SqliteSession) -> AsyncFixture[SqliteSession]:
    await load_documents(sqlite_session)
    yield sqlite_session


@pytest.fixture
async def postgres_session() -> AsyncFixture[PostgresSession]:
    dsn = os.environ.get(POSTGRES_DSN_ENV)
    if not dsn:
        pytest.skip(f"{POSTGRES_DSN_ENV} is not set")
    async with PostgresSession(dsn=dsn) as session:
        await session.custom_non_query(f"DROP TABLE IF EXISTS {TABLE}")
        await session.ensure_table(TABLE)
        yield session
        await session.custom_non_query(f"DROP TABLE IF EXISTS {TABLE}")


@pytest.fixture
async def postgres_loaded(postgres_session: PostgresSession) -> AsyncFixture[PostgresSession]:
    await load_documents(postgres_session)
    yield postgres_session
