from typing import TYPE_CHECKING

from pydocuments.connection.exceptions import SessionNotInitializedError

if TYPE_CHECKING:
    from pydocuments.connection.session import DocumentSession


async def init_tables(session: "DocumentSession", *table_names: str):
    """
    Ensure each table and its unique key index exist, one table after the other
    """
    if not session.initialized:
        raise SessionNotInitializedError()
    for table_name in table_names:
        await session.ensure_table(table_name)
