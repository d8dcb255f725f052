from typing import Iterable

from pydocuments.query.consts import (
    COUNT_ALIAS,
    DATA,
    DATA_PARAM,
    DEFAULT_ID_FIELD,
    FIELD_PARAM,
    ID_PARAM,
)
from pydocuments.query.operations import Field, Op


def bind(param_name: str) -> str:
    return f":{param_name}"


def split_schema_and_table(table_name: str) -> tuple[str, str]:
    schema, sep, table = table_name.partition(".")
    if not sep:
        return "", table_name
    return schema, table


def json_field(field_name: str) -> str:
    return f"{DATA} ->> '{field_name}'"


class DocumentQuery:
    """
    SQL statements shared by every JSON-capable backend

    All statements read and write the single ``data`` column of a document table. Statements whose shape differs
    between backends (table creation, patching) are declared here and implemented by the dialect
    subclasses.
    """

    dialect: str = "common"

    def __init__(self, id_field: str = DEFAULT_ID_FIELD):
        self.id_field = id_field

    def __repr__(self):
        return f"<{self.__class__.__name__} id_field={self.id_field!r}>"

    # where clauses

    def where_by_field(self, field: Field, param_name: str = bind(FIELD_PARAM)) -> str:
        if field.op.takes_value:
            return f"{json_field(field.name)} {field.op} {param_name}"
        return f"{json_field(field.name)} {field.op}"

    def where_by_id(self, param_name: str = bind(ID_PARAM)) -> str:
        return f"{json_field(self.id_field)} {Op.EQ} {param_name}"

    def select_from_table(self, table_name: str) -> str:
        return f"SELECT {DATA} FROM {table_name}"

    # definition

    def ensure_table_for(self, table_name: str, data_type: str) -> str:
        return f"CREATE TABLE IF NOT EXISTS {table_name} ({DATA} {data_type} NOT NULL)"

    def ensure_table(self, table_name: str) -> str:
        raise NotImplementedError

    def ensure_index_on(self, table_name: str, index_name: str, fields: Iterable[str], unique: bool = False) -> str:
        """
        ``fields`` may carry a sort direction after the field name, e.g. ``"Name DESC"``
        """
        _, table = split_schema_and_table(table_name)
        expressions = []
        for field in fields:
            field_name, _, direction = field.partition(" ")
            direction = f" {direction}" if direction else ""
            expressions.append(f"({json_field(field_name)}){direction}")
        kind = "UNIQUE INDEX" if unique else "INDEX"
        return f"CREATE {kind} IF NOT EXISTS idx_{table}_{index_name} ON {table_name} ({', '.join(expressions)})"

    def ensure_key(self, table_name: str) -> str:
        return self.ensure_index_on(table_name, "key", [self.id_field], unique=True)

    # document writes

    def insert(self, table_name: str) -> str:
        return f"INSERT INTO {table_name} VALUES ({bind(DATA_PARAM)})"

    def save(self, table_name: str) -> str:
        return (
            f"{self.insert(table_name)} ON CONFLICT (({json_field(self.id_field)}))"
            f" DO UPDATE SET {DATA} = EXCLUDED.{DATA}"
        )

    def update(self, table_name: str) -> str:
        return f"UPDATE {table_name} SET {DATA} = {bind(DATA_PARAM)} WHERE {self.where_by_id()}"

    def patch_by_id(self, table_name: str) -> str:
        raise NotImplementedError

    def patch_by_field(self, table_name: str, field: Field) -> str:
        raise NotImplementedError

    # reads

    def count_all(self, table_name: str) -> str:
        return f"SELECT COUNT(*) AS {COUNT_ALIAS} FROM {table_name}"

    def count_by_field(self, table_name: str, field: Field) -> str:
        return f"{self.count_all(table_name)} WHERE {self.where_by_field(field)}"

    def exists(self, table_name: str, where: str) -> str:
        return f"SELECT EXISTS (SELECT 1 FROM {table_name} WHERE {where}) AS {COUNT_ALIAS}"

    def exists_by_id(self, table_name: str) -> str:
        return self.exists(table_name, self.where_by_id())

    def exists_by_field(self, table_name: str, field: Field) -> str:
        return self.exists(table_name, self.where_by_field(field))

    def find_by_id(self, table_name: str) -> str:
        return f"{self.select_from_table(table_name)} WHERE {self.where_by_id()}"

    def find_by_field(self, table_name: str, field: Field) -> str:
        return f"{self.select_from_table(table_name)} WHERE {self.where_by_field(field)}"

    def find_first_by_field(self, table_name: str, field: Field) -> str:
        # no ORDER BY: any matching document may come back
        return f"{self.find_by_field(table_name, field)} LIMIT 1"

    # deletes

    def delete_by_id(self, table_name: str) -> str:
        return f"DELETE FROM {table_name} WHERE {self.where_by_id()}"

    def delete_by_field(self, table_name: str, field: Field) -> str:
        return f"DELETE FROM {table_name} WHERE {self.where_by_field(field)}"
