from typing import Final

DATA: Final[str] = "data"
"""The single JSON column every document table holds."""

DEFAULT_ID_FIELD: Final[str] = "Id"
"""The document field used as identifier unless configured otherwise."""

ID_PARAM: Final[str] = "id"
"""Bind parameter carrying a document identifier."""

FIELD_PARAM: Final[str] = "field"
"""Bind parameter carrying the comparison value of a field criterion."""

DATA_PARAM: Final[str] = "data"
"""Bind parameter carrying a serialized document or partial document."""

PATH_PARAM: Final[str] = "path"
"""Bind parameter carrying a JSON path expression (Postgres only)."""

CRITERIA_PARAM: Final[str] = "criteria"
"""Bind parameter carrying a containment criteria document (Postgres only)."""

NAME_PARAM: Final[str] = "name"
"""Bind parameter (or prefix of parameters) carrying field names to remove."""

COUNT_ALIAS: Final[str] = "it"
"""Alias of the single column returned by count and exists queries."""
