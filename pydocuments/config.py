import dataclasses
from dataclasses import dataclass, field

from pydocuments.query.consts import DEFAULT_ID_FIELD
from pydocuments.serializer import DocumentSerializer, PydanticSerializer


@dataclass(frozen=True)
class DocumentConfig:
    """
    Document handling settings, handed to a session once and used by every statement it builds and runs
    """

    serializer: DocumentSerializer = field(default_factory=PydanticSerializer)
    id_field: str = DEFAULT_ID_FIELD

    def use_serializer(self, serializer: DocumentSerializer) -> "DocumentConfig":
        return dataclasses.replace(self, serializer=serializer)

    def use_id_field(self, id_field: str) -> "DocumentConfig":
        return dataclasses.replace(self, id_field=id_field)


DEFAULT_CONFIG = DocumentConfig()
