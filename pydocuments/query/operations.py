import sys
from dataclasses import dataclass
from enum import Enum
from typing import Union

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

FieldValue: TypeAlias = Union[str, int, float, bool, None]

_VALUE_TYPES = (str, int, float, bool)


class InvalidFieldError(ValueError):
    pass


class Op(str, Enum):
    """
    Logical operations available for JSON field comparisons, valued by their SQL token
    """

    EQ = "="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    NE = "<>"
    EX = "IS NOT NULL"
    NEX = "IS NULL"

    def __str__(self):
        return self.value

    @property
    def takes_value(self) -> bool:
        return self not in (Op.EX, Op.NEX)


@dataclass(frozen=True)
class Field:
    """
    Criterion comparing a top-level field of a JSON document

    ``value`` must be given for every comparison operation and omitted for ``EX``/``NEX``.
    """

    name: str
    op: Op
    value: FieldValue = None

    def __post_init__(self):
        if not isinstance(self.op, Op):
            try:
                op = Op(self.op)
            except ValueError:
                raise InvalidFieldError(f"unknown operation {self.op!r} on field '{self.name}'") from None
            object.__setattr__(self, "op", op)

        if self.op.takes_value:
            if self.value is None:
                raise InvalidFieldError(f"operation {self.op.name} on field '{self.name}' requires a value")
            if not isinstance(self.value, _VALUE_TYPES):
                raise InvalidFieldError(
                    f"unsupported value type {type(self.value).__name__} for field '{self.name}'"
                )
        elif self.value is not None:
            raise InvalidFieldError(f"operation {self.op.name} on field '{self.name}' does not take a value")

    @classmethod
    def equal(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.EQ, value)

    @classmethod
    def greater(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.GT, value)

    @classmethod
    def greater_or_equal(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.GE, value)

    @classmethod
    def less(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.LT, value)

    @classmethod
    def less_or_equal(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.LE, value)

    @classmethod
    def not_equal(cls, name: str, value: FieldValue) -> "Field":
        return cls(name, Op.NE, value)

    @classmethod
    def exists(cls, name: str) -> "Field":
        return cls(name, Op.EX)

    @classmethod
    def not_exists(cls, name: str) -> "Field":
        return cls(name, Op.NEX)
