"""Bound query parameters as seen by a SQL logger."""

from dataclasses import dataclass
from typing import Any

BINARY_TYPES = frozenset({"binary", "blob", "bytea", "varbinary", "largebinary"})


@dataclass(frozen=True)
class BindParameter:
    """
    A named, typed value substituted into a query.

    ``type`` is the column type name as the database adapter reports it
    (e.g. "string", "integer", "binary").
    """
    name: str
    value: Any
    type: str = "string"

    @property
    def is_binary(self) -> bool:
        if self.value is None:
            return False
        return self.type.lower() in BINARY_TYPES or isinstance(self.value, (bytes, bytearray, memoryview))

    def value_for_database(self) -> Any:
        if isinstance(self.value, str) and self.is_binary:
            return self.value.encode("utf-8")
        return self.value
