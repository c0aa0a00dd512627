# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type descriptors for the columnar schema of a record type."""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive kinds known to the columnar type system.

    ``UNKNOWN`` is not a real column type: a primitive directive carrying it
    asks for the kind to be inferred from the field's native type.
    """

    VOID = "void"
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BINARY = "binary"
    DECIMAL = "decimal"
    VARCHAR = "varchar"
    CHAR = "char"
    INTERVAL_YEAR_MONTH = "interval_year_month"
    INTERVAL_DAY_TIME = "interval_day_time"
    UNKNOWN = "unknown"


class PrimitiveDescriptor(BaseModel):
    """A leaf column of a single primitive kind."""

    model_config = ConfigDict(frozen=True)

    category: Literal["primitive"] = "primitive"
    kind: PrimitiveKind


class SchemaField(BaseModel):
    """A named child of a struct descriptor."""

    model_config = ConfigDict(frozen=True)

    key: str
    type: TypeDescriptor


class StructDescriptor(BaseModel):
    """An ordered group of uniquely named child columns."""

    model_config = ConfigDict(frozen=True)

    category: Literal["struct"] = "struct"
    fields: list[SchemaField] = _Field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        """Return the field keys in declaration order."""
        return [f.key for f in self.fields]


class ListDescriptor(BaseModel):
    """A repeated column with a single element type."""

    model_config = ConfigDict(frozen=True)

    category: Literal["list"] = "list"
    element: TypeDescriptor


class MapDescriptor(BaseModel):
    """A key/value column with independently typed keys and values."""

    model_config = ConfigDict(frozen=True)

    category: Literal["map"] = "map"
    key: TypeDescriptor
    value: TypeDescriptor


# A node of the schema tree. The `category` discriminator keeps the union
# closed: every recursion over descriptors matches exactly these four.
TypeDescriptor = Annotated[
    PrimitiveDescriptor | StructDescriptor | ListDescriptor | MapDescriptor,
    _Field(discriminator="category"),
]


def render_schema(descriptor: TypeDescriptor) -> str:
    """Render a descriptor as a canonical ORC type string.

    Example: ``struct<name:string,age:int,tags:array<int>>``.
    """
    if isinstance(descriptor, PrimitiveDescriptor):
        name = _ORC_TYPE_NAMES.get(descriptor.kind)
        if name is None:
            raise ValueError(f"Primitive kind {descriptor.kind.value!r} has no ORC type name")
        return name
    if isinstance(descriptor, StructDescriptor):
        inner = ",".join(f"{_quote_field_name(f.key)}:{render_schema(f.type)}" for f in descriptor.fields)
        return f"struct<{inner}>"
    if isinstance(descriptor, ListDescriptor):
        return f"array<{render_schema(descriptor.element)}>"
    if isinstance(descriptor, MapDescriptor):
        return f"map<{render_schema(descriptor.key)},{render_schema(descriptor.value)}>"
    raise TypeError(f"Not a type descriptor: {descriptor!r}")


# Resolve forward references for models that use TypeDescriptor.
SchemaField.model_rebuild()
StructDescriptor.model_rebuild()
ListDescriptor.model_rebuild()
MapDescriptor.model_rebuild()

# ################
# Implementation
# ################

CHAR_DEFAULT_LENGTH = 255
VARCHAR_DEFAULT_LENGTH = 65535

_ORC_TYPE_NAMES: dict[PrimitiveKind, str] = {
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.BYTE: "tinyint",
    PrimitiveKind.SHORT: "smallint",
    PrimitiveKind.INT: "int",
    PrimitiveKind.LONG: "bigint",
    PrimitiveKind.FLOAT: "float",
    PrimitiveKind.DOUBLE: "double",
    PrimitiveKind.STRING: "string",
    PrimitiveKind.DATE: "date",
    PrimitiveKind.TIMESTAMP: "timestamp",
    PrimitiveKind.BINARY: "binary",
    PrimitiveKind.CHAR: f"char({CHAR_DEFAULT_LENGTH})",
    PrimitiveKind.VARCHAR: f"varchar({VARCHAR_DEFAULT_LENGTH})",
}

_UNQUOTED_NAME = re.compile(r"^[a-zA-Z0-9_]+$")


def _quote_field_name(name: str) -> str:
    if _UNQUOTED_NAME.match(name):
        return name
    return "`" + name.replace("`", "``") + "`"
