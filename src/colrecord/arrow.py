# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Hand-off of schemas and value trees to the Arrow columnar type system.

The ORC writer itself is pyarrow's; this module only translates descriptors
to ``pyarrow`` types and materialized rows to a ``pyarrow.Table``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pyarrow as pa

from colrecord.errors import InternalConsistencyError, SchemaGenerationError
from colrecord.model.types import (
    ListDescriptor,
    MapDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    StructDescriptor,
    TypeDescriptor,
)
from colrecord.model.values import StructValue, to_python

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def arrow_type(descriptor: TypeDescriptor) -> pa.DataType:
    """Return the Arrow data type of a descriptor."""
    if isinstance(descriptor, PrimitiveDescriptor):
        data_type = _ARROW_PRIMITIVES.get(descriptor.kind)
        if data_type is None:
            raise SchemaGenerationError(f"Primitive type {descriptor.kind.value} has no Arrow type")
        return data_type
    if isinstance(descriptor, StructDescriptor):
        return pa.struct([pa.field(f.key, arrow_type(f.type)) for f in descriptor.fields])
    if isinstance(descriptor, ListDescriptor):
        return pa.list_(arrow_type(descriptor.element))
    if isinstance(descriptor, MapDescriptor):
        return pa.map_(arrow_type(descriptor.key), arrow_type(descriptor.value))
    raise TypeError(f"Not a type descriptor: {descriptor!r}")


def arrow_schema(schema: StructDescriptor) -> pa.Schema:
    """Return the Arrow schema whose top-level columns are the struct's fields."""
    return pa.schema([pa.field(f.key, arrow_type(f.type)) for f in schema.fields])


def to_table(values: Iterable[StructValue], schema: StructDescriptor) -> pa.Table:
    """Build an Arrow table with one row per materialized record."""
    rows = [_row(value, schema) for value in values]
    return pa.Table.from_pylist(rows, schema=arrow_schema(schema))


def write_orc(path: Path | str, values: Iterable[StructValue], schema: StructDescriptor) -> int:
    """Write materialized records to an ORC file.

    Returns:
        The number of rows written.
    """
    from pyarrow import orc

    table = to_table(values, schema)
    orc.write_table(table, str(path))
    logger.info("Wrote %d rows to %s", table.num_rows, path)
    return table.num_rows


# ################
# Implementation
# ################

_ARROW_PRIMITIVES: dict[PrimitiveKind, pa.DataType] = {
    PrimitiveKind.BOOLEAN: pa.bool_(),
    PrimitiveKind.BYTE: pa.int8(),
    PrimitiveKind.SHORT: pa.int16(),
    PrimitiveKind.INT: pa.int32(),
    PrimitiveKind.LONG: pa.int64(),
    PrimitiveKind.FLOAT: pa.float32(),
    PrimitiveKind.DOUBLE: pa.float64(),
    PrimitiveKind.STRING: pa.string(),
    PrimitiveKind.CHAR: pa.string(),
    PrimitiveKind.VARCHAR: pa.string(),
    PrimitiveKind.DATE: pa.date32(),
    PrimitiveKind.TIMESTAMP: pa.timestamp("ns"),
    PrimitiveKind.BINARY: pa.binary(),
}


def _row(value: StructValue, schema: StructDescriptor) -> dict[str, Any]:
    if len(value) != len(schema.fields):
        raise InternalConsistencyError(
            f"Struct value has {len(value)} fields but schema has {len(schema.fields)}"
        )
    return {f.key: _arrow_value(v, f.type) for v, f in zip(value, schema.fields)}


def _arrow_value(value: Any, descriptor: TypeDescriptor) -> Any:
    if isinstance(descriptor, StructDescriptor):
        return _row(value, descriptor)
    if isinstance(descriptor, ListDescriptor):
        return [_arrow_value(v, descriptor.element) for v in value]
    if isinstance(descriptor, MapDescriptor):
        return [(_arrow_value(k, descriptor.key), _arrow_value(v, descriptor.value)) for k, v in value.items()]
    return to_python(value)
