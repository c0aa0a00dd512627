# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mapping between native Python types and primitive column kinds."""

from __future__ import annotations

import datetime
import decimal

import numpy as np

from colrecord.errors import SchemaGenerationError
from colrecord.model.types import PrimitiveDescriptor, PrimitiveKind

# ###############
# Public Interface
# ###############

# Kinds the schema builder can emit. The materializer only converts the
# subset in MATERIALIZABLE_KINDS.
SCHEMA_KINDS: frozenset[PrimitiveKind] = frozenset(
    {
        PrimitiveKind.INT,
        PrimitiveKind.DOUBLE,
        PrimitiveKind.STRING,
        PrimitiveKind.LONG,
        PrimitiveKind.CHAR,
        PrimitiveKind.BYTE,
        PrimitiveKind.DATE,
        PrimitiveKind.FLOAT,
        PrimitiveKind.SHORT,
        PrimitiveKind.BOOLEAN,
        PrimitiveKind.TIMESTAMP,
        PrimitiveKind.VARCHAR,
        PrimitiveKind.BINARY,
    }
)

MATERIALIZABLE_KINDS: frozenset[PrimitiveKind] = frozenset(
    {PrimitiveKind.INT, PrimitiveKind.LONG, PrimitiveKind.DOUBLE, PrimitiveKind.STRING}
)


def infer_kind(native_type: object) -> PrimitiveKind | None:
    """Return the primitive kind of a native type, or None if it is not primitive.

    The lookup is exact: subclasses of a mapped type are not primitive.
    """
    if not isinstance(native_type, type):
        return None
    return _NATIVE_KINDS.get(native_type)


def primitive_descriptor(kind: PrimitiveKind, *, key: str | None = None) -> PrimitiveDescriptor:
    """Return the schema node for a primitive kind.

    Args:
        kind: The resolved primitive kind.
        key: Field key reported in the error, if any.

    Raises:
        SchemaGenerationError: If *kind* has no column representation.
    """
    if kind not in SCHEMA_KINDS:
        prefix = f"Key[{key}]: " if key else ""
        raise SchemaGenerationError(f"{prefix}Primitive type {kind.value} not supported yet.", key=key)
    return PrimitiveDescriptor(kind=kind)


def native_types(kind: PrimitiveKind) -> list[type]:
    """Return the native types that infer to *kind*, in catalog order."""
    return [native for native, mapped in _NATIVE_KINDS.items() if mapped is kind]


# ################
# Implementation
# ################

_NATIVE_KINDS: dict[type, PrimitiveKind] = {
    type(None): PrimitiveKind.VOID,
    bool: PrimitiveKind.BOOLEAN,
    np.bool_: PrimitiveKind.BOOLEAN,
    np.int8: PrimitiveKind.BYTE,
    np.int16: PrimitiveKind.SHORT,
    int: PrimitiveKind.INT,
    np.int32: PrimitiveKind.INT,
    np.int64: PrimitiveKind.LONG,
    np.float32: PrimitiveKind.FLOAT,
    float: PrimitiveKind.DOUBLE,
    np.float64: PrimitiveKind.DOUBLE,
    str: PrimitiveKind.STRING,
    datetime.date: PrimitiveKind.DATE,
    datetime.datetime: PrimitiveKind.TIMESTAMP,
    bytes: PrimitiveKind.BINARY,
    bytearray: PrimitiveKind.BINARY,
    decimal.Decimal: PrimitiveKind.DECIMAL,
}
