# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of record instances into schema-shaped value trees."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np

from colrecord.errors import InternalConsistencyError, TypeCoercionError, UnsupportedOperationError
from colrecord.materialize.coercion import coerce_primitive
from colrecord.model.catalog import infer_kind
from colrecord.model.types import (
    ListDescriptor,
    MapDescriptor,
    PrimitiveDescriptor,
    StructDescriptor,
    TypeDescriptor,
)
from colrecord.model.values import StructValue
from colrecord.schema.builder import derive_schema
from colrecord.schema.resolver import declared_fields, is_registered

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def materialize(instance: object, schema: StructDescriptor | None = None) -> StructValue:
    """Convert a record instance into a value tree shaped like *schema*.

    Args:
        instance: The record to convert. It is only read.
        schema: Target struct schema. Defaults to
            ``derive_schema(type(instance))``; pass a schema derived once per
            type when materializing many rows.

    Returns:
        A :class:`StructValue` with one child per schema field.

    Raises:
        UnsupportedOperationError: The schema holds a primitive kind other than
            int, long, double or string.
        TypeCoercionError: A raw value cannot be converted to its target, or a
            value in struct position (or the instance itself) is not a record.
        InternalConsistencyError: The instance's fields do not line up with the
            schema (e.g. the schema was derived from another version of the type).
        SchemaError: Deriving the default schema failed.
    """
    if schema is None:
        schema = derive_schema(type(instance))
    value = _materialize_struct(instance, schema, "")
    logger.debug("Materialized %s into %d fields", type(instance).__qualname__, len(value))
    return value


def collect_field_values(instance: object) -> list[Any]:
    """Return the raw values of the instance's directive-bearing fields in column order."""
    values: list[Any] = []
    for spec in declared_fields(type(instance)):
        try:
            values.append(getattr(instance, spec.attribute))
        except AttributeError as exc:
            raise InternalConsistencyError(
                f"{type(instance).__qualname__} instance has no value for field '{spec.attribute}'",
                key=spec.attribute,
            ) from exc
    return values


# ################
# Implementation
# ################


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _materialize_value(value: Any, descriptor: TypeDescriptor, path: str) -> Any:
    if isinstance(descriptor, PrimitiveDescriptor):
        return coerce_primitive(descriptor.kind, value, key=path)
    if isinstance(descriptor, StructDescriptor):
        return _materialize_struct(value, descriptor, path)
    if isinstance(descriptor, ListDescriptor):
        return _materialize_list(value, descriptor, path)
    if isinstance(descriptor, MapDescriptor):
        return _materialize_map(value, descriptor, path)
    raise UnsupportedOperationError(f"Category [{type(descriptor).__name__}] not supported yet.", key=path or None)


def _materialize_struct(instance: Any, descriptor: StructDescriptor, path: str) -> StructValue:
    if instance is None:
        raise TypeCoercionError(f"Key[{path}]: struct value is missing", key=path or None)

    values = collect_field_values(instance)
    if not values and not _is_record(instance):
        prefix = f"Key[{path}]: " if path else ""
        raise TypeCoercionError(
            f"{prefix}{type(instance).__qualname__} value is not a record",
            key=path or None,
        )
    if len(values) != len(descriptor.fields):
        raise InternalConsistencyError(
            f"Schema field size {len(descriptor.fields)} and object field size {len(values)} "
            f"do not match for {type(instance).__qualname__}",
            key=path or None,
        )
    return StructValue(
        tuple(
            _materialize_value(value, field.type, _join(path, field.key))
            for value, field in zip(values, descriptor.fields)
        )
    )


def _materialize_list(value: Any, descriptor: ListDescriptor, path: str) -> list[Any]:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
        raise TypeCoercionError(f"Key[{path}]: expected a sequence, got {type(value).__name__}", key=path)
    return [_materialize_value(item, descriptor.element, f"{path}[{i}]") for i, item in enumerate(value)]


def _materialize_map(value: Any, descriptor: MapDescriptor, path: str) -> dict[Any, Any]:
    if not isinstance(value, Mapping):
        raise TypeCoercionError(f"Key[{path}]: expected a mapping, got {type(value).__name__}", key=path)
    result: dict[Any, Any] = {}
    for raw_key, raw_value in value.items():
        entry_path = f"{path}[{raw_key!r}]"
        map_key = _materialize_value(raw_key, descriptor.key, entry_path)
        map_value = _materialize_value(raw_value, descriptor.value, entry_path)
        try:
            # A later key that converts to an existing one overwrites it.
            result[map_key] = map_value
        except TypeError as exc:
            raise TypeCoercionError(f"Key[{entry_path}]: converted map key is not hashable", key=entry_path) from exc
    return result


def _is_record(value: Any) -> bool:
    """Return True for instances of registered or user-defined classes that are not primitive values."""
    value_type = type(value)
    if is_registered(value_type):
        return True
    return (
        value_type.__module__ != "builtins"
        and infer_kind(value_type) is None
        and not isinstance(value, (np.generic, Mapping))
    )
