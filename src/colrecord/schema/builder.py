# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Derivation of struct type descriptors from annotated record types."""

from __future__ import annotations

import logging

from colrecord.errors import RecursiveRecordError
from colrecord.model.catalog import infer_kind, primitive_descriptor
from colrecord.model.directives import ListField, MapField, PrimitiveField, StructField
from colrecord.model.types import (
    ListDescriptor,
    MapDescriptor,
    SchemaField,
    StructDescriptor,
    TypeDescriptor,
)
from colrecord.schema.resolver import ResolvedField, resolve_fields

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def derive_schema(record_type: type) -> StructDescriptor:
    """Derive the struct schema of a record type from its field directives.

    Field order follows :func:`~colrecord.schema.resolver.resolve_fields`.
    Struct fields recurse into their declared type; list elements and map
    keys/values become primitives when their type has a primitive kind and
    nested structs otherwise. Every call builds a fresh tree; equal inputs
    give structurally equal trees.

    Self-referential record types are not supported::

        @dataclass
        class Person:
            manager: Annotated[Person, StructField()]

    Args:
        record_type: The record class to describe.

    Returns:
        The root :class:`StructDescriptor`.

    Raises:
        DuplicateFieldKeyError: Two fields on one level expose the same key.
        NonPrimitiveFieldError: A primitive directive sits on a non-primitive type.
        SchemaGenerationError: A resolved primitive kind has no column type.
        FieldConfigurationError: A directive does not fit its declared type.
        RecursiveRecordError: The type is reachable from itself.
    """
    return _derive_struct(record_type, ())


# ################
# Implementation
# ################


def _derive_struct(record_type: type, ancestors: tuple[type, ...]) -> StructDescriptor:
    if record_type in ancestors:
        chain = " -> ".join(t.__qualname__ for t in (*ancestors, record_type))
        raise RecursiveRecordError(f"Recursive record type is not supported: {chain}")

    path = (*ancestors, record_type)
    fields = [SchemaField(key=f.key, type=_field_descriptor(f, path)) for f in resolve_fields(record_type)]
    logger.debug("Derived struct for %s with %d fields", record_type.__qualname__, len(fields))
    return StructDescriptor(fields=fields)


def _field_descriptor(field: ResolvedField, path: tuple[type, ...]) -> TypeDescriptor:
    directive = field.directive
    if isinstance(directive, PrimitiveField):
        assert field.kind is not None
        return primitive_descriptor(field.kind, key=field.key)
    if isinstance(directive, StructField):
        assert isinstance(field.native_type, type)
        return _derive_struct(field.native_type, path)
    if isinstance(directive, ListField):
        (element,) = field.type_args
        return ListDescriptor(element=_element_descriptor(element, field.key, path))
    if isinstance(directive, MapField):
        key_type, value_type = field.type_args
        return MapDescriptor(
            key=_element_descriptor(key_type, field.key, path),
            value=_element_descriptor(value_type, field.key, path),
        )
    raise TypeError(f"Unknown directive {directive!r}")


def _element_descriptor(element: type, key: str, path: tuple[type, ...]) -> TypeDescriptor:
    """Describe a list element or map key/value: a primitive if one maps, else a nested struct."""
    kind = infer_kind(element)
    if kind is not None:
        return primitive_descriptor(kind, key=key)
    return _derive_struct(element, path)
