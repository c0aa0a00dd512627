# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model for colrecord (type descriptors, directives, value tree)."""

from colrecord.model.catalog import (
    MATERIALIZABLE_KINDS,
    SCHEMA_KINDS,
    infer_kind,
    native_types,
    primitive_descriptor,
)
from colrecord.model.directives import (
    FieldDirective,
    ListField,
    MapField,
    PrimitiveField,
    StructField,
    is_directive,
)
from colrecord.model.types import (
    ListDescriptor,
    MapDescriptor,
    PrimitiveDescriptor,
    PrimitiveKind,
    SchemaField,
    StructDescriptor,
    TypeDescriptor,
    render_schema,
)
from colrecord.model.values import StructValue, to_python

__all__ = [
    # Type descriptors
    "PrimitiveKind",
    "PrimitiveDescriptor",
    "SchemaField",
    "StructDescriptor",
    "ListDescriptor",
    "MapDescriptor",
    "TypeDescriptor",
    "render_schema",
    # Primitive catalog
    "SCHEMA_KINDS",
    "MATERIALIZABLE_KINDS",
    "infer_kind",
    "native_types",
    "primitive_descriptor",
    # Directives
    "FieldDirective",
    "PrimitiveField",
    "StructField",
    "ListField",
    "MapField",
    "is_directive",
    # Values
    "StructValue",
    "to_python",
]
