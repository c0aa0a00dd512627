# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Columnar schemas and row values derived from annotated record types."""

from colrecord.errors import (
    ColrecordError,
    ConfigError,
    DuplicateFieldKeyError,
    FieldConfigurationError,
    InternalConsistencyError,
    MaterializationError,
    NonPrimitiveFieldError,
    RecursiveRecordError,
    SchemaError,
    SchemaGenerationError,
    TypeCoercionError,
    UnsupportedOperationError,
)
from colrecord.materialize import materialize
from colrecord.model import (
    ListDescriptor,
    ListField,
    MapDescriptor,
    MapField,
    PrimitiveDescriptor,
    PrimitiveField,
    PrimitiveKind,
    SchemaField,
    StructDescriptor,
    StructField,
    StructValue,
    TypeDescriptor,
    render_schema,
)
from colrecord.schema import FieldSpec, derive_schema, register_record, unregister_record

__all__ = [
    # Operations
    "derive_schema",
    "materialize",
    "render_schema",
    "register_record",
    "unregister_record",
    "FieldSpec",
    # Directives
    "PrimitiveField",
    "StructField",
    "ListField",
    "MapField",
    # Schema and values
    "PrimitiveKind",
    "PrimitiveDescriptor",
    "SchemaField",
    "StructDescriptor",
    "ListDescriptor",
    "MapDescriptor",
    "TypeDescriptor",
    "StructValue",
    # Errors
    "ColrecordError",
    "ConfigError",
    "SchemaError",
    "DuplicateFieldKeyError",
    "NonPrimitiveFieldError",
    "SchemaGenerationError",
    "FieldConfigurationError",
    "RecursiveRecordError",
    "MaterializationError",
    "UnsupportedOperationError",
    "TypeCoercionError",
    "InternalConsistencyError",
]
