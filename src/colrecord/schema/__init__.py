# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema derivation: directive resolution and type descriptor construction."""

from colrecord.schema.builder import derive_schema
from colrecord.schema.resolver import (
    FieldSpec,
    RecordRegistry,
    ResolvedField,
    clear_registered_records,
    declared_fields,
    is_registered,
    register_record,
    resolve_fields,
    unregister_record,
)

__all__ = [
    "FieldSpec",
    "RecordRegistry",
    "ResolvedField",
    "clear_registered_records",
    "declared_fields",
    "derive_schema",
    "is_registered",
    "register_record",
    "resolve_fields",
    "unregister_record",
]
