# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for schema derivation and value materialization.

Every error is fatal for the call that raised it: it points at a mis-defined
record type or at a record instance that does not match the schema it is
materialized against. None of them is retried internally.
"""

from __future__ import annotations

from collections.abc import Iterable

# ###############
# Public Interface
# ###############


class ColrecordError(Exception):
    """Base class for all colrecord errors.

    Attributes:
        key: Dotted path of the offending field, if the error concerns one.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class ConfigError(ColrecordError):
    """Raised when a configuration file is invalid or cannot be loaded."""


class SchemaError(ColrecordError):
    """Raised while deriving a schema from a record type."""


class DuplicateFieldKeyError(SchemaError):
    """Two directive-bearing fields on one record level expose the same key."""

    def __init__(self, key: str, existing: Iterable[str], record_type: type) -> None:
        self.existing_keys = tuple(existing)
        self.record_type = record_type
        super().__init__(
            f"Key[{key}] already exists in {record_type.__qualname__} keys {list(self.existing_keys)}",
            key=key,
        )


class NonPrimitiveFieldError(SchemaError):
    """A primitive directive sits on a field whose type has no primitive mapping."""


class SchemaGenerationError(SchemaError):
    """A resolved primitive kind has no schema representation."""


class FieldConfigurationError(SchemaError):
    """A field's directive cannot be applied to its declared type."""


class RecursiveRecordError(SchemaError):
    """A record type is reachable from itself through struct, list or map fields."""


class MaterializationError(ColrecordError):
    """Raised while converting an instance into a value tree."""


class UnsupportedOperationError(MaterializationError):
    """The materializer met a schema category or primitive kind it does not implement."""


class TypeCoercionError(MaterializationError):
    """A raw field value cannot be converted to its target representation."""


class InternalConsistencyError(MaterializationError):
    """The collected field values do not line up with the target struct schema."""
