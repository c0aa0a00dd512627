# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field directives that opt record attributes into the columnar schema.

A directive is attached to an attribute through ``typing.Annotated``::

    @dataclass
    class Person:
        name: Annotated[str, PrimitiveField()]
        person_id: Annotated[np.int64, PrimitiveField(key="id")]
        address: Annotated[Address, StructField()]
        tags: Annotated[list[int], ListField()]
        scores: Annotated[dict[str, int], MapField()]

Attributes without a directive are not part of the schema.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from colrecord.model.types import PrimitiveKind

# ###############
# Public Interface
# ###############


class PrimitiveField(BaseModel):
    """Marks a leaf column. ``kind`` overrides the kind inferred from the native type."""

    model_config = ConfigDict(frozen=True)

    role: Literal["primitive"] = "primitive"
    key: str | None = None
    kind: PrimitiveKind = PrimitiveKind.UNKNOWN


class StructField(BaseModel):
    """Marks a nested record; its schema is derived from the declared type."""

    model_config = ConfigDict(frozen=True)

    role: Literal["struct"] = "struct"
    key: str | None = None


class ListField(BaseModel):
    """Marks a repeated column; the element type comes from the declared generic."""

    model_config = ConfigDict(frozen=True)

    role: Literal["list"] = "list"
    key: str | None = None


class MapField(BaseModel):
    """Marks a key/value column; key and value types come from the declared generic."""

    model_config = ConfigDict(frozen=True)

    role: Literal["map"] = "map"
    key: str | None = None


FieldDirective = Annotated[
    PrimitiveField | StructField | ListField | MapField,
    _Field(discriminator="role"),
]

DIRECTIVE_TYPES: tuple[type, ...] = (PrimitiveField, StructField, ListField, MapField)


def is_directive(meta: object) -> bool:
    """Return True if an ``Annotated`` metadata entry is a field directive."""
    return isinstance(meta, DIRECTIVE_TYPES)
