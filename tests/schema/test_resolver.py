# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for field directive resolution and the explicit record registry."""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Annotated

import numpy as np
import pytest

from colrecord.errors import DuplicateFieldKeyError, FieldConfigurationError, NonPrimitiveFieldError
from colrecord.model.directives import ListField, MapField, PrimitiveField, StructField
from colrecord.model.types import PrimitiveKind
from colrecord.schema.builder import derive_schema
from colrecord.schema.resolver import (
    FieldSpec,
    RecordRegistry,
    declared_fields,
    register_record,
    resolve_fields,
    unregister_record,
)

# ###############
# Helpers
# ###############


@dataclass
class Point:
    x: Annotated[int, PrimitiveField()]
    y: Annotated[int, PrimitiveField(key="y_coord")]
    note: str = ""


@dataclass
class AbstractContainers:
    values: Annotated[Sequence[float], ListField()]
    lookup: Annotated[Mapping[str, np.int64], MapField()]
    pairs: Annotated[tuple[str, ...], ListField()]


@dataclass
class TwoDirectives:
    value: Annotated[int, PrimitiveField(), PrimitiveField(key="again")]


@dataclass
class ListOnMapping:
    items: Annotated[dict[str, int], ListField()]


@dataclass
class MapOnList:
    items: Annotated[list[int], MapField()]


@dataclass
class StructOnGeneric:
    items: Annotated[list[int], StructField()]


@dataclass
class KindOverrideOnComplexType:
    payload: Annotated[object, PrimitiveField(kind=PrimitiveKind.STRING)]


@dataclass
class EmptyKey:
    value: Annotated[int, PrimitiveField(key="")]


class LegacyPoint:
    """A class without annotations, described through the registry."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


@pytest.fixture
def registered_legacy_point() -> Iterator[type]:
    register_record(
        LegacyPoint,
        [
            FieldSpec("x", int, PrimitiveField()),
            FieldSpec("y", int, PrimitiveField(key="y_coord")),
        ],
    )
    yield LegacyPoint
    unregister_record(LegacyPoint)


# ###############
# Annotated Hints
# ###############


class TestDeclaredFields:
    def test_only_directive_fields_in_declaration_order(self) -> None:
        specs = declared_fields(Point)
        assert [s.attribute for s in specs] == ["x", "y"]
        assert specs[0].native_type is int
        assert specs[1].directive == PrimitiveField(key="y_coord")

    def test_multiple_directives_on_one_field(self) -> None:
        with pytest.raises(FieldConfigurationError, match="at most one"):
            declared_fields(TwoDirectives)

    def test_record_type_must_be_a_class(self) -> None:
        with pytest.raises(FieldConfigurationError, match="must be a class"):
            declared_fields(Point(1, 2))  # type: ignore[arg-type]


class TestResolveFields:
    def test_key_override_and_default(self) -> None:
        fields = resolve_fields(Point)
        assert [(f.attribute, f.key) for f in fields] == [("x", "x"), ("y", "y_coord")]
        assert all(f.kind is PrimitiveKind.INT for f in fields)

    def test_empty_key_falls_back_to_attribute_name(self) -> None:
        assert resolve_fields(EmptyKey)[0].key == "value"

    def test_abstract_container_types(self) -> None:
        values, lookup, pairs = resolve_fields(AbstractContainers)
        assert values.type_args == (float,)
        assert lookup.type_args == (str, np.int64)
        assert pairs.type_args == (str,)

    def test_explicit_kind_skips_inference(self) -> None:
        """An explicit kind is used even when the native type has no primitive mapping."""
        (field,) = resolve_fields(KindOverrideOnComplexType)
        assert field.kind is PrimitiveKind.STRING

    def test_list_directive_on_mapping(self) -> None:
        with pytest.raises(FieldConfigurationError, match="not a sequence type"):
            resolve_fields(ListOnMapping)

    def test_map_directive_on_list(self) -> None:
        with pytest.raises(FieldConfigurationError, match="not a mapping type"):
            resolve_fields(MapOnList)

    def test_struct_directive_on_generic(self) -> None:
        with pytest.raises(FieldConfigurationError, match="not a record class"):
            resolve_fields(StructOnGeneric)


# ###############
# Explicit Registry
# ###############


class TestRecordRegistry:
    def test_registered_layout_is_used(self, registered_legacy_point: type) -> None:
        schema = derive_schema(registered_legacy_point)
        assert schema.keys == ["x", "y_coord"]

    def test_registered_layout_takes_precedence(self) -> None:
        register_record(Point, [FieldSpec("note", str, PrimitiveField())])
        try:
            assert derive_schema(Point).keys == ["note"]
        finally:
            unregister_record(Point)
        assert derive_schema(Point).keys == ["x", "y_coord"]

    def test_registered_layout_is_validated_on_resolution(self) -> None:
        register_record(
            LegacyPoint,
            [FieldSpec("x", int, PrimitiveField()), FieldSpec("y", int, PrimitiveField(key="x"))],
        )
        try:
            with pytest.raises(DuplicateFieldKeyError):
                derive_schema(LegacyPoint)
        finally:
            unregister_record(LegacyPoint)

    def test_registered_non_primitive_field(self) -> None:
        register_record(LegacyPoint, [FieldSpec("x", object, PrimitiveField())])
        try:
            with pytest.raises(NonPrimitiveFieldError):
                derive_schema(LegacyPoint)
        finally:
            unregister_record(LegacyPoint)

    def test_rejects_non_directive(self) -> None:
        registry = RecordRegistry()
        with pytest.raises(FieldConfigurationError, match="not a field directive"):
            registry.register(LegacyPoint, [FieldSpec("x", int, "primitive")])  # type: ignore[arg-type]
        assert LegacyPoint not in registry

    def test_clear(self) -> None:
        registry = RecordRegistry()
        registry.register(LegacyPoint, [FieldSpec("x", int, PrimitiveField())])
        assert LegacyPoint in registry
        registry.clear()
        assert registry.get(LegacyPoint) is None
