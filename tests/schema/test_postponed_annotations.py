# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for record types declared with postponed (string) annotations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

import pytest

from colrecord.errors import FieldConfigurationError
from colrecord.model.directives import PrimitiveField, StructField
from colrecord.schema.builder import derive_schema
from colrecord.schema.resolver import declared_fields

if TYPE_CHECKING:
    from colrecord.config import ColrecordConfig

# ###############
# Record Types
# ###############


@dataclass
class Row:
    name: Annotated[str, PrimitiveField()]
    context: ColrecordConfig | None = None


@dataclass
class BrokenRow:
    name: Annotated[str, PrimitiveField()]
    settings: Annotated[ColrecordConfig, StructField()]


@dataclass
class Outer:
    inner: Annotated[Inner, StructField()]


@dataclass
class Inner:
    value: Annotated[int, PrimitiveField()]


@dataclass
class Entry:
    id: Annotated[int, PrimitiveField()]
    label: Annotated[str, PrimitiveField()]


@dataclass
class PlainLabelEntry(Entry):
    label: str = ""
    extra: Annotated[int, PrimitiveField()] = 0


@dataclass
class TitledEntry(Entry):
    label: Annotated[str, PrimitiveField(key="title")] = ""


# ###############
# Public Interface
# ###############


class TestUnresolvableAnnotations:
    def test_plain_field_with_unresolvable_type_is_skipped(self) -> None:
        assert [s.attribute for s in declared_fields(Row)] == ["name"]
        assert derive_schema(Row).keys == ["name"]

    def test_directive_field_with_unresolvable_type_fails(self) -> None:
        with pytest.raises(FieldConfigurationError, match="BrokenRow.settings") as exc_info:
            derive_schema(BrokenRow)
        assert exc_info.value.key == "settings"


class TestForwardReferences:
    def test_type_defined_later_in_module(self) -> None:
        assert derive_schema(Outer).keys == ["inner"]


class TestRedeclaredFields:
    def test_redeclaration_without_directive_drops_the_field(self) -> None:
        assert derive_schema(PlainLabelEntry).keys == ["id", "extra"]

    def test_redeclaration_keeps_base_position(self) -> None:
        assert derive_schema(TitledEntry).keys == ["id", "title"]
