# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of per-field directives on record types.

Fields come from one of two sources:

* an explicit registration made with :func:`register_record`, which lists
  ``(attribute, native type, directive)`` triples in column order; or
* the record type's ``typing.Annotated`` hints, read in declaration order
  (base classes first).

Resolution turns each directive-bearing field into a :class:`ResolvedField`
carrying the exposed key, the primitive kind or the generic type arguments
the schema builder needs.
"""

from __future__ import annotations

import inspect
import logging
import sys
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from threading import RLock
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from colrecord.errors import DuplicateFieldKeyError, FieldConfigurationError, NonPrimitiveFieldError
from colrecord.model.catalog import infer_kind
from colrecord.model.directives import ListField, MapField, PrimitiveField, StructField, is_directive
from colrecord.model.types import PrimitiveKind

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Directive = PrimitiveField | StructField | ListField | MapField


@dataclass(frozen=True)
class FieldSpec:
    """A directive-bearing attribute of a record type.

    Attributes:
        attribute: Attribute name read from instances.
        native_type: Declared type of the attribute (without ``Annotated``).
        directive: The single directive attached to the attribute.
    """

    attribute: str
    native_type: object
    directive: Directive


@dataclass(frozen=True)
class ResolvedField:
    """A field ready for schema construction.

    Attributes:
        attribute: Attribute name read from instances.
        key: Exposed column key (directive override or attribute name).
        directive: The field's directive.
        native_type: Declared type of the attribute.
        kind: Resolved primitive kind (primitive fields only).
        type_args: Element type for lists, key and value types for maps.
    """

    attribute: str
    key: str
    directive: Directive
    native_type: object
    kind: PrimitiveKind | None = None
    type_args: tuple[type, ...] = ()


class RecordRegistry:
    """Thread-safe table of explicitly registered record layouts."""

    def __init__(self) -> None:
        self._records: dict[type, tuple[FieldSpec, ...]] = {}
        self._lock = RLock()

    def register(self, record_type: type, fields: Iterable[FieldSpec]) -> None:
        specs = tuple(fields)
        for spec in specs:
            if not isinstance(spec, FieldSpec):
                raise FieldConfigurationError(f"{record_type.__qualname__}: expected FieldSpec, got {spec!r}")
            if not is_directive(spec.directive):
                raise FieldConfigurationError(
                    f"{record_type.__qualname__}.{spec.attribute}: {spec.directive!r} is not a field directive",
                    key=spec.attribute,
                )
        with self._lock:
            self._records[record_type] = specs
        logger.debug("Registered %s with %d fields", record_type.__qualname__, len(specs))

    def get(self, record_type: type) -> tuple[FieldSpec, ...] | None:
        with self._lock:
            return self._records.get(record_type)

    def unregister(self, record_type: type) -> None:
        with self._lock:
            self._records.pop(record_type, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, record_type: object) -> bool:
        with self._lock:
            return record_type in self._records


def register_record(record_type: type, fields: Sequence[FieldSpec]) -> type:
    """Register the column layout of *record_type* explicitly.

    Registered layouts take precedence over ``Annotated`` hints, which lets
    types that cannot carry annotations (third-party classes, classes with
    ``__slots__`` only) take part in schema derivation.

    Returns:
        *record_type*, so the call can be used as an expression.
    """
    _REGISTRY.register(record_type, fields)
    return record_type


def unregister_record(record_type: type) -> None:
    """Drop an explicit registration; annotation hints apply again."""
    _REGISTRY.unregister(record_type)


def clear_registered_records() -> None:
    """Reset the record registry (useful for tests)."""
    _REGISTRY.clear()


def is_registered(record_type: object) -> bool:
    """Return True if *record_type* has an explicitly registered layout."""
    return record_type in _REGISTRY


def declared_fields(record_type: type) -> list[FieldSpec]:
    """Return the directive-bearing fields of *record_type* in column order.

    Annotations are read class by class along the MRO, base classes first; a
    subclass that redeclares an attribute replaces it in its original
    position. Attributes without a directive are skipped, including those
    whose annotation cannot be evaluated (e.g. names imported only under
    ``TYPE_CHECKING``). No key or type validation happens here; see
    :func:`resolve_fields`.

    Raises:
        FieldConfigurationError: If a directive-bearing annotation cannot be
            evaluated or a field carries more than one directive.
    """
    if not isinstance(record_type, type):
        raise FieldConfigurationError(f"Record type must be a class, got {record_type!r}")

    registered = _REGISTRY.get(record_type)
    if registered is not None:
        return list(registered)

    declared: dict[str, tuple[type, Any]] = {}
    for owner in reversed(record_type.__mro__):
        for attribute, annotation in _own_annotations(owner).items():
            declared[attribute] = (owner, annotation)

    specs: list[FieldSpec] = []
    for attribute, (owner, annotation) in declared.items():
        hint = _evaluate_annotation(record_type, owner, attribute, annotation)
        if get_origin(hint) is not Annotated:
            continue
        native_type, *metadata = get_args(hint)
        directives = [meta for meta in metadata if is_directive(meta)]
        if not directives:
            continue
        if len(directives) > 1:
            raise FieldConfigurationError(
                f"{record_type.__qualname__}.{attribute} carries {len(directives)} directives; at most one is allowed",
                key=attribute,
            )
        specs.append(FieldSpec(attribute=attribute, native_type=native_type, directive=directives[0]))
    return specs


def resolve_fields(record_type: type) -> list[ResolvedField]:
    """Resolve the directive-bearing fields of *record_type*.

    Raises:
        DuplicateFieldKeyError: If two fields expose the same key. Fields are
            checked in order, so the first occurrence is the existing key.
        NonPrimitiveFieldError: If a primitive field's type has no primitive kind.
        FieldConfigurationError: If a struct, list or map field's declared type
            does not provide what the directive needs.
    """
    resolved: list[ResolvedField] = []
    keys: list[str] = []
    for spec in declared_fields(record_type):
        directive = spec.directive
        key = directive.key or spec.attribute
        if key in keys:
            raise DuplicateFieldKeyError(key, keys, record_type)

        kind: PrimitiveKind | None = None
        type_args: tuple[type, ...] = ()
        if isinstance(directive, PrimitiveField):
            kind = _resolve_kind(directive, spec.native_type, key)
        elif isinstance(directive, StructField):
            if not isinstance(spec.native_type, type) or get_origin(spec.native_type) is not None:
                raise FieldConfigurationError(
                    f"Key[{key}] of type[{spec.native_type}] is not a record class", key=key
                )
        elif isinstance(directive, ListField):
            type_args = _type_arguments(spec, key, arity=1)
        elif isinstance(directive, MapField):
            type_args = _type_arguments(spec, key, arity=2)

        keys.append(key)
        resolved.append(
            ResolvedField(
                attribute=spec.attribute,
                key=key,
                directive=directive,
                native_type=spec.native_type,
                kind=kind,
                type_args=type_args,
            )
        )

    logger.debug("Resolved %d fields on %s: %s", len(resolved), record_type.__qualname__, keys)
    return resolved


# ################
# Implementation
# ################

_REGISTRY = RecordRegistry()


def _own_annotations(owner: type) -> dict[str, Any]:
    """Return the annotations *owner* declares itself, unevaluated where possible."""
    if sys.version_info >= (3, 14):
        import annotationlib

        return annotationlib.get_annotations(owner, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(owner)


def _evaluate_annotation(record_type: type, owner: type, attribute: str, annotation: Any) -> Any:
    """Evaluate one attribute annotation in the namespace of the class declaring it.

    Returns ``None`` for an annotation that cannot be evaluated and carries no
    directive.
    """
    holder = type(owner.__name__, (), {"__annotations__": {attribute: annotation}, "__module__": owner.__module__})
    module = sys.modules.get(owner.__module__)
    try:
        hints = get_type_hints(
            holder,
            globalns=vars(module) if module is not None else {},
            localns=dict(vars(owner)),
            include_extras=True,
        )
    except (NameError, AttributeError, TypeError, SyntaxError) as exc:
        if not _may_carry_directive(annotation):
            logger.debug("Skipping %s.%s: %s", record_type.__qualname__, attribute, exc)
            return None
        raise FieldConfigurationError(
            f"Cannot evaluate annotation of {record_type.__qualname__}.{attribute}: {exc}", key=attribute
        ) from exc
    return hints[attribute]


def _may_carry_directive(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return "Annotated[" in annotation
    if get_origin(annotation) is Annotated:
        return any(is_directive(meta) for meta in get_args(annotation)[1:])
    return False


def _resolve_kind(directive: PrimitiveField, native_type: object, key: str) -> PrimitiveKind:
    if directive.kind is not PrimitiveKind.UNKNOWN:
        return directive.kind
    kind = infer_kind(native_type)
    if kind is None:
        raise NonPrimitiveFieldError(f"Key[{key}] of type[{native_type}] is non primitive.", key=key)
    return kind


def _type_arguments(spec: FieldSpec, key: str, *, arity: int) -> tuple[type, ...]:
    """Return the concrete generic arguments of a list (arity 1) or map (arity 2) field."""
    origin = get_origin(spec.native_type)
    what = "list" if arity == 1 else "map"

    if not isinstance(origin, type):
        raise FieldConfigurationError(
            f"Key[{key}] of type[{spec.native_type}] must be a parameterised {what} type", key=key
        )
    is_mapping = issubclass(origin, Mapping)
    if arity == 2 and not is_mapping:
        raise FieldConfigurationError(f"Key[{key}] of type[{spec.native_type}] is not a mapping type", key=key)
    if arity == 1 and (is_mapping or not issubclass(origin, Iterable)):
        raise FieldConfigurationError(f"Key[{key}] of type[{spec.native_type}] is not a sequence type", key=key)

    args = get_args(spec.native_type)[:arity]
    if len(args) < arity:
        raise FieldConfigurationError(
            f"Key[{key}] of type[{spec.native_type}] must declare {arity} type argument(s)", key=key
        )
    for arg in args:
        if not isinstance(arg, type) or get_origin(arg) is not None:
            raise FieldConfigurationError(
                f"Key[{key}] of type[{spec.native_type}]: type argument {arg!r} is not a concrete class", key=key
            )
    return tuple(args)
