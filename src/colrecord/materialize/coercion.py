# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of raw field values to native primitive representations.

Only four kinds are convertible:

* ``int``: integers are narrowed to 32 bits by two's-complement wrap-around,
  floats are truncated toward zero and saturated to the 32-bit range (NaN
  becomes 0).
* ``long``: the same rules with 64 bits.
* ``double``: only ``float`` values are accepted, without conversion.
* ``string``: only ``str`` values are accepted, without conversion.

Booleans are never accepted as integers.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

import numpy as np

from colrecord.errors import TypeCoercionError, UnsupportedOperationError
from colrecord.model.types import PrimitiveKind

# ###############
# Public Interface
# ###############


def coerce_primitive(kind: PrimitiveKind, value: Any, *, key: str | None = None) -> Any:
    """Convert *value* to the native representation of *kind*.

    Raises:
        UnsupportedOperationError: If *kind* is not materializable.
        TypeCoercionError: If *value* cannot be converted.
    """
    converter = _CONVERTERS.get(kind)
    if converter is None:
        raise UnsupportedOperationError(f"{_prefix(key)}Primitive category[{kind.value}] not supported yet.", key=key)
    return converter(value, key)


def to_int(value: Any, key: str | None = None) -> np.int32:
    """Convert to a 32-bit integer."""
    return np.int32(_to_integer(value, 32, "int", key))


def to_long(value: Any, key: str | None = None) -> np.int64:
    """Convert to a 64-bit integer."""
    return np.int64(_to_integer(value, 64, "long", key))


def to_double(value: Any, key: str | None = None) -> np.float64:
    """Accept a double-width float as is."""
    if isinstance(value, float):
        return np.float64(value)
    raise _coercion_error(value, "double", key)


def to_string(value: Any, key: str | None = None) -> str:
    """Accept a text value as is."""
    if isinstance(value, str):
        return str(value)
    raise _coercion_error(value, "string", key)


# ################
# Implementation
# ################


def _to_integer(value: Any, bits: int, target: str, key: str | None) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise _coercion_error(value, target, key)
    if isinstance(value, (int, np.integer)):
        return _wrap(int(value), bits)
    if isinstance(value, (float, np.floating)):
        return _truncate(float(value), bits)
    raise _coercion_error(value, target, key)


def _wrap(value: int, bits: int) -> int:
    """Keep the low *bits* bits of *value* as a signed integer."""
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _truncate(value: float, bits: int) -> int:
    """Truncate toward zero, saturating at the bounds of a signed *bits*-bit integer."""
    high = (1 << (bits - 1)) - 1
    low = -(1 << (bits - 1))
    if math.isnan(value):
        return 0
    if value >= high:
        return high
    if value <= low:
        return low
    return int(value)


def _prefix(key: str | None) -> str:
    return f"Key[{key}]: " if key else ""


def _coercion_error(value: Any, target: str, key: str | None) -> TypeCoercionError:
    return TypeCoercionError(
        f"{_prefix(key)}cannot convert {type(value).__name__} value {value!r} to {target}",
        key=key,
    )


_CONVERTERS: dict[PrimitiveKind, Callable[[Any, str | None], Any]] = {
    PrimitiveKind.INT: to_int,
    PrimitiveKind.LONG: to_long,
    PrimitiveKind.DOUBLE: to_double,
    PrimitiveKind.STRING: to_string,
}
