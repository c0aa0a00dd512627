# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value tree nodes produced by materialization."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class StructValue:
    """Positional values of one struct, aligned with the struct's schema fields.

    Lists are plain ``list`` objects and maps plain ``dict`` objects; primitive
    leaves are numpy scalars (``int``/``long``/``double``) or ``str``.
    """

    fields: tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.fields)

    def __getitem__(self, index: int) -> Any:
        return self.fields[index]

    def to_python(self) -> list[Any]:
        """Unwrap the tree into plain Python lists, dicts and scalars."""
        return [to_python(v) for v in self.fields]


def to_python(value: Any) -> Any:
    """Unwrap any value tree node into plain Python objects."""
    if isinstance(value, StructValue):
        return value.to_python()
    if isinstance(value, list):
        return [to_python(v) for v in value]
    if isinstance(value, dict):
        return {_hashable(to_python(k)): to_python(v) for k, v in value.items()}
    if isinstance(value, np.generic):
        return value.item()
    return value


# ################
# Implementation
# ################


def _hashable(value: Any) -> Any:
    """Struct map keys unwrap to lists; turn them into tuples so they stay usable as keys."""
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, dict):
        return tuple((k, _hashable(v)) for k, v in value.items())
    return value
