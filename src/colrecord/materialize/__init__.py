# Copyright 2026 colrecord Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value materialization: record instances to schema-shaped value trees."""

from colrecord.materialize.coercion import coerce_primitive, to_double, to_int, to_long, to_string
from colrecord.materialize.creator import collect_field_values, materialize

__all__ = [
    "coerce_primitive",
    "collect_field_values",
    "materialize",
    "to_double",
    "to_int",
    "to_long",
    "to_string",
]
