"""Stage 1: Graph IR.

This module defines the dataflow IR shared by the frontends and the Ada
code generator.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "Graph",
    "Identifier",
    "Operation",
    "Tensor",
    "Value",
    "ValueKind",
    "dtype_name",
    "value_kind",
]

from .types import (
    Graph,
    Identifier,
    Operation,
    Tensor,
    Value,
    ValueKind,
    dtype_name,
    value_kind,
)
