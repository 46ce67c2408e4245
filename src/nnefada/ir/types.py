"""Stage 1: Graph IR Type Definitions.

Defines the read-only dataflow IR consumed by code generation: Graph,
Tensor, Operation and the closed Value union.

Values are plain Python objects plus the Identifier marker type:

- None -> None
- String -> str
- Identifier -> Identifier (str subclass)
- Logical -> bool
- Integer -> int
- Scalar -> float
- Array -> list
- Tuple -> tuple
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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import numpy as np


class Identifier(str):
    """Reference to a tensor in Graph.tensors.

    Distinguishes tensor references from plain string literals.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Identifier({str.__repr__(self)})"


Value = Union[None, str, Identifier, bool, int, float, list, tuple]


class ValueKind(Enum):
    """Variants of the Value union.

    :cvar NONE: Absent value
    :cvar STRING: String literal
    :cvar IDENTIFIER: Tensor reference
    :cvar LOGICAL: Boolean literal
    :cvar INTEGER: Integer literal
    :cvar SCALAR: Floating-point literal
    :cvar ARRAY: Ordered sequence of values
    :cvar TUPLE: Fixed sequence of values
    """

    NONE = "none"
    STRING = "string"
    IDENTIFIER = "identifier"
    LOGICAL = "logical"
    INTEGER = "integer"
    SCALAR = "scalar"
    ARRAY = "array"
    TUPLE = "tuple"


def value_kind(value: Any) -> ValueKind:
    """Classify a value into its Value variant.

    :param value: Value to classify
    :return: Variant of the value
    :raises TypeError: If value is not a member of the Value union
    """
    if value is None:
        return ValueKind.NONE
    # Identifier before str, bool before int (subclasses)
    if isinstance(value, Identifier):
        return ValueKind.IDENTIFIER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, bool):
        return ValueKind.LOGICAL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.SCALAR
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, tuple):
        return ValueKind.TUPLE
    raise TypeError(
        f"Unsupported value of type {type(value).__name__}: {value!r}. "
        f"Supported types: None, str, Identifier, bool, int, float, list, tuple"
    )


def dtype_name(dtype: np.dtype | type) -> str:
    """Map a numpy dtype to a graph element kind.

    :param dtype: Numpy dtype (or scalar type)
    :return: "scalar", "integer", "logical", or the numpy dtype name
    """
    dtype = np.dtype(dtype)
    if dtype.kind == "f":
        return "scalar"
    if dtype.kind in ("i", "u"):
        return "integer"
    if dtype.kind == "b":
        return "logical"
    return dtype.name


@dataclass(frozen=True)
class Tensor:
    """Named, typed and shaped data slot of a graph.

    :param name: Tensor identifier (unique within the graph)
    :param dtype: Element kind ("scalar", "integer", "logical", or other)
    :param shape: Tensor extents, rank is the tuple length
    :param data: Optional tensor contents (unused by code generation)
    """

    name: str
    dtype: str
    shape: tuple[int, ...]
    data: np.ndarray | None = field(default=None, compare=False, repr=False)

    @property
    def rank(self) -> int:
        return len(self.shape)


@dataclass(frozen=True)
class Operation:
    """Single computational step of a graph.

    :param name: Operation kind (e.g., "conv", "add", "external", "variable")
    :param inputs: Ordered (parameter name, value) pairs
    :param outputs: Ordered (parameter name, identifier) pairs
    :param attribs: Attribute values in declaration order
    """

    name: str
    inputs: tuple[tuple[str, Value], ...] = ()
    outputs: tuple[tuple[str, Value], ...] = ()
    attribs: dict[str, Value] = field(default_factory=dict)

    def attrib(self, name: str) -> Value:
        """Get attribute value by name.

        :param name: Attribute name
        :return: Attribute value
        :raises KeyError: If operation has no such attribute
        """
        if name not in self.attribs:
            raise KeyError(f"Operation '{self.name}' has no attribute '{name}'")
        return self.attribs[name]


@dataclass(frozen=True)
class Graph:
    """Shape-annotated dataflow graph.

    :param name: Graph name (becomes the generated package name)
    :param inputs: Graph input tensor identifiers
    :param outputs: Graph output tensor identifiers
    :param tensors: All tensors keyed by identifier
    :param operations: Operations in execution order
    """

    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    tensors: dict[str, Tensor]
    operations: tuple[Operation, ...]

    def tensor(self, identifier: str) -> Tensor:
        """Look up a tensor by identifier.

        :param identifier: Tensor identifier
        :return: Tensor
        :raises KeyError: If the graph has no such tensor
        """
        try:
            return self.tensors[identifier]
        except KeyError:
            raise KeyError(f"Graph '{self.name}' has no tensor '{identifier}'") from None
