"""Tensor to Ada type mapping.

Maps tensor element kinds and ranks to the array types declared by the
Generic_Real_Arrays library.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "tensor_declaration",
    "tensor_type_name",
    "type_name",
]

from collections.abc import Container

from nnefada.generate._identifiers import resolve_identifier
from nnefada.generate._utils import format_extents
from nnefada.ir import Tensor
from nnefada.presets import DTYPE_FAMILIES, RANK_SUFFIXES


def type_name(dtype: str, rank: int) -> str:
    """Get Ada type name for an element kind and rank.

    Unknown element kinds are used verbatim as the family prefix and
    ranks outside 1-4 map to the generic "Tensor" suffix.

    :param dtype: Tensor element kind (e.g., "scalar", "integer", "logical")
    :param rank: Tensor rank
    :return: Type name (e.g., "Real_Matrix", "Integer_Tensor_4D")
    """
    family = DTYPE_FAMILIES.get(dtype, dtype)
    suffix = RANK_SUFFIXES.get(rank, "Tensor")
    return f"{family}_{suffix}"


def tensor_type_name(tensor: Tensor) -> str:
    return type_name(tensor.dtype, tensor.rank)


def tensor_declaration(tensor: Tensor, known_operation_names: Container[str]) -> str:
    """Format object declaration for a tensor.

    :param tensor: Tensor to declare
    :param known_operation_names: Operation names used in the graph
    :return: Declaration (e.g., "x: Real_Matrix (1..2, 1..3);")
    """
    name = resolve_identifier(tensor.name, known_operation_names)
    return f"{name}: {tensor_type_name(tensor)} ({format_extents(tensor.shape)});"
