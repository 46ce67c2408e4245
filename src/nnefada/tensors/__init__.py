"""Tensor file tools.

Inspection and comparison of tensor files produced by model runners.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "format_comparison",
    "format_tensor",
    "format_tensor_header",
    "read_tensor",
    "relative_difference",
]

from nnefada.tensors.info import (
    format_comparison,
    format_tensor,
    format_tensor_header,
    read_tensor,
    relative_difference,
)
