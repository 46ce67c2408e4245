"""Attribute argument formatting.

Renders operation attributes as Ada named arguments, applying the
per-attribute policies of the target operator library:

- border modes become Border_Mode_* constants
- axis indices are renumbered from 0-based to 1-based
- empty padding/stride/dilation arrays become library default symbols
- other empty arrays become zero aggregates sized to the spatial rank
- single-element arrays use named aggregate syntax "(1 => x)"
"""

__docformat__ = "restructuredtext"
__all__ = ["format_attribute", "spatial_rank"]

from collections.abc import Mapping

from nnefada.generate._utils import format_integer, format_value
from nnefada.ir import Graph, Operation, Value, ValueKind, value_kind
from nnefada.presets import (
    AXIS_ATTRIBUTES,
    AXIS_LIST_ATTRIBUTES,
    DEFAULT_SYMBOLS,
    SPATIAL_RANK_OFFSETS,
)


def spatial_rank(
    graph: Graph,
    operation: Operation,
    spatial_rank_offsets: Mapping[str, int] | None = None,
) -> int:
    """Get spatial rank of an operation's first input tensor.

    :param graph: Graph owning the operation
    :param operation: Operation whose first input is inspected
    :param spatial_rank_offsets: Leading non-spatial dimensions per operation kind
    :return: Input rank minus the operation's offset
    :raises ValueError: If the first input is missing or not a tensor reference
    """
    if spatial_rank_offsets is None:
        spatial_rank_offsets = SPATIAL_RANK_OFFSETS

    if not operation.inputs:
        raise ValueError(f"Operation '{operation.name}' has no input to derive a default from")

    param, value = operation.inputs[0]
    if value_kind(value) is not ValueKind.IDENTIFIER:
        raise ValueError(
            f"Operation '{operation.name}' input '{param}' is not a tensor reference: {value!r}"
        )

    rank = graph.tensor(value).rank - spatial_rank_offsets.get(operation.name, 0)
    return max(rank, 0)


def _format_axis(value: Value, attr: str) -> str:
    if value_kind(value) is not ValueKind.INTEGER:
        raise TypeError(f"Attribute '{attr}' expects integer axes, got {value!r}")
    return format_integer(value + 1)


def _format_sequence(
    graph: Graph,
    operation: Operation,
    attr: str,
    value: list | tuple,
    spatial_rank_offsets: Mapping[str, int] | None,
) -> str:
    if len(value) == 0:
        if attr in DEFAULT_SYMBOLS:
            return DEFAULT_SYMBOLS[attr]
        rank = spatial_rank(graph, operation, spatial_rank_offsets)
        return f"({', '.join('0' for _ in range(rank))})"

    if attr in AXIS_LIST_ATTRIBUTES:
        items = [_format_axis(item, attr) for item in value]
    else:
        items = [format_value(item) for item in value]

    # Ada positional aggregates need at least two components
    if len(items) == 1:
        return f"(1 => {items[0]})"
    return f"({', '.join(items)})"


def format_attribute(
    graph: Graph,
    operation: Operation,
    attr: str,
    value: Value,
    spatial_rank_offsets: Mapping[str, int] | None = None,
) -> str:
    """Format one attribute as an Ada named argument.

    :param graph: Graph owning the operation
    :param operation: Operation the attribute belongs to
    :param attr: Attribute name
    :param value: Attribute value
    :param spatial_rank_offsets: Leading non-spatial dimensions per operation kind
    :return: Named argument (e.g., "axis => 2", "padding => Padding_Auto")
    :raises TypeError: If value is not a member of the Value union, or a
        border mode is not a string
    """
    if attr == "border":
        if value_kind(value) is not ValueKind.STRING:
            raise TypeError(f"Attribute 'border' expects a mode name, got {value!r}")
        return f"{attr} => Border_Mode_{value}"

    kind = value_kind(value)
    if kind is ValueKind.INTEGER and attr in AXIS_ATTRIBUTES:
        text = format_integer(value + 1)
    elif kind in (ValueKind.ARRAY, ValueKind.TUPLE):
        text = _format_sequence(graph, operation, attr, value, spatial_rank_offsets)
    else:
        text = format_value(value)

    return f"{attr} => {text}"
