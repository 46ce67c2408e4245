"""Tensor identifier resolution.

Generated calls use operation names as callable symbols, so a tensor
named like any operation of the graph must be renamed to stay distinct.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "COLLISION_SUFFIX",
    "build_known_operation_names",
    "resolve_identifier",
]

from collections.abc import Container, Iterable

from nnefada.ir import Graph
from nnefada.presets import RESERVED_OPERATION_NAMES

COLLISION_SUFFIX = "_0"


def build_known_operation_names(
    graph: Graph,
    reserved: Iterable[str] = RESERVED_OPERATION_NAMES,
) -> frozenset[str]:
    """Collect every operation name of the graph plus reserved names.

    :param graph: Graph to scan
    :param reserved: Names always treated as operation names
    :return: Set of operation names
    """
    names = {operation.name for operation in graph.operations}
    names.update(reserved)
    return frozenset(names)


def resolve_identifier(name: str, known_operation_names: Container[str]) -> str:
    """Get emitted name for a tensor identifier.

    :param name: Tensor identifier
    :param known_operation_names: Operation names used in the graph
    :return: Identifier, suffixed with "_0" if it collides with an operation name
    """
    if name in known_operation_names:
        return name + COLLISION_SUFFIX
    return str(name)
