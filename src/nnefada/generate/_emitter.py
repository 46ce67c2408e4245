"""Emit declarations and statements for every graph operation.

Main emission logic with handler dispatch.
"""

__docformat__ = "restructuredtext"
__all__ = ["emit_graph", "emit_operation"]

from collections.abc import Mapping

from nnefada.generate._context import EmissionContext
from nnefada.generate._handlers import (
    HANDLERS,
    SOURCE_HANDLERS,
    get_handler,
    handle_call,
    register_source_handlers,
)
from nnefada.generate._identifiers import build_known_operation_names
from nnefada.ir import Graph, Operation


def _ensure_handlers_registered() -> None:
    """Ensure all handlers are registered (lazy initialization).

    Source handlers are registered on first use, and again whenever one of
    them is missing. Handlers registered by callers are kept.
    """
    if any(operation_name not in HANDLERS for operation_name in SOURCE_HANDLERS):
        register_source_handlers(replace=False)


def emit_operation(operation: Operation, ctx: EmissionContext) -> None:
    """Emit code for a single operation using its registered handler.

    Operations without a dedicated handler become library calls.

    :param operation: Operation to emit
    :param ctx: Emission context receiving the generated code
    """
    _ensure_handlers_registered()
    handler = get_handler(operation.name) or handle_call
    handler(operation, ctx)


def emit_graph(
    graph: Graph,
    spatial_rank_offsets: Mapping[str, int] | None = None,
) -> EmissionContext:
    """Emit code for all operations of a graph in execution order.

    Operation names are collected in a first pass so that tensor names
    colliding with any operation of the graph are renamed consistently.

    :param graph: Shape-inferred graph
    :param spatial_rank_offsets: Leading non-spatial dimensions per operation kind
    :return: Context holding declarations, statements and stub types
    """
    known_operation_names = build_known_operation_names(graph)
    ctx = EmissionContext(graph, known_operation_names, spatial_rank_offsets)

    for operation in graph.operations:
        try:
            emit_operation(operation, ctx)
        except (KeyError, TypeError, ValueError) as error:
            raise type(error)(
                f"Cannot generate code for operation '{operation.name}': {error}"
            ) from error

    return ctx
