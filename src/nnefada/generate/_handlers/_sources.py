"""SOURCE handlers for code generation.

Handlers for operations that bring tensors into the graph ("external"
inputs and "variable" parameters). They emit load statements such as:

    external ("input", input);
    variable ("conv1/filter", filter1);
"""

__docformat__ = "restructuredtext"
__all__ = ["SOURCE_HANDLERS", "register_source_handlers"]

from nnefada.generate._context import EmissionContext
from nnefada.generate._handlers._registry import get_handler, register_handler
from nnefada.ir import Operation, Tensor, ValueKind, value_kind


def _single_output(operation: Operation, ctx: EmissionContext) -> Tensor:
    if len(operation.outputs) != 1:
        raise ValueError(
            f"'{operation.name}' requires exactly 1 output, got {len(operation.outputs)}"
        )
    param, value = operation.outputs[0]
    return ctx.output_tensor(param, value)


def _load_statement(procedure: str, label: str, target: str) -> str:
    return f'{procedure} ("{label}", {target});'


def _handle_external(operation: Operation, ctx: EmissionContext) -> None:
    """Handle external input.

    The tensor is declared with the graph inputs, so only the load
    statement is emitted.

    :param operation: External operation
    :param ctx: Emission context
    """
    tensor = _single_output(operation, ctx)
    ctx.add_statement(_load_statement(operation.name, tensor.name, ctx.resolve(tensor.name)))
    ctx.mark_external_type(tensor)


def _handle_variable(operation: Operation, ctx: EmissionContext) -> None:
    """Handle variable (stored parameter tensor).

    Declares the tensor at package level and loads it by label.

    :param operation: Variable operation
    :param ctx: Emission context
    """
    tensor = _single_output(operation, ctx)
    label = operation.attrib("label")
    if value_kind(label) is not ValueKind.STRING:
        raise TypeError(f"Variable '{tensor.name}' label must be a string, got {label!r}")

    ctx.add_declaration(tensor)
    ctx.add_statement(_load_statement(operation.name, label, ctx.resolve(tensor.name)))
    ctx.mark_variable_type(tensor)


SOURCE_HANDLERS = {
    "external": _handle_external,
    "variable": _handle_variable,
}


def register_source_handlers(replace: bool = True) -> None:
    """Register all source operation handlers.

    :param replace: If False, keep handlers already registered for a source kind
    """
    for operation_name, handler in SOURCE_HANDLERS.items():
        if replace or get_handler(operation_name) is None:
            register_handler(operation_name, handler)
