"""CALL handler for code generation.

Every operation without a dedicated handler becomes one call to the
operator library with named arguments:

    conv (input => input, filter => filter1, bias => 0.0, border => Border_Mode_constant,
          padding => Padding_Auto, ..., output => conv1);
"""

__docformat__ = "restructuredtext"
__all__ = ["handle_call", "order_inputs"]

from nnefada.generate._attributes import format_attribute
from nnefada.generate._context import EmissionContext
from nnefada.generate._utils import format_value
from nnefada.ir import Operation, Value, ValueKind, value_kind
from nnefada.presets import ATTRIBUTE_FREE_OPERATIONS, COMMUTATIVE_OPERATIONS


def _is_identifier(value: Value) -> bool:
    return value_kind(value) is ValueKind.IDENTIFIER


def order_inputs(operation: Operation) -> list[tuple[str, Value]]:
    """Get call inputs in emission order.

    For commutative operations whose first operand is a literal and whose
    second operand is a tensor, the two are swapped so the tensor comes
    first. Each operand keeps its own parameter name.

    :param operation: Operation
    :return: Ordered (parameter name, value) pairs
    """
    inputs = list(operation.inputs)
    if (
        operation.name in COMMUTATIVE_OPERATIONS
        and len(inputs) >= 2
        and not _is_identifier(inputs[0][1])
        and _is_identifier(inputs[1][1])
    ):
        inputs[0], inputs[1] = inputs[1], inputs[0]
    return inputs


def _format_operand(value: Value, ctx: EmissionContext) -> str:
    """Format an input value, resolving tensor references at any nesting depth."""
    kind = value_kind(value)
    if kind is ValueKind.IDENTIFIER:
        return ctx.resolve(value)
    if kind in (ValueKind.ARRAY, ValueKind.TUPLE):
        return f"({', '.join(_format_operand(item, ctx) for item in value)})"
    return format_value(value)


def _format_input(param: str, value: Value, ctx: EmissionContext) -> str:
    return f"{param} => {_format_operand(value, ctx)}"


def handle_call(operation: Operation, ctx: EmissionContext) -> None:
    """Handle generic operation as a named-argument procedure call.

    Output tensors that are not graph outputs get a forward declaration
    so they exist before first use.

    :param operation: Operation
    :param ctx: Emission context
    """
    args = [_format_input(param, value, ctx) for param, value in order_inputs(operation)]

    if operation.name not in ATTRIBUTE_FREE_OPERATIONS:
        args.extend(
            format_attribute(ctx.graph, operation, attr, value, ctx.spatial_rank_offsets)
            for attr, value in operation.attribs.items()
        )

    for param, value in operation.outputs:
        tensor = ctx.output_tensor(param, value)
        if ctx.is_graph_output(tensor):
            ctx.mark_output_type(tensor)
        else:
            ctx.add_forward_declaration(tensor)
        args.append(f"{param} => {ctx.resolve(tensor.name)}")

    ctx.add_statement(f"{operation.name} ({', '.join(args)});")
