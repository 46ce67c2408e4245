"""ONNX frontend: convert ONNX models to graph IR.

ONNX nodes are mapped to the operation vocabulary of the Ada operator
library (NNEF operation names and parameters):

- graph inputs become "external" operations
- initializers used as tensors become "variable" operations
- single-element initializers feeding elementwise operators become literals
- nodes become library operations ("conv", "add", "reshape", ...)
"""

__docformat__ = "restructuredtext"
__all__ = ["ONNX_OPERATIONS", "onnx_model_to_graph"]

from collections.abc import Callable

from onnx import ModelProto, NodeProto, helper

from nnefada.generate._utils import sanitize_identifier, to_package_name
from nnefada.ir import Graph, Identifier, Operation, Tensor, Value
from nnefada.load.errors import GraphLoadError, ShapeInferenceError
from nnefada.load.utils import (
    get_onnx_initializers,
    get_onnx_model_dtypes,
    get_onnx_model_input_names,
    get_onnx_model_output_names,
    get_onnx_model_shapes,
)


class _ConversionState:
    """Tensor bookkeeping while converting one ONNX model."""

    def __init__(self, model: ModelProto):
        self.initializers = get_onnx_initializers(model)
        self.shapes = get_onnx_model_shapes(model)
        self.dtypes = get_onnx_model_dtypes(model)
        self.code_names: dict[str, str] = {}
        self.used_initializers: set[str] = set()

    def code_name(self, onnx_name: str) -> str:
        """Get unique Ada identifier for an ONNX tensor name."""
        if onnx_name not in self.code_names:
            base = sanitize_identifier(onnx_name)
            taken = set(self.code_names.values())
            candidate = base
            counter = 1
            while candidate in taken:
                candidate = f"{base}_{counter}"
                counter += 1
            self.code_names[onnx_name] = candidate
        return self.code_names[onnx_name]

    def shape(self, onnx_name: str) -> tuple[int, ...]:
        shape = self.shapes.get(onnx_name)
        if shape is None:
            raise ShapeInferenceError(f"Shape of tensor '{onnx_name}' could not be inferred")
        return shape

    def rank(self, onnx_name: str) -> int:
        return len(self.shape(onnx_name))

    def tensor(self, onnx_name: str) -> Identifier:
        """Reference a tensor operand, marking initializers as variables."""
        if onnx_name in self.initializers:
            self.used_initializers.add(onnx_name)
        return Identifier(self.code_name(onnx_name))

    def operand(self, onnx_name: str) -> Value:
        """Reference an operand, inlining single-element initializers as literals."""
        array = self.initializers.get(onnx_name)
        if array is not None and array.size == 1:
            return array.reshape(()).item()
        return self.tensor(onnx_name)

    def optional_operand(self, node: NodeProto, index: int, default: Value) -> Value:
        if index < len(node.input) and node.input[index]:
            return self.operand(node.input[index])
        return default


Converter = Callable[[NodeProto, dict, _ConversionState], Operation]


def _output(node: NodeProto, state: _ConversionState, param: str) -> tuple[tuple[str, Value]]:
    return ((param, state.tensor(node.output[0])),)


def _positive_axis(axis: int, rank: int) -> int:
    return axis + rank if axis < 0 else axis


def _unary(name: str) -> Converter:
    def convert(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
        return Operation(
            name=name,
            inputs=(("x", state.tensor(node.input[0])),),
            outputs=_output(node, state, "y"),
        )

    return convert


def _binary(name: str) -> Converter:
    def convert(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
        return Operation(
            name=name,
            inputs=(("x", state.operand(node.input[0])), ("y", state.operand(node.input[1]))),
            outputs=_output(node, state, "z"),
        )

    return convert


def _pads_to_padding(pads: list[int] | None, rank: int) -> list[tuple[int, int]]:
    if not pads:
        return [(0, 0)] * rank
    return list(zip(pads[:rank], pads[rank:], strict=True))


def _spatial_padding(attrs: dict, spatial_rank: int) -> list[tuple[int, int]]:
    auto_pad = attrs.get("auto_pad", b"NOTSET")
    if isinstance(auto_pad, bytes):
        auto_pad = auto_pad.decode()
    if auto_pad in ("SAME_UPPER", "SAME_LOWER"):
        # Empty padding selects automatic (same) padding
        return []
    if auto_pad == "VALID":
        return [(0, 0)] * spatial_rank
    return _pads_to_padding(attrs.get("pads"), spatial_rank)


def _convert_conv(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    spatial_rank = state.rank(node.input[0]) - 2
    return Operation(
        name="conv",
        inputs=(
            ("input", state.tensor(node.input[0])),
            ("filter", state.tensor(node.input[1])),
            ("bias", state.optional_operand(node, 2, 0.0)),
        ),
        outputs=_output(node, state, "output"),
        attribs={
            "border": "constant",
            "padding": _spatial_padding(attrs, spatial_rank),
            "stride": list(attrs.get("strides", [])),
            "dilation": list(attrs.get("dilations", [])),
            "groups": attrs.get("group", 1),
        },
    )


def _pool(name: str) -> Converter:
    def convert(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
        spatial_rank = state.rank(node.input[0]) - 2
        padding = _spatial_padding(attrs, spatial_rank)
        strides = list(attrs.get("strides", []))
        dilations = list(attrs.get("dilations", []))
        if name == "avg_pool" and attrs.get("count_include_pad", 0):
            border = "constant"
        else:
            border = "ignore"
        return Operation(
            name=name,
            inputs=(("input", state.tensor(node.input[0])),),
            outputs=_output(node, state, "output"),
            attribs={
                "size": [1, 1, *attrs["kernel_shape"]],
                "border": border,
                "padding": [(0, 0), (0, 0), *padding] if padding else [],
                "stride": [1, 1, *strides] if strides else [],
                "dilation": [1, 1, *dilations] if dilations else [],
            },
        )

    return convert


def _convert_matmul(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    return Operation(
        name="matmul",
        inputs=(("A", state.tensor(node.input[0])), ("B", state.tensor(node.input[1]))),
        outputs=_output(node, state, "C"),
        attribs={"transposeA": False, "transposeB": False},
    )


def _convert_gemm(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    if attrs.get("alpha", 1.0) != 1.0 or attrs.get("beta", 1.0) != 1.0:
        raise GraphLoadError(f"Gemm '{node.name}' with alpha/beta other than 1 is not supported")
    if attrs.get("transA", 0) or not attrs.get("transB", 0):
        raise GraphLoadError(f"Gemm '{node.name}' is only supported with transA=0, transB=1")
    return Operation(
        name="linear",
        inputs=(
            ("input", state.tensor(node.input[0])),
            ("filter", state.tensor(node.input[1])),
            ("bias", state.optional_operand(node, 2, 0.0)),
        ),
        outputs=_output(node, state, "output"),
    )


def _convert_reshape(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    # Inferred output shape replaces the 0/-1 placeholders of the shape input
    return Operation(
        name="reshape",
        inputs=(("input", state.tensor(node.input[0])),),
        outputs=_output(node, state, "output"),
        attribs={
            "shape": list(state.shape(node.output[0])),
            "axis_start": 0,
            "axis_count": -1,
        },
    )


def _convert_transpose(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    rank = state.rank(node.input[0])
    perm = attrs.get("perm", list(reversed(range(rank))))
    return Operation(
        name="transpose",
        inputs=(("input", state.tensor(node.input[0])),),
        outputs=_output(node, state, "output"),
        attribs={"axes": list(perm)},
    )


def _convert_softmax(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    rank = state.rank(node.input[0])
    axis = _positive_axis(attrs.get("axis", -1), rank)
    return Operation(
        name="softmax",
        inputs=(("x", state.tensor(node.input[0])),),
        outputs=_output(node, state, "y"),
        attribs={"axes": [axis]},
    )


def _convert_concat(node: NodeProto, attrs: dict, state: _ConversionState) -> Operation:
    rank = state.rank(node.output[0])
    return Operation(
        name="concat",
        inputs=(("values", [state.tensor(name) for name in node.input]),),
        outputs=_output(node, state, "value"),
        attribs={"axis": _positive_axis(attrs["axis"], rank)},
    )


ONNX_OPERATIONS: dict[str, Converter] = {
    "Abs": _unary("abs"),
    "Add": _binary("add"),
    "AveragePool": _pool("avg_pool"),
    "Concat": _convert_concat,
    "Conv": _convert_conv,
    "Div": _binary("div"),
    "Exp": _unary("exp"),
    "Flatten": _convert_reshape,
    "Gemm": _convert_gemm,
    "Identity": _unary("copy"),
    "Log": _unary("log"),
    "MatMul": _convert_matmul,
    "MaxPool": _pool("max_pool"),
    "Mul": _binary("mul"),
    "Neg": _unary("neg"),
    "Relu": _unary("relu"),
    "Reshape": _convert_reshape,
    "Sigmoid": _unary("sigmoid"),
    "Softmax": _convert_softmax,
    "Sqrt": _unary("sqrt"),
    "Sub": _binary("sub"),
    "Tanh": _unary("tanh"),
    "Transpose": _convert_transpose,
}


def _convert_node(node: NodeProto, state: _ConversionState) -> Operation:
    converter = ONNX_OPERATIONS.get(node.op_type)
    if converter is None:
        raise GraphLoadError(f"Unsupported ONNX operator: {node.op_type} (node '{node.name}')")
    attrs = {attr.name: helper.get_attribute_value(attr) for attr in node.attribute}
    try:
        return converter(node, attrs, state)
    except (GraphLoadError, ShapeInferenceError):
        raise
    except (KeyError, IndexError, TypeError, ValueError) as error:
        raise GraphLoadError(
            f"Cannot convert ONNX node '{node.name}' ({node.op_type}): {error!r}"
        ) from error


def _source_operation(
    name: str, code_name: str, shape: tuple[int, ...], label: str | None
) -> Operation:
    attribs: dict[str, Value] = {"shape": list(shape)}
    if label is not None:
        attribs["label"] = label
    return Operation(
        name=name,
        outputs=(("output", Identifier(code_name)),),
        attribs=attribs,
    )


def onnx_model_to_graph(model: ModelProto, name: str | None = None) -> Graph:
    """Convert a shape-inferred ONNX model to graph IR.

    :param model: Preprocessed ONNX model (shapes inferred, constants folded)
    :param name: Graph name (default: ONNX graph name)
    :return: Graph with external, variable and library operations
    :raises GraphLoadError: If the model uses an unsupported operator
    :raises ShapeInferenceError: If a tensor has no known shape
    """
    state = _ConversionState(model)
    input_names = get_onnx_model_input_names(model)
    output_names = get_onnx_model_output_names(model)

    # Register graph I/O names first so they keep their sanitized names
    for onnx_name in (*input_names, *output_names):
        state.code_name(onnx_name)

    node_operations = [_convert_node(node, state) for node in model.graph.node]

    sources = [
        _source_operation("external", state.code_name(n), state.shape(n), None)
        for n in input_names
    ]
    sources.extend(
        _source_operation("variable", state.code_name(n), state.shape(n), n)
        for n in state.initializers
        if n in state.used_initializers
    )

    tensors: dict[str, Tensor] = {}
    for onnx_name, code_name in state.code_names.items():
        if onnx_name in state.initializers and onnx_name not in state.used_initializers:
            continue
        tensors[code_name] = Tensor(
            name=code_name,
            dtype=state.dtypes.get(onnx_name, "scalar"),
            shape=state.shape(onnx_name),
            data=state.initializers.get(onnx_name),
        )

    return Graph(
        name=to_package_name(name or model.graph.name or "Graph"),
        inputs=tuple(state.code_name(n) for n in input_names),
        outputs=tuple(state.code_name(n) for n in output_names),
        tensors=tensors,
        operations=(*sources, *node_operations),
    )
