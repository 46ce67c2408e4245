"""NNEF frontend: load NNEF graphs through the Khronos NNEF parser.

The parser package ("nnef", optional dependency) performs parsing,
lowering of composite operations and shape inference; this module only
converts its graph objects to graph IR.
"""

__docformat__ = "restructuredtext"
__all__ = ["load_nnef_graph", "nnef_graph_to_graph"]

from collections.abc import Iterable
from typing import Any

from nnefada.ir import Graph, Identifier, Operation, Tensor, Value, dtype_name
from nnefada.load.errors import GraphLoadError, ShapeInferenceError


def _import_nnef():
    try:
        import nnef
    except ImportError as error:
        raise GraphLoadError(
            "Loading NNEF graphs requires the 'nnef' parser package "
            "(pip install nnefada[nnef])"
        ) from error
    return nnef


def _convert_value(value: Any) -> Value:
    """Convert a parser value to a graph IR value.

    Parser identifiers are str subclasses, string literals are plain str.
    """
    if isinstance(value, list):
        return [_convert_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_convert_value(item) for item in value)
    if isinstance(value, str) and type(value) is not str:
        return Identifier(value)
    return value


def _convert_params(params: Any) -> tuple[tuple[str, Value], ...]:
    items = params.items() if hasattr(params, "items") else params
    return tuple((name, _convert_value(value)) for name, value in items)


def _convert_dtype(dtype: Any) -> str:
    if isinstance(dtype, str):
        return dtype
    return dtype_name(dtype)


def nnef_graph_to_graph(nnef_graph: Any) -> Graph:
    """Convert an NNEF parser graph to graph IR.

    :param nnef_graph: Graph returned by nnef.load_graph (shapes inferred)
    :return: Graph
    :raises ShapeInferenceError: If a tensor has no shape
    """
    tensors = {}
    for name, tensor in nnef_graph.tensors.items():
        if tensor.shape is None:
            raise ShapeInferenceError(f"Shape of tensor '{name}' is unknown")
        tensors[name] = Tensor(
            name=tensor.name,
            dtype=_convert_dtype(tensor.dtype),
            shape=tuple(int(dim) for dim in tensor.shape),
            data=getattr(tensor, "data", None),
        )

    operations = tuple(
        Operation(
            name=operation.name,
            inputs=_convert_params(operation.inputs),
            outputs=_convert_params(operation.outputs),
            attribs=dict(_convert_params(operation.attribs)),
        )
        for operation in nnef_graph.operations
    )

    return Graph(
        name=nnef_graph.name,
        inputs=tuple(nnef_graph.inputs),
        outputs=tuple(nnef_graph.outputs),
        tensors=tensors,
        operations=operations,
    )


def load_nnef_graph(
    path: str,
    stdlib: str | None = None,
    lowered: Iterable[str] = (),
    infer_shapes: bool = True,
) -> Graph:
    """Load an NNEF graph (model directory, .nnef file or archive).

    :param path: Path to the NNEF model
    :param stdlib: Replacement standard library source text
    :param lowered: Composite operation names to expand into primitives
    :param infer_shapes: Whether to run NNEF shape inference
    :return: Graph
    :raises GraphLoadError: If the parser is unavailable or parsing fails
    :raises ShapeInferenceError: If shape inference fails
    """
    nnef = _import_nnef()

    try:
        nnef_graph = nnef.load_graph(path, stdlib=stdlib, lowered=sorted(lowered))
    except nnef.Error as error:
        raise GraphLoadError(str(error)) from error

    if infer_shapes:
        try:
            nnef.infer_shapes(nnef_graph)
        except nnef.Error as error:
            raise ShapeInferenceError(str(error)) from error

    return nnef_graph_to_graph(nnef_graph)
