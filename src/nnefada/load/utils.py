"""Utility functions for ONNX model inspection."""

__docformat__ = "restructuredtext"
__all__ = [
    "get_onnx_initializers",
    "get_onnx_model_dtypes",
    "get_onnx_model_input_names",
    "get_onnx_model_output_names",
    "get_onnx_model_shapes",
    "onnx_dtype_name",
]

import numpy as np
from onnx import ModelProto, TensorProto, numpy_helper

from nnefada.ir import dtype_name

_SCALAR_TYPES = frozenset(
    {TensorProto.FLOAT, TensorProto.DOUBLE, TensorProto.FLOAT16, TensorProto.BFLOAT16}
)
_INTEGER_TYPES = frozenset(
    {
        TensorProto.INT8,
        TensorProto.INT16,
        TensorProto.INT32,
        TensorProto.INT64,
        TensorProto.UINT8,
        TensorProto.UINT16,
        TensorProto.UINT32,
        TensorProto.UINT64,
    }
)


def onnx_dtype_name(elem_type: int) -> str:
    """Map ONNX element type to graph element kind.

    :param elem_type: TensorProto.DataType value
    :return: "scalar", "integer", "logical", or the lowercase ONNX type name
    """
    if elem_type in _SCALAR_TYPES:
        return "scalar"
    if elem_type in _INTEGER_TYPES:
        return "integer"
    if elem_type == TensorProto.BOOL:
        return "logical"
    return TensorProto.DataType.Name(elem_type).lower()


def get_onnx_initializers(model: ModelProto) -> dict[str, np.ndarray]:
    """Get all initializer tensors as numpy arrays.

    :param model: ONNX model
    :return: Dictionary mapping initializer names to arrays
    """
    return {init.name: numpy_helper.to_array(init) for init in model.graph.initializer}


def get_onnx_model_input_names(model: ModelProto) -> list[str]:
    """Get model input tensor names.

    :param model: ONNX model
    :return: List of input tensor names (initializers excluded)
    """
    initializer_names = {init.name for init in model.graph.initializer}
    # Exclude inputs that are actually initializers (weights/biases)
    return [inp.name for inp in model.graph.input if inp.name not in initializer_names]


def get_onnx_model_output_names(model: ModelProto) -> list[str]:
    """Get model output tensor names.

    :param model: ONNX model
    :return: List of output tensor names
    """
    return [output_info.name for output_info in model.graph.output]


def _value_infos(model: ModelProto):
    yield from model.graph.input
    yield from model.graph.output
    yield from model.graph.value_info


def get_onnx_model_shapes(model: ModelProto) -> dict[str, tuple[int, ...] | None]:
    """Get shapes of all typed tensors in the ONNX model.

    Symbolic dimensions (e.g., 'batch_size') are set to 1. Tensors with
    an unknown dimension or no shape information map to None.

    :param model: ONNX model
    :return: Dictionary mapping tensor names to shapes
    """
    shapes: dict[str, tuple[int, ...] | None] = {}

    def _get_shape_from_type(tensor_type) -> tuple[int, ...] | None:
        if not tensor_type.HasField("shape"):
            return None
        dims = []
        for d in tensor_type.shape.dim:
            if d.dim_value > 0:  # static dimension
                dims.append(d.dim_value)
            elif d.dim_param:  # dynamic/symbolic dimension
                dims.append(1)
            else:  # unknown dimension
                return None
        return tuple(dims)

    for value_info in _value_infos(model):
        shapes[value_info.name] = _get_shape_from_type(value_info.type.tensor_type)

    for name, array in get_onnx_initializers(model).items():
        shapes[name] = tuple(array.shape)

    return shapes


def get_onnx_model_dtypes(model: ModelProto) -> dict[str, str]:
    """Get element kinds of all typed tensors in the ONNX model.

    :param model: ONNX model
    :return: Dictionary mapping tensor names to element kinds
    """
    dtypes = {
        value_info.name: onnx_dtype_name(value_info.type.tensor_type.elem_type)
        for value_info in _value_infos(model)
    }
    for name, array in get_onnx_initializers(model).items():
        dtypes[name] = dtype_name(array.dtype)
    return dtypes
