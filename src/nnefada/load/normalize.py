"""ONNX model preprocessing utilities."""

__docformat__ = "restructuredtext"
__all__ = ["load_and_preprocess_onnx_model"]

import warnings

import onnx
from google.protobuf.message import DecodeError
from onnx import ModelProto, TensorProto, version_converter

from nnefada.load.errors import GraphLoadError, ShapeInferenceError

# Opset range the operator conversion table is written against
MIN_TESTED_OPSET = 11
MAX_TESTED_OPSET = 21


def _check_model(model: ModelProto) -> None:
    """Check ONNX model validity using onnx.checker.

    :param model: Input ONNX model
    :raises GraphLoadError: If model is invalid
    """
    try:
        onnx.checker.check_model(model)
    except (onnx.checker.ValidationError, ValueError, AttributeError, TypeError) as error:
        raise GraphLoadError(f"Invalid ONNX model: {error}") from error


def _convert_version(model: ModelProto, target_opset: int) -> ModelProto:
    """Convert ONNX model to specified opset version.

    :param model: Input ONNX model
    :param target_opset: Target opset version
    :return: Converted model, or the original model if conversion fails
    """
    current_opset = model.opset_import[0].version if model.opset_import else 0

    if not (MIN_TESTED_OPSET <= target_opset <= MAX_TESTED_OPSET):
        warnings.warn(
            f"Target opset {target_opset} is outside "
            f"tested range [{MIN_TESTED_OPSET}, {MAX_TESTED_OPSET}].",
            UserWarning,
            stacklevel=2,
        )

    if current_opset != target_opset:
        try:
            model = version_converter.convert_version(model, target_opset)
        except (ValueError, RuntimeError, AttributeError) as error:
            warnings.warn(
                f"Version conversion failed "
                f"from opset {current_opset} to {target_opset}: {error}. "
                f"Keeping original opset version.",
                UserWarning,
                stacklevel=2,
            )

    return model


def _infer_shapes(model: ModelProto) -> ModelProto:
    """Run ONNX shape inference.

    :param model: Input ONNX model
    :return: Model with inferred shapes in value_info
    :raises ShapeInferenceError: If inference fails
    """
    try:
        return onnx.shape_inference.infer_shapes(model, strict_mode=True)
    except (onnx.shape_inference.InferenceError, ValueError, RuntimeError) as error:
        raise ShapeInferenceError(f"Shape inference failed: {error}") from error


def _convert_onnx_constants_to_initializers(model: ModelProto) -> ModelProto:
    """Convert Constant nodes to initializers.

    ONNX Constant nodes contain constant tensors that don't change during inference.
    This function extracts these constants and adds them as initializers, then
    removes the Constant nodes from the graph.

    :param model: Input ONNX model
    :return: Modified ONNX model with Constant nodes converted to initializers
    """
    new_initializers = []
    nodes_to_remove = []

    for node in model.graph.node:
        if node.op_type != "Constant" or not node.output:
            continue

        for attr in node.attribute:
            if attr.name == "value":
                new_tensor = TensorProto()
                new_tensor.CopyFrom(attr.t)
                new_tensor.name = node.output[0]

                new_initializers.append(new_tensor)
                nodes_to_remove.append(node)
                break

    if not new_initializers:
        return model

    model_copy = ModelProto()
    model_copy.CopyFrom(model)

    model_copy.graph.initializer.extend(new_initializers)

    remaining_nodes = [n for n in model_copy.graph.node if n not in nodes_to_remove]

    del model_copy.graph.node[:]
    model_copy.graph.node.extend(remaining_nodes)

    return model_copy


def load_and_preprocess_onnx_model(
    onnx_path: str,
    target_opset: int | None = None,
    infer_shapes: bool = True,
    check_model: bool = True,
    eliminate_constants: bool = True,
) -> ModelProto:
    """Load ONNX model and preprocess it for graph conversion.

    Preprocessing steps:
    1. Load model from file
    2. Validate with ONNX checker (if enabled)
    3. Convert to target opset version (if specified)
    4. Run shape inference (if enabled)
    5. Convert Constant nodes to initializers (if enabled)

    :param onnx_path: Path to ONNX file
    :param target_opset: Target opset version (None = keep original)
    :param infer_shapes: Whether to run shape inference
    :param check_model: Whether to validate model with onnx.checker
    :param eliminate_constants: Whether to convert Constant nodes to initializers
    :return: Preprocessed model
    :raises FileNotFoundError: If the file does not exist
    :raises GraphLoadError: If the file is not a valid ONNX model
    :raises ShapeInferenceError: If shape inference fails
    """
    try:
        model = onnx.load(onnx_path)
    except DecodeError as error:
        raise GraphLoadError(f"Cannot parse ONNX file '{onnx_path}': {error}") from error

    if check_model:
        _check_model(model)

    if target_opset is not None:
        model = _convert_version(model, target_opset=target_opset)
        if check_model:
            _check_model(model)

    if infer_shapes:
        model = _infer_shapes(model)

    if eliminate_constants:
        model = _convert_onnx_constants_to_initializers(model)

    return model
