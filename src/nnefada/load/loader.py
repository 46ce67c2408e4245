"""Graph loading entry point.

Dispatches on the model path: ONNX files go through the ONNX frontend,
everything else is treated as an NNEF model.
"""

__docformat__ = "restructuredtext"
__all__ = ["load_graph"]

import warnings
from collections.abc import Iterable
from pathlib import Path

from nnefada.ir import Graph
from nnefada.load.nnef_frontend import load_nnef_graph
from nnefada.load.normalize import load_and_preprocess_onnx_model
from nnefada.load.onnx_frontend import onnx_model_to_graph
from nnefada.presets import LOWERED_OPERATIONS


def load_graph(
    path: str,
    stdlib: str | None = None,
    lowered: Iterable[str] = LOWERED_OPERATIONS,
    infer_shapes: bool = True,
) -> Graph:
    """Load a model file and return its shape-inferred graph.

    :param path: Path to an .onnx file or an NNEF model
    :param stdlib: Replacement NNEF standard library source (NNEF only)
    :param lowered: Composite operations to lower (NNEF only)
    :param infer_shapes: Whether to run shape inference
    :return: Graph
    :raises FileNotFoundError: If the path does not exist
    :raises GraphLoadError: If the model cannot be loaded or converted
    :raises ShapeInferenceError: If shapes cannot be inferred
    """
    model_path = Path(path)
    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")

    if model_path.suffix.lower() == ".onnx":
        if stdlib:
            warnings.warn(
                "Standard library override only applies to NNEF models; ignoring",
                UserWarning,
                stacklevel=2,
            )
        model = load_and_preprocess_onnx_model(str(model_path), infer_shapes=infer_shapes)
        return onnx_model_to_graph(model, name=model_path.stem)

    return load_nnef_graph(
        str(model_path), stdlib=stdlib, lowered=lowered, infer_shapes=infer_shapes
    )
