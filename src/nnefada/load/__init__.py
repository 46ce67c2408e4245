"""Stage 2: Graph Loading.

This module loads ONNX and NNEF models into shape-inferred graph IR.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "GraphLoadError",
    "ShapeInferenceError",
    "load_and_preprocess_onnx_model",
    "load_graph",
    "load_nnef_graph",
    "nnef_graph_to_graph",
    "onnx_model_to_graph",
]

from nnefada.load.errors import GraphLoadError, ShapeInferenceError
from nnefada.load.loader import load_graph
from nnefada.load.nnef_frontend import load_nnef_graph, nnef_graph_to_graph
from nnefada.load.normalize import load_and_preprocess_onnx_model
from nnefada.load.onnx_frontend import onnx_model_to_graph
