"""Shared pytest configuration and fixtures for nnefada unit tests.

This module provides:
- Graph fixtures (graph IR built directly, no frontend involved)
- Model fixtures (ONNX files saved to a temporary directory)
"""

import pytest

from tests.test_units.test_nnefada.fixtures.synthetic_graphs import SyntheticGraphs
from tests.test_units.test_nnefada.fixtures.synthetic_models import SyntheticONNXModels

# ===== Graph Fixtures =====


@pytest.fixture
def add_scalar_graph():
    """Graph computing y = x + 2.0."""
    return SyntheticGraphs.create_add_scalar_graph()


@pytest.fixture
def literal_first_graph():
    """Graph whose add has the literal operand first."""
    return SyntheticGraphs.create_literal_first_graph()


@pytest.fixture
def variable_graph():
    """Graph with an external input and a stored weight."""
    return SyntheticGraphs.create_variable_graph()


@pytest.fixture
def conv_relu_graph():
    """Conv -> relu graph with a tensor named like an operation."""
    return SyntheticGraphs.create_conv_relu_graph()


@pytest.fixture
def reshape_graph():
    """Reshape -> softmax graph."""
    return SyntheticGraphs.create_reshape_graph()


@pytest.fixture
def multi_output_graph():
    """Graph with two typed inputs and two outputs."""
    return SyntheticGraphs.create_multi_output_graph()


# ===== Model Fixtures =====


@pytest.fixture
def identity_model(save_onnx):
    """Create and save Identity ONNX model."""
    return save_onnx(SyntheticONNXModels.create_identity_model(), "identity.onnx")


@pytest.fixture
def add_scalar_model(save_onnx):
    """Create and save Add-with-constant ONNX model."""
    return save_onnx(SyntheticONNXModels.create_add_scalar_model(), "add_scalar.onnx")


@pytest.fixture
def mlp_model(save_onnx):
    """Create and save 2-layer MLP ONNX model."""
    return save_onnx(SyntheticONNXModels.create_mlp_model(), "mlp.onnx")


@pytest.fixture
def conv_model(save_onnx):
    """Create and save Conv -> Relu ONNX model."""
    return save_onnx(SyntheticONNXModels.create_conv_model(), "conv_net.onnx")


@pytest.fixture
def unsupported_model(save_onnx):
    """Create and save ONNX model with an operator that has no conversion."""
    return save_onnx(SyntheticONNXModels.create_unsupported_model(), "erf.onnx")
