"""Pytest configuration and shared fixtures for nnefada tests."""

import onnx
import pytest


@pytest.fixture
def save_onnx(tmp_path):
    """Save an ONNX model under tmp_path and return its path as a string."""

    def _save(model: onnx.ModelProto, file_name: str) -> str:
        path = tmp_path / file_name
        onnx.save(model, str(path))
        return str(path)

    return _save
