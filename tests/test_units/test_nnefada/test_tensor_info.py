"""Tensor Inspection Tests - tensor headers, contents and comparison."""

import math
import sys

import numpy as np
import pytest

from nnefada.tensors import (
    format_comparison,
    format_tensor,
    format_tensor_header,
    read_tensor,
    relative_difference,
)


class TestFormatTensor:
    """Test tensor printing."""

    def test_header(self):
        """Verify header lists element kind and 1-based extents."""
        assert format_tensor_header(np.zeros((2, 3), dtype=np.float32)) == "scalar\n1..2 1..3\n"

    def test_integer_header(self):
        """Verify integer tensors report the integer element kind."""
        assert format_tensor_header(np.zeros(4, dtype=np.int32)) == "integer\n1..4\n"

    def test_contents_one_per_line(self):
        """Verify contents are printed in row-major order, one per line."""
        array = np.array([[1, 2], [3, 4]], dtype=np.float32)
        assert format_tensor(array) == "scalar\n1..2 1..2\n1.0\n2.0\n3.0\n4.0\n"

    def test_logical_contents(self):
        """Verify logical tensors print their truth values."""
        assert format_tensor(np.array([True, False])) == "logical\n1..2\nTrue\nFalse\n"


class TestRelativeDifference:
    """Test relative L2 difference."""

    def test_identical(self):
        """Verify identical tensors have no difference."""
        array = np.array([1.0, 2.0, 3.0])
        assert relative_difference(array, array.copy()) == 0.0

    def test_difference(self):
        """Verify difference is normalized by the reference norm."""
        reference = np.array([3.0, 4.0])
        assert relative_difference(reference, np.zeros(2)) == pytest.approx(1.0)
        assert relative_difference(reference, np.array([3.0, 4.5])) == pytest.approx(0.1)

    def test_zero_reference(self):
        """Verify all-zero references give 0.0 or infinity."""
        assert relative_difference(np.zeros(3), np.zeros(3)) == 0.0
        assert math.isinf(relative_difference(np.zeros(3), np.ones(3)))

    def test_size_mismatch_uses_common_prefix(self):
        """Verify only the common leading elements are compared."""
        reference = np.array([1.0, 2.0])
        other = np.array([[1.0, 2.0], [9.0, 9.0]])
        assert relative_difference(reference, other) == 0.0

    def test_comparison_report(self):
        """Verify the comparison prints both headers and the difference."""
        first = np.ones(2, dtype=np.float32)
        assert format_comparison(first, first) == (
            "tensor #1:\nscalar\n1..2\ntensor #2:\nscalar\n1..2\nrelative difference:\n0.0\n"
        )


class TestReadTensor:
    """Test tensor file reading."""

    def test_read_npy(self, tmp_path):
        """Verify NumPy files are read with numpy."""
        path = tmp_path / "tensor.npy"
        np.save(path, np.arange(6, dtype=np.float32).reshape(2, 3))
        array = read_tensor(str(path))
        assert array.shape == (2, 3)
        assert array[1, 2] == 5.0

    def test_missing_file(self, tmp_path):
        """Verify missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_tensor(str(tmp_path / "missing.npy"))

    def test_nnef_tensor_without_parser(self, tmp_path, monkeypatch):
        """Verify NNEF tensor files need the parser package."""
        monkeypatch.setitem(sys.modules, "nnef", None)
        path = tmp_path / "tensor.dat"
        path.write_bytes(b"\x4e\xef\x01\x00")
        with pytest.raises(ValueError, match="'nnef' parser package"):
            read_tensor(str(path))
