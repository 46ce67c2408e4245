"""Tensor file inspection and comparison.

Prints tensor headers and contents, and compares two tensors by their
relative L2 difference.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "format_comparison",
    "format_tensor",
    "format_tensor_header",
    "read_tensor",
    "relative_difference",
]

from pathlib import Path

import numpy as np

from nnefada.ir import dtype_name


def read_tensor(path: str) -> np.ndarray:
    """Read a tensor file.

    NumPy (.npy) files are read with numpy; other files are read as NNEF
    binary tensors through the optional "nnef" parser package.

    :param path: Tensor file path
    :return: Tensor contents
    :raises FileNotFoundError: If the file does not exist
    :raises ValueError: If the file cannot be decoded
    """
    tensor_path = Path(path)
    if not tensor_path.exists():
        raise FileNotFoundError(f"Tensor file not found: {path}")

    if tensor_path.suffix.lower() == ".npy":
        return np.load(tensor_path, allow_pickle=False)

    try:
        import nnef
    except ImportError as error:
        raise ValueError(
            f"Reading '{path}' requires the 'nnef' parser package (pip install nnefada[nnef])"
        ) from error

    with tensor_path.open("rb") as file:
        try:
            result = nnef.read_tensor(file)
        except nnef.Error as error:
            raise ValueError(f"Cannot read tensor '{path}': {error}") from error
    # Older parser versions return (array, quantization)
    array = result[0] if isinstance(result, tuple) else result
    return np.asarray(array)


def format_tensor_header(array: np.ndarray) -> str:
    """Format tensor element kind and extents.

    :param array: Tensor contents
    :return: Two lines, e.g. "scalar\\n1..2 1..3\\n"
    """
    extents = " ".join(f"1..{dim}" for dim in array.shape)
    return f"{dtype_name(array.dtype)}\n{extents}\n"


def format_tensor(array: np.ndarray) -> str:
    """Format tensor header followed by one element per line.

    :param array: Tensor contents
    :return: Formatted tensor
    """
    lines = [str(item) for item in array.reshape(-1).tolist()]
    return format_tensor_header(array) + "".join(f"{line}\n" for line in lines)


def relative_difference(reference: np.ndarray, other: np.ndarray) -> float:
    """Relative L2 difference of two tensors.

    Computes sqrt(sum((other - reference)^2) / sum(reference^2)) over the
    first min(volume) elements in row-major order.

    :param reference: Reference tensor
    :param other: Tensor compared against the reference
    :return: Relative difference (inf when the reference is all zeros and
        the tensors differ, 0.0 when both are all zeros)
    """
    count = min(reference.size, other.size)
    first = reference.reshape(-1)[:count].astype(np.float64)
    second = other.reshape(-1)[:count].astype(np.float64)

    diff = float(np.sum(np.square(second - first)))
    scale = float(np.sum(np.square(first)))
    if scale == 0.0:
        return 0.0 if diff == 0.0 else float("inf")
    return float(np.sqrt(diff / scale))


def format_comparison(reference: np.ndarray, other: np.ndarray) -> str:
    """Format both tensor headers and their relative difference.

    :param reference: First tensor
    :param other: Second tensor
    :return: Comparison report
    """
    return (
        "tensor #1:\n"
        + format_tensor_header(reference)
        + "tensor #2:\n"
        + format_tensor_header(other)
        + "relative difference:\n"
        + f"{relative_difference(reference, other)}\n"
    )
