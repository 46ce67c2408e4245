"""Utility functions for code generation.

Helper functions for formatting values, extents and names.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ADA_RESERVED_WORDS",
    "format_extents",
    "format_integer",
    "format_scalar",
    "format_value",
    "sanitize_identifier",
    "to_package_name",
]

import math
import re
from typing import Any

from nnefada.ir import ValueKind, value_kind

ADA_RESERVED_WORDS = frozenset(
    {
        "abort", "abs", "abstract", "accept", "access", "aliased", "all", "and",
        "array", "at", "begin", "body", "case", "constant", "declare", "delay",
        "delta", "digits", "do", "else", "elsif", "end", "entry", "exception",
        "exit", "for", "function", "generic", "goto", "if", "in", "interface",
        "is", "limited", "loop", "mod", "new", "not", "null", "of", "or",
        "others", "out", "overriding", "package", "parallel", "pragma",
        "private", "procedure", "protected", "raise", "range", "record", "rem",
        "renames", "requeue", "return", "reverse", "select", "separate", "some",
        "subtype", "synchronized", "tagged", "task", "terminate", "then",
        "type", "until", "use", "when", "while", "with", "xor",
    }
)  # fmt: skip


def format_extents(shape: tuple[int, ...]) -> str:
    """Format tensor shape as Ada index ranges.

    :param shape: Tensor shape tuple
    :return: Formatted extents (e.g., "1..2, 1..3")
    """
    return ", ".join(f"1..{dim}" for dim in shape)


def format_integer(value: int) -> str:
    return str(value)


def format_scalar(value: float) -> str:
    """Format float as Ada real literal.

    The mantissa always carries a decimal point so integral values stay
    real literals ("2.0", "1.0e-05").

    :param value: Float value
    :return: Literal text (e.g., "2.0", "2.5")
    :raises ValueError: If value is infinite or NaN
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite scalar {value!r} as Ada literal")
    mantissa, sep, exponent = repr(value).partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return mantissa + sep + exponent


def format_value(value: Any) -> str:
    """Format a graph value as Ada literal text.

    Handles every Value variant: None, str, Identifier, bool, int, float,
    list, tuple. Arrays and tuples are rendered recursively as
    parenthesized, comma-separated aggregates.

    :param value: Value to format
    :return: Ada literal string
    :raises TypeError: If value is not a member of the Value union
    """
    kind = value_kind(value)
    if kind is ValueKind.NONE:
        return "None"
    if kind in (ValueKind.STRING, ValueKind.IDENTIFIER):
        return str(value)
    if kind is ValueKind.LOGICAL:
        return "true" if value else "false"
    if kind is ValueKind.INTEGER:
        return format_integer(value)
    if kind is ValueKind.SCALAR:
        return format_scalar(value)
    if kind in (ValueKind.ARRAY, ValueKind.TUPLE):
        return f"({', '.join(format_value(item) for item in value)})"
    raise TypeError(f"Unhandled value kind: {kind}")


def sanitize_identifier(name: str) -> str:
    """Sanitize string to be a valid Ada identifier.

    Replaces invalid characters with underscores, collapses repeated
    underscores, strips leading and trailing underscores and avoids
    Ada reserved words.

    :param name: String to sanitize
    :return: Valid Ada identifier
    """
    sanitized = "".join(c if c.isalnum() and c.isascii() else "_" for c in name)
    sanitized = re.sub(r"_+", "_", sanitized).strip("_")

    if not sanitized:
        return "T"

    # Ada identifiers must start with a letter
    if not sanitized[0].isalpha():
        sanitized = "T_" + sanitized

    if sanitized.lower() in ADA_RESERVED_WORDS:
        sanitized = sanitized + "_T"

    return sanitized


def to_package_name(name: str) -> str:
    """Convert name to an Ada package name in Mixed_Case.

    Examples:
        "mnist-net" -> "Mnist_Net"
        "resnet18_v1.7" -> "Resnet18_V1_7"

    :param name: Original name
    :return: Package name
    """
    words = sanitize_identifier(name).split("_")
    return "_".join(word[:1].upper() + word[1:] for word in words if word)
