"""Errors raised while loading graphs."""

__docformat__ = "restructuredtext"
__all__ = ["GraphLoadError", "ShapeInferenceError"]


class GraphLoadError(ValueError):
    """Graph file cannot be read, parsed or converted."""


class ShapeInferenceError(ValueError):
    """Tensor shapes cannot be inferred for a loaded graph."""
